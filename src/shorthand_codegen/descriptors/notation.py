"""Compact type notation for descriptor files.

Writing every type reference as a nested mapping is tedious, so descriptor
files may spell types the way they appear in source:

    IoFluently.AbsolutePath
    SimpleMonads.IMaybe<UnitsNet.Information>
    System.Collections.Generic.IDictionary<string, System.Collections.Generic.IList<int>>
    System.Byte[]
    long

Keyword aliases resolve to their ``System`` identifiers, generic types are
stored with their arity marker (``IMaybe`1``) and array suffixes become
structured element types.
"""

from __future__ import annotations

import re

from shorthand_codegen.errors import TypeNotationError
from shorthand_codegen.models import GENERIC_ARITY_MARKER, TypeRef

KEYWORD_ALIASES: dict[str, tuple[str, str]] = {
    "long": ("System", "Int64"),
    "int": ("System", "Int32"),
    "short": ("System", "Int16"),
    "ulong": ("System", "UInt64"),
    "uint": ("System", "UInt32"),
    "ushort": ("System", "UInt16"),
    "byte": ("System", "Byte"),
    "sbyte": ("System", "SByte"),
    "string": ("System", "String"),
    "void": ("System", "Void"),
    "bool": ("System", "Boolean"),
    "char": ("System", "Char"),
    "double": ("System", "Double"),
    "float": ("System", "Single"),
    "decimal": ("System", "Decimal"),
    "object": ("System", "Object"),
}

_TOKEN_PATTERN = re.compile(r"\s*(?:([A-Za-z_][A-Za-z0-9_`]*)|(\S))")


class _Parser:
    """Recursive-descent parser over the token stream of one notation string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._tokens = self._tokenise(text)
        self._position = 0

    def _tokenise(self, text: str) -> list[str]:
        tokens: list[str] = []
        position = 0
        stripped = text.rstrip()
        while position < len(stripped):
            match = _TOKEN_PATTERN.match(stripped, position)
            if match is None:
                raise TypeNotationError(f"Unexpected character in type notation '{self._text}'")
            tokens.append(match.group(1) or match.group(2))
            position = match.end()
        return tokens

    def _peek(self) -> str | None:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise TypeNotationError(f"Unexpected end of type notation '{self._text}'")
        self._position += 1
        return token

    def _expect(self, expected: str) -> None:
        token = self._next()
        if token != expected:
            raise TypeNotationError(
                f"Expected '{expected}' but found '{token}' in type notation '{self._text}'"
            )

    def _identifier(self) -> str:
        token = self._next()
        if not (token[0].isalpha() or token[0] == "_"):
            raise TypeNotationError(
                f"Expected a type name but found '{token}' in type notation '{self._text}'"
            )
        return token

    def parse(self) -> TypeRef:
        type_ref = self._type()
        if self._peek() is not None:
            raise TypeNotationError(
                f"Unexpected '{self._peek()}' after type in notation '{self._text}'"
            )
        return type_ref

    def _type(self) -> TypeRef:
        segments = [self._identifier()]
        while self._peek() == ".":
            self._next()
            segments.append(self._identifier())

        namespace = ".".join(segments[:-1])
        name = segments[-1]
        if not namespace and name in KEYWORD_ALIASES:
            namespace, name = KEYWORD_ALIASES[name]

        arguments: list[TypeRef] = []
        if self._peek() == "<":
            self._next()
            arguments.append(self._type())
            while self._peek() == ",":
                self._next()
                arguments.append(self._type())
            self._expect(">")
            if GENERIC_ARITY_MARKER not in name:
                name = f"{name}{GENERIC_ARITY_MARKER}{len(arguments)}"

        type_ref = TypeRef(name=name, namespace=namespace, arguments=tuple(arguments))

        while self._peek() == "[":
            self._next()
            rank = 1
            while self._peek() == ",":
                self._next()
                rank += 1
            self._expect("]")
            type_ref = TypeRef(
                name=f"{type_ref.bare_name}[{',' * (rank - 1)}]",
                namespace=type_ref.namespace,
                element_type=type_ref,
                array_rank=rank,
            )

        return type_ref


def parse_type_notation(text: str) -> TypeRef:
    """Parse compact type notation into a structured TypeRef.

    Args:
        text: Notation such as ``SimpleMonads.IMaybe<System.Int64>``

    Returns:
        The structured type reference

    Raises:
        TypeNotationError: If the notation is empty or malformed

    """
    if not text.strip():
        raise TypeNotationError("Type notation must be a non-empty string")
    return _Parser(text).parse()
