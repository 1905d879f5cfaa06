"""Data models for the Type Descriptor Model.

These models are the structural view of a contract type that drives
generation. They are immutable; the generator only ever reads them.
"""

from __future__ import annotations

import enum
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Generic types carry an arity marker in their metadata name, e.g. "IMaybe`1"
GENERIC_ARITY_MARKER = "`"

_NON_PUBLIC_ALIASES = frozenset(
    {
        "non_public",
        "private",
        "protected",
        "internal",
        "protected_internal",
        "private_protected",
    }
)


class Visibility(str, Enum):
    """Visibility of a contract method."""

    PUBLIC = "public"
    NON_PUBLIC = "non_public"


class TypeIdentifier(BaseModel):
    """Namespace-qualified identity of a type, ignoring type arguments."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespace: str = ""
    name: str = Field(min_length=1)

    @property
    def full_name(self) -> str:
        """Namespace-qualified name (bare name when there is no namespace)."""
        if not self.namespace:
            return self.name
        return f"{self.namespace}.{self.name}"

    @property
    def bare_name(self) -> str:
        """Name with any generic arity marker stripped."""
        return self.name.split(GENERIC_ARITY_MARKER, 1)[0]


class TypeRef(BaseModel):
    """Reference to a (possibly generic or array) type.

    Equality is structural: two references are the same type iff their
    identifiers, type arguments and element types match recursively.
    A plain string is accepted on validation and parsed as compact type
    notation (see :mod:`shorthand_codegen.descriptors.notation`).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    namespace: str = ""
    arguments: tuple[TypeRef, ...] = ()
    element_type: TypeRef | None = None
    array_rank: int = Field(default=1, ge=1)

    @model_validator(mode="before")
    @classmethod
    def parse_notation(cls, data: Any) -> Any:  # noqa: ANN401
        """Accept compact type notation strings in place of mappings."""
        if isinstance(data, str):
            from shorthand_codegen.descriptors.notation import parse_type_notation

            return parse_type_notation(data).model_dump()
        return data

    @property
    def identifier(self) -> TypeIdentifier:
        """Identity of this type without its type arguments."""
        return TypeIdentifier(namespace=self.namespace, name=self.name)

    @property
    def full_name(self) -> str:
        """Namespace-qualified metadata name."""
        return self.identifier.full_name

    @property
    def bare_name(self) -> str:
        """Name with any generic arity marker stripped."""
        return self.identifier.bare_name

    @property
    def is_generic(self) -> bool:
        """Whether this reference carries type arguments."""
        return bool(self.arguments)

    @property
    def is_array(self) -> bool:
        """Whether this reference is an array type."""
        return self.element_type is not None

    @property
    def is_void(self) -> bool:
        """Whether this reference denotes the absence of a return value."""
        return self.namespace == "System" and self.name == "Void" and not self.is_array


VOID = TypeRef(name="Void", namespace="System")


class EnumValue(BaseModel):
    """An enum-typed default value.

    ``formatted`` holds the value's formatted flag names, comma separated
    when several flags are set (e.g. ``"Read, Write"``).
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    enum_type: TypeRef
    formatted: str = Field(min_length=1)

    @property
    def flags(self) -> list[str]:
        """Individual flag names in formatted order."""
        return [segment.strip() for segment in self.formatted.split(",") if segment.strip()]

    @classmethod
    def from_enum(cls, value: Enum) -> EnumValue:
        """Build from a Python enum member (including composite flags)."""
        enum_class = type(value)
        if isinstance(value, enum.Flag):
            names = [
                member.name
                for member in enum_class
                if member.name and member.value and member in value
            ]
            formatted = ", ".join(names) if names else str(value.name or value.value)
        else:
            formatted = value.name
        return cls(
            enum_type=TypeRef(name=enum_class.__name__, namespace=enum_class.__module__),
            formatted=formatted,
        )


DefaultValue = EnumValue | bool | int | float | str | None


class ParameterDescriptor(BaseModel):
    """A method parameter, in declaration order."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    type: TypeRef
    is_output: bool = False
    has_default_value: bool = False
    default_value: DefaultValue = None

    @model_validator(mode="before")
    @classmethod
    def infer_has_default_value(cls, data: Any) -> Any:  # noqa: ANN401
        """Treat a supplied ``default_value`` as a declared default."""
        if isinstance(data, dict) and "default_value" in data:
            data = dict(data)
            data.setdefault("has_default_value", True)
        return data

    @field_validator("default_value", mode="before")
    @classmethod
    def convert_python_enum(cls, v: Any) -> Any:  # noqa: ANN401
        """Convert Python enum members into EnumValue."""
        if isinstance(v, Enum):
            return EnumValue.from_enum(v)
        return v


class MethodDescriptor(BaseModel):
    """A method declared on a contract type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    parameters: tuple[ParameterDescriptor, ...] = ()
    return_type: TypeRef = VOID
    is_static: bool = False
    visibility: Visibility = Visibility.PUBLIC

    @field_validator("visibility", mode="before")
    @classmethod
    def normalise_visibility(cls, v: Any) -> Any:  # noqa: ANN401
        """Fold every non-public access modifier into NON_PUBLIC."""
        if isinstance(v, str) and not isinstance(v, Visibility):
            lowered = v.strip().lower().replace(" ", "_")
            if lowered in _NON_PUBLIC_ALIASES:
                return Visibility.NON_PUBLIC
            return lowered
        return v

    @property
    def first_parameter(self) -> ParameterDescriptor | None:
        """The receiver candidate, if the method takes any parameter."""
        return self.parameters[0] if self.parameters else None


class ContractDescriptor(BaseModel):
    """A contract type and its declared methods."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    namespace: str = ""
    methods: tuple[MethodDescriptor, ...] = ()

    @property
    def identifier(self) -> TypeIdentifier:
        """Identity of the contract type."""
        return TypeIdentifier(namespace=self.namespace, name=self.name)


class DescriptorDocument(BaseModel):
    """Root of a descriptor file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    contracts: list[ContractDescriptor] = Field(default_factory=list)
