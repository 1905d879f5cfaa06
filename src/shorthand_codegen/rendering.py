"""Rendering of type references and default values as C# source text."""

from __future__ import annotations

from enum import Enum

from shorthand_codegen.models import DefaultValue, EnumValue, TypeRef

PRIMITIVE_TYPE_NAMES: dict[str, str] = {
    "System.Int64": "long",
    "System.Int32": "int",
    "System.Int16": "short",
    "System.UInt64": "ulong",
    "System.UInt32": "uint",
    "System.UInt16": "ushort",
    "System.Byte": "byte",
    "System.SByte": "sbyte",
    "System.String": "string",
    "System.Void": "void",
}

NULL_LITERAL = "null"
FLAG_SEPARATOR = " | "


def render_type_name(type_ref: TypeRef, include_namespaces: bool = False) -> str:
    """Render a type reference as a C# type name.

    E.g. ``SimpleMonads.IMaybe`1<System.Int64>`` renders as ``IMaybe<long>``.

    Args:
        type_ref: The type to render
        include_namespaces: Qualify non-primitive names with their namespace

    Returns:
        The C# spelling of the type

    """
    if type_ref.element_type is not None:
        element = render_type_name(type_ref.element_type, include_namespaces)
        return f"{element}[{',' * (type_ref.array_rank - 1)}]"

    if not type_ref.arguments and type_ref.full_name in PRIMITIVE_TYPE_NAMES:
        return PRIMITIVE_TYPE_NAMES[type_ref.full_name]

    base_name = type_ref.bare_name
    if include_namespaces and type_ref.namespace:
        base_name = f"{type_ref.namespace}.{base_name}"

    if not type_ref.arguments:
        return base_name

    arguments = ", ".join(
        render_type_name(argument, include_namespaces) for argument in type_ref.arguments
    )
    return f"{base_name}<{arguments}>"


def render_default_value(value: DefaultValue | Enum) -> str:
    """Render a parameter's default value as a C# literal.

    Args:
        value: Default value as held by a ParameterDescriptor, or a Python enum

    Returns:
        Source literal text

    """
    if value is None:
        return NULL_LITERAL
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str) and not isinstance(value, Enum):
        return '@"' + value.replace('"', '""') + '"'
    if isinstance(value, Enum):
        value = EnumValue.from_enum(value)
    if isinstance(value, EnumValue):
        type_name = render_type_name(value.enum_type)
        if not value.flags:
            return f"default({type_name})"
        return FLAG_SEPARATOR.join(f"{type_name}.{flag}" for flag in value.flags)
    return str(value)
