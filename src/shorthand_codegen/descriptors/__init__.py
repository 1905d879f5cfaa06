"""Type Descriptor Model sources."""

from shorthand_codegen.descriptors.in_memory import InMemoryTypeDescriptorModel
from shorthand_codegen.descriptors.loader import DescriptorLoader
from shorthand_codegen.descriptors.notation import KEYWORD_ALIASES, parse_type_notation

__all__ = [
    "DescriptorLoader",
    "InMemoryTypeDescriptorModel",
    "KEYWORD_ALIASES",
    "parse_type_notation",
]
