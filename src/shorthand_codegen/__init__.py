"""Shorthand property and extension wrapper generator.

This package derives two companion C# sources from a structural description
of a service contract: partial-type property shorthands and static extension
wrappers that forward to the service reachable from their receiver.

Pipeline: TypeDescriptorModel → Classifier → SourceEmitter → files
"""

from shorthand_codegen.classification import (
    Classifier,
    GroupedClassification,
    MethodRole,
)
from shorthand_codegen.configuration import (
    ClassificationPolicy,
    ConfigLoader,
    EmissionConfig,
    GeneratorConfig,
    OptionalPropertyMode,
)
from shorthand_codegen.descriptors import (
    DescriptorLoader,
    InMemoryTypeDescriptorModel,
    parse_type_notation,
)
from shorthand_codegen.emitter import SourceEmitter
from shorthand_codegen.errors import (
    CodegenError,
    ConfigError,
    ContractNotFoundError,
    DescriptorError,
    DescriptorLoadError,
    DescriptorValidationError,
    ModelError,
    OutputWriteError,
    TypeNotationError,
)
from shorthand_codegen.generator import GeneratedSources, ShorthandGenerator
from shorthand_codegen.models import (
    ContractDescriptor,
    DescriptorDocument,
    EnumValue,
    MethodDescriptor,
    ParameterDescriptor,
    TypeIdentifier,
    TypeRef,
    Visibility,
)
from shorthand_codegen.protocols import TypeDescriptorModel
from shorthand_codegen.rendering import render_default_value, render_type_name

__all__ = [
    # Models
    "ContractDescriptor",
    "DescriptorDocument",
    "EnumValue",
    "MethodDescriptor",
    "ParameterDescriptor",
    "TypeIdentifier",
    "TypeRef",
    "Visibility",
    # Model sources
    "DescriptorLoader",
    "InMemoryTypeDescriptorModel",
    "TypeDescriptorModel",
    "parse_type_notation",
    # Configuration
    "ClassificationPolicy",
    "ConfigLoader",
    "EmissionConfig",
    "GeneratorConfig",
    "OptionalPropertyMode",
    # Pipeline
    "Classifier",
    "GeneratedSources",
    "GroupedClassification",
    "MethodRole",
    "ShorthandGenerator",
    "SourceEmitter",
    "render_default_value",
    "render_type_name",
    # Errors
    "CodegenError",
    "ConfigError",
    "ContractNotFoundError",
    "DescriptorError",
    "DescriptorLoadError",
    "DescriptorValidationError",
    "ModelError",
    "OutputWriteError",
    "TypeNotationError",
]
