"""Configuration for the shorthand generator.

Every policy constant the generator relies on lives here rather than in
the classifier or emitter: receiver allow-lists, side-effect verb markers,
the optional-binder shape, the preamble and output locations. The defaults
describe the IoFluently ``IIoService`` contract.

Configuration supports three layers:
1. Explicit properties (highest priority, e.g. from a YAML file)
2. Environment variables (fallback for selected top-level fields)
3. Defaults (lowest priority)
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing_extensions import override

from shorthand_codegen.errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_RECEIVER_TYPES: tuple[str, ...] = (
    "AbsolutePath",
    "RelativePath",
    "IAbsolutePathTranslation",
    "IHasAbsolutePath",
    "File",
    "Folder",
    "MissingPath",
    "FileOrMissingPath",
    "FolderOrMissingPath",
    "FileOrFolder",
)

DEFAULT_PREAMBLE_IMPORTS: tuple[str, ...] = (
    "System",
    "System.Collections.Generic",
    "System.Threading.Tasks",
    "System.Threading",
    "System.IO",
    "System.Linq",
    "System.Net.Http.Headers",
    "System.Reactive",
    "System.Text",
    "LiveLinq.Dictionary",
    "LiveLinq.Set",
    "SimpleMonads",
    "TreeLinq",
    "UnitsNet",
)

DEFAULT_EXTENSIONS_SUMMARY = (
    "Contains extension methods on AbsolutePath, RelativePath, and IAbsolutePathTranslation "
    "that essentially wrap\n"
    "methods on the object's IoService property. That is, myAbsolutePath.RelativeTo(parameter1) "
    "is equivalent to\n"
    "myAbsolutePath.IoService.RelativeTo(myAbsolutePath, parameter1). This shorthand makes the "
    "syntax be fluent\n"
    "while allowing the IIoService to be dependency injectable."
)

CONTRACT_ENV_VAR = "SHORTHAND_CODEGEN_CONTRACT"
OPTIONAL_PROPERTY_MODE_ENV_VAR = "SHORTHAND_CODEGEN_OPTIONAL_PROPERTY_MODE"


class OptionalPropertyMode(str, Enum):
    """How ``Try...`` methods returning an optional become properties.

    UNWRAP declares the payload type and unwraps the call's result.
    RAW declares the payload type but returns the raw optional call; the
    output does not type-check and exists only to reproduce older output.
    WRAPPED declares the full optional type and returns the raw call.
    """

    UNWRAP = "unwrap"
    RAW = "raw"
    WRAPPED = "wrapped"


class BaseConfiguration(BaseModel):
    """Base class for generator configuration sections.

    Immutable, strict (no unknown keys) and created through
    ``from_properties`` when read from a file.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
    )

    @classmethod
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from a properties dictionary with validation."""
        return cls.model_validate(properties)


def _clean_names(values: tuple[str, ...]) -> tuple[str, ...]:
    cleaned = tuple(value.strip() for value in values)
    if any(not value for value in cleaned):
        raise ValueError("Names must be non-empty strings")
    return cleaned


class ClassificationPolicy(BaseConfiguration):
    """Rules deciding which contract methods become properties or wrappers."""

    property_receivers: tuple[str, ...] = Field(
        default=DEFAULT_RECEIVER_TYPES,
        description="Type identifiers (bare or full names) that may host generated properties",
    )
    extension_hosts: tuple[str, ...] = Field(
        default=DEFAULT_RECEIVER_TYPES,
        description="Type identifiers (bare or full names) that may host extension wrappers",
    )
    excluded_name_fragments: tuple[str, ...] = Field(
        default=("Open", "Clear", "Delete", "Ensure", "Observe", "Read", "Set"),
        description="Method name fragments marking side effects; such methods never become properties",
    )
    fragment_exemptions: dict[str, tuple[str, ...]] = Field(
        default_factory=lambda: {"Read": ("ReadOnly",)},
        description="Fragments that lift an exclusion when also present in the name",
    )
    excluded_names: tuple[str, ...] = Field(
        default=("Decrypt", "Encrypt", "Renamings", "Simplify"),
        description="Exact method names that never become properties",
    )
    optional_type_names: tuple[str, ...] = Field(
        default=("IMaybe",),
        description="Bare names of single-argument generic types meaning 'value may be absent'",
    )
    capability_receiver: str = Field(
        default="IHasAbsolutePath",
        min_length=1,
        description="Receiver emitted as a partial interface rather than a partial class",
    )

    @field_validator(
        "property_receivers",
        "extension_hosts",
        "excluded_name_fragments",
        "excluded_names",
        "optional_type_names",
    )
    @classmethod
    def validate_names(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Strip names and reject blank entries."""
        return _clean_names(v)


class EmissionConfig(BaseConfiguration):
    """Settings shaping the emitted source text."""

    preamble_imports: tuple[str, ...] = Field(
        default=DEFAULT_PREAMBLE_IMPORTS,
        description="Namespaces imported at the top of both generated files",
    )
    service_accessor: str = Field(
        default="IoService",
        min_length=1,
        description="Member through which a receiver exposes the service instance",
    )
    optional_value_accessor: str = Field(
        default="Value",
        min_length=1,
        description="Member extracting the payload of an optional (fails when empty)",
    )
    optional_property_mode: OptionalPropertyMode = Field(
        default=OptionalPropertyMode.UNWRAP,
        description="Rendering of Try-prefixed optional-returning properties",
    )
    include_namespaces: bool = Field(
        default=False,
        description="Render namespace-qualified type names",
    )
    extensions_namespace: str = Field(
        default="IoFluently",
        min_length=1,
        description="Namespace enclosing the generated extension class",
    )
    extensions_class_name: str = Field(
        default="IoExtensions",
        min_length=1,
        description="Name of the generated static partial extension class",
    )
    extensions_summary: str = Field(
        default=DEFAULT_EXTENSIONS_SUMMARY,
        description="Documentation summary of the generated extension class",
    )

    @field_validator("preamble_imports")
    @classmethod
    def validate_imports(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        """Strip namespaces and reject blank entries."""
        return _clean_names(v)


class GeneratorConfig(BaseConfiguration):
    """Complete configuration of one generator run."""

    contract: str = Field(
        default="IoFluently.IIoService",
        min_length=1,
        description="Full or bare name of the contract type to generate from",
    )
    properties_output: Path = Field(
        default=Path("src/IoFluently/PartialClasses.g.cs"),
        description="Properties artifact path, relative to the output root",
    )
    extensions_output: Path = Field(
        default=Path("src/IoFluently/IoExtensions.g.cs"),
        description="Extension wrappers artifact path, relative to the output root",
    )
    classification: ClassificationPolicy = Field(default_factory=ClassificationPolicy)
    emission: EmissionConfig = Field(default_factory=EmissionConfig)

    @classmethod
    @override
    def from_properties(cls, properties: dict[str, Any]) -> Self:
        """Create configuration from properties with environment fallback.

        Environment variables used:
        - SHORTHAND_CODEGEN_CONTRACT: contract to generate from
        - SHORTHAND_CODEGEN_OPTIONAL_PROPERTY_MODE: optional property mode

        Args:
            properties: Configuration properties dictionary

        Returns:
            Validated configuration instance

        Raises:
            ConfigError: If validation fails

        """
        config_data = dict(properties)

        if "contract" not in config_data and os.getenv(CONTRACT_ENV_VAR):
            config_data["contract"] = os.environ[CONTRACT_ENV_VAR]

        mode = os.getenv(OPTIONAL_PROPERTY_MODE_ENV_VAR)
        if mode:
            emission = dict(config_data.get("emission") or {})
            emission.setdefault("optional_property_mode", mode.strip().lower())
            config_data["emission"] = emission

        try:
            config = cls.model_validate(config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid generator configuration: {e}") from e

        if config.emission.optional_property_mode is OptionalPropertyMode.RAW:
            logger.warning(
                "Optional property mode 'raw' declares payload types but returns raw "
                "optionals; the generated properties will not compile"
            )
        return config


class ConfigLoader:
    """Loads generator configuration from YAML files."""

    @classmethod
    def load(cls, config_path: Path | None = None) -> GeneratorConfig:
        """Load configuration, falling back to defaults when no file is given.

        Args:
            config_path: Optional path to a YAML configuration file

        Returns:
            Validated generator configuration

        Raises:
            ConfigError: If the file cannot be read, parsed or validated

        """
        if config_path is None:
            logger.debug("No configuration file given, using defaults")
            return GeneratorConfig.from_properties({})

        logger.debug("Loading configuration from: %s", config_path)
        try:
            with open(config_path, encoding="utf-8") as f:
                raw_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Cannot read file {config_path}: {e}") from e

        if raw_data is None:
            raw_data = {}
        if not isinstance(raw_data, dict):
            raise ConfigError(f"Invalid configuration format in {config_path}")

        return GeneratorConfig.from_properties(raw_data)
