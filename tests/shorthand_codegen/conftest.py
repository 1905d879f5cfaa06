"""Pytest configuration for shorthand-codegen tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from shorthand_codegen.configuration import (
    ClassificationPolicy,
    EmissionConfig,
    GeneratorConfig,
)

EXAMPLES_DIR = Path(__file__).resolve().parents[2] / "examples"


@pytest.fixture
def io_descriptor_path() -> Path:
    """Path to the bundled IoFluently contract descriptor."""
    return EXAMPLES_DIR / "io_service.yaml"


@pytest.fixture
def example_config_path() -> Path:
    """Path to the bundled generator configuration."""
    return EXAMPLES_DIR / "shorthand-codegen.yaml"


@pytest.fixture
def small_policy() -> ClassificationPolicy:
    """Synthetic policy with small allow-lists."""
    return ClassificationPolicy(
        property_receivers=("Demo.Path", "Marker"),
        extension_hosts=("Demo.Path", "Demo.PathUnion", "Marker"),
        capability_receiver="Marker",
    )


@pytest.fixture
def small_emission() -> EmissionConfig:
    """Emission settings with a one-line preamble and summary."""
    return EmissionConfig(
        preamble_imports=("System",),
        extensions_namespace="Demo",
        extensions_class_name="DemoExtensions",
        extensions_summary="Wrappers.",
    )


@pytest.fixture
def small_config(
    small_policy: ClassificationPolicy, small_emission: EmissionConfig
) -> GeneratorConfig:
    """Generator configuration for the synthetic Demo.IService contract."""
    return GeneratorConfig(
        contract="Demo.IService",
        properties_output=Path("generated/Properties.g.cs"),
        extensions_output=Path("generated/Extensions.g.cs"),
        classification=small_policy,
        emission=small_emission,
    )


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo global logging changes made by setup_logging."""
    package_logger = logging.getLogger("shorthand_codegen")
    root_logger = logging.getLogger()
    saved = (
        package_logger.level,
        package_logger.propagate,
        list(package_logger.handlers),
        root_logger.level,
        list(root_logger.handlers),
    )
    yield
    package_logger.setLevel(saved[0])
    package_logger.propagate = saved[1]
    package_logger.handlers = saved[2]
    root_logger.setLevel(saved[3])
    root_logger.handlers = saved[4]
