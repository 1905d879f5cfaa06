"""Shared wiring for CLI commands."""

from __future__ import annotations

from pathlib import Path

from shorthand_codegen.configuration import ConfigLoader
from shorthand_codegen.descriptors import DescriptorLoader
from shorthand_codegen.generator import ShorthandGenerator


def build_generator(descriptor_path: Path, config_path: Path | None) -> ShorthandGenerator:
    """Create a generator from a descriptor file and optional configuration file."""
    config = ConfigLoader.load(config_path)
    model = DescriptorLoader.load(descriptor_path)
    return ShorthandGenerator(model, config)
