"""Descriptor file loading with Pydantic validation.

A descriptor file is YAML (JSON is accepted as a YAML subset) describing
one or more contract types:

    contracts:
      - name: IIoService
        namespace: IoFluently
        methods:
          - name: TryGetSize
            return_type: SimpleMonads.IMaybe<UnitsNet.Information>
            parameters:
              - name: path
                type: IoFluently.AbsolutePath
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from shorthand_codegen.descriptors.in_memory import InMemoryTypeDescriptorModel
from shorthand_codegen.errors import (
    DescriptorError,
    DescriptorLoadError,
    DescriptorValidationError,
)
from shorthand_codegen.models import DescriptorDocument

logger = logging.getLogger(__name__)


class DescriptorLoader:
    """Loads descriptor files into validated Type Descriptor Models."""

    @classmethod
    def load(cls, descriptor_path: Path) -> InMemoryTypeDescriptorModel:
        """Load a descriptor file into an in-memory Type Descriptor Model.

        Args:
            descriptor_path: Path to the YAML or JSON descriptor file

        Returns:
            Model serving every contract in the file

        Raises:
            DescriptorLoadError: If the file cannot be read or parsed
            DescriptorValidationError: If the file content is invalid

        """
        document = cls.load_document(descriptor_path)
        model = InMemoryTypeDescriptorModel(document.contracts)
        logger.info(
            "Loaded %d contract(s) from %s", len(document.contracts), descriptor_path
        )
        return model

    @classmethod
    def load_document(cls, descriptor_path: Path) -> DescriptorDocument:
        """Load and validate the raw descriptor document."""
        logger.debug("Loading descriptor file: %s", descriptor_path)

        raw_data = cls._load_descriptor_file(descriptor_path)
        try:
            return DescriptorDocument.model_validate(raw_data)
        except ValidationError as e:
            error_details: list[str] = []
            for error in e.errors():
                location = (
                    " -> ".join(str(part) for part in error["loc"])
                    if error["loc"]
                    else "root"
                )
                error_details.append(f"  {location}: {error['msg']}")

            error_message = (
                f"Descriptor validation failed for {descriptor_path}:\n"
                + "\n".join(error_details)
            )
            raise DescriptorValidationError(error_message) from e
        except DescriptorError as e:
            raise DescriptorValidationError(
                f"Descriptor validation failed for {descriptor_path}: {e}"
            ) from e

    @staticmethod
    def _load_descriptor_file(file_path: Path) -> Any:  # noqa: ANN401
        """Load YAML data from file.

        Raises:
            DescriptorLoadError: If file cannot be read or parsed

        """
        try:
            with open(file_path, encoding="utf-8") as f:
                return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise DescriptorLoadError(f"Invalid YAML in {file_path}: {e}") from e
        except OSError as e:
            raise DescriptorLoadError(f"Cannot read file {file_path}: {e}") from e
