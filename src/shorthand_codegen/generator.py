"""Generator driver: one offline pass from contract description to source files.

The pass reads the whole contract from the Type Descriptor Model, classifies
it, renders both artifacts in memory and only then touches the filesystem.
Writing goes through temporary files that are swapped into place, so a run
either replaces both artifacts or leaves the previous ones untouched.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from shorthand_codegen.classification import Classifier, GroupedClassification
from shorthand_codegen.configuration import GeneratorConfig
from shorthand_codegen.emitter import SourceEmitter
from shorthand_codegen.errors import ModelError, OutputWriteError
from shorthand_codegen.models import MethodDescriptor
from shorthand_codegen.protocols import TypeDescriptorModel

logger = logging.getLogger(__name__)

_ENCODING = "utf-8"


@dataclass(frozen=True)
class GeneratedSources:
    """Rendered text of both artifacts from a single pass."""

    properties: str
    extensions: str
    classification: GroupedClassification


class ShorthandGenerator:
    """Generates property shorthands and extension wrappers for a contract."""

    def __init__(self, model: TypeDescriptorModel, config: GeneratorConfig) -> None:
        """Initialise the generator.

        Args:
            model: Source of the contract's method descriptions
            config: Policy, emission and output settings

        """
        self._model = model
        self._config = config
        self._classifier = Classifier(config.classification)
        self._emitter = SourceEmitter(config.emission, self._classifier)

    @property
    def config(self) -> GeneratorConfig:
        """Configuration of this generator."""
        return self._config

    @property
    def classifier(self) -> Classifier:
        """Classifier applying the configured policy."""
        return self._classifier

    def describe_contract(self) -> list[MethodDescriptor]:
        """Fetch the contract's methods from the model.

        Raises:
            ModelError: If the model cannot describe the contract

        """
        contract = self._config.contract
        try:
            methods = self._model.describe_methods(contract)
        except ModelError:
            raise
        except Exception as e:
            raise ModelError(f"Failed to describe contract '{contract}': {e}") from e
        logger.info("Contract %s declares %d methods", contract, len(methods))
        return methods

    def render(self) -> GeneratedSources:
        """Run classification and emission without writing anything."""
        classification = self._classifier.classify(self.describe_contract())
        return GeneratedSources(
            properties=self._emitter.emit_properties(classification),
            extensions=self._emitter.emit_extensions(classification),
            classification=classification,
        )

    def output_paths(self, output_root: Path) -> tuple[Path, Path]:
        """Resolve the properties and extensions artifact paths."""
        return (
            output_root / self._config.properties_output,
            output_root / self._config.extensions_output,
        )

    def _targets(self, output_root: Path, sources: GeneratedSources) -> dict[Path, str]:
        properties_path, extensions_path = self.output_paths(output_root)
        return {
            properties_path: sources.properties,
            extensions_path: sources.extensions,
        }

    def generate(self, output_root: Path) -> list[Path]:
        """Render both artifacts and write them under ``output_root``.

        Returns:
            Paths of the written artifacts

        Raises:
            ModelError: If the contract cannot be described (nothing is written)
            OutputWriteError: If an artifact cannot be written

        """
        targets = self._targets(output_root, self.render())
        write_atomically(targets)
        for path in targets:
            logger.info("Wrote %s", path)
        return list(targets)

    def check(self, output_root: Path) -> list[Path]:
        """Find artifacts that are missing or differ from a fresh rendering.

        Returns:
            Paths of stale artifacts (empty when everything is up to date)

        """
        stale: list[Path] = []
        for path, text in self._targets(output_root, self.render()).items():
            try:
                current = path.read_bytes().decode(_ENCODING)
            except FileNotFoundError:
                logger.info("Missing generated file %s", path)
                stale.append(path)
                continue
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Cannot read generated file %s: %s", path, e)
                stale.append(path)
                continue
            if current != text:
                logger.info("Generated file %s is out of date", path)
                stale.append(path)
        return stale


def _target_mode(path: Path) -> int:
    """Permission bits for a rewritten file: the existing ones, else the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_atomically(targets: Mapping[Path, str]) -> None:
    """Write several text files so that each is either fully replaced or untouched.

    Every file is first written to a temporary sibling; only once all of them
    are written are they moved into place. Temporaries are removed on failure.

    Raises:
        OutputWriteError: If any file cannot be written

    """
    staged: list[tuple[Path, Path]] = []
    try:
        for path, text in targets.items():
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
            )
            temp_path = Path(temp_name)
            staged.append((temp_path, path))
            with os.fdopen(fd, "wb") as f:
                os.fchmod(f.fileno(), _target_mode(path))
                f.write(text.encode(_ENCODING))
                f.flush()
                os.fsync(f.fileno())

        for temp_path, path in staged:
            os.replace(temp_path, path)
    except OSError as e:
        raise OutputWriteError(f"Failed to write generated sources: {e}") from e
    finally:
        for temp_path, _ in staged:
            temp_path.unlink(missing_ok=True)
