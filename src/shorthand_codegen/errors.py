"""Error classes for shorthand-codegen.

This module provides:
- CodegenError: Base exception class for all generator errors
- ModelError, ContractNotFoundError: Type Descriptor Model exceptions
- DescriptorError, DescriptorLoadError, DescriptorValidationError,
  TypeNotationError: Descriptor file exceptions
- ConfigError: Configuration exception
- OutputWriteError: Artifact writing exception
"""


class CodegenError(Exception):
    """Base exception for all shorthand-codegen errors."""

    pass


class ModelError(CodegenError):
    """Raised when the Type Descriptor Model cannot describe a contract."""

    pass


class ContractNotFoundError(ModelError):
    """Raised when the requested contract type is absent from the model."""

    def __init__(self, contract: str) -> None:
        """Initialise with the name of the missing contract.

        Args:
            contract: Full or bare name of the contract that was requested

        """
        super().__init__(f"Contract type '{contract}' not found in type descriptor model")
        self.contract = contract


class DescriptorError(CodegenError):
    """Base exception for descriptor file errors."""

    pass


class DescriptorLoadError(DescriptorError):
    """Raised when a descriptor file cannot be read or parsed."""

    pass


class DescriptorValidationError(DescriptorError):
    """Raised when a descriptor file is structurally invalid."""

    pass


class TypeNotationError(DescriptorError):
    """Raised when a compact type notation string is malformed."""

    pass


class ConfigError(CodegenError):
    """Raised when generator configuration is invalid."""

    pass


class OutputWriteError(CodegenError):
    """Raised when a generated artifact cannot be written."""

    pass
