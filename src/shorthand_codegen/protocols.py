"""Protocols for Type Descriptor Model sources."""

from typing import Protocol, runtime_checkable

from shorthand_codegen.models import MethodDescriptor


@runtime_checkable
class TypeDescriptorModel(Protocol):
    """Read-only structural view of contract types.

    Implementations may be backed by a descriptor file, an in-memory
    fixture, or any reflection facility that can describe a contract:
    - methods are returned in a stable declaration order
    - parameters keep their declaration order
    - generic instantiations and arrays are structured TypeRefs
    """

    def describe_methods(self, contract: str) -> list[MethodDescriptor]:
        """List the methods declared on a contract type.

        Args:
            contract: Full name (``IoFluently.IIoService``) or bare name
                (``IIoService``) of the contract

        Returns:
            The contract's methods in declaration order

        Raises:
            ContractNotFoundError: If the model has no such contract

        """
        ...
