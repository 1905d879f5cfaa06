"""Dictionary-backed Type Descriptor Model."""

from __future__ import annotations

from collections.abc import Iterable

from shorthand_codegen.errors import ContractNotFoundError
from shorthand_codegen.models import ContractDescriptor, MethodDescriptor


class InMemoryTypeDescriptorModel:
    """Type Descriptor Model over a fixed set of contract descriptors.

    Contracts are addressed by full name; a bare name also resolves as long
    as it is unambiguous.
    """

    def __init__(self, contracts: Iterable[ContractDescriptor]) -> None:
        """Initialise the model.

        Args:
            contracts: Contract descriptors to serve

        """
        self._by_full_name: dict[str, ContractDescriptor] = {}
        self._by_name: dict[str, list[ContractDescriptor]] = {}
        for contract in contracts:
            self._by_full_name[contract.identifier.full_name] = contract
            self._by_name.setdefault(contract.name, []).append(contract)

    def describe_methods(self, contract: str) -> list[MethodDescriptor]:
        """List the methods declared on a contract type."""
        return list(self.get_contract(contract).methods)

    def get_contract(self, contract: str) -> ContractDescriptor:
        """Resolve a contract by full or bare name.

        Raises:
            ContractNotFoundError: If the name is unknown or ambiguous

        """
        if contract in self._by_full_name:
            return self._by_full_name[contract]
        candidates = self._by_name.get(contract, [])
        if len(candidates) == 1:
            return candidates[0]
        raise ContractNotFoundError(contract)

    def list_contracts(self) -> list[str]:
        """List the full names of all served contracts."""
        return list(self._by_full_name.keys())
