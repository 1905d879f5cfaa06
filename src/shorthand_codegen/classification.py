"""Classification of contract methods into properties and extension wrappers.

A method becomes a property shorthand when it is a pure accessor on a
single path-like receiver, and an extension wrapper when it is any other
operation whose first parameter is an allowed host type. Everything the
classifier does not recognise is treated as "not eligible" and skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum

from shorthand_codegen.configuration import ClassificationPolicy
from shorthand_codegen.models import (
    MethodDescriptor,
    TypeIdentifier,
    TypeRef,
    Visibility,
)

logger = logging.getLogger(__name__)

TRY_PREFIX = "Try"
GET_PREFIX = "Get"


class MethodRole(str, Enum):
    """What a contract method turns into."""

    PROPERTY = "property"
    EXTENSION = "extension"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class GroupedClassification:
    """Result of classifying one contract.

    Attributes:
        property_groups: Property methods keyed by receiver, keys in natural
            sort order, methods ordered by name, parameter count, then
            declaration order
        extension_methods: Wrapper methods in declaration order

    """

    property_groups: dict[TypeIdentifier, list[MethodDescriptor]] = field(
        default_factory=dict
    )
    extension_methods: list[MethodDescriptor] = field(default_factory=list)

    @property
    def property_count(self) -> int:
        """Total number of property methods across all receivers."""
        return sum(len(methods) for methods in self.property_groups.values())


def strip_try_prefix(name: str) -> str:
    """Drop a leading ``Try`` from a method name."""
    return name[len(TRY_PREFIX) :] if name.startswith(TRY_PREFIX) else name


def property_name_for(name: str) -> str:
    """Property name for a ``Try``/``TryGet`` method (``TryGetSize`` -> ``Size``)."""
    stripped = strip_try_prefix(name)
    if stripped.startswith(GET_PREFIX):
        stripped = stripped[len(GET_PREFIX) :]
    return stripped


class Classifier:
    """Decides per method whether it becomes a property, a wrapper, or neither."""

    def __init__(self, policy: ClassificationPolicy) -> None:
        """Initialise the classifier.

        Args:
            policy: Allow-lists and name rules to classify with

        """
        self._policy = policy
        self._property_receivers = frozenset(policy.property_receivers)
        self._extension_hosts = frozenset(policy.extension_hosts)
        self._optional_names = frozenset(policy.optional_type_names)

    @property
    def policy(self) -> ClassificationPolicy:
        """The policy this classifier applies."""
        return self._policy

    @staticmethod
    def _is_allowed(type_ref: TypeRef, allowed: frozenset[str]) -> bool:
        """Match a plain named type against identifiers given by bare or full name."""
        if type_ref.is_generic or type_ref.is_array:
            return False
        return type_ref.name in allowed or type_ref.full_name in allowed

    def is_optional(self, type_ref: TypeRef) -> bool:
        """Whether a type has the optional-binder shape."""
        return (
            not type_ref.is_array
            and len(type_ref.arguments) == 1
            and type_ref.bare_name in self._optional_names
        )

    def optional_payload(self, type_ref: TypeRef) -> TypeRef | None:
        """Payload type of an optional-binder type, or None for other shapes."""
        if self.is_optional(type_ref):
            return type_ref.arguments[0]
        return None

    def is_unwrappable(self, method: MethodDescriptor) -> bool:
        """Whether a method is a ``Try`` method returning an optional."""
        return method.name.startswith(TRY_PREFIX) and self.is_optional(method.return_type)

    def has_excluded_name(self, name: str) -> bool:
        """Whether a method name marks a side effect rather than a pure accessor."""
        if name in self._policy.excluded_names:
            return True
        for fragment in self._policy.excluded_name_fragments:
            if fragment not in name:
                continue
            exemptions = self._policy.fragment_exemptions.get(fragment, ())
            if not any(exemption in name for exemption in exemptions):
                return True
        return False

    def is_property_candidate(self, method: MethodDescriptor) -> bool:
        """Whether a method becomes a zero-argument property on its parameter's type."""
        if len(method.parameters) != 1:
            return False
        if method.is_static and method.return_type.is_void:
            return False
        if method.visibility is not Visibility.PUBLIC:
            return False
        if not self._is_allowed(method.parameters[0].type, self._property_receivers):
            return False
        return not self.has_excluded_name(method.name)

    def is_extension_candidate(self, method: MethodDescriptor) -> bool:
        """Whether a method becomes a free function on its first parameter."""
        if self.is_property_candidate(method):
            return False
        receiver = method.first_parameter
        if receiver is None or receiver.is_output:
            return False
        return self._is_allowed(receiver.type, self._extension_hosts)

    def role_of(self, method: MethodDescriptor) -> MethodRole:
        """Classify a single method."""
        if self.is_property_candidate(method):
            return MethodRole.PROPERTY
        if self.is_extension_candidate(method):
            return MethodRole.EXTENSION
        return MethodRole.SKIPPED

    def classify(self, methods: Iterable[MethodDescriptor]) -> GroupedClassification:
        """Classify every method of a contract.

        Args:
            methods: Contract methods in declaration order

        Returns:
            Property groups and wrapper methods, ordered for emission

        """
        declared: Sequence[MethodDescriptor] = list(methods)

        # sorted() is stable, so ties keep declaration order
        by_name = sorted(
            declared, key=lambda method: (method.name, len(method.parameters))
        )
        groups: dict[TypeIdentifier, list[MethodDescriptor]] = {}
        for method in by_name:
            if self.is_property_candidate(method):
                receiver = method.parameters[0].type.identifier
                groups.setdefault(receiver, []).append(method)

        extension_methods: list[MethodDescriptor] = []
        for method in declared:
            role = self.role_of(method)
            logger.debug("Method %s classified as %s", method.name, role.value)
            if role is MethodRole.EXTENSION:
                extension_methods.append(method)

        ordered_groups = {
            key: groups[key]
            for key in sorted(groups, key=lambda key: (key.namespace, key.name))
        }
        result = GroupedClassification(
            property_groups=ordered_groups, extension_methods=extension_methods
        )
        logger.info(
            "Classified %d methods: %d properties on %d receivers, %d wrappers",
            len(declared),
            result.property_count,
            len(ordered_groups),
            len(extension_methods),
        )
        return result
