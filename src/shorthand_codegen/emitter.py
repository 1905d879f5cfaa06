"""Assembly of the generated properties and extension wrapper sources."""

from __future__ import annotations

import logging

from shorthand_codegen.classification import (
    Classifier,
    GroupedClassification,
    property_name_for,
    strip_try_prefix,
)
from shorthand_codegen.configuration import EmissionConfig, OptionalPropertyMode
from shorthand_codegen.models import MethodDescriptor, TypeIdentifier, TypeRef
from shorthand_codegen.rendering import render_default_value, render_type_name

logger = logging.getLogger(__name__)

INDENT = "    "


class SourceEmitter:
    """Renders a GroupedClassification into the two generated compilation units.

    The emitter is a pure function of its inputs: the same classification and
    configuration always produce byte-identical text, with ``\\n`` line endings
    and a single trailing newline.
    """

    def __init__(self, config: EmissionConfig, classifier: Classifier) -> None:
        """Initialise the emitter.

        Args:
            config: Emission settings (preamble, accessors, naming)
            classifier: Classifier used to recognise optional-binder shapes

        """
        self._config = config
        self._classifier = classifier

    def _type(self, type_ref: TypeRef) -> str:
        return render_type_name(type_ref, self._config.include_namespaces)

    def preamble(self) -> list[str]:
        """Import lines opening both generated files."""
        lines = [f"using {namespace};" for namespace in self._config.preamble_imports]
        if lines:
            lines.append("")
        return lines

    # ========================================================================
    # Properties
    # ========================================================================

    def emit_properties(self, classification: GroupedClassification) -> str:
        """Render one partial type block per receiver group.

        Args:
            classification: Classified contract methods

        Returns:
            Complete source text of the properties file

        """
        lines = self.preamble()
        for receiver, methods in classification.property_groups.items():
            lines.extend(self._property_block(receiver, methods))
        return "\n".join(lines) + "\n"

    def _property_block(
        self, receiver: TypeIdentifier, methods: list[MethodDescriptor]
    ) -> list[str]:
        kind = (
            "interface"
            if receiver.bare_name == self._classifier.policy.capability_receiver
            or receiver.full_name == self._classifier.policy.capability_receiver
            else "class"
        )
        indent = INDENT if receiver.namespace else ""

        lines: list[str] = []
        if receiver.namespace:
            lines.append(f"namespace {receiver.namespace} {{")
        lines.append(f"{indent}public partial {kind} {receiver.bare_name} {{")
        lines.extend(
            f"{indent}{INDENT}{self.render_property(method)}" for method in methods
        )
        lines.append(f"{indent}}}")
        if receiver.namespace:
            lines.append("}")
        return lines

    def render_property(self, method: MethodDescriptor) -> str:
        """Render a single property declaration for a property candidate."""
        call = f"{self._config.service_accessor}.{method.name}(this)"
        payload = self._classifier.optional_payload(method.return_type)

        name = property_name_for(method.name)
        if payload is None or not name or not self._classifier.is_unwrappable(method):
            return f"public {self._type(method.return_type)} {method.name} => {call};"

        match self._config.optional_property_mode:
            case OptionalPropertyMode.UNWRAP:
                return (
                    f"public {self._type(payload)} {name} => "
                    f"{call}.{self._config.optional_value_accessor};"
                )
            case OptionalPropertyMode.RAW:
                return f"public {self._type(payload)} {name} => {call};"
            case OptionalPropertyMode.WRAPPED:
                return f"public {self._type(method.return_type)} {name} => {call};"

    # ========================================================================
    # Extension wrappers
    # ========================================================================

    def emit_extensions(self, classification: GroupedClassification) -> str:
        """Render one static wrapper (plus unwrap variant) per wrapper method.

        Args:
            classification: Classified contract methods

        Returns:
            Complete source text of the extension wrappers file

        """
        lines = self.preamble()
        lines.append(f"namespace {self._config.extensions_namespace}")
        lines.append("{")
        lines.append(f"{INDENT}/// <summary>")
        lines.extend(
            f"{INDENT}/// {summary_line}".rstrip()
            for summary_line in self._config.extensions_summary.splitlines()
        )
        lines.append(f"{INDENT}/// </summary>")
        lines.append(
            f"{INDENT}public static partial class {self._config.extensions_class_name}"
        )
        lines.append(f"{INDENT}{{")

        functions: list[list[str]] = []
        for method in classification.extension_methods:
            functions.extend(self.render_extension(method))
        for index, function in enumerate(functions):
            if index:
                lines.append("")
            lines.extend(function)

        lines.append(f"{INDENT}}}")
        lines.append("}")
        return "\n".join(lines) + "\n"

    def render_extension(self, method: MethodDescriptor) -> list[list[str]]:
        """Render the wrapper functions for one method.

        Returns:
            The wrapper's lines, followed by the unwrap variant's lines when
            the method is a ``Try`` method returning an optional

        """
        parameters, arguments = self._signature(method)
        receiver = method.parameters[0].name
        call = f"{receiver}.{self._config.service_accessor}.{method.name}({', '.join(arguments)})"

        functions = [
            self._function(
                self._type(method.return_type),
                method.name,
                parameters,
                call,
                returns_value=not method.return_type.is_void,
            )
        ]

        payload = self._classifier.optional_payload(method.return_type)
        variant_name = strip_try_prefix(method.name)
        if payload is not None and variant_name and self._classifier.is_unwrappable(method):
            functions.append(
                self._function(
                    self._type(payload),
                    variant_name,
                    parameters,
                    f"{call}.{self._config.optional_value_accessor}",
                    returns_value=True,
                )
            )
        return functions

    def _signature(self, method: MethodDescriptor) -> tuple[list[str], list[str]]:
        """Build declared parameters and forwarded arguments in original order."""
        parameters: list[str] = []
        arguments: list[str] = []
        for index, parameter in enumerate(method.parameters):
            modifier = ""
            if index == 0:
                modifier = "this "
            elif parameter.is_output:
                modifier = "out "

            declaration = f"{modifier}{self._type(parameter.type)} {parameter.name}"
            if parameter.has_default_value:
                declaration += f" = {render_default_value(parameter.default_value)}"
            parameters.append(declaration)

            arguments.append(
                f"out {parameter.name}" if parameter.is_output else parameter.name
            )
        return parameters, arguments

    @staticmethod
    def _function(
        return_type: str,
        name: str,
        parameters: list[str],
        body: str,
        returns_value: bool,
    ) -> list[str]:
        statement = f"return {body};" if returns_value else f"{body};"
        return [
            f"{INDENT * 2}public static {return_type} {name}({', '.join(parameters)}) {{",
            f"{INDENT * 3}{statement}",
            f"{INDENT * 2}}}",
        ]
