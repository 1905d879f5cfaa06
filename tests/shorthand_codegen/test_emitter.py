"""Tests for source emission."""

from typing import Any

import pytest

from shorthand_codegen.classification import Classifier
from shorthand_codegen.configuration import (
    ClassificationPolicy,
    EmissionConfig,
    OptionalPropertyMode,
)
from shorthand_codegen.emitter import SourceEmitter
from shorthand_codegen.models import MethodDescriptor


def make_method(
    name: str, *parameters: dict[str, Any], returns: str = "long", **fields: Any
) -> MethodDescriptor:
    """Build a method from parameter mappings."""
    return MethodDescriptor.model_validate(
        {"name": name, "return_type": returns, "parameters": list(parameters), **fields}
    )


def param(name: str, type_notation: str, **fields: Any) -> dict[str, Any]:
    """Build a parameter mapping."""
    return {"name": name, "type": type_notation, **fields}


PATH = param("path", "Demo.Path")


def build_emitter(
    policy: ClassificationPolicy, emission: EmissionConfig, **overrides: Any
) -> SourceEmitter:
    """Create an emitter with emission overrides applied."""
    config = emission.model_copy(update=overrides)
    return SourceEmitter(config, Classifier(policy))


@pytest.fixture
def emitter(small_policy: ClassificationPolicy, small_emission: EmissionConfig) -> SourceEmitter:
    """Emitter over the synthetic Demo policy."""
    return build_emitter(small_policy, small_emission)


@pytest.fixture
def classifier(small_policy: ClassificationPolicy) -> Classifier:
    """Classifier over the synthetic Demo policy."""
    return Classifier(small_policy)


class TestRenderProperty:
    """Tests for SourceEmitter.render_property."""

    def test_plain_property(self, emitter: SourceEmitter) -> None:
        """Test that ordinary accessors keep their name and return type."""
        method = make_method("Exists", PATH, returns="bool")

        assert emitter.render_property(method) == "public Boolean Exists => IoService.Exists(this);"

    def test_generic_return_type_without_try_is_kept(self, emitter: SourceEmitter) -> None:
        """Test that optionals from non-Try methods are not unwrapped."""
        method = make_method("GetSize", PATH, returns="SimpleMonads.IMaybe<long>")

        assert (
            emitter.render_property(method)
            == "public IMaybe<long> GetSize => IoService.GetSize(this);"
        )

    def test_unwrap_mode(self, emitter: SourceEmitter) -> None:
        """Test that Try optionals declare and return the payload by default."""
        method = make_method("TryGetSize", PATH, returns="SimpleMonads.IMaybe<long>")

        assert (
            emitter.render_property(method)
            == "public long Size => IoService.TryGetSize(this).Value;"
        )

    def test_raw_mode(
        self, small_policy: ClassificationPolicy, small_emission: EmissionConfig
    ) -> None:
        """Test that raw mode declares the payload but returns the raw call."""
        emitter = build_emitter(
            small_policy, small_emission, optional_property_mode=OptionalPropertyMode.RAW
        )
        method = make_method("TryGetSize", PATH, returns="SimpleMonads.IMaybe<long>")

        assert emitter.render_property(method) == "public long Size => IoService.TryGetSize(this);"

    def test_wrapped_mode(
        self, small_policy: ClassificationPolicy, small_emission: EmissionConfig
    ) -> None:
        """Test that wrapped mode declares the optional type."""
        emitter = build_emitter(
            small_policy, small_emission, optional_property_mode=OptionalPropertyMode.WRAPPED
        )
        method = make_method("TryGetSize", PATH, returns="SimpleMonads.IMaybe<long>")

        assert (
            emitter.render_property(method)
            == "public IMaybe<long> Size => IoService.TryGetSize(this);"
        )

    def test_try_without_get(self, emitter: SourceEmitter) -> None:
        """Test that only the Try prefix is removed when there is no Get."""
        method = make_method("TryParent", PATH, returns="SimpleMonads.IMaybe<Demo.Path>")

        assert (
            emitter.render_property(method)
            == "public Path Parent => IoService.TryParent(this).Value;"
        )

    @pytest.mark.parametrize("name", ["Try", "TryGet"])
    def test_prefix_only_name_stays_plain(self, emitter: SourceEmitter, name: str) -> None:
        """Test that a name with nothing after its prefixes keeps the plain form."""
        method = make_method(name, PATH, returns="SimpleMonads.IMaybe<long>")

        assert (
            emitter.render_property(method)
            == f"public IMaybe<long> {name} => IoService.{name}(this);"
        )

    def test_custom_accessors(
        self, small_policy: ClassificationPolicy, small_emission: EmissionConfig
    ) -> None:
        """Test that the service and value accessors are configurable."""
        emitter = build_emitter(
            small_policy,
            small_emission,
            service_accessor="Service",
            optional_value_accessor="Unwrap()",
        )
        method = make_method("TryGetSize", PATH, returns="SimpleMonads.IMaybe<long>")

        assert (
            emitter.render_property(method)
            == "public long Size => Service.TryGetSize(this).Unwrap();"
        )


class TestEmitProperties:
    """Tests for SourceEmitter.emit_properties."""

    def test_class_block(self, emitter: SourceEmitter, classifier: Classifier) -> None:
        """Test the layout of one receiver group."""
        classification = classifier.classify(
            [make_method("Size", PATH), make_method("Exists", PATH, returns="bool")]
        )

        assert emitter.emit_properties(classification) == (
            "using System;\n"
            "\n"
            "namespace Demo {\n"
            "    public partial class Path {\n"
            "        public Boolean Exists => IoService.Exists(this);\n"
            "        public long Size => IoService.Size(this);\n"
            "    }\n"
            "}\n"
        )

    def test_capability_receiver_is_an_interface(
        self, emitter: SourceEmitter, classifier: Classifier
    ) -> None:
        """Test that the capability receiver becomes a partial interface."""
        classification = classifier.classify(
            [make_method("GetParent", param("path", "Demo.Marker"), returns="Demo.Path")]
        )

        assert "    public partial interface Marker {\n" in emitter.emit_properties(classification)

    def test_global_namespace_receiver(
        self, emitter: SourceEmitter, classifier: Classifier
    ) -> None:
        """Test that receivers without a namespace are emitted unwrapped."""
        classification = classifier.classify([make_method("Size", param("m", "Marker"))])

        assert emitter.emit_properties(classification) == (
            "using System;\n"
            "\n"
            "public partial interface Marker {\n"
            "    public long Size => IoService.Size(this);\n"
            "}\n"
        )

    def test_no_properties(self, emitter: SourceEmitter, classifier: Classifier) -> None:
        """Test that an empty classification emits only the preamble."""
        assert emitter.emit_properties(classifier.classify([])) == "using System;\n\n"

    def test_default_preamble(self, classifier: Classifier) -> None:
        """Test that the default preamble imports every IoFluently dependency."""
        emitter = SourceEmitter(EmissionConfig(), classifier)

        preamble = emitter.preamble()

        assert preamble[0] == "using System;"
        assert "using SimpleMonads;" in preamble
        assert preamble[-1] == ""
        assert len(preamble) == 15


class TestRenderExtension:
    """Tests for SourceEmitter.render_extension."""

    def test_simple_wrapper(self, emitter: SourceEmitter) -> None:
        """Test that the receiver is passed first to the service call."""
        method = make_method(
            "RelativeTo", PATH, param("relativeTo", "Demo.Path"), returns="Demo.RelativePath"
        )

        assert emitter.render_extension(method) == [
            [
                "        public static RelativePath RelativeTo(this Path path, Path relativeTo) {",
                "            return path.IoService.RelativeTo(path, relativeTo);",
                "        }",
            ]
        ]

    def test_void_wrapper_has_no_return(self, emitter: SourceEmitter) -> None:
        """Test that void wrappers call without returning."""
        method = make_method("Touch", PATH, param("when", "System.DateTime"), returns="void")

        (function,) = emitter.render_extension(method)

        assert function[0] == "        public static void Touch(this Path path, DateTime when) {"
        assert function[1] == "            path.IoService.Touch(path, when);"

    def test_out_parameters(self, emitter: SourceEmitter) -> None:
        """Test that output parameters are declared and forwarded with out."""
        method = make_method(
            "TryResolve",
            PATH,
            param("text", "string"),
            param("result", "Demo.Path", is_output=True),
            returns="bool",
        )

        (function,) = emitter.render_extension(method)

        assert function[0] == (
            "        public static Boolean TryResolve(this Path path, string text, out Path result) {"
        )
        assert function[1] == "            return path.IoService.TryResolve(path, text, out result);"

    def test_default_values(self, emitter: SourceEmitter) -> None:
        """Test that defaults are rendered after the parameter."""
        method = make_method(
            "ReadLines",
            PATH,
            param(
                "access",
                "System.IO.FileAccess",
                default_value={"enum_type": "System.IO.FileAccess", "formatted": "Read, Write"},
            ),
            param("encoding", "System.Text.Encoding", default_value=None),
            param("pattern", "string", default_value="*"),
            param("overwrite", "bool", default_value=False),
            param("limit", "int", default_value=10),
            returns="System.Collections.Generic.IEnumerable<string>",
        )

        (function,) = emitter.render_extension(method)

        assert function[0] == (
            "        public static IEnumerable<string> ReadLines(this Path path, "
            "FileAccess access = FileAccess.Read | FileAccess.Write, "
            "Encoding encoding = null, "
            'string pattern = @"*", '
            "Boolean overwrite = false, "
            "int limit = 10) {"
        )

    def test_try_optional_gets_unwrap_variant(self, emitter: SourceEmitter) -> None:
        """Test that Try methods returning optionals get a Value-unwrapping twin."""
        method = make_method(
            "TryFind", PATH, param("name", "string"), returns="SimpleMonads.IMaybe<Demo.Path>"
        )

        wrapper, variant = emitter.render_extension(method)

        assert wrapper == [
            "        public static IMaybe<Path> TryFind(this Path path, string name) {",
            "            return path.IoService.TryFind(path, name);",
            "        }",
        ]
        assert variant == [
            "        public static Path Find(this Path path, string name) {",
            "            return path.IoService.TryFind(path, name).Value;",
            "        }",
        ]

    def test_variant_keeps_get_prefix(self, emitter: SourceEmitter) -> None:
        """Test that the unwrap variant strips only Try."""
        method = make_method(
            "TryGetChild", PATH, param("name", "string"), returns="SimpleMonads.IMaybe<Demo.Path>"
        )

        _, variant = emitter.render_extension(method)

        assert variant[0].startswith("        public static Path GetChild(")

    def test_bare_try_has_no_variant(self, emitter: SourceEmitter) -> None:
        """Test that a method named Try keeps only its optional-returning wrapper."""
        method = make_method(
            "Try", PATH, param("name", "string"), returns="SimpleMonads.IMaybe<Demo.Path>"
        )

        assert emitter.render_extension(method) == [
            [
                "        public static IMaybe<Path> Try(this Path path, string name) {",
                "            return path.IoService.Try(path, name);",
                "        }",
            ]
        ]

    def test_optional_without_try_has_no_variant(self, emitter: SourceEmitter) -> None:
        """Test that only Try-prefixed methods are unwrapped."""
        method = make_method(
            "Find", PATH, param("name", "string"), returns="SimpleMonads.IMaybe<Demo.Path>"
        )

        assert len(emitter.render_extension(method)) == 1

    def test_include_namespaces(
        self, small_policy: ClassificationPolicy, small_emission: EmissionConfig
    ) -> None:
        """Test namespace-qualified rendering of signatures."""
        emitter = build_emitter(small_policy, small_emission, include_namespaces=True)
        method = make_method("Combine", PATH, param("other", "Demo.Path"), returns="Demo.Path")

        (function,) = emitter.render_extension(method)

        assert function[0] == (
            "        public static Demo.Path Combine(this Demo.Path path, Demo.Path other) {"
        )


class TestEmitExtensions:
    """Tests for SourceEmitter.emit_extensions."""

    def test_file_layout(self, emitter: SourceEmitter, classifier: Classifier) -> None:
        """Test the enclosing namespace, summary and class."""
        classification = classifier.classify(
            [
                make_method(
                    "RelativeTo",
                    PATH,
                    param("relativeTo", "Demo.Path"),
                    returns="Demo.RelativePath",
                )
            ]
        )

        assert emitter.emit_extensions(classification) == (
            "using System;\n"
            "\n"
            "namespace Demo\n"
            "{\n"
            "    /// <summary>\n"
            "    /// Wrappers.\n"
            "    /// </summary>\n"
            "    public static partial class DemoExtensions\n"
            "    {\n"
            "        public static RelativePath RelativeTo(this Path path, Path relativeTo) {\n"
            "            return path.IoService.RelativeTo(path, relativeTo);\n"
            "        }\n"
            "    }\n"
            "}\n"
        )

    def test_functions_are_separated_by_blank_lines(
        self, emitter: SourceEmitter, classifier: Classifier
    ) -> None:
        """Test spacing between consecutive wrapper functions."""
        classification = classifier.classify(
            [
                make_method("TryFind", PATH, param("name", "string"), returns="SimpleMonads.IMaybe<long>"),
                make_method("Copy", PATH, param("target", "Demo.Path"), returns="void"),
            ]
        )

        text = emitter.emit_extensions(classification)

        assert "        }\n\n        public static long Find(" in text
        assert "        }\n\n        public static void Copy(" in text
        assert text.count("        public static ") == 3

    def test_multi_line_summary(
        self,
        small_policy: ClassificationPolicy,
        small_emission: EmissionConfig,
        classifier: Classifier,
    ) -> None:
        """Test that each summary line gets its own doc comment prefix."""
        emitter = build_emitter(small_policy, small_emission, extensions_summary="First.\n\nThird.")

        text = emitter.emit_extensions(classifier.classify([]))

        assert "    /// First.\n    ///\n    /// Third.\n" in text

    def test_emission_is_deterministic(
        self, emitter: SourceEmitter, classifier: Classifier
    ) -> None:
        """Test that repeated emission yields identical text."""
        methods = [
            make_method("Size", PATH),
            make_method("RelativeTo", PATH, param("other", "Demo.Path"), returns="Demo.Path"),
        ]

        first = emitter.emit_extensions(classifier.classify(methods))
        second = emitter.emit_extensions(classifier.classify(list(methods)))

        assert first == second
        assert "\r" not in first
