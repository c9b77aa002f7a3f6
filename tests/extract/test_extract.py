"""
Tests for the entry extractor.

Classification and member handling run against the real InspectModel over
tests/fixtures/sample_api.
"""

import logging

import pytest

from apiref.model import Declaration, DeclarationKind, Symbol


def _declaration(model, module, name):
    import importlib

    obj = getattr(importlib.import_module(module), name)
    symbol = model.resolve_alias(Symbol(module, name, obj))
    return model.get_declarations(symbol)[0]


class TestVisitClass:
    """Tests for class declarations."""

    def test_class_entry_first(self, model):
        """The class entry precedes its members."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))

        assert out.entries[0].kind == "class"
        assert out.entries[0].name == "Tensor"
        assert out.entries[0].docstr.startswith("An n-dimensional array.")

    def test_members_in_declaration_order(self, model):
        """Members follow the class body order, annotated fields first."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))

        assert [e.name for e in out.entries] == [
            "Tensor",
            "Tensor.rank",
            "Tensor.constructor",
            "Tensor.foo",
            "Tensor.shape",
            "Tensor.astype",
            "Tensor.ones",
            "Tensor.scale",
        ]

    def test_private_member_excluded(self, model):
        """Public foo is documented, private _bar is not."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))
        names = {e.name for e in out.entries}

        assert "Tensor.foo" in names
        assert not any("_bar" in name for name in names)

    def test_member_kinds(self, model):
        """Constructors and methods are methods; fields and accessors are properties."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))
        kinds = {e.name: e.kind for e in out.entries}

        assert kinds["Tensor.constructor"] == "method"
        assert kinds["Tensor.foo"] == "method"
        assert kinds["Tensor.ones"] == "method"
        assert kinds["Tensor.scale"] == "method"
        assert kinds["Tensor.rank"] == "property"
        assert kinds["Tensor.shape"] == "property"

    def test_property_has_no_args(self, model):
        """Only method entries carry args and a return type."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))
        for entry in out.entries:
            if entry.kind != "method":
                assert entry.args is None
                assert entry.ret_type is None

    def test_property_typestr(self, model):
        """Property entries show the member type."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))
        by_name = {e.name: e for e in out.entries}

        assert by_name["Tensor.rank"].typestr == "int"
        assert by_name["Tensor.shape"].typestr == "Shape"
        assert by_name["Tensor.shape"].docstr == "Dimensions of the tensor."

    def test_property_types_not_walked(self, model):
        """Property types do not feed the walker."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))
        displayed = {model.type_to_display_string(t) for t in out.types}

        assert "Shape" not in displayed


class TestVisitMethod:
    """Tests for method entries."""

    def test_function_entry(self, model):
        """A free function becomes an unqualified method entry."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "add"))

        (entry,) = out.entries
        assert entry.kind == "method"
        assert entry.name == "add"
        assert entry.typestr == "(a: Tensor, b: Tensor) -> Tensor"
        assert entry.ret_type == "Tensor"
        assert entry.docstr.startswith("Add two tensors elementwise.")

    def test_args_in_order_with_docs(self, model):
        """Args keep parameter order and carry their documented text."""
        from apiref.entry import ArgEntry
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "add"))

        assert out.entries[0].args == [
            ArgEntry("a", "Tensor", "Left operand."),
            ArgEntry("b", "Tensor", "Right operand."),
        ]

    def test_referenced_types_returned(self, model):
        """Parameter and return types are returned for the walker."""
        from apiref.extract import Extractor
        from sample_api.core import Tensor

        out = Extractor(model).visit(_declaration(model, "sample_api", "add"))

        assert [t.annotation for t in out.types] == [Tensor, Tensor, Tensor]

    def test_constructor_signature(self, model):
        """Constructors drop self, return the class and use class-level arg docs."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))
        ctor = {e.name: e for e in out.entries}["Tensor.constructor"]

        assert ctor.typestr == "(data: list[float], dtype: DType | None = None) -> Tensor"
        assert [a.name for a in ctor.args] == ["data", "dtype"]
        assert ctor.args[0].docstr == "Values in row-major order."
        assert ctor.ret_type == "Tensor"

    def test_callable_variable_is_method(self, model):
        """A variable bound to a lambda is documented as a method."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "negate"))

        (entry,) = out.entries
        assert entry.kind == "method"
        assert entry.name == "negate"
        assert entry.typestr == "(t)"
        assert entry.args[0].typestr == "Any"

    def test_overloaded_function_uses_first_overload(self, model):
        """Only the first overload's signature is documented."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "norm"))

        (entry,) = out.entries
        assert entry.typestr == "(t: Tensor) -> float"
        assert entry.docstr == "Vector norm of a tensor."

    def test_partial_member_signature(self, model):
        """A partial bound in a class body keeps its remaining parameters."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "Tensor"))
        scale = {e.name: e for e in out.entries}["Tensor.scale"]

        assert scale.typestr == "(t: Tensor, *, factor: float = 2.0) -> Tensor"


class TestSkippedKinds:
    """Tests for declarations that produce no entries."""

    @pytest.mark.parametrize("name", ["VERSION", "DEFAULTS", "MAX_RANK", "Reducer", "Shape", "Device"])
    def test_no_entries(self, model, name):
        """Plain variables, literals, aliases and interfaces are skipped."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", name))

        assert out.entries == []
        assert out.types == []

    def test_skip_is_logged(self, model, caplog):
        """Skips are logged at INFO for operator visibility."""
        from apiref.extract import Extractor

        with caplog.at_level(logging.INFO, logger="apiref"):
            Extractor(model).visit(_declaration(model, "sample_api", "Shape"))

        assert "skipping type alias Shape" in caplog.text

    def test_unknown_kind_raises(self, model):
        """An unknown declaration kind is fatal."""
        from apiref.exceptions import ClassificationError
        from apiref.extract import Extractor

        symbol = Symbol("sample_api", "core")
        decl = Declaration(DeclarationKind.UNKNOWN, "core", symbol)

        with pytest.raises(ClassificationError) as exc_info:
            Extractor(model).visit(decl)

        assert exc_info.value.code == "UNKNOWN_DECLARATION"


class TestSourceLinks:
    """Tests for resolver wiring."""

    def test_no_resolver_no_url(self, model):
        """Without a resolver entries carry no source link."""
        from apiref.extract import Extractor

        out = Extractor(model).visit(_declaration(model, "sample_api", "add"))

        assert out.entries[0].source_url is None

    def test_resolver_called_per_entry(self, model):
        """Every entry asks the resolver for its link."""
        from apiref.extract import Extractor

        class Resolver:
            def __init__(self):
                self.nodes = []

            def resolve_source_url(self, node):
                self.nodes.append(node)
                return f"https://example.com/{node.name}"

        resolver = Resolver()
        out = Extractor(model, resolver).visit(_declaration(model, "sample_api", "Tensor"))

        assert len(resolver.nodes) == len(out.entries)
        assert out.entries[0].source_url == "https://example.com/Tensor"
