"""
End-to-end tests over tests/fixtures/sample_api.
"""

import pytest


class TestLoadModule:
    """Tests for load_module."""

    def test_dotted_name(self, sample_api):
        """Dotted names are imported."""
        from apiref.generate import load_module

        assert load_module("sample_api") is sample_api

    def test_module_object(self, sample_api):
        """Module objects pass through."""
        from apiref.generate import load_module

        assert load_module(sample_api) is sample_api

    def test_missing_module(self):
        """An unknown module is a discovery error."""
        from apiref.exceptions import DiscoveryError
        from apiref.generate import load_module

        with pytest.raises(DiscoveryError) as exc_info:
            load_module("sample_api_does_not_exist")

        assert exc_info.value.code == "MODULE_NOT_FOUND"

    def test_py_path(self, tmp_path):
        """A .py path is loaded as a standalone module."""
        from apiref.generate import load_module

        path = tmp_path / "standalone_api.py"
        path.write_text('"""Standalone."""\n\n__all__ = ["double"]\n\n\ndef double(x: int) -> int:\n    return 2 * x\n')

        module = load_module(str(path))

        assert module.__name__ == "standalone_api"
        assert module.double(2) == 4

    def test_failing_path_not_left_in_sys_modules(self, tmp_path):
        """A module that raises while loading is removed from sys.modules."""
        import sys

        from apiref.generate import load_module

        path = tmp_path / "raising_api.py"
        path.write_text('raise ValueError("bad config")\n')

        with pytest.raises(ValueError, match="bad config"):
            load_module(str(path))

        assert "raising_api" not in sys.modules

    def test_import_failure_in_path(self, tmp_path):
        """An ImportError inside a .py path is a discovery error."""
        import sys

        from apiref.exceptions import DiscoveryError
        from apiref.generate import load_module

        path = tmp_path / "broken_import_api.py"
        path.write_text("import module_that_does_not_exist_anywhere\n")

        with pytest.raises(DiscoveryError):
            load_module(str(path))

        assert "broken_import_api" not in sys.modules

    def test_missing_path(self, tmp_path):
        """A missing .py path is a discovery error."""
        from apiref.exceptions import DiscoveryError
        from apiref.generate import load_module

        with pytest.raises(DiscoveryError):
            load_module(str(tmp_path / "nope.py"))


class TestGenerateEntries:
    """Tests for generate_entries on the sample package."""

    def test_expected_entries(self, sample_entries):
        """Exports and the classes their signatures reach are documented."""
        assert {e.name for e in sample_entries} == {
            "Tensor",
            "Tensor.rank",
            "Tensor.constructor",
            "Tensor.foo",
            "Tensor.shape",
            "Tensor.astype",
            "Tensor.ones",
            "Tensor.scale",
            "add",
            "zeros",
            "norm",
            "negate",
            "DType",
            "DType.constructor",
        }

    def test_no_duplicates(self, sample_entries):
        """Tensor is exported twice but documented once."""
        names = [e.name for e in sample_entries]

        assert len(names) == len(set(names))

    def test_visiting_order(self, sample_entries):
        """Exports come first; reached-only classes follow."""
        names = [e.name for e in sample_entries]

        assert names[0] == "Tensor"
        assert names.index("add") < names.index("DType")

    def test_skipped_exports(self, sample_entries):
        """Plain variables, literals, aliases and interfaces are not documented."""
        names = {e.name for e in sample_entries}

        for skipped in ("VERSION", "DEFAULTS", "MAX_RANK", "Reducer", "Shape", "Device", "Array"):
            assert skipped not in names

    def test_closure_complete(self, sample_entries, model):
        """Every package class named in a method signature has its own entry."""
        names = {e.name for e in sample_entries if e.kind == "class"}

        for entry in sample_entries:
            if entry.kind != "method":
                continue
            for typestr in [a.typestr for a in entry.args] + [entry.ret_type]:
                for cls in ("Tensor", "DType"):
                    if cls in typestr:
                        assert cls in names

    def test_args_only_on_methods(self, sample_entries):
        """args and ret_type are set on methods and nowhere else."""
        for entry in sample_entries:
            if entry.kind == "method":
                assert entry.args is not None
                assert entry.ret_type is not None
            else:
                assert entry.args is None
                assert entry.ret_type is None

    def test_custom_resolver(self, sample_api):
        """A resolver passed in supplies every source link."""
        from apiref.generate import generate_entries

        class Resolver:
            def resolve_source_url(self, node):
                return "https://example.com/src"

        entries = generate_entries(sample_api, resolver=Resolver())

        assert all(e.source_url == "https://example.com/src" for e in entries)

    def test_skips_logged(self, sample_api, caplog):
        """Skipped exports are logged but do not abort the run."""
        import logging

        from apiref.generate import generate_entries

        with caplog.at_level(logging.INFO, logger="apiref"):
            generate_entries(sample_api)

        assert "skipping string literal VERSION" in caplog.text
        assert "skipping interface Device" in caplog.text
        assert "skipping var MAX_RANK" in caplog.text


class TestGenerateHtml:
    """Tests for generate_html and write_html."""

    def test_page(self, sample_api):
        """The page lists functions before classes."""
        from apiref.generate import generate_html

        html = generate_html(sample_api, title="Sample")

        assert "<h1>Sample</h1>" in html
        assert html.index('href="#add"') < html.index('href="#zeros"') < html.index('href="#Tensor"')
        assert '<div id=Tensor_constructor class="doc-entry">' in html

    def test_example_block(self, sample_api):
        """Indented docstring examples become notebook blocks."""
        from apiref.generate import generate_html

        html = generate_html(sample_api)

        assert "<script type=notebook>\n" in html
        assert "t = Tensor([1.0, 2.0])" in html

    def test_parameter_docs_not_code(self, sample_api):
        """Args sections render once, as arguments, never as a notebook block."""
        from apiref.generate import generate_html

        html = generate_html(sample_api, print_args=True)
        start = html.index('<div id=add class="doc-entry">')
        block = html[start : html.index("<div id=", start + 1)]

        assert "<script type=notebook>" not in block
        assert "Args:" not in block
        assert block.count("Left operand.") == 1
        assert '<span class="docstr">Left operand.</span>' in block

    def test_write_html(self, tmp_path):
        """Pages are written as UTF-8, creating directories."""
        from apiref.generate import write_html

        path = write_html("<p>héllo</p>", tmp_path / "site" / "index.html")

        assert path.read_text(encoding="utf-8") == "<p>héllo</p>"
