"""
Tests for the command line entry point.
"""

import json
from unittest.mock import patch


class TestMain:
    """Tests for apiref.__main__.main."""

    def test_writes_page(self, tmp_path):
        """A successful run writes the page and exits 0."""
        from apiref.__main__ import main

        out = tmp_path / "index.html"

        assert main(["sample_api", str(out), "--title", "Sample"]) == 0
        html = out.read_text(encoding="utf-8")
        assert "<h1>Sample</h1>" in html
        assert "source-link" not in html

    def test_writes_json(self, tmp_path):
        """--json dumps the entry list."""
        from apiref.__main__ import main

        out = tmp_path / "index.html"
        dump = tmp_path / "entries.json"

        assert main(["sample_api", str(out), "--json", str(dump)]) == 0
        names = [e["name"] for e in json.loads(dump.read_text())]
        assert "Tensor.constructor" in names

    def test_print_args(self, tmp_path):
        """--print-args renders argument blocks."""
        from apiref.__main__ import main

        out = tmp_path / "index.html"

        assert main(["sample_api", str(out), "--print-args"]) == 0
        assert "Arguments" in out.read_text(encoding="utf-8")

    def test_missing_output(self, capsys):
        """Without an output path the usage is printed and the exit code is 1."""
        from apiref.__main__ import main

        assert main(["sample_api"]) == 1
        assert "usage: apiref" in capsys.readouterr().err

    def test_missing_module_writes_nothing(self, tmp_path):
        """A fatal error exits 1 without writing output."""
        from apiref.__main__ import main

        out = tmp_path / "index.html"

        assert main(["sample_api_does_not_exist", str(out)]) == 1
        assert not out.exists()

    def test_source_links(self, tmp_path):
        """--repo-url turns on source links."""
        from apiref.__main__ import main

        out = tmp_path / "index.html"
        with patch("apiref.source.GitSourceResolver.file_url", return_value="https://x/blob/sha/f.py"):
            assert main(["sample_api", str(out), "--repo-url", "https://x"]) == 0

        assert 'href="https://x/blob/sha/f.py#L' in out.read_text(encoding="utf-8")

    def test_no_source_links(self, tmp_path):
        """--no-source-links wins over --repo-url."""
        from apiref.__main__ import main

        out = tmp_path / "index.html"
        with patch("apiref.source.GitSourceResolver.file_url") as file_url:
            assert main(["sample_api", str(out), "--repo-url", "https://x", "--no-source-links"]) == 0

        file_url.assert_not_called()

    def test_no_check_urls_restored(self, tmp_path):
        """--no-check-urls applies to one run only."""
        from apiref.__main__ import main
        from apiref.config import config

        out = tmp_path / "index.html"
        assert main(["sample_api", str(out), "--no-check-urls"]) == 0

        assert config.check_urls is True
