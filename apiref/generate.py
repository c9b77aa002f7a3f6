"""
Documentation runs.

Glue between module loading, the walker and the renderer. Each call builds
a fresh model, extractor and walker, so runs never share state.
"""

from __future__ import annotations

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from ._logging import scoped_logger
from .entry import DocEntry
from .exceptions import DiscoveryError
from .extract import Extractor
from .model import InspectModel
from .render import to_html
from .source import GitSourceResolver, SourceResolver
from .walker import Walker

__all__ = ["load_module", "generate_entries", "generate_html", "write_html"]

_log = scoped_logger("cli")


def load_module(target: str | ModuleType) -> ModuleType:
    """Import the root module by dotted name or ``.py`` path.

    Raises:
        DiscoveryError: The module cannot be found or fails to import.
    """
    if isinstance(target, ModuleType):
        return target
    if target.endswith(".py"):
        return _load_path(Path(target))
    try:
        return importlib.import_module(target)
    except ImportError as e:
        raise DiscoveryError(
            f"Cannot import module '{target}': {e}",
            details={"module": target},
        ) from e


def _load_path(path: Path) -> ModuleType:
    if not path.is_file():
        raise DiscoveryError(f"Root module not found: {path}", details={"path": str(path)})
    name = path.stem
    spec = importlib.util.spec_from_file_location(name, path)
    if spec is None or spec.loader is None:
        raise DiscoveryError(f"Cannot load module from {path}", details={"path": str(path)})
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    try:
        spec.loader.exec_module(module)
    except BaseException as e:
        sys.modules.pop(name, None)
        if isinstance(e, ImportError):
            raise DiscoveryError(
                f"Cannot import module '{path}': {e}",
                details={"path": str(path)},
            ) from e
        raise
    return module


def generate_entries(
    target: str | ModuleType,
    repo_url: str | None = None,
    resolver: SourceResolver | None = None,
) -> list[DocEntry]:
    """Walk a root module and return its entries in visiting order.

    Args:
        target: Module object, dotted module name or ``.py`` path.
        repo_url: Hosted repository URL. When given (and no ``resolver``),
            entries get commit-pinned source links.
        resolver: Source link resolver to use instead of the git one.
    """
    module = load_module(target)
    model = InspectModel.for_module(module)
    if resolver is None and repo_url:
        resolver = GitSourceResolver(repo_url, model)

    walker = Walker(model, Extractor(model, resolver))
    entries = walker.run(model.get_exports_of_module(module))
    _log.info("documented %s: %d entries", module.__name__, len(entries))
    return entries


def generate_html(
    target: str | ModuleType,
    repo_url: str | None = None,
    resolver: SourceResolver | None = None,
    title: str | None = None,
    print_args: bool | None = None,
) -> str:
    """Walk a root module and render the complete HTML page."""
    entries = generate_entries(target, repo_url=repo_url, resolver=resolver)
    return to_html(entries, title=title, print_args=print_args)


def write_html(html: str, path: str | Path) -> Path:
    """Write a rendered page as UTF-8, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html, encoding="utf-8")
    _log.info("wrote %s", path)
    return path
