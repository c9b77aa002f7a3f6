"""
Source links.

Resolves a declaration to a permanent link into the hosted repository,
pinned to the last commit that touched its file:

    https://github.com/org/repo/blob/<sha>/pkg/core.py#L10-L24

Pinning to the file's last commit (rather than the branch head) keeps the
links stable for as long as the file does not change.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path
from typing import Protocol
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ._logging import scoped_logger
from .config import config
from .exceptions import SourceLinkError
from .model import Declaration, Member, SemanticModel

__all__ = ["SourceResolver", "GitSourceResolver"]

_log = scoped_logger("source")

_SHA_RE = re.compile(r"^\s*([0-9a-fA-F]{40})\s*$")


class SourceResolver(Protocol):
    """Resolves declarations to external source links."""

    def resolve_source_url(self, node: Declaration | Member) -> str | None:
        """Link to the source of ``node``, or None when it has no source file."""
        ...


def _git(args: list[str], cwd: Path) -> str:
    try:
        result = subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as e:
        stderr = getattr(e, "stderr", None) or str(e)
        raise SourceLinkError(
            f"git {args[0]} failed in {cwd}: {stderr.strip()}",
            details={"command": ["git", *args], "cwd": str(cwd)},
        ) from e
    return result.stdout


class GitSourceResolver:
    """
    Source links backed by git and a hosted repository.

    Args:
        repo_url: Base URL of the hosted repository, e.g.
            ``https://github.com/org/repo``.
        model: Semantic model used to locate declarations.
        check_urls: Probe every file URL once before using it. Defaults to
            ``config.check_urls``.
        timeout: Probe timeout in seconds. Defaults to ``config.url_timeout``.

    Raises (from ``resolve_source_url``):
        SourceLinkError: The file has uncommitted changes, has never been
            committed, or its URL cannot be loaded.
    """

    def __init__(
        self,
        repo_url: str,
        model: SemanticModel,
        check_urls: bool | None = None,
        timeout: float | None = None,
    ) -> None:
        self.repo_url = repo_url.rstrip("/")
        self.model = model
        self.check_urls = config.check_urls if check_urls is None else check_urls
        self.timeout = config.url_timeout if timeout is None else timeout
        self._file_urls: dict[Path, str] = {}

    def resolve_source_url(self, node: Declaration | Member) -> str | None:
        location = self.model.get_source_location(node)
        if location is None:
            return None
        return f"{self.file_url(location.path)}#{location.fragment}"

    def file_url(self, path: Path) -> str:
        """Commit-pinned URL of ``path``, cached per file."""
        path = Path(path).resolve()
        if path in self._file_urls:
            return self._file_urls[path]

        status = _git(["status", "--porcelain", "--", str(path)], cwd=path.parent)
        if status.strip():
            raise SourceLinkError(
                f"File has been modified since last commit: {path.name}.",
                details={"file": str(path)},
            )

        log = _git(["log", "-n1", "--pretty=%H", "--", str(path)], cwd=path.parent)
        match = _SHA_RE.match(log)
        if match is None:
            raise SourceLinkError(
                f"File has no commit: {path.name}.",
                details={"file": str(path)},
            )
        sha = match.group(1)

        toplevel = Path(_git(["rev-parse", "--show-toplevel"], cwd=path.parent).strip()).resolve()
        relpath = path.relative_to(toplevel).as_posix()
        url = f"{self.repo_url}/blob/{sha}/{relpath}"

        if self.check_urls:
            self._check_url(url, path)
        _log.debug("resolved %s", url, extra={"symbol": path.name})
        self._file_urls[path] = url
        return url

    def _check_url(self, url: str, path: Path) -> None:
        try:
            req = Request(url, method="HEAD", headers={"User-Agent": "apiref/1.0"})
            with urlopen(req, timeout=self.timeout):
                pass
        except (HTTPError, URLError, TimeoutError) as e:
            raise SourceLinkError(
                f"File committed but not available at {self.repo_url}: {path.name}\n"
                f"You probably need to push your branch.\n{e}",
                details={"file": str(path), "url": url},
            ) from e
