"""
Apiref exceptions.

This module defines the exception hierarchy for apiref:

    ApirefError (base)
    ├── DiscoveryError - Root module cannot be located or imported
    ├── DeclarationError - Symbol has no declaration to document
    ├── ClassificationError - Declaration kind is not recognized
    ├── SourceLinkError - Source link cannot be resolved
    └── ValidationError - Invalid configuration value

Every error except ``ValidationError`` aborts a documentation run: the
generated reference is only written when the whole traversal succeeds.

Usage:
    try:
        html = apiref.generate_html("mylib")
    except apiref.SourceLinkError as e:
        print(f"Push your branch first: {e}")
    except apiref.ApirefError as e:
        print(f"Error {e.code}: {e}")
        print(f"Details: {e.details}")
"""

from typing import Any

__all__ = [
    "ApirefError",
    "DiscoveryError",
    "DeclarationError",
    "ClassificationError",
    "SourceLinkError",
    "ValidationError",
]


class ApirefError(Exception):
    """
    Base exception for all apiref errors.

    Attributes
    ----------
    message : str
        Human-readable error description.
    code : str
        Stable, string-based error code (e.g., "UNKNOWN_DECLARATION").
    details : dict[str, Any]
        Structured context (e.g., {"file": "core.py"}).
    """

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.args[0]!r}, code={self.code!r})"


class DiscoveryError(ApirefError, LookupError):
    """
    The root module cannot be located.

    Raised before any traversal starts, when the module named on the
    command line cannot be imported.
    """

    def __init__(
        self,
        message: str,
        code: str = "MODULE_NOT_FOUND",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class DeclarationError(ApirefError, RuntimeError):
    """
    A symbol reached the walker without any declaration.

    This is a semantic model contract breach, not a normal runtime
    condition, so the run is aborted.
    """

    def __init__(
        self,
        message: str,
        code: str = "NO_DECLARATIONS",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class ClassificationError(ApirefError, TypeError):
    """
    A declaration has a kind the extractor does not know how to document.

    Documentation generation must not silently omit unknown constructs.
    """

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN_DECLARATION",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class SourceLinkError(ApirefError, OSError):
    """
    A declaration's permanent source link could not be resolved.

    Raised when:
    - The source file has uncommitted changes
    - The file has no commit yet
    - The resolved URL is not reachable (branch not pushed)
    """

    def __init__(
        self,
        message: str,
        code: str = "SOURCE_LINK_FAILED",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)


class ValidationError(ApirefError, ValueError):
    """
    Invalid parameter value.

    This exception inherits from both ApirefError and ValueError, so both work::

        except apiref.ApirefError:   # catches all apiref errors
        except ValueError:           # catches validation errors (Pythonic)

    Example:
        >>> apiref.config.url_timeout = -1
        ValidationError: url_timeout must be positive, got -1
    """

    def __init__(
        self,
        message: str,
        code: str = "INVALID_ARGUMENT",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code, details)
