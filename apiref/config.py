"""
Apiref configuration.

Provides runtime configuration for rendering and source-link behavior.
Settings can be modified programmatically without environment variables.

Example:
    >>> from apiref import config
    >>> config.print_args = True  # Show Arguments/Returns blocks
    >>> config.title = "Mylib"
"""

from .exceptions import ValidationError

_DEFAULT_STYLESHEETS = (
    "normalize.css",
    "skeleton.css",
    "syntax.css",
    "style.css",
)


def _require(value: object, expected: type | tuple[type, ...], param: str) -> None:
    if not isinstance(value, expected):
        raise ValidationError(
            f"{param} must be {getattr(expected, '__name__', expected)}, got {type(value).__name__}",
            code="INVALID_ARGUMENT",
            details={"param": param, "type": type(value).__name__},
        )


class _ApirefConfig:
    """
    Singleton configuration for apiref settings.

    This is a singleton - import and modify `config` directly:

        from apiref import config
        config.check_urls = False

    Attributes
    ----------
        print_args: Render the Arguments/Returns block for each method.
        title: Heading shown in the index panel and the page <title>.
        analytics_id: Analytics tag id; the snippet is omitted when None.
        stylesheets: Stylesheet hrefs linked from the page shell.
        check_urls: Probe each resolved source link over HTTP.
        url_timeout: Seconds to wait for a source link probe.
    """

    __slots__ = (
        "_print_args",
        "_title",
        "_analytics_id",
        "_stylesheets",
        "_check_urls",
        "_url_timeout",
    )

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Restore every setting to its default."""
        self._print_args = False
        self._title = "API Reference"
        self._analytics_id: str | None = None
        self._stylesheets: tuple[str, ...] = _DEFAULT_STYLESHEETS
        self._check_urls = True
        self._url_timeout = 10.0

    @property
    def print_args(self) -> bool:
        """Render argument and return type blocks."""
        return self._print_args

    @print_args.setter
    def print_args(self, value: bool) -> None:
        _require(value, bool, "print_args")
        self._print_args = value

    @property
    def title(self) -> str:
        """Page title."""
        return self._title

    @title.setter
    def title(self, value: str) -> None:
        _require(value, str, "title")
        self._title = value

    @property
    def analytics_id(self) -> str | None:
        """Analytics tag id, or None to omit the snippet."""
        return self._analytics_id

    @analytics_id.setter
    def analytics_id(self, value: str | None) -> None:
        if value is not None:
            _require(value, str, "analytics_id")
        self._analytics_id = value

    @property
    def stylesheets(self) -> tuple[str, ...]:
        """Stylesheet hrefs, in link order."""
        return self._stylesheets

    @stylesheets.setter
    def stylesheets(self, value: tuple[str, ...] | list[str]) -> None:
        _require(value, (tuple, list), "stylesheets")
        for href in value:
            _require(href, str, "stylesheets")
        self._stylesheets = tuple(value)

    @property
    def check_urls(self) -> bool:
        """Probe resolved source links before using them."""
        return self._check_urls

    @check_urls.setter
    def check_urls(self, value: bool) -> None:
        _require(value, bool, "check_urls")
        self._check_urls = value

    @property
    def url_timeout(self) -> float:
        """Timeout in seconds for a source link probe."""
        return self._url_timeout

    @url_timeout.setter
    def url_timeout(self, value: float) -> None:
        if isinstance(value, bool):
            _require(value, float, "url_timeout")
        _require(value, (int, float), "url_timeout")
        if value <= 0:
            raise ValidationError(
                f"url_timeout must be positive, got {value}",
                code="INVALID_ARGUMENT",
                details={"param": "url_timeout", "value": value},
            )
        self._url_timeout = float(value)

    def __repr__(self) -> str:
        return (
            f"ApirefConfig(print_args={self._print_args}, title={self._title!r}, "
            f"check_urls={self._check_urls}, url_timeout={self._url_timeout})"
        )


# Module-level singleton
config = _ApirefConfig()
