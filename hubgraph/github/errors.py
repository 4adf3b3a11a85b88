"""GitHub events client errors."""

from __future__ import annotations


class GitHubAPIError(RuntimeError):
    """Raised when GitHub returns an unexpected error response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        """Initialise with a message and optional HTTP status code."""
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def http_error(cls, status_code: int, *, url: str) -> GitHubAPIError:
        """Return an error for non-2xx HTTP responses."""
        return cls(f"GitHub HTTP {status_code} for {url}", status_code=status_code)


class GitHubTransportError(RuntimeError):
    """Raised when a request to GitHub fails before a response arrives."""

    def __init__(self, message: str, *, cause: BaseException) -> None:
        """Initialise with a message and the underlying transport error."""
        self.cause = cause
        super().__init__(message)

    @classmethod
    def request_failed(cls, url: str, cause: BaseException) -> GitHubTransportError:
        """Return an error wrapping an ``httpx`` network or timeout failure."""
        return cls(
            f"GitHub request to {url} failed: {type(cause).__name__}: {cause}",
            cause=cause,
        )


class GitHubResponseShapeError(RuntimeError):
    """Raised when GitHub responses cannot be decoded into the expected shape."""

    @classmethod
    def invalid_body(cls, url: str, detail: str) -> GitHubResponseShapeError:
        """Return an error for a response body that fails to decode."""
        return cls(f"GitHub response from {url} is malformed: {detail}")

    @classmethod
    def invalid_header(cls, name: str, value: str) -> GitHubResponseShapeError:
        """Return an error for a quota header that is not an integer."""
        return cls(f"GitHub header {name} is not an integer: {value!r}")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def empty_token(cls) -> GitHubConfigError:
        """Return an error when a provided token is blank."""
        return cls("GitHub token must be non-empty when provided")

    @classmethod
    def invalid_page(cls, page: int) -> GitHubConfigError:
        """Return an error for a page number below one."""
        return cls(f"GitHub event pages are 1-based, got {page}")
