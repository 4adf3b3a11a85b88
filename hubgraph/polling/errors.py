"""Poller errors."""

from __future__ import annotations


class RateLimitRetriesExhaustedError(RuntimeError):
    """Raised when a run keeps hitting the rate limit after every restart."""

    def __init__(self, attempts: int) -> None:
        """Initialise with the number of attempts made."""
        self.attempts = attempts
        super().__init__(f"Still rate limited after {attempts} attempts")


class PollerConfigError(ValueError):
    """Raised when poller configuration values are invalid."""

    @classmethod
    def not_an_integer(cls, env_var: str, raw: str) -> PollerConfigError:
        """Return an error for a non-integer environment value."""
        return cls(f"{env_var} must be an integer, got: {raw!r}")

    @classmethod
    def out_of_range(cls, name: str, value: int, minimum: int) -> PollerConfigError:
        """Return an error for a value below its allowed minimum."""
        return cls(f"{name} must be at least {minimum}, got: {value}")
