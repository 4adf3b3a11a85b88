"""Configuration for the poll orchestrator.

Usage
-----
Create a configuration with defaults:

>>> config = PollerConfig()
>>> config.pages
3

Or load from environment variables:

>>> import os
>>> os.environ["HUBGRAPH_PAGES"] = "5"
>>> PollerConfig.from_env().pages
5

"""

from __future__ import annotations

import dataclasses as dc
import os

from .errors import PollerConfigError


def _read_optional_int(env_var: str, *, minimum: int) -> int | None:
    """Read an integer env var, returning ``None`` when unset or blank."""
    raw = os.environ.get(env_var, "")
    if not raw.strip():
        return None
    try:
        value = int(raw)
    except ValueError as exc:
        raise PollerConfigError.not_an_integer(env_var, raw) from exc
    if value < minimum:
        raise PollerConfigError.out_of_range(env_var, value, minimum)
    return value


def _read_int(env_var: str, default: int, *, minimum: int) -> int:
    """Read an integer env var, falling back to ``default`` when blank."""
    value = _read_optional_int(env_var, minimum=minimum)
    return default if value is None else value


@dc.dataclass(frozen=True, slots=True)
class PollerConfig:
    """Runtime knobs for the poll loop.

    Attributes
    ----------
    pages
        Event pages fetched per run. Each page costs one request.
    fixed_delay
        Seconds between runs. When ``None`` the interval follows GitHub's
        ``X-Poll-Interval`` hint scaled by ``pages``.
    max_rate_limit_retries
        Whole-run restarts allowed after hitting the rate limit.
    rate_limit_margin_s
        Extra seconds waited past the reported quota reset.
    idle_backoff_s
        Minimum wait after a run that did not publish.
    fallback_reset_wait_s
        Wait used when a rate-limited response gives no reset time.

    """

    pages: int = 3
    fixed_delay: int | None = None
    max_rate_limit_retries: int = 5
    rate_limit_margin_s: int = 3
    idle_backoff_s: int = 60
    fallback_reset_wait_s: int = 60

    def __post_init__(self) -> None:
        """Validate value ranges."""
        if self.pages < 1:
            raise PollerConfigError.out_of_range("pages", self.pages, 1)
        if self.fixed_delay is not None and self.fixed_delay < 1:
            raise PollerConfigError.out_of_range("fixed_delay", self.fixed_delay, 1)
        if self.max_rate_limit_retries < 0:
            raise PollerConfigError.out_of_range(
                "max_rate_limit_retries", self.max_rate_limit_retries, 0
            )

    @classmethod
    def from_env(cls) -> PollerConfig:
        """Create configuration from environment variables.

        Reads the following environment variables:

        - ``HUBGRAPH_PAGES``: Pages per run. Must be positive.
        - ``HUBGRAPH_DELAY``: Optional fixed seconds between runs.
        - ``HUBGRAPH_MAX_RATE_LIMIT_RETRIES``: Whole-run restarts allowed.
        - ``HUBGRAPH_IDLE_BACKOFF``: Minimum wait after a run that did not
          publish.

        Raises
        ------
        PollerConfigError
            If any variable is not an integer in its allowed range.

        """
        defaults = cls()
        pages = _read_int("HUBGRAPH_PAGES", defaults.pages, minimum=1)
        fixed_delay = _read_optional_int("HUBGRAPH_DELAY", minimum=1)
        max_retries = _read_int(
            "HUBGRAPH_MAX_RATE_LIMIT_RETRIES",
            defaults.max_rate_limit_retries,
            minimum=0,
        )
        idle_backoff = _read_int(
            "HUBGRAPH_IDLE_BACKOFF", defaults.idle_backoff_s, minimum=0
        )
        return cls(
            pages=pages,
            fixed_delay=fixed_delay,
            max_rate_limit_retries=max_retries,
            idle_backoff_s=idle_backoff,
        )
