"""GitHub REST client for the public events stream.

The client fetches one page of ``GET /events`` at a time and maps HTTP
signals into typed outcomes: 200 becomes :class:`EventPage`, 304 becomes
:class:`NotModified` and 403/429 become :class:`RateLimited`. Transport
failures and malformed responses raise, since a run cannot continue without a
valid page. Quota headers on every response are recorded on the shared
:class:`RateLimitTracker`.
"""

from __future__ import annotations

import dataclasses
import os
import typing as typ

import httpx
import msgspec

from hubgraph.common.time import utcnow

from .errors import (
    GitHubAPIError,
    GitHubConfigError,
    GitHubResponseShapeError,
    GitHubTransportError,
)
from .models import EventPage, GitHubEvent, NotModified, RateLimited

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import FetchOutcome
    from .quota import QuotaState, RateLimitTracker


_HEADER_LIMIT = "X-RateLimit-Limit"
_HEADER_REMAINING = "X-RateLimit-Remaining"
_HEADER_RESET = "X-RateLimit-Reset"
_HEADER_POLL_INTERVAL = "X-Poll-Interval"
_QUOTA_HEADERS = (_HEADER_LIMIT, _HEADER_REMAINING, _HEADER_RESET, _HEADER_POLL_INTERVAL)

_HTTP_OK = 200
_HTTP_NOT_MODIFIED = 304
_RATE_LIMIT_STATUSES = frozenset({403, 429})

_EVENTS_DECODER = msgspec.json.Decoder(list[GitHubEvent])


class _CoreRateLimit(msgspec.Struct, frozen=True):
    limit: int
    remaining: int
    reset: int


class _RateLimitResources(msgspec.Struct, frozen=True):
    core: _CoreRateLimit


class _RateLimitResponse(msgspec.Struct, frozen=True):
    resources: _RateLimitResources


_RATE_LIMIT_DECODER = msgspec.json.Decoder(_RateLimitResponse)


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubEventsConfig:
    """Configuration for the GitHub events client.

    ``token`` is optional: without it requests are unauthenticated and
    GitHub applies the much lower anonymous quota.
    """

    token: str | None = None
    events_url: str = "https://api.github.com/events"
    rate_limit_url: str = "https://api.github.com/rate_limit"
    timeout_s: float = 30.0
    user_agent: str = "hubgraph/0.1"

    @property
    def authenticated(self) -> bool:
        """Return whether requests carry a credential."""
        return self.token is not None

    @classmethod
    def from_env(cls) -> GitHubEventsConfig:
        """Build configuration using the optional ``HUBGRAPH_GITHUB_TOKEN``."""
        token = os.environ.get("HUBGRAPH_GITHUB_TOKEN", "").strip()
        return cls(token=token or None)


def _parse_int_header(headers: httpx.Headers, name: str) -> int | None:
    raw = headers.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise GitHubResponseShapeError.invalid_header(name, raw) from exc


def _has_quota_headers(headers: httpx.Headers) -> bool:
    return any(name in headers for name in _QUOTA_HEADERS)


class GitHubEventsClient:
    """Fetch pages of public GitHub events for one API identity."""

    def __init__(
        self,
        config: GitHubEventsConfig,
        tracker: RateLimitTracker,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client with API configuration and a quota tracker."""
        if config.token is not None and not config.token.strip():
            raise GitHubConfigError.empty_token()

        self._config = config
        self._tracker = tracker
        self._etags: dict[int, str] = {}
        headers = {
            "User-Agent": config.user_agent,
            "Accept": "application/vnd.github+json",
        }
        if config.token is not None:
            headers["Authorization"] = f"Bearer {config.token}"
        self._headers = headers
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=config.timeout_s)

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    async def fetch_page(self, page: int) -> FetchOutcome:
        """Fetch one 1-based page of events.

        Raises
        ------
        GitHubTransportError
            If the request fails or times out.
        GitHubResponseShapeError
            If the body or quota headers cannot be decoded.
        GitHubAPIError
            For any other non-2xx status.

        """
        if page < 1:
            raise GitHubConfigError.invalid_page(page)

        headers: dict[str, str] = {}
        etag = self._etags.get(page)
        if etag is not None:
            headers["If-None-Match"] = etag

        url = self._config.events_url
        response = await self._get(url, params={"page": page}, headers=headers)

        if response.status_code in _RATE_LIMIT_STATUSES:
            return RateLimited(page=page, reset_at=self._reset_hint(response))

        if _has_quota_headers(response.headers):
            self._record_headers(response.headers)

        if response.status_code == _HTTP_NOT_MODIFIED:
            return NotModified(page=page)
        if response.status_code != _HTTP_OK:
            raise GitHubAPIError.http_error(response.status_code, url=url)

        try:
            events = _EVENTS_DECODER.decode(response.content)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.invalid_body(url, str(exc)) from exc

        return EventPage(
            page=page,
            events=tuple(events),
            etag=response.headers.get("ETag") or None,
        )

    def remember_etags(self, etags: cabc.Mapping[int, str]) -> None:
        """Replace the validators sent as ``If-None-Match`` on later fetches.

        Call this only with the ETags of a published run. A discarded run
        must not leave validators behind, or GitHub would answer 304 for
        pages whose content was never served.
        """
        self._etags = dict(etags)

    async def fetch_rate_limits(self) -> QuotaState:
        """Refresh the quota from ``GET /rate_limit`` and record it.

        The endpoint does not carry a poll interval, so the previously
        observed hint is kept.
        """
        url = self._config.rate_limit_url
        response = await self._get(url, params=None, headers={})
        if response.status_code != _HTTP_OK:
            raise GitHubAPIError.http_error(response.status_code, url=url)
        try:
            payload = _RATE_LIMIT_DECODER.decode(response.content)
        except msgspec.DecodeError as exc:
            raise GitHubResponseShapeError.invalid_body(url, str(exc)) from exc

        core = payload.resources.core
        return self._tracker.record(
            limit=core.limit,
            remaining=core.remaining,
            reset_at=core.reset,
            poll_interval=self._tracker.current().poll_interval,
        )

    async def _get(
        self,
        url: str,
        *,
        params: dict[str, typ.Any] | None,
        headers: dict[str, str],
    ) -> httpx.Response:
        try:
            return await self._client.get(
                url,
                params=params,
                headers={**self._headers, **headers},
                timeout=self._config.timeout_s,
            )
        except httpx.HTTPError as exc:
            raise GitHubTransportError.request_failed(url, exc) from exc

    def _record_headers(
        self, headers: httpx.Headers, *, keep_poll_interval: bool = False
    ) -> QuotaState:
        poll_interval = _parse_int_header(headers, _HEADER_POLL_INTERVAL)
        if poll_interval is None and keep_poll_interval:
            poll_interval = self._tracker.current().poll_interval
        return self._tracker.record(
            limit=_parse_int_header(headers, _HEADER_LIMIT),
            remaining=_parse_int_header(headers, _HEADER_REMAINING),
            reset_at=_parse_int_header(headers, _HEADER_RESET),
            poll_interval=poll_interval,
        )

    def _reset_hint(self, response: httpx.Response) -> int:
        """Work out when a rate-limited identity may retry.

        Rate-limited responses carry quota counts but no poll hint, so the
        previously observed hint is kept.
        """
        if _has_quota_headers(response.headers):
            state = self._record_headers(response.headers, keep_poll_interval=True)
            if state.reset_at > 0:
                return state.reset_at

        retry_after = _parse_int_header(response.headers, "Retry-After")
        if retry_after is not None:
            return int(utcnow().timestamp()) + retry_after

        return self._tracker.current().reset_at
