"""Domain exceptions and Falcon error handlers for the API layer.

Usage
-----
Register error handlers on the Falcon app::

    from hubgraph.api.errors import (
        PublicationUnavailableError,
        handle_publication_unavailable,
    )

    app.add_error_handler(
        PublicationUnavailableError, handle_publication_unavailable
    )

"""

from __future__ import annotations

import typing as typ

import falcon

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

__all__ = [
    "PublicationUnavailableError",
    "handle_publication_unavailable",
]

# Seconds clients are asked to wait before retrying an unpublished document.
_RETRY_AFTER_S = 5


class PublicationUnavailableError(Exception):
    """Raised when a document is requested before the first publication.

    Attributes
    ----------
    document
        Name of the requested document.

    """

    def __init__(self, document: str) -> None:
        """Initialize with the name of the requested document."""
        self.document = document
        super().__init__(f"The {document} document has not been published yet.")


async def handle_publication_unavailable(
    _req: Request,
    resp: Response,
    ex: PublicationUnavailableError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``PublicationUnavailableError`` to an HTTP 503 JSON response.

    Parameters
    ----------
    _req
        Falcon request (unused).
    resp
        Falcon response whose status, headers and media are set.
    ex
        The exception naming the unavailable document.
    _params
        URI template parameters (unused).

    """
    resp.status = falcon.HTTP_503
    resp.set_header("Retry-After", str(_RETRY_AFTER_S))
    resp.media = {
        "title": "Not yet published",
        "description": str(ex),
    }
