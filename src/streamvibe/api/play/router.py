"""Playback endpoint: class-based router delegating to AssetResolver."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response
from fastapi.responses import JSONResponse, RedirectResponse

from streamvibe.api.constants import ERROR_IDENTIFIER_REQUIRED, ERROR_INTERNAL, ERROR_NOT_FOUND
from streamvibe.api.dependencies import get_resolver
from streamvibe.resolver.exceptions import AssetNotFoundError, UpstreamError
from streamvibe.resolver.service import AssetResolver

logger = logging.getLogger(__name__)


class PlayRouter:
    """Class-based router for the playback redirect endpoint."""

    def __init__(self) -> None:
        self.router = APIRouter()
        self.router.add_api_route("/play", self.play, methods=["GET"], response_model=None)

    async def play(
        self,
        resolver: Annotated[AssetResolver, Depends(get_resolver)],
        video_id: Annotated[str | None, Query(alias="videoId")] = None,
        email: Annotated[str | None, Query()] = None,
    ) -> Response:
        """Resolve ``videoId`` and redirect to its current playback link.

        ``email`` optionally attributes the play to a known user; the
        history update runs after the response is produced.
        """
        identifier = (video_id or "").strip()
        if not identifier:
            return JSONResponse(status_code=400, content={"error": ERROR_IDENTIFIER_REQUIRED})

        logger.info("Handling play request for %s", identifier)
        try:
            asset = await resolver.resolve(identifier, email)
        except AssetNotFoundError:
            logger.info("No playable asset for %s", identifier)
            return JSONResponse(status_code=404, content={"error": ERROR_NOT_FOUND})
        except UpstreamError as exc:
            logger.error("Upstream failure resolving %s: %s", identifier, exc)
            return JSONResponse(status_code=500, content={"error": ERROR_INTERNAL, "details": str(exc)})
        except Exception as exc:
            logger.exception("Unexpected failure resolving %s", identifier)
            return JSONResponse(status_code=500, content={"error": ERROR_INTERNAL, "details": str(exc)})

        return RedirectResponse(url=asset.playback_url)


_instance = PlayRouter()
router = _instance.router
