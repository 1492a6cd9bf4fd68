"""JSON-over-HTTP binding (FastAPI)."""

from __future__ import annotations

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool

from .api import process_payload_to_json
from .errors import DecodeError, EncodeError, TokenizerError
from .orchestrator import MorphOrchestrator


LOGGER = logging.getLogger(__name__)

MORPH_PATH = "/morph"


def build_router(orchestrator: MorphOrchestrator) -> APIRouter:
    router = APIRouter(tags=["Morphology"])

    @router.post(MORPH_PATH)
    async def morph(request: Request) -> Response:
        """Analyse ``{"input": "<text>"}`` and return the per-token items."""

        raw = await request.body()
        try:
            body = await run_in_threadpool(process_payload_to_json, orchestrator, raw)
        except DecodeError as exc:
            LOGGER.info("event=http_morph status=bad_request error=%s", exc)
            return PlainTextResponse(str(exc), status_code=400)
        except (EncodeError, TokenizerError) as exc:
            LOGGER.error(
                "event=http_morph status=error kind=%s error=%s", exc.kind, exc
            )
            return PlainTextResponse(str(exc), status_code=500)
        return Response(content=body, media_type="application/json")

    return router


def create_app(orchestrator: MorphOrchestrator) -> FastAPI:
    """Create the HTTP application around a shared orchestrator."""

    app = FastAPI(
        title="morph-service",
        description="Per-token morphological analysis over JSON",
    )
    app.include_router(build_router(orchestrator))
    return app
