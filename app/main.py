"""Entry point for the FastAPI-powered podcast add-on."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import Settings, settings
from .errors import (
    InconsistentPagination,
    InvalidMetaIdError,
    RemoteFailure,
    UnknownGenreError,
)
from .models import CatalogRequest, ResourceRequest
from .services.adapter import BaseAdapter, ListenNotesAdapter
from .services.listennotes import ListenNotesClient

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

CATALOG_ID = "listennotes"
SUPPORTED_TYPES = {"series"}

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    exit_stack = AsyncExitStack()
    http_client = await exit_stack.enter_async_context(
        httpx.AsyncClient(
            base_url=str(settings.listennotes_api_url),
            timeout=httpx.Timeout(settings.request_timeout_seconds, connect=10.0),
        )
    )
    client = ListenNotesClient(settings, http_client)
    fastapi_app.state.adapter = ListenNotesAdapter(settings, client)

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await exit_stack.aclose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Listen Notes podcasts as a browsable series catalog",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_adapter(app: FastAPI) -> BaseAdapter:
    adapter = getattr(app.state, "adapter", None)
    if not isinstance(adapter, BaseAdapter):
        raise RuntimeError("Catalog adapter not initialised")
    return adapter


def _ensure_supported_type(content_type: str) -> None:
    if content_type not in SUPPORTED_TYPES:
        raise HTTPException(status_code=404, detail="Unsupported content type")


def _raw_extra_segment(request: Request, decoded: str) -> str:
    """Return the catalog extra segment as sent, before percent-decoding."""

    raw_path = request.scope.get("raw_path")
    if not raw_path:
        return decoded
    path = raw_path.split(b"?", 1)[0].decode("latin-1")
    segment = path.rsplit("/", 1)[-1]
    return segment.removesuffix(".json")


def _upstream_error(exc: Exception) -> HTTPException:
    logger.warning("Upstream failure: %s", exc)
    return HTTPException(status_code=502, detail=str(exc))


def register_routes(fastapi_app: FastAPI, app_settings: Settings | None = None) -> None:
    config = app_settings or settings

    async def _catalog_endpoint(
        content_type: str, catalog_id: str, extra: str | None = None
    ) -> JSONResponse:
        _ensure_supported_type(content_type)
        if catalog_id != CATALOG_ID:
            raise HTTPException(status_code=404, detail="Unknown catalog")
        try:
            request = CatalogRequest.from_extra_segment(extra)
        except ValidationError as exc:
            raise HTTPException(status_code=400, detail=exc.errors()) from exc

        adapter = get_adapter(fastapi_app)
        try:
            entries = await adapter.get_summarized_metadata_collection(request)
        except UnknownGenreError as exc:
            raise HTTPException(status_code=404, detail=str(exc)) from exc
        except (RemoteFailure, InconsistentPagination) as exc:
            raise _upstream_error(exc) from exc
        return JSONResponse({"metas": [entry.to_payload() for entry in entries]})

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/manifest.json")
    async def manifest() -> dict[str, Any]:
        adapter = get_adapter(fastapi_app)
        try:
            genres = await adapter.get_genres()
        except RemoteFailure as exc:
            raise _upstream_error(exc) from exc
        return {
            "id": f"com.listennotes.{config.id_namespace}",
            "version": "1.0.0",
            "name": config.app_name,
            "description": "Podcasts from Listen Notes, browsable as series.",
            "resources": ["catalog", "meta", "stream"],
            "types": sorted(SUPPORTED_TYPES),
            "idPrefixes": [config.id_prefix],
            "catalogs": [
                {
                    "type": "series",
                    "id": CATALOG_ID,
                    "name": "Listen Notes",
                    "extra": [
                        {"name": "search", "isRequired": False},
                        {"name": "genre", "isRequired": False, "options": genres},
                        {"name": "skip", "isRequired": False},
                    ],
                }
            ],
        }

    @fastapi_app.get("/catalog/{content_type}/{catalog_id}.json")
    async def catalog(content_type: str, catalog_id: str) -> JSONResponse:
        return await _catalog_endpoint(content_type, catalog_id)

    @fastapi_app.get("/catalog/{content_type}/{catalog_id}/{extra}.json")
    async def catalog_with_extra(
        request: Request, content_type: str, catalog_id: str, extra: str
    ) -> JSONResponse:
        return await _catalog_endpoint(
            content_type, catalog_id, _raw_extra_segment(request, extra)
        )

    @fastapi_app.get("/meta/{content_type}/{meta_id}.json")
    async def meta(content_type: str, meta_id: str) -> JSONResponse:
        _ensure_supported_type(content_type)
        adapter = get_adapter(fastapi_app)
        try:
            response = await adapter.get_metadata(ResourceRequest(id=meta_id))
        except InvalidMetaIdError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except (RemoteFailure, InconsistentPagination) as exc:
            raise _upstream_error(exc) from exc
        return JSONResponse(response.to_payload())

    @fastapi_app.get("/stream/{content_type}/{meta_id}.json")
    async def stream(content_type: str, meta_id: str) -> JSONResponse:
        _ensure_supported_type(content_type)
        adapter = get_adapter(fastapi_app)
        try:
            response = await adapter.get_streams(ResourceRequest(id=meta_id))
        except InvalidMetaIdError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except RemoteFailure as exc:
            raise _upstream_error(exc) from exc
        return JSONResponse(response.to_payload())


app = create_app()
