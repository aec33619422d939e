"""FastAPI application exposing the tree document endpoints."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.concurrency import run_in_threadpool
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from . import __version__
from .config import Settings, get_settings
from .storage.documents import DocumentStore
from .storage.errors import MissingField, StorageReadFailed, StorageWriteFailed
from .storage.models import GroupSummary, LoadStatus

logger = logging.getLogger(__name__)

MISSING_FIELDS_MESSAGE = "Missing file, group, or treeData in request body."
WRITE_FAILED_MESSAGE = "Server failed to write file to disk. Check server console for details."
INVALID_BODY_MESSAGE = "Invalid file, group, or treeData in request body."
SAVE_PATH = "/api/save"


class SaveRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    group: Optional[str] = None
    file: Optional[str] = None
    tree_data: Any = Field(default=None, alias="treeData")


class SaveResponse(BaseModel):
    success: bool
    message: str


def get_document_store(request: Request) -> DocumentStore:
    return request.app.state.document_store


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application; the store is seeded when the app starts up."""
    settings = settings or get_settings()
    store = DocumentStore.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await run_in_threadpool(store.ensure_seeded)
        yield

    app = FastAPI(title="Tree Store Server", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.document_store = store

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def save_validation_error(request: Request, exc: RequestValidationError):
        if request.url.path != SAVE_PATH:
            return await request_validation_exception_handler(request, exc)
        logger.warning("Rejected save request: %s", exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=SaveResponse(success=False, message=INVALID_BODY_MESSAGE).model_dump(),
        )

    @app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/api/available-groups", response_model=list[GroupSummary])
    async def available_groups(store: DocumentStore = Depends(get_document_store)):
        try:
            return await run_in_threadpool(store.list_groups)
        except StorageReadFailed:
            logger.exception("Error fetching groups")
            return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=[])

    @app.get("/api/load")
    async def load_document(
        group: Optional[str] = None,
        file: Optional[str] = None,
        store: DocumentStore = Depends(get_document_store),
    ):
        result = await run_in_threadpool(store.load_document, group, file)
        if result.status is LoadStatus.DEFAULT_UNAVAILABLE:
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=result.document)
        return JSONResponse(status_code=status.HTTP_200_OK, content=result.document)

    @app.put(SAVE_PATH, response_model=SaveResponse)
    async def save_document(
        payload: SaveRequest,
        store: DocumentStore = Depends(get_document_store),
    ):
        try:
            await run_in_threadpool(store.save_document, payload.group, payload.file, payload.tree_data)
        except MissingField:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content=SaveResponse(success=False, message=MISSING_FIELDS_MESSAGE).model_dump(),
            )
        except StorageWriteFailed as exc:
            logger.error("Failed to save file: %s", exc)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=SaveResponse(success=False, message=WRITE_FAILED_MESSAGE).model_dump(),
            )
        return SaveResponse(
            success=True,
            message=f"Tree data for {payload.group}/{payload.file} saved successfully.",
        )

    if settings.static_dir is not None and settings.static_dir.is_dir():
        app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")

    return app
