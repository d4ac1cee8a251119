"""HTTP surface: a FastAPI router serving the documentation page.

Usage::

    app = FastAPI(docs_url=None, redoc_url=None)
    include_docs_router(app, lambda: table, settings)

FastAPI serves its own Swagger UI at ``/docs`` by default and registers it
before any included router, so the default documentation endpoint is only
reachable once the app's ``docs_url`` is disabled or moved.
``include_docs_router`` refuses a clashing setup instead of mounting a route
that can never be hit.
"""

from collections.abc import Callable
from typing import Literal

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query
from fastapi.responses import FileResponse, JSONResponse, PlainTextResponse

from endpoint_docs.config import DocsSettings
from endpoint_docs.errors import ConfigurationError
from endpoint_docs.handler import DocumentationHandler
from endpoint_docs.logging_utils import get_logger
from endpoint_docs.render.markdown import MarkdownRenderer
from endpoint_docs.routes.base import ServerGroup

logger = get_logger(__name__)


def create_docs_router(
    table_provider: Callable[[], list[ServerGroup]],
    settings: DocsSettings | None = None,
    renderer: MarkdownRenderer | None = None,
) -> APIRouter:
    """Build the router for the documentation path and its static assets."""
    settings = settings or DocsSettings()
    handler = DocumentationHandler(table_provider, settings)
    renderer = renderer or MarkdownRenderer()
    dependencies = [Depends(settings.auth)] if settings.auth is not None else []
    router = APIRouter(dependencies=dependencies)

    @router.get(settings.endpoint, include_in_schema=False)
    def docs(
        path: str | None = None,
        server: str | None = None,
        output_format: Literal["markdown", "json"] = Query("markdown", alias="format"),
    ):
        view = handler.handle(path=path, server=server)
        if view is None:
            raise HTTPException(status_code=404, detail="Not Found")
        if output_format == "json":
            return JSONResponse(view.model_dump(mode="json", by_alias=True))
        return PlainTextResponse(renderer.render(view), media_type="text/markdown")

    if settings.css_path is not None:
        css_root = settings.css_path.resolve()

        @router.get(settings.css_base_url + "/{name:path}", include_in_schema=False)
        def css(name: str):
            file_path = (css_root / name).resolve()
            if not file_path.is_relative_to(css_root) or not file_path.is_file():
                raise HTTPException(status_code=404, detail="Not Found")
            return FileResponse(file_path)

    logger.debug("Documentation served at %s", settings.endpoint)
    return router


def include_docs_router(
    app: FastAPI,
    table_provider: Callable[[], list[ServerGroup]],
    settings: DocsSettings | None = None,
    renderer: MarkdownRenderer | None = None,
) -> None:
    """Mount the documentation router on ``app``.

    Raises ConfigurationError when the documentation path, or the CSS asset
    prefix, is already taken by one of FastAPI's built-in pages.
    """
    settings = settings or DocsSettings()
    clash = _builtin_route_clash(app, settings)
    if clash is not None:
        raise ConfigurationError(
            f"Documentation endpoint {settings.endpoint} clashes with the app's built-in {clash}; "
            "disable it (e.g. FastAPI(docs_url=None)) or choose another endpoint"
        )
    app.include_router(create_docs_router(table_provider, settings, renderer))


def _builtin_route_clash(app: FastAPI, settings: DocsSettings) -> str | None:
    builtin = {
        "docs_url": app.docs_url,
        "redoc_url": app.redoc_url,
        "openapi_url": app.openapi_url,
    }
    if app.docs_url:
        builtin["swagger_ui_oauth2_redirect_url"] = app.swagger_ui_oauth2_redirect_url

    for name, url in builtin.items():
        if not url:
            continue
        if url == settings.endpoint:
            return f"{name} ({url})"
        if settings.css_path is not None and url.startswith(settings.css_base_url + "/"):
            return f"{name} ({url})"
    return None
