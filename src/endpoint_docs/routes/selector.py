"""Route selection: which endpoints get documented, and in what order."""

from pydantic import BaseModel

from endpoint_docs.config import DocsSettings
from endpoint_docs.logging_utils import get_logger
from endpoint_docs.routes.base import Endpoint, ServerGroup

logger = get_logger(__name__)

CORS_PREFLIGHT_METHOD = "options"


class RouteSelection(BaseModel):
    """Filtered, sorted server groups.

    ``single_route`` is set for a precise lookup (both path and server given)
    that left exactly one non-empty group.
    """

    groups: list[ServerGroup]
    single_route: bool = False

    @property
    def route_group(self) -> ServerGroup:
        """The first group with surviving endpoints."""
        return next(group for group in self.groups if group.endpoints)


def select_routes(
    groups: list[ServerGroup],
    path: str | None = None,
    server: str | None = None,
    settings: DocsSettings | None = None,
) -> RouteSelection | None:
    """Filter and sort endpoints per server group.

    Returns None when no endpoint in any group survives the filters.
    """
    settings = settings or DocsSettings()
    selected = []
    for group in groups:
        if server and group.server != server:
            continue

        endpoints = [ep for ep in group.endpoints if _is_documented(ep, group, path, settings)]
        endpoints.sort(key=lambda ep: (ep.path, _method_rank(ep.method, settings.methods_order)))
        selected.append(group.model_copy(update={"endpoints": endpoints}))

    non_empty = [group for group in selected if group.endpoints]
    if not non_empty:
        logger.info("No documented routes match path=%r server=%r", path, server)
        return None

    single_route = bool(path and server) and len(non_empty) == 1
    logger.debug(
        "Selected %d routes in %d groups (single_route=%s)",
        sum(len(group.endpoints) for group in selected), len(selected), single_route,
    )
    return RouteSelection(groups=selected, single_route=single_route)


def _is_documented(endpoint: Endpoint, group: ServerGroup, path: str | None, settings: DocsSettings) -> bool:
    if path and endpoint.path != path:
        return False

    return (
        not _is_docs_route(endpoint, settings)
        and not endpoint.settings.is_internal
        and endpoint.settings.docs
        and endpoint.method.lower() != CORS_PREFLIGHT_METHOD
        and (settings.filter_routes is None or bool(settings.filter_routes(endpoint.method, endpoint.path, group)))
    )


def _is_docs_route(endpoint: Endpoint, settings: DocsSettings) -> bool:
    """The documentation path and its CSS assets never document themselves."""
    if endpoint.path == settings.endpoint:
        return True
    return settings.css_path is not None and endpoint.path.startswith(settings.css_base_url + "/")


def _method_rank(method: str, methods_order: tuple[str, ...]) -> int:
    """Position in the configured order; unknown methods sort last."""
    try:
        return methods_order.index(method.lower())
    except ValueError:
        return len(methods_order)
