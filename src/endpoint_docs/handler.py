"""Documentation request handling.

Selects the routes a request asks for and normalizes their schemas into
EndpointRecord views for a renderer.
"""

from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from endpoint_docs.config import DocsSettings
from endpoint_docs.logging_utils import get_logger
from endpoint_docs.routes.base import Endpoint, EndpointRecord, GroupRecord, ServerGroup
from endpoint_docs.routes.selector import select_routes
from endpoint_docs.schema.formatting import process_notes
from endpoint_docs.schema.normalizer import describe, describe_status_schema

logger = get_logger(__name__)


class _View(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)


class RouteView(_View):
    """All methods of a single path on one server."""

    kind: Literal["route"] = "route"
    routes: list[EndpointRecord]
    api_version: str | None = None


class IndexView(_View):
    kind: Literal["index"] = "index"
    groups: list[GroupRecord]
    api_version: str | None = None


class DocumentationHandler:
    """Builds documentation views from the host's current routing table."""

    def __init__(self, table_provider: Callable[[], list[ServerGroup]], settings: DocsSettings | None = None):
        self.table_provider = table_provider
        self.settings = settings or DocsSettings()

    def handle(self, path: str | None = None, server: str | None = None) -> RouteView | IndexView | None:
        """Return the view for a request, or None when no route matches."""
        selection = select_routes(self.table_provider(), path=path, server=server, settings=self.settings)
        if selection is None:
            return None

        if selection.single_route:
            group = selection.route_group
            logger.debug("Rendering route view for %s on %s", path, group.server)
            return RouteView(
                routes=get_routes_data(group.endpoints, group),
                api_version=self.settings.api_version,
            )

        return IndexView(
            groups=[
                GroupRecord(server=group.server, routes=get_routes_data(group.endpoints, group))
                for group in selection.groups
            ],
            api_version=self.settings.api_version,
        )


def get_routes_data(endpoints: list[Endpoint], group: ServerGroup) -> list[EndpointRecord]:
    return [_route_data(endpoint, group) for endpoint in endpoints]


def _route_data(endpoint: Endpoint, group: ServerGroup) -> EndpointRecord:
    settings = endpoint.settings
    return EndpointRecord(
        path=endpoint.path,
        method=endpoint.method.upper(),
        description=settings.description,
        notes=process_notes(settings.notes),
        tags=settings.tags,
        auth=group.lookup_auth(endpoint),
        vhost=settings.vhost,
        cors=settings.cors,
        jsonp=settings.jsonp,
        path_params=describe(settings.validation.params),
        query_params=describe(settings.validation.query),
        payload_params=describe(settings.validation.payload),
        response_params=describe(settings.response.schema_),
        status_schema=describe_status_schema(settings.response.status),
    )
