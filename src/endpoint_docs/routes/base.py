"""Endpoint set models.

The host service hands over its routing table as server groups of
endpoints; documentation is produced as EndpointRecord entries.
"""

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from endpoint_docs.schema.nodes import AnyDocNode


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="ignore")


class ValidateSettings(_Model):
    """Raw validation descriptors per request location."""

    params: Any = None
    query: Any = None
    payload: Any = None


class ResponseSettings(_Model):
    schema_: Any = Field(default=None, alias="schema")
    status: dict[int | str, Any] | None = None  # {status_code: descriptor}


class RouteSettings(_Model):
    description: str | None = None
    notes: str | list[str] | None = None
    tags: list[str] | None = None
    is_internal: bool = False
    docs: bool = True  # False opts the route out of documentation
    validation: ValidateSettings = Field(default_factory=ValidateSettings, alias="validate")
    response: ResponseSettings = Field(default_factory=ResponseSettings)
    cors: Any = None
    jsonp: str | None = None
    vhost: str | list[str] | None = None
    auth: Any = None


class Endpoint(_Model):
    path: str  # /users/{id}
    method: str  # get / post / ...
    settings: RouteSettings = Field(default_factory=RouteSettings)


class ServerGroup(_Model):
    """All endpoints served by one server (identified by its URI)."""

    server: str
    endpoints: list[Endpoint] = []
    auth_lookup: Callable[[Endpoint], Any] | None = Field(default=None, exclude=True)

    def lookup_auth(self, endpoint: Endpoint) -> Any:
        if self.auth_lookup is not None:
            return self.auth_lookup(endpoint)
        return endpoint.settings.auth


class EndpointRecord(_Model):
    """Documentation for one endpoint, ready for a renderer."""

    path: str
    method: str  # uppercased
    description: str | None = None
    notes: list[str] | None = None
    tags: list[str] | None = None
    auth: Any = None
    vhost: str | list[str] | None = None
    cors: Any = None
    jsonp: str | None = None
    path_params: AnyDocNode | None = None
    query_params: AnyDocNode | None = None
    payload_params: AnyDocNode | None = None
    response_params: AnyDocNode | None = None
    status_schema: dict[str, AnyDocNode | None] | None = None


class GroupRecord(_Model):
    server: str
    routes: list[EndpointRecord]
