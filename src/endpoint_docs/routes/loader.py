"""Routing table loader.

Reads a service's endpoint set from a YAML or JSON file::

    servers:
      - uri: http://localhost:8000
        routes:
          - method: get
            path: /users/{id}
            settings:
              description: Fetch a user
              validate:
                params: {type: object, children: {id: {type: number}}}
"""

from pathlib import Path

import yaml
from pydantic import ValidationError

from endpoint_docs.errors import RoutingTableError
from endpoint_docs.routes.base import Endpoint, ServerGroup


def load_routing_table(file_path: Path) -> list[ServerGroup]:
    """Parse a routing table file into server groups."""
    text = file_path.read_text(encoding="utf-8")
    try:
        doc = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise RoutingTableError(f"Cannot parse routing table {file_path}: {e}") from e

    if not isinstance(doc, dict):
        raise RoutingTableError(f"Routing table {file_path} must be a mapping with a 'servers' list")

    try:
        return [_parse_server(server) for server in doc.get("servers", [])]
    except (ValidationError, KeyError, TypeError) as e:
        raise RoutingTableError(f"Invalid routing table {file_path}: {e}") from e


def _parse_server(server: dict) -> ServerGroup:
    return ServerGroup(
        server=server["uri"],
        endpoints=[_parse_route(route) for route in server.get("routes", [])],
    )


def _parse_route(route: dict) -> Endpoint:
    return Endpoint(
        method=route["method"],
        path=route["path"],
        settings=route.get("settings") or {},
    )
