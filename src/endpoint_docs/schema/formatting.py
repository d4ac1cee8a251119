"""Display formatting for individual constraint values."""

import datetime
import json
import math
from typing import Any

from endpoint_docs.schema.base import Dependency, Reference


def format_reference(ref: Reference) -> str:
    """Context references get a ``$`` prefix, field references are the bare key."""
    return ("$" if ref.is_context else "") + ref.key


def format_existing_values(value_type: str, values: list[Any]) -> str | None:
    """Format allowed or disallowed values as a comma separated list.

    Empty strings are dropped, and so are infinities on numbers: the
    validation library uses them to mean "unbounded". Literals are JSON
    encoded so they read the same as on the wire. Returns None when no
    value survives.
    """
    formatted = [
        format_reference(value) if isinstance(value, Reference) else _encode_literal(value)
        for value in values
        if _is_constraint(value_type, value)
    ]
    return ", ".join(formatted) if formatted else None


def _is_constraint(value_type: str, value: Any) -> bool:
    if isinstance(value, str) and not value:
        return False
    if (
        value_type == "number"
        and isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isinf(value)
    ):
        return False
    return True


def _encode_literal(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def format_peer_dependency(dep: Dependency) -> str:
    if dep.key:
        negation = "" if dep.relation == "with" else "not "
        return f"Requires {', '.join(dep.peers)} to {negation}be present when {dep.key} is."
    return "Requires " + f" {dep.relation} ".join(dep.peers) + "."


def process_notes(notes: str | list[str] | None) -> list[str] | None:
    if not notes:
        return None
    if isinstance(notes, str):
        return [notes]
    return notes


def capitalize(name: str) -> str:
    # rest of the name keeps its case: "minLength" -> "MinLength"
    return name[:1].upper() + name[1:]
