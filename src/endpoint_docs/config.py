"""Documentation settings.

Settings are built once from declared defaults plus validated overrides
and are immutable afterwards.
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from endpoint_docs.errors import ConfigurationError

DEFAULT_METHODS_ORDER = ("get", "head", "post", "put", "patch", "delete", "trace", "options")


class DocsSettings(BaseModel):
    """Options for the documentation route and route selection."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    endpoint: str = "/docs"
    api_version: str | None = None
    css_path: Path | None = None  # directory of presentation assets
    methods_order: tuple[str, ...] = DEFAULT_METHODS_ORDER
    # Called as filter_routes(method, path, group); False hides the route.
    filter_routes: Callable[[str, str, Any], bool] | None = None
    # FastAPI dependency guarding the documentation routes.
    auth: Callable[..., Any] | None = None

    @field_validator("endpoint")
    @classmethod
    def _normalize_endpoint(cls, value: str) -> str:
        if not value.startswith("/"):
            value = "/" + value
        if len(value) > 1 and value.endswith("/"):
            value = value[:-1]
        return value

    @field_validator("methods_order")
    @classmethod
    def _lowercase_methods(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(method.lower() for method in value)

    @property
    def css_base_url(self) -> str:
        return ("" if self.endpoint == "/" else self.endpoint) + "/css"


def load_settings(file_path: Path | None = None, **overrides: Any) -> DocsSettings:
    """Build settings from an optional YAML file and keyword overrides.

    Raises ConfigurationError when the file is unreadable or any option is invalid.
    """
    data: dict[str, Any] = {}
    if file_path is not None:
        try:
            loaded = yaml.safe_load(file_path.read_text(encoding="utf-8"))
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot read settings from {file_path}: {e}") from e
        if loaded is not None and not isinstance(loaded, dict):
            raise ConfigurationError(f"Settings file {file_path} must contain a mapping")
        data.update(loaded or {})
    data.update(overrides)

    try:
        return DocsSettings(**data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid documentation settings: {e}") from e
