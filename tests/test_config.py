from pathlib import Path

import pytest
from pydantic import ValidationError

from endpoint_docs.config import DEFAULT_METHODS_ORDER, DocsSettings, load_settings
from endpoint_docs.errors import ConfigurationError

FIXTURES = Path(__file__).parent / "fixtures"


class TestDocsSettings:
    def test_defaults(self):
        settings = DocsSettings()
        assert settings.endpoint == "/docs"
        assert settings.api_version is None
        assert settings.methods_order == DEFAULT_METHODS_ORDER
        assert settings.filter_routes is None

    @pytest.mark.parametrize("raw, expected", [
        ("docs", "/docs"),
        ("/docs/", "/docs"),
        ("api/docs/", "/api/docs"),
        ("/", "/"),
    ])
    def test_endpoint_normalized(self, raw, expected):
        assert DocsSettings(endpoint=raw).endpoint == expected

    def test_css_base_url(self):
        assert DocsSettings().css_base_url == "/docs/css"
        assert DocsSettings(endpoint="/").css_base_url == "/css"

    def test_methods_order_lowercased(self):
        assert DocsSettings(methods_order=("GET", "Post")).methods_order == ("get", "post")

    def test_immutable(self):
        settings = DocsSettings()
        with pytest.raises(ValidationError):
            settings.endpoint = "/other"


class TestLoadSettings:
    def test_from_file(self):
        settings = load_settings(FIXTURES / "settings.yaml")
        assert settings.endpoint == "/api-docs"
        assert settings.api_version == "2.1"

    def test_overrides_win(self):
        settings = load_settings(FIXTURES / "settings.yaml", api_version="3.0")
        assert settings.api_version == "3.0"

    def test_unknown_option_fails(self):
        with pytest.raises(ConfigurationError):
            load_settings(templates="html")

    def test_invalid_value_fails(self):
        with pytest.raises(ConfigurationError):
            load_settings(filter_routes="not callable")

    def test_non_mapping_file_fails(self, tmp_path):
        f = tmp_path / "settings.yaml"
        f.write_text("- one\n")
        with pytest.raises(ConfigurationError):
            load_settings(f)
