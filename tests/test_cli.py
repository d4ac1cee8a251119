import json
from pathlib import Path

from click.testing import CliRunner

from endpoint_docs.cli import main

FIXTURES = Path(__file__).parent / "fixtures"
TABLE = str(FIXTURES / "routes.yaml")


class TestCliRender:
    def test_index_markdown(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", TABLE])

        assert result.exit_code == 0
        assert result.output.index("### GET /test") < result.output.index("### POST /test")
        assert "/notincluded" not in result.output
        assert "/internal" not in result.output
        assert "OPTIONS" not in result.output
        assert "## http://localhost:9000" in result.output

    def test_single_route(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", TABLE, "--path", "/test", "--server", "http://localhost:8000", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["kind"] == "route"
        assert [route["method"] for route in data["routes"]] == ["GET", "POST"]
        assert data["routes"][1]["statusSchema"]["201"]["children"][0]["name"] == "id"

    def test_index_json(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", TABLE, "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["kind"] == "index"
        delete_route = data["groups"][1]["routes"][0]
        assert delete_route["method"] == "DELETE"
        assert delete_route["pathParams"]["children"][0]["type"] == "integer"

    def test_not_found(self):
        runner = CliRunner()
        result = runner.invoke(main, ["render", TABLE, "--path", "/missing"])

        assert result.exit_code == 1
        assert "Not Found" in result.output

    def test_output_file_and_config(self, tmp_path):
        output_file = tmp_path / "out" / "docs.md"
        runner = CliRunner()
        result = runner.invoke(main, [
            "render", TABLE,
            "--config", str(FIXTURES / "settings.yaml"),
            "-o", str(output_file),
        ])

        assert result.exit_code == 0
        content = output_file.read_text(encoding="utf-8")
        assert content.startswith("# API Documentation (v2.1)")

    def test_invalid_config(self, tmp_path):
        config = tmp_path / "settings.yaml"
        config.write_text("unknown_option: 1\n")
        runner = CliRunner()
        result = runner.invoke(main, ["render", TABLE, "--config", str(config)])

        assert result.exit_code == 1
        assert "Invalid documentation settings" in result.output


class TestCliDescribe:
    def test_describe_schema(self):
        runner = CliRunner()
        result = runner.invoke(main, ["describe", str(FIXTURES / "schema.yaml")])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["root"] is True
        children = {child["name"]: child for child in data["children"]}
        assert children["username"]["type"] == "alphanum"
        assert children["password"]["flags"]["required"] is True
        assert children["confirm"]["type"] == "reference"
        assert children["confirm"]["target"] == "password"
        assert data["peers"] == ["Requires confirm to be present when password is."]

    def test_describe_malformed(self, tmp_path):
        f = tmp_path / "schema.yaml"
        f.write_text("type: tuple\n")
        runner = CliRunner()
        result = runner.invoke(main, ["describe", str(f)])

        assert result.exit_code == 1
        assert "Malformed schema descriptor" in result.output

    def test_describe_not_a_schema(self, tmp_path):
        f = tmp_path / "schema.yaml"
        f.write_text("just text\n")
        runner = CliRunner()
        result = runner.invoke(main, ["describe", str(f)])

        assert result.exit_code == 1
