"""Tests for the pco command line."""

import hashlib
import hmac
import json
from pathlib import Path

import httpx
import pytest
from typer.testing import CliRunner

from factories import RecordingTransport, document, json_response, resource
from pco_cli import VERSION
from pco_cli.cli import common
from pco_cli.cli.app import app
from pco_cli.client import create_client

runner = CliRunner()

TOKEN = ["--token", "app:secret"]


@pytest.fixture
def api(clean_env: Path, monkeypatch: pytest.MonkeyPatch):
    """Route CLI requests to canned responses keyed on ``(method, path)``."""
    routes = {}
    transport = RecordingTransport(
        lambda request: routes.get((request.method, request.url.path), lambda r: json_response(404))(request)
    )
    monkeypatch.setattr(common, "create_client", lambda settings: create_client(settings, transport=transport))
    transport.routes = routes
    return transport


def fixed(payload, status: int = 200):
    return lambda request: json_response(status, payload)


class TestRootCommand:
    """Test cases for global options."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert VERSION in result.output

    def test_invalid_format(self, clean_env: Path) -> None:
        result = runner.invoke(app, ["--format", "xml", "people", "list"])
        assert result.exit_code == 2

    def test_missing_credentials(self, clean_env: Path) -> None:
        result = runner.invoke(app, ["people", "list"])
        assert result.exit_code == 1
        assert "PLANNING_CENTER_PAT" in result.output


class TestListAndGet:
    """Test cases for the generated list and get commands."""

    def test_list_json(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed(document(
            [resource("Person", 1, first_name="Ann"), resource("Person", 2, first_name="Bo")], total_count=5
        ))

        result = runner.invoke(app, TOKEN + ["--format", "json", "people", "list", "--page-size", "2"])

        assert result.exit_code == 0, result.output
        assert '"first_name": "Ann"' in result.output
        assert "Showing 2 of 5 people (Page 1)" in result.output
        assert api.last_request.url.params["per_page"] == "2"
        assert api.last_request.headers["Authorization"].startswith("Basic ")

    def test_list_passes_filters(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed(document([]))

        result = runner.invoke(
            app, TOKEN + ["people", "list", "--where", "status=active", "--order", "-created_at", "--page", "3"]
        )

        assert result.exit_code == 0, result.output
        params = api.last_request.url.params
        assert params["where[status]"] == "active"
        assert params["order"] == "-created_at"
        assert params["offset"] == str(2 * 25)

    def test_invalid_where(self, api: RecordingTransport) -> None:
        result = runner.invoke(app, TOKEN + ["people", "list", "--where", "status"])
        assert result.exit_code == 1
        assert "Error" in result.output
        assert api.requests == []

    def test_list_all_with_max_items(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed(document(
            [resource("Person", i, first_name=f"P{i}") for i in range(1, 4)]
        ))

        result = runner.invoke(app, TOKEN + ["-f", "json", "people", "list", "--all", "--max-items", "2"])

        assert result.exit_code == 0, result.output
        assert "Retrieved 2 people" in result.output
        assert "P3" not in result.output

    def test_all_not_supported(self, api: RecordingTransport) -> None:
        result = runner.invoke(app, TOKEN + ["people", "emails", "list", "1", "--all"])
        assert result.exit_code == 1
        assert "--all is not supported for emails" in result.output

    def test_get_found(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people/7")] = fixed(document(resource("Person", 7, first_name="Ann")))

        result = runner.invoke(app, TOKEN + ["-f", "json", "people", "get", "7"])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["first_name"] == "Ann"

    def test_get_not_found(self, api: RecordingTransport) -> None:
        result = runner.invoke(app, TOKEN + ["people", "get", "404"])
        assert result.exit_code == 0
        assert "Person with ID '404' not found." in result.output

    def test_api_error_exits_with_message(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed({"errors": [{"title": "Unauthorized"}]}, 401)

        result = runner.invoke(app, TOKEN + ["people", "list"])

        assert result.exit_code == 1
        assert "Error" in result.output

    def test_output_file(self, api: RecordingTransport, clean_env: Path) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed(document([resource("Person", 1, first_name="Ann")]))
        target = clean_env / "people.csv"

        result = runner.invoke(app, TOKEN + ["-f", "csv", "people", "list", "--output-file", str(target)])

        assert result.exit_code == 0, result.output
        assert "Showing" not in result.output
        assert target.read_text(encoding="utf-8").splitlines()[0].startswith("id")

    def test_all_pages_to_output_file_prints_no_summary(self, api: RecordingTransport, clean_env: Path) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed(document([resource("Person", 1, first_name="Ann")]))
        target = clean_env / "people.json"

        result = runner.invoke(
            app, TOKEN + ["-f", "json", "people", "list", "--all", "--output-file", str(target)]
        )

        assert result.exit_code == 0, result.output
        assert "Retrieved" not in result.output
        assert json.loads(target.read_text(encoding="utf-8"))[0]["first_name"] == "Ann"

    def test_nested_list_commands(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people/7/field_data")] = fixed(document(
            [resource("FieldDatum", 1, value="Large")], total_count=1
        ))
        api.routes[("GET", "/publishing/v2/episodes/3/speakerships")] = fixed(document(
            [resource("Speakership", 9, role="host", relationships={"speaker": ("Speaker", "4")})]
        ))

        field_data = runner.invoke(app, TOKEN + ["-f", "json", "people", "field-data", "7"])
        speakerships = runner.invoke(app, TOKEN + ["-f", "json", "publishing", "speakerships", "list", "3"])

        assert field_data.exit_code == 0, field_data.output
        assert '"value": "Large"' in field_data.output
        assert "Showing 1 of 1 field data (Page 1)" in field_data.output
        assert speakerships.exit_code == 0, speakerships.output
        assert '"speaker_id": "4"' in speakerships.output


class TestPeopleSearch:
    """Test cases for ``pco people search``."""

    def test_found(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed(document(
            [resource("Person", 1, first_name="Ann")], total_count=12
        ))

        result = runner.invoke(app, TOKEN + ["-f", "json", "people", "search", "ann", "--limit", "5"])

        assert result.exit_code == 0, result.output
        assert '"first_name": "Ann"' in result.output
        assert "Found 1 of 12 people matching 'ann'" in result.output
        params = api.last_request.url.params
        assert params["where[search_name_or_email]"] == "ann"
        assert params["per_page"] == "5"

    def test_none_found(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/people")] = fixed(document([]))

        result = runner.invoke(app, TOKEN + ["people", "search", "nobody"])

        assert result.exit_code == 0, result.output
        assert "No people found matching 'nobody'." in result.output

    def test_limit_out_of_range(self, api: RecordingTransport) -> None:
        result = runner.invoke(app, TOKEN + ["people", "search", "ann", "--limit", "500"])
        assert result.exit_code == 2
        assert api.requests == []


class TestGivingTotal:
    """Test cases for ``pco giving donations total``."""

    def test_total(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/giving/v2/donations")] = fixed(document([
            resource("Donation", 1, amount_cents=1000),
            resource("Donation", 2, amount_cents=575),
        ]))

        result = runner.invoke(app, TOKEN + ["giving", "donations", "total"])

        assert result.exit_code == 0, result.output
        assert "Total giving: $15.75 (1575 cents)" in result.output

    def test_total_needs_both_bounds(self, api: RecordingTransport) -> None:
        result = runner.invoke(app, TOKEN + ["giving", "donations", "total", "--start", "2024-01-01"])
        assert result.exit_code == 1
        assert api.requests == []


class TestHealth:
    """Test cases for ``pco health``."""

    def test_healthy(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/me")] = fixed(document(resource("Person", 1)))

        result = runner.invoke(app, TOKEN + ["health"])

        assert result.exit_code == 0, result.output
        assert "healthy" in result.output

    def test_unhealthy(self, api: RecordingTransport) -> None:
        api.routes[("GET", "/people/v2/me")] = fixed({"errors": []}, 401)

        result = runner.invoke(app, TOKEN + ["health"])

        assert result.exit_code == 1
        assert "unhealthy" in result.output


class TestWebhookVerify:
    """Test cases for ``pco webhooks verify``."""

    def run_verify(self, tmp_path: Path, signature: str):
        payload_file = tmp_path / "payload.json"
        payload_file.write_text('{"data": []}', encoding="utf-8")
        return runner.invoke(
            app,
            ["webhooks", "verify", "--payload-file", str(payload_file), "--signature", signature, "--secret", "key"],
        )

    def test_valid(self, tmp_path: Path) -> None:
        signature = hmac.new(b"key", b'{"data": []}', hashlib.sha256).hexdigest()
        result = self.run_verify(tmp_path, signature)
        assert result.exit_code == 0
        assert "Signature is valid." in result.output

    def test_invalid(self, tmp_path: Path) -> None:
        result = self.run_verify(tmp_path, "00" * 32)
        assert result.exit_code == 1
        assert "Signature is invalid." in result.output


@pytest.mark.usefixtures("clean_env")
class TestConfigCommand:
    """Test cases for ``pco config``."""

    def test_set_project_value(self, clean_env: Path) -> None:
        result = runner.invoke(app, ["config", "--set", "default_page_size=50", "--scope", "project"])

        assert result.exit_code == 0, result.output
        saved = json.loads((clean_env / ".pco" / "settings.json").read_text(encoding="utf-8"))
        assert saved == {"default_page_size": 50}

    def test_set_rejects_invalid_value(self, clean_env: Path) -> None:
        result = runner.invoke(app, ["config", "--set", "default_page_size=500", "--scope", "project"])

        assert result.exit_code == 1
        assert "default_page_size" in result.output
        assert not (clean_env / ".pco" / "settings.json").exists()

    def test_set_normalizes_value(self, clean_env: Path) -> None:
        result = runner.invoke(app, ["config", "--set", "log_level=debug", "--scope", "project"])

        assert result.exit_code == 0, result.output
        saved = json.loads((clean_env / ".pco" / "settings.json").read_text(encoding="utf-8"))
        assert saved == {"log_level": "DEBUG"}

    def test_set_rejects_secret(self) -> None:
        result = runner.invoke(app, ["config", "--set", "personal_access_token=a:b"])
        assert result.exit_code == 1

    def test_set_needs_equals(self) -> None:
        result = runner.invoke(app, ["config", "--set", "default_page_size"])
        assert result.exit_code == 1
        assert "key=value" in result.output

    def test_invalid_scope(self) -> None:
        result = runner.invoke(app, ["config", "--set", "timeout=5", "--scope", "global"])
        assert result.exit_code == 1
        assert "Invalid scope" in result.output

    def test_init(self, clean_env: Path) -> None:
        result = runner.invoke(app, ["config", "--init", "--scope", "project"])

        assert result.exit_code == 0, result.output
        assert (clean_env / ".pco" / ".env").exists()

    def test_show_masks_token(self) -> None:
        result = runner.invoke(app, ["--token", "app:secret", "config", "--show"])

        assert result.exit_code == 0, result.output
        assert "app:secret" not in result.output

    def test_no_option_prints_usage(self) -> None:
        result = runner.invoke(app, ["config"])
        assert result.exit_code == 0
        assert "--show" in result.output
