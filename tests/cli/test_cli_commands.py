"""CLI smoke tests: every command group against a file-backed catalog."""

import json

import pytest
from typer.testing import CliRunner

from apidoc.cli.app import app

runner = CliRunner()


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Point the CLI at a temporary data/docs directory pair."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("APIDOC_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("APIDOC_DOCS_DIR", str(tmp_path / "docs"))
    monkeypatch.setenv("APIDOC_STORAGE_BACKEND", "file")
    monkeypatch.setenv("APIDOC_LOG_LEVEL", "ERROR")
    return tmp_path


def _invoke_json(*args: str) -> dict:
    result = runner.invoke(app, [*args, "--json"])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


class TestRootCommand:
    def test_version(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "apidoc 0.1.0" in result.stdout

    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert "module" in result.output


class TestModuleCommands:
    def test_add_list_show(self, cli_env):
        created = _invoke_json("module", "add", "billing", "-d", "Money things")
        assert created["path"] == "billing"

        listed = _invoke_json("module", "list")
        assert listed == [{"id": created["id"], "name": "billing"}]

        shown = _invoke_json("module", "show", "--path", "billing")
        assert shown["id"] == created["id"]
        assert shown["description"] == "Money things"

    def test_add_child_writes_documents(self, cli_env):
        _invoke_json("module", "add", "billing")
        child = _invoke_json("module", "add", "invoices", "--parent", "billing")

        assert child["path"] == "billing/invoices"
        assert (cli_env / "docs" / "modules" / "billing" / "invoices.md").is_file()

    def test_dry_run_writes_nothing(self, cli_env):
        created = _invoke_json("module", "add", "billing", "--dry-run")
        assert created["dry_run"] is True
        assert _invoke_json("module", "list") == []

    def test_show_missing_exits_1(self, cli_env):
        result = runner.invoke(app, ["module", "show", "missing"])
        assert result.exit_code == 1

    def test_json_error_payload(self, cli_env):
        result = runner.invoke(app, ["module", "show", "missing", "--json"])
        assert result.exit_code == 1
        payload = json.loads(result.stdout)
        assert payload["success"] is False
        assert payload["error"]["code"] == "NOT_FOUND"

    def test_table_output(self, cli_env):
        _invoke_json("module", "add", "billing")
        result = runner.invoke(app, ["module", "list"])
        assert result.exit_code == 0
        assert "billing" in result.stdout


class TestEndpointCommands:
    def test_add_and_show(self, cli_env):
        module = _invoke_json("module", "add", "billing")
        endpoint = _invoke_json("endpoint", "add", module["id"], "pay", "-s", "def pay(amount)")

        shown = _invoke_json("endpoint", "show", endpoint["id"])
        assert shown["declaration"] == "def pay(amount)"
        assert shown["module_path"] == "billing"
        assert (cli_env / "docs" / "apis" / "billing" / "pay.md").is_file()


class TestSyncCommands:
    def test_sync_all_writes_index(self, cli_env):
        _invoke_json("module", "add", "billing")

        summary = _invoke_json("sync", "all")

        assert summary["documents"] == ["modules/billing.md", "index.md"]
        index = (cli_env / "docs" / "index.md").read_text(encoding="utf-8")
        assert "[billing](modules/billing.md)" in index

    def test_sync_all_dry_run(self, cli_env):
        _invoke_json("module", "add", "billing")
        _invoke_json("sync", "all", "--dry-run")
        assert not (cli_env / "docs" / "index.md").exists()


class TestConfigCommands:
    def test_show_json(self, cli_env):
        result = runner.invoke(app, ["config", "show", "--format", "json"])
        assert result.exit_code == 0
        payload = json.loads(result.stdout)
        assert payload["storage_backend"] == "file"
        assert payload["log_level"] == "ERROR"

    def test_show_env(self, cli_env):
        result = runner.invoke(app, ["config", "show", "--format", "env"])
        assert result.exit_code == 0
        assert "APIDOC_STORAGE_BACKEND=file" in result.stdout
        assert "APIDOC_LOG_LEVEL=ERROR" in result.stdout

    def test_invalid_backend(self, cli_env, monkeypatch):
        monkeypatch.setenv("APIDOC_STORAGE_BACKEND", "postgres")
        result = runner.invoke(app, ["config", "show"])
        assert result.exit_code == 1


class TestIndexCommands:
    def test_rebuild_after_detach(self, cli_env):
        parent = _invoke_json("module", "add", "billing")
        child = _invoke_json("module", "add", "invoices", "--parent", "billing")
        _invoke_json("module", "detach", parent["id"], child["id"])

        assert [m["name"] for m in _invoke_json("module", "list")] == ["billing"]

        rebuilt = _invoke_json("index", "rebuild")
        assert [m["name"] for m in rebuilt] == ["billing", "invoices"]


class TestSampleCommands:
    def test_load_writes_docs(self, cli_env):
        loaded = _invoke_json("sample", "load")

        assert [m["name"] for m in loaded["modules"]] == ["user", "product"]
        assert (cli_env / "docs" / "apis" / "user" / "login.md").is_file()
        assert (cli_env / "docs" / "index.md").is_file()
