import pytest
import yaml
from typer.testing import CliRunner

from rsspress.cli.app import app

runner = CliRunner()


@pytest.fixture
def memory_config(tmp_path, monkeypatch):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"storage": {"backend": "memory"}, "llm": {"provider": "mock"}}))
    monkeypatch.setenv("RSSPRESS_CONFIG", str(path))
    return path


class TestCLI:

    def test_feeds_defaults(self, memory_config):
        result = runner.invoke(app, ["feeds", "defaults", "--locale", "ja"])

        assert result.exit_code == 0
        assert "NHK" in result.stdout

    def test_history_rejects_future_date(self, memory_config):
        result = runner.invoke(app, ["history", "paper-1", "--date", "2999-01-01"])

        assert result.exit_code == 1
        assert "FUTURE_DATE" in result.stdout

    def test_history_rejects_malformed_date(self, memory_config):
        result = runner.invoke(app, ["history", "paper-1", "--date", "yesterday"])

        assert result.exit_code == 1
        assert "INVALID_DATE" in result.stdout

    def test_dates_empty(self, memory_config):
        result = runner.invoke(app, ["dates", "paper-1"])

        assert result.exit_code == 0
        assert "No stored dates" in result.stdout

    def test_cleanup_on_empty_store(self, memory_config):
        result = runner.invoke(app, ["cleanup"])

        assert result.exit_code == 0
        assert "Cleanup complete" in result.stdout

    def test_init_memory_backend(self, tmp_path):
        result = runner.invoke(app, ["init", "--config-dir", str(tmp_path), "--backend", "memory"])

        assert result.exit_code == 0
        saved = yaml.safe_load((tmp_path / "config.yaml").read_text())
        assert saved["storage"]["backend"] == "memory"
