"""Tests for scripts/run_cron_job.py: manual job runs from the command line."""

import importlib.util
from pathlib import Path

import pytest

from churchapp.core.errors import PersistenceError

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "run_cron_job.py"


@pytest.fixture
def script(monkeypatch):
    spec = importlib.util.spec_from_file_location("run_cron_job", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    closed = []

    class FakeSession:
        def close(self):
            closed.append(True)

    monkeypatch.setattr(module, "SessionLocal", FakeSession)
    module.closed = closed
    return module


class TestRunCronJob:
    def test_prints_result(self, script, monkeypatch, capsys):
        monkeypatch.setattr(script, "run_rota_reminders", lambda db, today, app_url: {"success": True, "sent": 2})
        assert script.main(["rota-reminders"]) == 0
        assert '"sent": 2' in capsys.readouterr().out
        assert script.closed == [True]

    def test_read_failure_exits_non_zero(self, script, monkeypatch, capsys):
        def boom(*args, **kwargs):
            raise PersistenceError("Failed to fetch patterns")

        monkeypatch.setattr(script, "run_service_generation", boom)
        assert script.main(["generate-services"]) == 1
        assert "generate-services aborted: Failed to fetch patterns" in capsys.readouterr().err
        assert script.closed == [True]

    def test_unknown_job_rejected(self, script):
        with pytest.raises(SystemExit):
            script.main(["weekly-digest"])
