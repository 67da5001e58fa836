"""Unit tests for main.py lifespan and drain loop."""

import asyncio
import logging

import pytest
from unittest.mock import MagicMock, patch
from fastapi.testclient import TestClient

from locinstaller.config import InstallerSettings
from locinstaller.main import drain_loop
from locinstaller.services.session_controller import SessionController


# -----------------------------------------------------------------------
# drain_loop
# -----------------------------------------------------------------------

@pytest.mark.unit
class TestDrainLoop:

    @pytest.mark.asyncio
    async def test_drains_repeatedly_until_cancelled(self):
        controller = MagicMock()
        task = asyncio.create_task(drain_loop(controller, 0.01))

        await asyncio.sleep(0.1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert controller.drain.call_count >= 2

    @pytest.mark.asyncio
    async def test_drain_error_is_logged_and_loop_continues(self, caplog):
        controller = MagicMock()
        controller.drain.side_effect = [RuntimeError("bad event")] + [[]] * 100
        task = asyncio.create_task(drain_loop(controller, 0.01))

        with caplog.at_level(logging.ERROR, logger="locinstaller.drain"):
            await asyncio.sleep(0.05)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        assert controller.drain.call_count >= 2
        assert "bad event" in caplog.text


# -----------------------------------------------------------------------
# lifespan
# -----------------------------------------------------------------------

def _run_app(settings):
    from locinstaller.main import app

    with patch("locinstaller.main.configure_logging") as mock_log:
        mock_log.return_value = MagicMock()
        with patch("locinstaller.main.get_settings", return_value=settings):
            with TestClient(app) as client:
                client.get("/")
    return mock_log


@pytest.mark.unit
class TestLifespan:

    def test_logger_configured_from_settings(self, tmp_path):
        settings = InstallerSettings(log_file=str(tmp_path / "svc.log"), log_level="debug")

        mock_log = _run_app(settings)

        mock_log.assert_called_once_with(settings)
        assert mock_log.call_args.args[0].logging_level == logging.DEBUG

    def test_controller_created_with_line_limit(self, tmp_path):
        settings = InstallerSettings(log_file=str(tmp_path / "svc.log"), max_line_length=512)

        _run_app(settings)

        assert SessionController().max_line_length == 512

    def test_shutdown_warns_when_installer_running(self, tmp_path):
        settings = InstallerSettings(log_file=str(tmp_path / "svc.log"))

        with patch.object(SessionController, "is_running", return_value=True):
            mock_log = _run_app(settings)

        mock_log.return_value.warning.assert_called_once()
