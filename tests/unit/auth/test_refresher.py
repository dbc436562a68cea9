"""Unit tests for the background PersistentRefresher."""

import asyncio
import logging
from unittest.mock import AsyncMock, Mock

import pytest

from nfield_client.auth import PersistentRefresher
from nfield_client.exceptions import AuthenticationFailedError


@pytest.fixture
def token_manager():
    manager = Mock()
    manager.refresh = AsyncMock()
    return manager


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_not_running_until_started(self, token_manager):
        refresher = PersistentRefresher(token_manager, interval=0.01)
        assert not refresher.is_running()

    @pytest.mark.asyncio
    async def test_refreshes_on_interval(self, token_manager):
        refresher = PersistentRefresher(token_manager, interval=0.01)
        refresher.start()
        await asyncio.sleep(0.05)
        await refresher.stop()

        assert token_manager.refresh.await_count >= 2

    @pytest.mark.asyncio
    async def test_double_start_keeps_one_task(self, token_manager):
        refresher = PersistentRefresher(token_manager, interval=10)
        refresher.start()
        first = refresher._task
        refresher.start(interval=0.01)

        assert refresher._task is first
        assert refresher.interval == 10
        await refresher.stop()

    @pytest.mark.asyncio
    async def test_stop_is_idempotent(self, token_manager):
        refresher = PersistentRefresher(token_manager, interval=10)
        await refresher.stop()
        refresher.start()
        await refresher.stop()
        await refresher.stop()

        assert not refresher.is_running()

    @pytest.mark.asyncio
    async def test_no_refresh_after_stop(self, token_manager):
        refresher = PersistentRefresher(token_manager, interval=0.01)
        refresher.start()
        await refresher.stop()
        count = token_manager.refresh.await_count
        await asyncio.sleep(0.03)

        assert token_manager.refresh.await_count == count

    @pytest.mark.asyncio
    async def test_rejects_non_positive_interval(self, token_manager):
        refresher = PersistentRefresher(token_manager)
        with pytest.raises(ValueError, match="positive"):
            refresher.start(interval=0)
        assert not refresher.is_running()

    @pytest.mark.asyncio
    async def test_context_manager(self, token_manager):
        async with PersistentRefresher(token_manager, interval=10) as refresher:
            assert refresher.is_running()
        assert not refresher.is_running()


class TestFailures:
    @pytest.mark.asyncio
    async def test_sync_handler_receives_error(self, token_manager):
        error = AuthenticationFailedError("401: bad credentials", status_code=401)
        token_manager.refresh.side_effect = error
        handler = Mock()

        refresher = PersistentRefresher(token_manager, interval=0.01, on_error=handler)
        refresher.start()
        await asyncio.sleep(0.035)
        await refresher.stop()

        assert handler.call_count >= 2
        handler.assert_called_with(error)

    @pytest.mark.asyncio
    async def test_async_handler_is_awaited(self, token_manager):
        token_manager.refresh.side_effect = AuthenticationFailedError("500: down")
        handler = AsyncMock()

        refresher = PersistentRefresher(token_manager, interval=0.01)
        refresher.start(on_error=handler)
        await asyncio.sleep(0.025)
        await refresher.stop()

        assert handler.await_count >= 1

    @pytest.mark.asyncio
    async def test_loop_survives_failures(self, token_manager):
        failures = [AuthenticationFailedError("503: busy")]

        async def refresh():
            if failures:
                raise failures.pop()

        token_manager.refresh.side_effect = refresh
        handler = Mock()

        refresher = PersistentRefresher(token_manager, interval=0.01, on_error=handler)
        refresher.start()
        await asyncio.sleep(0.045)
        await refresher.stop()

        assert handler.call_count == 1
        assert token_manager.refresh.await_count >= 2

    @pytest.mark.asyncio
    async def test_logs_warning_without_handler(self, token_manager, caplog):
        token_manager.refresh.side_effect = AuthenticationFailedError("401: nope")

        refresher = PersistentRefresher(token_manager, interval=0.01)
        with caplog.at_level(logging.WARNING, logger="nfield_client.auth.refresher"):
            refresher.start()
            await asyncio.sleep(0.025)
            await refresher.stop()

        assert "Background token refresh failed: 401: nope" in caplog.text

    @pytest.mark.asyncio
    async def test_failing_handler_is_logged(self, token_manager, caplog):
        token_manager.refresh.side_effect = AuthenticationFailedError("401: nope")
        handler = Mock(side_effect=RuntimeError("handler broke"))

        refresher = PersistentRefresher(token_manager, interval=0.01, on_error=handler)
        with caplog.at_level(logging.ERROR, logger="nfield_client.auth.refresher"):
            refresher.start()
            await asyncio.sleep(0.025)
            await refresher.stop()

        assert "error handler raised" in caplog.text
