"""Unit tests for the heartbeat context manager."""

import asyncio

import pytest

from augrag.application.heartbeat import heartbeat


@pytest.mark.asyncio
async def test_callback_called_periodically_and_stopped() -> None:
    calls = 0

    async def beat() -> None:
        nonlocal calls
        calls += 1

    async with heartbeat(beat, 0.01):
        await asyncio.sleep(0.055)
    stopped_at = calls
    await asyncio.sleep(0.03)

    assert stopped_at >= 3
    assert calls == stopped_at


@pytest.mark.asyncio
async def test_stopped_when_block_raises() -> None:
    calls = 0

    async def beat() -> None:
        nonlocal calls
        calls += 1

    with pytest.raises(RuntimeError):
        async with heartbeat(beat, 0.01):
            await asyncio.sleep(0.02)
            raise RuntimeError("operation failed")
    stopped_at = calls
    await asyncio.sleep(0.03)

    assert calls == stopped_at


@pytest.mark.asyncio
async def test_failing_callback_keeps_beating(caplog: pytest.LogCaptureFixture) -> None:
    calls = 0

    async def beat() -> None:
        nonlocal calls
        calls += 1
        raise ConnectionError("chat unavailable")

    async with heartbeat(beat, 0.01):
        await asyncio.sleep(0.035)

    assert calls >= 2
    assert "Heartbeat callback failed" in caplog.text


@pytest.mark.asyncio
async def test_none_callback_is_noop() -> None:
    async with heartbeat(None, 0):
        pass


@pytest.mark.asyncio
async def test_non_positive_interval_rejected() -> None:
    async def beat() -> None:
        pass

    with pytest.raises(ValueError):
        async with heartbeat(beat, 0):
            pass
