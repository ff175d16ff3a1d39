import pytest

from flowlink.utils.retry import (
    MAX_BACKOFF_SECONDS,
    compute_backoff,
    retry_async,
    schedule_retry,
)


def test_backoff_grows_with_attempts():
    delays = [compute_backoff(attempt, jitter=0) for attempt in range(1, 5)]
    assert delays == sorted(delays)
    assert delays[0] == 1.5


def test_backoff_is_capped():
    assert compute_backoff(50, jitter=0) == MAX_BACKOFF_SECONDS
    assert compute_backoff(50) <= MAX_BACKOFF_SECONDS + 0.5


@pytest.mark.asyncio
async def test_schedule_retry_sleeps_for_backoff(monkeypatch):
    slept = []

    async def fake_sleep(delay):
        slept.append(delay)

    monkeypatch.setattr("flowlink.utils.retry.asyncio.sleep", fake_sleep)
    await schedule_retry(2)
    assert 2.25 <= slept[0] <= 2.75


@pytest.mark.asyncio
async def test_retry_async_retries_matching_errors(monkeypatch):
    retries = []
    attempts = []

    async def fake_retry(attempt):
        retries.append(attempt)

    async def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise ConnectionError("down")
        return "ok"

    monkeypatch.setattr("flowlink.utils.retry.schedule_retry", fake_retry)

    assert await retry_async(flaky, 2, retry_on=(ConnectionError,)) == "ok"
    assert retries == [1, 2]


@pytest.mark.asyncio
async def test_retry_async_gives_up_and_skips_other_errors(monkeypatch):
    async def fake_retry(attempt):
        return None

    async def down():
        raise ConnectionError("down")

    async def broken():
        raise KeyError("nope")

    monkeypatch.setattr("flowlink.utils.retry.schedule_retry", fake_retry)

    with pytest.raises(ConnectionError):
        await retry_async(down, 1, retry_on=(ConnectionError,))
    with pytest.raises(KeyError):
        await retry_async(broken, 5, retry_on=(ConnectionError,))
