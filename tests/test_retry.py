import pytest

from wair.core.errors import ApiError
from wair.core.retry import RetryPolicy, linear_backoff, run_with_retry
from tests.fixtures import RecordingSleep


class Flaky:
    def __init__(self, *errors, result="ok"):
        self.errors = list(errors)
        self.result = result
        self.calls = 0

    async def __call__(self):
        self.calls += 1
        if self.errors:
            raise self.errors.pop(0)
        return self.result


def test_linear_backoff_grows_by_step():
    delay = linear_backoff(1000)
    assert [delay(1), delay(2), delay(3)] == [1.0, 2.0, 3.0]


@pytest.mark.asyncio
async def test_retries_transient_errors_then_succeeds():
    sleep = RecordingSleep()
    call = Flaky(ApiError("busy", "RATE_LIMIT", True), ApiError("busy", "RATE_LIMIT", True))
    out = await run_with_retry(call, RetryPolicy.linear(2), sleep=sleep)
    assert out == "ok"
    assert call.calls == 3
    assert sleep.delays == [1.0, 2.0]


@pytest.mark.asyncio
async def test_non_retryable_error_is_raised_immediately():
    sleep = RecordingSleep()
    err = ApiError("bad request", "API_ERROR", False)
    call = Flaky(err)
    with pytest.raises(ApiError) as exc:
        await run_with_retry(call, RetryPolicy.linear(5), sleep=sleep)
    assert exc.value is err
    assert call.calls == 1
    assert sleep.delays == []


@pytest.mark.asyncio
async def test_last_error_propagates_when_budget_runs_out():
    sleep = RecordingSleep()
    errors = [ApiError(f"e{i}", "EMPTY_RESPONSE", True) for i in range(3)]
    call = Flaky(*errors)
    with pytest.raises(ApiError) as exc:
        await run_with_retry(call, RetryPolicy.linear(2), sleep=sleep)
    assert exc.value is errors[-1]
    assert call.calls == 3


@pytest.mark.asyncio
async def test_custom_predicate_decides_what_is_retried():
    sleep = RecordingSleep()
    policy = RetryPolicy(max_attempts=2, backoff=lambda n: 0.5, is_retryable=lambda e: isinstance(e, KeyError))
    call = Flaky(KeyError("x"))
    assert await run_with_retry(call, policy, sleep=sleep) == "ok"
    assert sleep.delays == [0.5]

    with pytest.raises(ValueError):
        await run_with_retry(Flaky(ValueError("no")), policy, sleep=sleep)
