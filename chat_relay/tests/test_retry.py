from chat_relay.domain.models import Retryable, RetryPolicy, Success, Terminal
from chat_relay.providers.retry import backoff_delay, run_with_retry


class ZeroJitter:
    def uniform(self, a, b):
        return 0.0


def test_backoff_delay_doubles():
    policy = RetryPolicy(max_attempts=4, base_delay=0.5, max_jitter=0.2)
    delays = [backoff_delay(policy, n, ZeroJitter()) for n in (1, 2, 3)]
    assert delays == [0.5, 1.0, 2.0]


def test_backoff_delay_jitter_bounded():
    policy = RetryPolicy(max_attempts=4, base_delay=0.5, max_jitter=0.2)
    for _ in range(50):
        assert 0.5 <= backoff_delay(policy, 1) <= 0.7


def test_retry_policy_minimum_one_attempt():
    assert RetryPolicy(max_attempts=0).max_attempts == 1


def test_run_with_retry_stops_on_terminal():
    seen = []
    sleeps = []

    def attempt(n):
        seen.append(n)
        return Terminal(message="nope", status_code=400)

    outcome = run_with_retry(attempt, RetryPolicy(max_attempts=5), sleep=sleeps.append)
    assert outcome == Terminal(message="nope", status_code=400)
    assert seen == [1]
    assert sleeps == []


def test_run_with_retry_returns_last_retryable():
    sleeps = []

    def attempt(n):
        return Retryable(reason=f"fail {n}", status_code=503)

    policy = RetryPolicy(max_attempts=3, base_delay=0.1, max_jitter=0.0)
    outcome = run_with_retry(attempt, policy, sleep=sleeps.append, rng=ZeroJitter())
    assert outcome == Retryable(reason="fail 3", status_code=503)
    assert sleeps == [0.1, 0.2]


def test_run_with_retry_success_after_failures():
    results = [Retryable(reason="x"), Success(text="done")]
    sleeps = []
    outcome = run_with_retry(lambda n: results[n - 1], RetryPolicy(max_attempts=4), sleep=sleeps.append)
    assert outcome == Success(text="done")
    assert len(sleeps) == 1
