"""带指数退避与随机抖动的重试循环。

单次尝试返回 AttemptOutcome，而不是抛异常：

- Success / Terminal：立即返回；
- Retryable：等待 backoff_delay 后再次尝试，直到 max_attempts 耗尽。

sleep 与 rng 可注入，便于测试中记录等待时间而不真正休眠。
"""

import random
import time
from typing import Callable

from chat_relay.domain.models import AttemptOutcome, Retryable, RetryPolicy
from chat_relay.infrastructure.logging.logger import logger


def backoff_delay(policy: RetryPolicy, attempt: int, rng=random) -> float:
    """第 attempt 次（从 1 开始）失败后的等待秒数。"""
    jitter = rng.uniform(0, policy.max_jitter) if policy.max_jitter > 0 else 0.0
    return policy.base_delay * (2 ** (attempt - 1)) + jitter


def run_with_retry(
    attempt: Callable[[int], AttemptOutcome],
    policy: RetryPolicy,
    sleep: Callable[[float], None] = time.sleep,
    rng=random,
) -> AttemptOutcome:
    outcome: AttemptOutcome = Retryable(reason="no attempt made")
    for n in range(1, policy.max_attempts + 1):
        outcome = attempt(n)
        if not isinstance(outcome, Retryable):
            return outcome
        if n == policy.max_attempts:
            break
        delay = backoff_delay(policy, n, rng)
        logger.warning(
            f"Transient failure, retrying in {delay:.3f}s (attempt {n}/{policy.max_attempts})",
            extra={"extra": {
                "attempt": n,
                "max_attempts": policy.max_attempts,
                "delay_seconds": round(delay, 3),
                "reason": outcome.reason,
                "status": outcome.status_code,
            }},
        )
        sleep(delay)
    return outcome
