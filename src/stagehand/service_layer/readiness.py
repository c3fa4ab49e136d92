"""Dependency readiness waiting.

`wait_until_ready` polls a `ReadinessProbe` on a fixed interval until it
reports ready or the attempt budget runs out. There is no backoff growth and
no cancellation; a supervisor restarts the whole process if startup hangs.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import TYPE_CHECKING

from stagehand.domain.errors import ReadinessTimeoutError

if TYPE_CHECKING:
    from stagehand.domain.value_objects import HealthProbe
    from stagehand.interfaces.readiness import ReadinessProbe

logger = logging.getLogger(__name__)


def _probe_once(checker: ReadinessProbe) -> bool:
    try:
        return checker.check()
    except Exception as e:  # pylint: disable=broad-except
        # Any probe failure means "not ready yet".
        logger.debug("Readiness probe raised %s: %s", e.__class__.__name__, e)
        return False


def wait_until_ready(
    probe: HealthProbe,
    checker: ReadinessProbe,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Block until ``checker`` reports ready or ``probe.max_attempts`` run out.

    ``probe.interval`` seconds are slept after every failed attempt.

    Args:
        probe: Retry budget, interval and exhaustion policy.
        checker: The connectivity check to run.
        sleep: Sleep function; injectable for tests.

    Returns:
        bool: True when the dependency became ready, False when the budget was
        exhausted and ``probe.fail_on_exhaustion`` is off.

    Raises:
        ReadinessTimeoutError: If the budget is exhausted and
            ``probe.fail_on_exhaustion`` is on.
    """
    logger.info("Waiting for %s to be ready...", probe.target)

    for attempt in range(1, probe.max_attempts + 1):
        if _probe_once(checker):
            logger.info("%s is ready (attempt %d/%d)", probe.target, attempt, probe.max_attempts)
            return True
        logger.info(
            "%s not ready yet (attempt %d/%d)...",
            probe.target,
            attempt,
            probe.max_attempts,
        )
        sleep(probe.interval)

    if probe.fail_on_exhaustion:
        raise ReadinessTimeoutError(probe.target, probe.max_attempts)

    logger.warning(
        "%s did not become ready after %d attempts, continuing anyway",
        probe.target,
        probe.max_attempts,
    )
    return False
