"""
pic4pdf — Logging setup and timed conversion steps.

Every module logs through the ``pic4pdf`` logger. ``step_timer`` wraps
a conversion step and reports how long it took, tagged with the page
geometry it ran with, so a slow or failing batch can be traced back to
its page size and unit.
"""

import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Generator

logging.basicConfig(
    level=os.getenv("P4P_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
    datefmt="%H:%M:%S",
)

logger = logging.getLogger("pic4pdf")


def describe(step_name: str, **context: Any) -> str:
    """Label a step with its context, e.g. ``Convert (pages=2 unit=mm)``."""
    fields = " ".join(f"{key}={value}" for key, value in context.items() if value is not None)
    return f"{step_name} ({fields})" if fields else step_name


@contextmanager
def step_timer(step_name: str, **context: Any) -> Generator[None, None, None]:
    """
    Log the start and duration of a conversion step.

    Keyword arguments are appended to the step label. A step that raises
    is logged as failed at WARNING level and the exception propagates.
    """
    label = describe(step_name, **context)
    logger.info("▶ %s", label)
    start = time.perf_counter()
    try:
        yield
    except Exception:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.warning("✗ %s failed after %.0f ms", label, elapsed_ms)
        raise
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info("✔ %s done in %.0f ms", label, elapsed_ms)
