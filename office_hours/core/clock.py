# office_hours/core/clock.py
import time

NANOS_PER_SECOND = 1_000_000_000
NANOS_PER_MINUTE = 60 * NANOS_PER_SECOND


def now_nanos() -> int:
    """Current UTC instant in nanoseconds since the Unix epoch."""
    return time.time_ns()

# Largest instant that fits the signed 64-bit columns (year 2262).
MAX_INSTANT = 2**63 - 1
