import re
import time
from datetime import UTC, datetime

SLUG_RE = re.compile(r"^[a-z0-9-]+$")


def now() -> datetime:
    return datetime.now(UTC)


def now_ms() -> int:
    """Current time as epoch milliseconds."""
    return time.time_ns() // 1_000_000
