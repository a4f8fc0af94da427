"""
Domain time utilities (pure).

The website reports timestamps as JavaScript epoch milliseconds, so the relay
measures time the same way.
"""

from __future__ import annotations

import math
import time
from typing import Any, Optional


def now_epoch_ms() -> float:
    """Current wall-clock time in epoch milliseconds."""
    return time.time() * 1000.0


def parse_epoch_ms(value: Any) -> Optional[float]:
    """
    Parse a client-reported epoch millisecond timestamp.

    Accepts ints, floats and numeric strings. Returns None for anything that
    does not give a finite number (missing values, blanks, booleans, NaN,
    infinities, non-numeric text).
    """

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if not math.isfinite(number):
        return None
    return number
