#!/usr/bin/env python3
"""
General utilities for the Black Hole Simulator.
"""
import math
from typing import Optional


def try_float(val) -> Optional[float]:
    """Parse a form field; None for anything that is not a finite number."""
    try:
        f = float(val)
    except (TypeError, ValueError):
        return None
    return f if math.isfinite(f) else None
