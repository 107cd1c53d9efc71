#!/usr/bin/env python3
"""
General utilities for the Projectile Simulator.
"""
import math
from typing import Optional


def try_float(val) -> Optional[float]:
    """Return val as a finite float, or None when it is not numeric."""
    try:
        f = float(val)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(f):
        return None
    return f
