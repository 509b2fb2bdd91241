# src/service/num_utils.py
from __future__ import annotations
import math
import numpy as np, pandas as pd

NBSP = "\u00a0"

def to_number(x, default=0.0) -> float:
    """Coerce form input ("9000", "", None, 12, "50%") to float; anything unusable -> default."""
    if x is None or isinstance(x, bool):
        return float(default)
    try:
        v = float(x)
        return v if np.isfinite(v) else float(default)
    except (TypeError, ValueError):
        s = str(x).strip().rstrip("%").replace(",", ".").strip()
        v = pd.to_numeric(s, errors="coerce")
        return float(v) if pd.notna(v) and np.isfinite(v) else float(default)

def round_half_up(x: float) -> float:
    return float(math.floor(x + 0.5))

def euros(x) -> str:
    """de-DE EUR with zero decimals: 9000000 -> '9.000.000 €'."""
    v = to_number(x, default=0.0)
    n = round_half_up(abs(v))
    body = f"{n:,.0f}".replace(",", ".")
    sign = "-" if v < 0 and n else ""
    return f"{sign}{body}{NBSP}€"

def percent(x, digits: int = 1) -> str:
    return f"{to_number(x, 0.0):.{digits}f}%"

def is_blank(x) -> bool:
    return x is None or (isinstance(x, str) and not x.strip())

def de_number(x, max_decimals: int = 2) -> str:
    """Plain number in de-DE style: 1000 -> '1.000', 37.5 -> '37,5'."""
    v = to_number(x, 0.0)
    s = f"{v:,.{max_decimals}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s.replace(",", "_").replace(".", ",").replace("_", ".")
