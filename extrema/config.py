"""
Extrema — Shared configuration constants.

All tunable parameters live here so that every module imports from
one canonical source.  Environment variables (or a ``.env`` file)
override the defaults.
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ── Fallback synthesis ────────────────────────────────────────────────
# Upper bound (exclusive) on the length of synthesized str / list / dict
# values.  Nested containers receive the same bound.
MAX_SIZE: int = int(os.getenv("EXTREMA_MAX_SIZE", "50"))

# ── Check harness ─────────────────────────────────────────────────────
DEFAULT_MAX_COUNT: int = int(os.getenv("EXTREMA_MAX_COUNT", "100"))

# ── Extreme table ─────────────────────────────────────────────────────
# When set, complex128 "minimum" yields (+max, +max) instead of
# (-max, -max).  Kept only for parity with older generators.
LEGACY_COMPLEX128_MINIMUM: bool = (
    os.getenv("EXTREMA_LEGACY_COMPLEX128_MIN", "0").lower()
    in ("1", "true", "yes", "on")
)

ENGINE_VERSION: str = "extrema-0.1.0"
