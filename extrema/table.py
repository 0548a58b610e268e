"""
Extrema — Extreme value table.

Three lookups over ``ScalarKind``, each returning ``(value, ok)``:

* ``minimum``   – most negative representable value (``1`` for unsigned
  kinds; zero belongs to the near-zero lookup).
* ``maximum``   – most positive representable value.
* ``near_zero`` – just below zero, just above zero, or exactly zero.

Any parameter without a scalar kind is delegated to the uniform-random
fallback, whose own ``ok`` flag is passed through unchanged.
"""
from __future__ import annotations

import logging
import random
from typing import Any

from extrema import fallback as _fallback
from extrema.config import LEGACY_COMPLEX128_MINIMUM
from extrema.kinds import (
    COMPLEX_KINDS, FLOAT_KINDS, SIGNED_INT_KINDS, UNSIGNED_INT_KINDS,
    NearZeroVariant, ScalarKind,
    construct, int_bounds, max_finite, smallest_nonzero,
)
from extrema.types import Fallback, ParameterDescriptor

logger = logging.getLogger("extrema.table")

_VARIANTS: tuple[NearZeroVariant, ...] = tuple(NearZeroVariant)


def draw_near_zero_variant(rnd: random.Random) -> NearZeroVariant:
    return _VARIANTS[rnd.randrange(len(_VARIANTS))]


class ExtremeValueTable:
    """Stateless per-kind value table.

    Usage::

        table = ExtremeValueTable()
        value, ok = table.minimum(param, random.Random(7))
    """

    def __init__(
        self,
        fallback: Fallback | None = None,
        legacy_complex128_minimum: bool = LEGACY_COMPLEX128_MINIMUM,
    ) -> None:
        self._fallback: Fallback = fallback or _fallback.value
        self._legacy_complex128_minimum = legacy_complex128_minimum

    # ── Fallback ──────────────────────────────────────────────────────

    def fallback(
        self, param: ParameterDescriptor, rnd: random.Random,
    ) -> tuple[Any, bool]:
        return self._fallback(param.annotation, rnd)

    # ── Minimum ───────────────────────────────────────────────────────

    def minimum(
        self, param: ParameterDescriptor, rnd: random.Random,
    ) -> tuple[Any, bool]:
        kind = param.kind
        if kind is None:
            return self.fallback(param, rnd)

        if kind is ScalarKind.BOOL:
            raw: Any = False
        elif kind in FLOAT_KINDS:
            raw = -max_finite(kind)
        elif kind is ScalarKind.COMPLEX64:
            raw = complex(-max_finite(kind), -max_finite(kind))
        elif kind is ScalarKind.COMPLEX128:
            top = max_finite(kind)
            if self._legacy_complex128_minimum:
                raw = complex(top, top)
            else:
                raw = complex(-top, -top)
        elif kind in SIGNED_INT_KINDS:
            raw = int_bounds(kind)[0]
        elif kind in UNSIGNED_INT_KINDS:
            raw = 1
        else:
            return self.fallback(param, rnd)

        return construct(param.annotation, raw), True

    # ── Maximum ───────────────────────────────────────────────────────

    def maximum(
        self, param: ParameterDescriptor, rnd: random.Random,
    ) -> tuple[Any, bool]:
        kind = param.kind
        if kind is None:
            return self.fallback(param, rnd)

        if kind is ScalarKind.BOOL:
            raw: Any = True
        elif kind in FLOAT_KINDS:
            raw = max_finite(kind)
        elif kind in COMPLEX_KINDS:
            raw = complex(max_finite(kind), max_finite(kind))
        elif kind in SIGNED_INT_KINDS or kind in UNSIGNED_INT_KINDS:
            raw = int_bounds(kind)[1]
        else:
            return self.fallback(param, rnd)

        return construct(param.annotation, raw), True

    # ── Near zero ─────────────────────────────────────────────────────

    def near_zero(
        self,
        param: ParameterDescriptor,
        rnd: random.Random,
        variant: NearZeroVariant | None = None,
    ) -> tuple[Any, bool]:
        if variant is None:
            variant = draw_near_zero_variant(rnd)
        kind = param.kind
        if kind is None:
            return self.fallback(param, rnd)

        if variant is NearZeroVariant.JUST_BELOW_ZERO:
            sign = -1.0
        elif variant is NearZeroVariant.JUST_ABOVE_ZERO:
            sign = 1.0
        else:
            sign = 0.0

        if kind is ScalarKind.BOOL:
            raw: Any = False
        elif kind in FLOAT_KINDS:
            raw = sign * smallest_nonzero(kind)
        elif kind in COMPLEX_KINDS:
            tiny = sign * smallest_nonzero(kind)
            raw = complex(tiny, tiny)
        elif kind in SIGNED_INT_KINDS or kind in UNSIGNED_INT_KINDS:
            raw = 0
        else:
            return self.fallback(param, rnd)

        logger.debug("near_zero %s %s → %r", kind.value, variant.name, raw)
        return construct(param.annotation, raw), True
