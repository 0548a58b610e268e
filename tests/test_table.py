"""Extreme value table: minimum / maximum / near-zero per scalar kind.

  T01–T03  coverage over every ScalarKind
  T04–T06  ordering of extremes
  T07–T10  concrete boundary values
  T11–T14  near-zero variants
  T15–T18  fallback delegation
"""
import math
import random
import sys
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np
import pytest

from extrema.kinds import (
    COMPLEX_KINDS, FLOAT_KINDS, SIGNED_INT_KINDS, UNSIGNED_INT_KINDS,
    NearZeroVariant, ScalarKind, canonical_type, concrete_type,
)
from extrema.table import ExtremeValueTable
from extrema.types import ParameterDescriptor

ALL_KINDS = list(ScalarKind)
NUMERIC_KINDS = [k for k in ScalarKind if k is not ScalarKind.BOOL]

F32_MAX = float(np.finfo(np.float32).max)
F32_TINY = float(np.finfo(np.float32).smallest_subnormal)
F64_TINY = math.ulp(0.0)


@pytest.fixture
def table() -> ExtremeValueTable:
    return ExtremeValueTable(legacy_complex128_minimum=False)


def _param(kind: ScalarKind) -> ParameterDescriptor:
    return ParameterDescriptor.for_kind(kind, name="x")


def _runtime_type(kind: ScalarKind) -> type:
    return concrete_type(canonical_type(kind))


def _parts(value: Any) -> list[float]:
    if isinstance(value, (complex, np.complexfloating)):
        return [float(value.real), float(value.imag)]
    return [value]


# ══════════════════════════════════════════════════════════════════════
# Coverage
# ══════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.value)
def test_t01_minimum_covers_every_kind(table, rnd, kind):
    value, ok = table.minimum(_param(kind), rnd)
    assert ok
    assert isinstance(value, _runtime_type(kind))


@pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.value)
def test_t02_maximum_covers_every_kind(table, rnd, kind):
    value, ok = table.maximum(_param(kind), rnd)
    assert ok
    assert isinstance(value, _runtime_type(kind))


@pytest.mark.parametrize("variant", list(NearZeroVariant), ids=lambda v: v.name)
@pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.value)
def test_t03_near_zero_covers_every_kind_and_variant(table, rnd, kind, variant):
    value, ok = table.near_zero(_param(kind), rnd, variant=variant)
    assert ok
    assert isinstance(value, _runtime_type(kind))


# ══════════════════════════════════════════════════════════════════════
# Ordering
# ══════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("kind", NUMERIC_KINDS, ids=lambda k: k.value)
def test_t04_minimum_le_zero_le_maximum(table, rnd, kind):
    lo, _ = table.minimum(_param(kind), rnd)
    hi, _ = table.maximum(_param(kind), rnd)
    for lo_part, hi_part in zip(_parts(lo), _parts(hi)):
        if kind in UNSIGNED_INT_KINDS:
            # Unsigned minimum is 1; zero is left to the near-zero lookup.
            assert lo_part == 1
        else:
            assert lo_part <= 0
        assert 0 <= hi_part


@pytest.mark.parametrize(
    "kind", sorted(FLOAT_KINDS | COMPLEX_KINDS, key=lambda k: k.value),
    ids=lambda k: k.value,
)
def test_t05_float_minimum_strictly_below_maximum(table, rnd, kind):
    lo, _ = table.minimum(_param(kind), rnd)
    hi, _ = table.maximum(_param(kind), rnd)
    for lo_part, hi_part in zip(_parts(lo), _parts(hi)):
        assert lo_part < hi_part
        assert math.isfinite(lo_part) and math.isfinite(hi_part)


def test_t06_bool_extremes(table, rnd):
    param = _param(ScalarKind.BOOL)
    assert table.minimum(param, rnd) == (False, True)
    assert table.maximum(param, rnd) == (True, True)


# ══════════════════════════════════════════════════════════════════════
# Concrete boundary values
# ══════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("kind, lo, hi", [
    (ScalarKind.INT8, -128, 127),
    (ScalarKind.INT16, -32768, 32767),
    (ScalarKind.INT32, -2**31, 2**31 - 1),
    (ScalarKind.INT64, -2**63, 2**63 - 1),
    (ScalarKind.INT, -2**63, 2**63 - 1),
], ids=lambda x: getattr(x, "value", None))
def test_t07_signed_integer_extremes(table, rnd, kind, lo, hi):
    assert table.minimum(_param(kind), rnd)[0] == lo
    assert table.maximum(_param(kind), rnd)[0] == hi


@pytest.mark.parametrize("kind, hi", [
    (ScalarKind.UINT8, 255),
    (ScalarKind.UINT16, 65535),
    (ScalarKind.UINT32, 2**32 - 1),
    (ScalarKind.UINT64, 2**64 - 1),
    (ScalarKind.UINT, 2**64 - 1),
    (ScalarKind.UINTPTR, 2**64 - 1),
], ids=lambda x: getattr(x, "value", None))
def test_t08_unsigned_integer_extremes(table, rnd, kind, hi):
    assert table.minimum(_param(kind), rnd)[0] == 1
    assert table.maximum(_param(kind), rnd)[0] == hi


def test_t09_float_extremes(table, rnd):
    f32 = _param(ScalarKind.FLOAT32)
    f64 = _param(ScalarKind.FLOAT64)
    assert table.minimum(f32, rnd)[0] == np.float32(-F32_MAX)
    assert table.maximum(f32, rnd)[0] == np.float32(F32_MAX)
    assert table.minimum(f64, rnd)[0] == -sys.float_info.max
    assert table.maximum(f64, rnd)[0] == sys.float_info.max


def test_t10_complex_extremes_and_legacy_quirk(rnd):
    c64 = _param(ScalarKind.COMPLEX64)
    c128 = _param(ScalarKind.COMPLEX128)
    big = sys.float_info.max

    table = ExtremeValueTable(legacy_complex128_minimum=False)
    assert table.minimum(c64, rnd)[0] == np.complex64(complex(-F32_MAX, -F32_MAX))
    assert table.maximum(c64, rnd)[0] == np.complex64(complex(F32_MAX, F32_MAX))
    assert table.minimum(c128, rnd)[0] == complex(-big, -big)
    assert table.maximum(c128, rnd)[0] == complex(big, big)

    legacy = ExtremeValueTable(legacy_complex128_minimum=True)
    assert legacy.minimum(c128, rnd)[0] == complex(big, big)
    # complex64 never had the quirk
    assert legacy.minimum(c64, rnd)[0] == np.complex64(complex(-F32_MAX, -F32_MAX))


# ══════════════════════════════════════════════════════════════════════
# Near zero
# ══════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("kind, tiny", [
    (ScalarKind.FLOAT32, F32_TINY),
    (ScalarKind.FLOAT64, F64_TINY),
], ids=["float32", "float64"])
def test_t11_float_near_zero_is_bounded(table, rnd, kind, tiny):
    param = _param(kind)
    below, _ = table.near_zero(param, rnd, NearZeroVariant.JUST_BELOW_ZERO)
    above, _ = table.near_zero(param, rnd, NearZeroVariant.JUST_ABOVE_ZERO)
    zero, _ = table.near_zero(param, rnd, NearZeroVariant.EXACT_ZERO)

    assert float(below) == -tiny
    assert float(above) == tiny
    assert below < 0 < above
    assert abs(float(below)) < tiny * 100
    assert abs(float(above)) < tiny * 100
    assert zero == 0


@pytest.mark.parametrize("kind, tiny", [
    (ScalarKind.COMPLEX64, F32_TINY),
    (ScalarKind.COMPLEX128, F64_TINY),
], ids=["complex64", "complex128"])
def test_t12_complex_near_zero(table, rnd, kind, tiny):
    param = _param(kind)
    below, _ = table.near_zero(param, rnd, NearZeroVariant.JUST_BELOW_ZERO)
    above, _ = table.near_zero(param, rnd, NearZeroVariant.JUST_ABOVE_ZERO)
    zero, _ = table.near_zero(param, rnd, NearZeroVariant.EXACT_ZERO)

    assert _parts(below) == [-tiny, -tiny]
    assert _parts(above) == [tiny, tiny]
    assert zero == 0


@pytest.mark.parametrize(
    "kind", sorted(SIGNED_INT_KINDS | UNSIGNED_INT_KINDS, key=lambda k: k.value),
    ids=lambda k: k.value,
)
def test_t13_integer_near_zero_is_always_zero(table, rnd, kind):
    for variant in NearZeroVariant:
        assert table.near_zero(_param(kind), rnd, variant) == (0, True)


def test_t14_near_zero_draws_variant_from_randomness(table, scripted):
    param = _param(ScalarKind.FLOAT64)
    assert table.near_zero(param, scripted([0]))[0] == -F64_TINY
    assert table.near_zero(param, scripted([1]))[0] == F64_TINY
    assert table.near_zero(param, scripted([2]))[0] == 0.0
    for variant in range(3):
        assert table.near_zero(_param(ScalarKind.BOOL), scripted([variant]))[0] is False


# ══════════════════════════════════════════════════════════════════════
# Fallback delegation
# ══════════════════════════════════════════════════════════════════════

@dataclass
class Point:
    x: int
    y: float


def test_t15_composite_delegates_to_fallback(table, rnd):
    param = ParameterDescriptor.of(Point, "p")
    assert param.kind is None
    for lookup in (table.minimum, table.maximum, table.near_zero):
        value, ok = lookup(param, rnd)
        assert ok
        assert isinstance(value, Point)


def test_t16_unsynthesizable_type_reports_failure(table, rnd):
    param = ParameterDescriptor.of(Callable[[int], int], "cb")
    for lookup in (table.minimum, table.maximum, table.near_zero):
        assert lookup(param, rnd) == (None, False)


def test_t17_custom_fallback_is_used_for_unrecognized_only(rnd):
    calls: list[Any] = []

    def fake(tp, _rnd):
        calls.append(tp)
        return "sentinel", True

    table = ExtremeValueTable(fallback=fake)
    assert table.minimum(ParameterDescriptor.of(list[int]), rnd) == ("sentinel", True)
    assert table.maximum(_param(ScalarKind.INT8), rnd)[0] == 127
    assert calls == [list[int]]


def test_t18_lookups_do_not_share_state(table):
    param = _param(ScalarKind.FLOAT32)
    first = [table.near_zero(param, random.Random(5))[0] for _ in range(3)]
    second = [table.near_zero(param, random.Random(5))[0] for _ in range(3)]
    assert first == second
