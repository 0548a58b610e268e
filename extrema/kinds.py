"""
Extrema — Scalar kinds and type introspection.

Maps Python / NumPy types onto the closed ``ScalarKind`` enumeration and
builds values of a given type from raw Python numbers.  Fixed-width
integer kinds that have no distinct runtime class (``UINT``,
``UINTPTR``, …) are reachable through the ``Annotated`` aliases below::

    def f(n: UInt8, p: UIntPtr) -> bool: ...
"""
from __future__ import annotations

import enum
import typing
from typing import Annotated, Any

import numpy as np


# ── Enumerations ──────────────────────────────────────────────────────

class ScalarKind(enum.Enum):
    """Primitive value kinds known to the extreme-value table."""
    BOOL = "bool"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INT = "int"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINT = "uint"
    UINTPTR = "uintptr"

    @property
    def bits(self) -> int:
        return _BITS[self]

    @property
    def is_signed_int(self) -> bool:
        return self in SIGNED_INT_KINDS

    @property
    def is_unsigned_int(self) -> bool:
        return self in UNSIGNED_INT_KINDS


class StrategyChoice(enum.Enum):
    MIN_EXTREME = 0
    MAX_EXTREME = 1
    NEAR_ZERO = 2
    UNIFORM_RANDOM = 3


class NearZeroVariant(enum.Enum):
    JUST_BELOW_ZERO = 0
    JUST_ABOVE_ZERO = 1
    EXACT_ZERO = 2


_BITS: dict[ScalarKind, int] = {
    ScalarKind.BOOL: 1,
    ScalarKind.FLOAT32: 32,
    ScalarKind.FLOAT64: 64,
    ScalarKind.COMPLEX64: 64,
    ScalarKind.COMPLEX128: 128,
    ScalarKind.INT8: 8,
    ScalarKind.INT16: 16,
    ScalarKind.INT32: 32,
    ScalarKind.INT64: 64,
    ScalarKind.INT: 64,
    ScalarKind.UINT8: 8,
    ScalarKind.UINT16: 16,
    ScalarKind.UINT32: 32,
    ScalarKind.UINT64: 64,
    ScalarKind.UINT: 64,
    ScalarKind.UINTPTR: 64,
}

SIGNED_INT_KINDS: frozenset[ScalarKind] = frozenset({
    ScalarKind.INT8, ScalarKind.INT16, ScalarKind.INT32,
    ScalarKind.INT64, ScalarKind.INT,
})

UNSIGNED_INT_KINDS: frozenset[ScalarKind] = frozenset({
    ScalarKind.UINT8, ScalarKind.UINT16, ScalarKind.UINT32,
    ScalarKind.UINT64, ScalarKind.UINT, ScalarKind.UINTPTR,
})

FLOAT_KINDS: frozenset[ScalarKind] = frozenset({
    ScalarKind.FLOAT32, ScalarKind.FLOAT64,
})

COMPLEX_KINDS: frozenset[ScalarKind] = frozenset({
    ScalarKind.COMPLEX64, ScalarKind.COMPLEX128,
})


# ── Annotated aliases ─────────────────────────────────────────────────

Int8 = Annotated[int, ScalarKind.INT8]
Int16 = Annotated[int, ScalarKind.INT16]
Int32 = Annotated[int, ScalarKind.INT32]
Int64 = Annotated[int, ScalarKind.INT64]
UInt8 = Annotated[int, ScalarKind.UINT8]
UInt16 = Annotated[int, ScalarKind.UINT16]
UInt32 = Annotated[int, ScalarKind.UINT32]
UInt64 = Annotated[int, ScalarKind.UINT64]
UInt = Annotated[int, ScalarKind.UINT]
UIntPtr = Annotated[int, ScalarKind.UINTPTR]
Float32 = Annotated[float, ScalarKind.FLOAT32]
Complex64 = Annotated[complex, ScalarKind.COMPLEX64]


# ── Introspection ─────────────────────────────────────────────────────

_BUILTIN_KINDS: dict[type, ScalarKind] = {
    bool: ScalarKind.BOOL,
    int: ScalarKind.INT,
    float: ScalarKind.FLOAT64,
    complex: ScalarKind.COMPLEX128,
}

# (dtype.kind, dtype.itemsize) → ScalarKind
_NUMPY_KINDS: dict[tuple[str, int], ScalarKind] = {
    ("b", 1): ScalarKind.BOOL,
    ("f", 4): ScalarKind.FLOAT32,
    ("f", 8): ScalarKind.FLOAT64,
    ("c", 8): ScalarKind.COMPLEX64,
    ("c", 16): ScalarKind.COMPLEX128,
    ("i", 1): ScalarKind.INT8,
    ("i", 2): ScalarKind.INT16,
    ("i", 4): ScalarKind.INT32,
    ("i", 8): ScalarKind.INT64,
    ("u", 1): ScalarKind.UINT8,
    ("u", 2): ScalarKind.UINT16,
    ("u", 4): ScalarKind.UINT32,
    ("u", 8): ScalarKind.UINT64,
}


def _annotated_kind(tp: Any) -> ScalarKind | None:
    for meta in getattr(tp, "__metadata__", ()):
        if isinstance(meta, ScalarKind):
            return meta
    return None


def kind_of(tp: Any) -> ScalarKind | None:
    """Return the ``ScalarKind`` of *tp*, or ``None`` if it has none."""
    if typing.get_origin(tp) is Annotated:
        found = _annotated_kind(tp)
        if found is not None:
            return found
        return kind_of(typing.get_args(tp)[0])

    # list[int] and friends pass isinstance(tp, type) on 3.10
    if typing.get_origin(tp) is not None or not isinstance(tp, type):
        return None
    if tp in _BUILTIN_KINDS:
        return _BUILTIN_KINDS[tp]
    if issubclass(tp, np.generic):
        dt = np.dtype(tp)
        return _NUMPY_KINDS.get((dt.kind, dt.itemsize))
    return None


def concrete_type(tp: Any) -> Any:
    """Strip ``Annotated`` wrappers down to the runtime class."""
    while typing.get_origin(tp) is Annotated:
        tp = typing.get_args(tp)[0]
    return tp


def construct(tp: Any, raw: Any) -> Any:
    """Build a value of type *tp* from the Python number *raw*."""
    return concrete_type(tp)(raw)


# ── Numeric limits ────────────────────────────────────────────────────

def int_bounds(kind: ScalarKind) -> tuple[int, int]:
    """Inclusive ``(lo, hi)`` range of an integer kind."""
    bits = kind.bits
    if kind in SIGNED_INT_KINDS:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def component_info(kind: ScalarKind) -> np.finfo:
    """``finfo`` of a float kind, or of one component of a complex kind."""
    if kind in (ScalarKind.FLOAT32, ScalarKind.COMPLEX64):
        return np.finfo(np.float32)
    return np.finfo(np.float64)


def max_finite(kind: ScalarKind) -> float:
    return float(component_info(kind).max)


def smallest_nonzero(kind: ScalarKind) -> float:
    return float(component_info(kind).smallest_subnormal)


# ── Canonical types ───────────────────────────────────────────────────

_CANONICAL_TYPES: dict[ScalarKind, Any] = {
    ScalarKind.BOOL: bool,
    ScalarKind.FLOAT32: np.float32,
    ScalarKind.FLOAT64: float,
    ScalarKind.COMPLEX64: np.complex64,
    ScalarKind.COMPLEX128: complex,
    ScalarKind.INT8: np.int8,
    ScalarKind.INT16: np.int16,
    ScalarKind.INT32: np.int32,
    ScalarKind.INT64: np.int64,
    ScalarKind.INT: int,
    ScalarKind.UINT8: np.uint8,
    ScalarKind.UINT16: np.uint16,
    ScalarKind.UINT32: np.uint32,
    ScalarKind.UINT64: np.uint64,
    ScalarKind.UINT: UInt,
    ScalarKind.UINTPTR: UIntPtr,
}


def canonical_type(kind: ScalarKind) -> Any:
    """The annotation ``kind_of`` maps back onto *kind*."""
    return _CANONICAL_TYPES[kind]
