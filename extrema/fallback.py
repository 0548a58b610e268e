"""
Extrema — Uniform-random value synthesis.

The fallback every extreme-table lookup delegates to when a type has no
scalar kind, and the default value source of the check harness.

Each call returns ``(value, ok)``; ``ok`` is ``False`` only when the
type cannot be synthesized at all (callables, ``Any``, plain classes).
A type may supply its own values by defining a ``generate(rnd, size)``
classmethod or staticmethod.
"""
from __future__ import annotations

import collections.abc
import dataclasses
import enum
import inspect
import logging
import random
import types
import typing
from typing import Any

import numpy as np

from extrema.config import MAX_SIZE
from extrema.kinds import (
    COMPLEX_KINDS, FLOAT_KINDS, ScalarKind,
    concrete_type, construct, kind_of, max_finite,
)

logger = logging.getLogger("extrema.fallback")

_FAIL: tuple[Any, bool] = (None, False)

_SEQUENCE_ORIGINS = frozenset({
    list,
    collections.abc.Sequence, collections.abc.MutableSequence,
    collections.abc.Collection, collections.abc.Iterable,
})
_SET_ORIGINS = frozenset({
    set, frozenset, collections.abc.Set, collections.abc.MutableSet,
})
_MAPPING_ORIGINS = frozenset({
    dict, collections.abc.Mapping, collections.abc.MutableMapping,
})

# Code points above the surrogate block are shifted past it.
_SURROGATE_START = 0xD800
_SURROGATE_COUNT = 0x800
_MAX_CODE_POINT = 0x10FFFF


# ── Public API ────────────────────────────────────────────────────────

def value(
    tp: Any, rnd: random.Random, size: int = MAX_SIZE,
) -> tuple[Any, bool]:
    """Return ``(value, ok)`` with *value* a uniformly-random *tp*."""
    own = _own_generator(tp)
    if own is not None:
        return own(rnd, size), True

    kind = kind_of(tp)
    if kind is not None:
        return construct(tp, random_scalar(kind, rnd)), True

    if tp is None or tp is type(None):
        return None, True

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if origin is typing.Annotated:
        return value(args[0], rnd, size)
    if origin is typing.Union or origin is types.UnionType:
        # Out of budget: Optional[...] bottoms out at None.
        if size <= 0 and type(None) in args:
            return None, True
        return value(rnd.choice(args), rnd, size)
    if origin is typing.Literal:
        return rnd.choice(args), True
    if origin is not None:
        return _container(origin, args, rnd, size)

    if not isinstance(tp, type):
        logger.debug("cannot synthesize non-type annotation %r", tp)
        return _FAIL
    if issubclass(tp, enum.Enum):
        members = list(tp)
        if not members:
            return _FAIL
        return rnd.choice(members), True
    if issubclass(tp, np.generic):
        return _numpy_scalar(tp, rnd)
    if tp is str:
        return _random_str(rnd, size), True
    if tp is bytes:
        return _random_bytes(rnd, size), True
    if tp is bytearray:
        return bytearray(_random_bytes(rnd, size)), True
    if tp in (list, tuple, set, frozenset, dict):
        return _container(tp, (), rnd, size)
    if dataclasses.is_dataclass(tp):
        return _dataclass(tp, rnd, size)

    logger.debug("no synthesis rule for %r", tp)
    return _FAIL


def random_scalar(kind: ScalarKind, rnd: random.Random) -> Any:
    """Uniform raw Python number for *kind* (not yet constructed)."""
    if kind is ScalarKind.BOOL:
        return rnd.getrandbits(1) == 1
    if kind in FLOAT_KINDS:
        return _random_float(kind, rnd)
    if kind in COMPLEX_KINDS:
        return complex(_random_float(kind, rnd), _random_float(kind, rnd))

    bits = kind.bits
    raw = rnd.getrandbits(bits)
    if kind.is_signed_int and raw >= 1 << (bits - 1):
        raw -= 1 << bits
    return raw


# ── Scalars ───────────────────────────────────────────────────────────

def _random_float(kind: ScalarKind, rnd: random.Random) -> float:
    f = rnd.random() * max_finite(kind)
    if rnd.getrandbits(1):
        f = -f
    if kind in (ScalarKind.FLOAT32, ScalarKind.COMPLEX64):
        # Float32 aliases hold Python floats; keep them representable.
        f = float(np.float32(f))
    return f


def _numpy_scalar(tp: type, rnd: random.Random) -> tuple[Any, bool]:
    """NumPy numbers outside the scalar table (float16, longdouble, …)."""
    dt = np.dtype(tp)
    if dt.kind in "iu":
        info = np.iinfo(dt)
        return tp(rnd.randint(int(info.min), int(info.max))), True
    # Scale inside the type's own precision; longdouble max overflows float.
    if dt.kind == "f":
        top = np.finfo(dt).max
        return top * tp(_signed_fraction(rnd)), True
    if dt.kind == "c":
        top = np.finfo(dt).max
        part = top.dtype.type
        real = top * part(_signed_fraction(rnd))
        imag = top * part(_signed_fraction(rnd))
        return tp(real) + tp(imag) * tp(1j), True
    logger.debug("no synthesis rule for numpy dtype %s", dt)
    return _FAIL


def _signed_fraction(rnd: random.Random) -> float:
    f = rnd.random()
    return -f if rnd.getrandbits(1) else f


def _length(rnd: random.Random, size: int) -> int:
    return rnd.randrange(size) if size > 0 else 0


def _random_str(rnd: random.Random, size: int) -> str:
    chars = []
    for _ in range(_length(rnd, size)):
        cp = rnd.randrange(_MAX_CODE_POINT + 1 - _SURROGATE_COUNT)
        if cp >= _SURROGATE_START:
            cp += _SURROGATE_COUNT
        chars.append(chr(cp))
    return "".join(chars)


def _random_bytes(rnd: random.Random, size: int) -> bytes:
    return bytes(rnd.getrandbits(8) for _ in range(_length(rnd, size)))


# ── Composites ────────────────────────────────────────────────────────

def _elements(
    tp: Any, rnd: random.Random, size: int,
) -> tuple[list[Any], bool]:
    # Nested containers get half the budget so recursive types terminate.
    items: list[Any] = []
    for _ in range(_length(rnd, size)):
        item, ok = value(tp, rnd, size // 2)
        if not ok:
            return [], False
        items.append(item)
    return items, True


def _container(
    origin: Any, args: tuple, rnd: random.Random, size: int,
) -> tuple[Any, bool]:
    if origin in _SEQUENCE_ORIGINS:
        items, ok = _elements(args[0] if args else int, rnd, size)
        return (items, True) if ok else _FAIL

    if origin in _SET_ORIGINS:
        items, ok = _elements(args[0] if args else int, rnd, size)
        if not ok:
            return _FAIL
        try:
            return (frozenset(items) if origin is frozenset
                    else set(items)), True
        except TypeError:
            logger.debug("unhashable set element type %r", args)
            return _FAIL

    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            items, ok = _elements(args[0], rnd, size)
            return (tuple(items), True) if ok else _FAIL
        if not args:
            items, ok = _elements(int, rnd, size)
            return (tuple(items), True) if ok else _FAIL
        fixed = []
        for member in args:
            item, ok = value(member, rnd, size // 2)
            if not ok:
                return _FAIL
            fixed.append(item)
        return tuple(fixed), True

    if origin in _MAPPING_ORIGINS:
        key_tp, val_tp = args if len(args) == 2 else (int, int)
        out: dict[Any, Any] = {}
        for _ in range(_length(rnd, size)):
            key, ok_k = value(key_tp, rnd, size // 2)
            val, ok_v = value(val_tp, rnd, size // 2)
            if not (ok_k and ok_v):
                return _FAIL
            try:
                out[key] = val
            except TypeError:
                logger.debug("unhashable mapping key type %r", key_tp)
                return _FAIL
        return out, True

    logger.debug("no synthesis rule for generic %r", origin)
    return _FAIL


def _dataclass(tp: type, rnd: random.Random, size: int) -> tuple[Any, bool]:
    try:
        hints = typing.get_type_hints(tp, include_extras=True)
    except (NameError, TypeError) as exc:
        logger.debug("cannot resolve hints of %r: %s", tp, exc)
        return _FAIL

    fields = [f for f in dataclasses.fields(tp) if f.init]
    if fields and size <= 0:
        logger.debug("size budget exhausted at %r", tp)
        return _FAIL

    kwargs: dict[str, Any] = {}
    try:
        for field in fields:
            item, ok = value(hints.get(field.name, field.type), rnd, size // 2)
            if not ok:
                return _FAIL
            kwargs[field.name] = item
    except RecursionError:
        logger.debug("recursion limit reached while building %r", tp)
        return _FAIL
    return tp(**kwargs), True


def _own_generator(tp: Any) -> Any:
    cls = concrete_type(tp)
    if typing.get_origin(cls) is not None or not isinstance(cls, type):
        return None
    attr = inspect.getattr_static(cls, "generate", None)
    if isinstance(attr, (classmethod, staticmethod)):
        return getattr(cls, "generate")
    return None
