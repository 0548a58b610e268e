"""
Extrema — Property check loop.

Runs a function under test on many generated argument lists:

* ``check(f)``          – *f* returns ``bool``; the first ``False``
  raises ``CheckError`` carrying the offending input.
* ``check_equal(f, g)`` – both functions run on the same inputs; the
  first divergence raises ``CheckEqualError`` with both outputs.

Arguments come from ``CheckConfig.values`` when set (for instance
``extreme_values(f)``), otherwise from the uniform-random fallback.
"""
from __future__ import annotations

import cmath
import copy
import logging
import random
import time
from typing import Any, Callable, Optional, Sequence

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from extrema import fallback
from extrema.config import DEFAULT_MAX_COUNT
from extrema.inference import describe_parameters
from extrema.types import (
    CheckEqualError, CheckError, ParameterDescriptor, SetupError,
)

logger = logging.getLogger("extrema.harness.quick")


# ── Configuration ─────────────────────────────────────────────────────

class CheckConfig(BaseModel):
    """Options for ``check`` / ``check_equal``."""
    model_config = ConfigDict(arbitrary_types_allowed=True)

    max_count: int = Field(default=DEFAULT_MAX_COUNT, ge=1)
    max_count_scale: float = Field(default=1.0, gt=0)
    seed: Optional[int] = None
    rand: Optional[random.Random] = None
    values: Optional[Callable[[list, random.Random], None]] = Field(
        default=None,
        description="Value generator; ``None`` uses uniform synthesis.",
    )

    def effective_max_count(self) -> int:
        return max(1, int(self.max_count * self.max_count_scale))

    def source(self) -> random.Random:
        if self.rand is not None:
            return self.rand
        if self.seed is not None:
            return random.Random(self.seed)
        return random.Random(time.time_ns())


# ── Public API ────────────────────────────────────────────────────────

def check(f: Callable[..., Any], config: CheckConfig | None = None) -> None:
    config = config or CheckConfig()
    params = describe_parameters(f)
    rnd = config.source()
    max_count = config.effective_max_count()
    logger.info("check %s: %d params, %d trials.",
                _name(f), len(params), max_count)

    for i in range(max_count):
        args = _arbitrary_values(params, config, rnd)
        result = f(*args)
        if not isinstance(result, (bool, np.bool_)):
            raise SetupError(
                f"{_name(f)} returned {type(result).__name__}, not bool"
            )
        if not result:
            logger.warning("check %s: failed on trial #%d.", _name(f), i + 1)
            raise CheckError(i + 1, tuple(args))

    logger.info("check %s: passed %d trials.", _name(f), max_count)


def check_equal(
    f: Callable[..., Any],
    g: Callable[..., Any],
    config: CheckConfig | None = None,
) -> None:
    config = config or CheckConfig()
    params_f = describe_parameters(f)
    params_g = describe_parameters(g)
    # Arguments are drawn from f's parameters; g only has to accept as many.
    if len(params_f) != len(params_g):
        raise SetupError(
            f"functions have different arity: "
            f"{_name(f)}{_sig(params_f)} vs {_name(g)}{_sig(params_g)}"
        )

    rnd = config.source()
    max_count = config.effective_max_count()
    logger.info("check_equal %s / %s: %d params, %d trials.",
                _name(f), _name(g), len(params_f), max_count)

    for i in range(max_count):
        args = _arbitrary_values(params_f, config, rnd)
        out1 = f(*copy.deepcopy(args))
        out2 = g(*copy.deepcopy(args))
        if not _outputs_equal(out1, out2):
            logger.warning("check_equal: divergence on trial #%d.", i + 1)
            raise CheckEqualError(i + 1, tuple(args), out1, out2)

    logger.info("check_equal %s / %s: no divergence in %d trials.",
                _name(f), _name(g), max_count)


# ── Argument generation ───────────────────────────────────────────────

def _arbitrary_values(
    params: Sequence[ParameterDescriptor],
    config: CheckConfig,
    rnd: random.Random,
) -> list[Any]:
    if config.values is not None:
        args: list[Any] = [None] * len(params)
        config.values(args, rnd)
        if len(args) != len(params):
            raise SetupError(
                f"value generator produced {len(args)} arguments, "
                f"expected {len(params)}"
            )
        return args

    args = []
    for param in params:
        value, ok = fallback.value(param.annotation, rnd)
        if not ok:
            raise SetupError(
                f"cannot create arbitrary value of type "
                f"{param.annotation!r} for parameter '{param.name}'"
            )
        args.append(value)
    return args


# ── Output normalisation ─────────────────────────────────────────────

def _normalize(val: Any) -> Any:
    if isinstance(val, (set, frozenset)):
        try:
            return sorted(val, key=lambda x: (str(type(x).__name__), x))
        except TypeError:
            return val
    if isinstance(val, tuple):
        return list(val)
    return val


def _is_nan(val: Any) -> bool:
    try:
        return cmath.isnan(val)
    except (TypeError, ValueError, OverflowError):
        return False


def _outputs_equal(a: Any, b: Any) -> bool:
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        try:
            return bool(np.array_equal(a, b, equal_nan=True))
        except TypeError:
            return bool(np.array_equal(a, b))
    if _is_nan(a) and _is_nan(b):
        return True
    return bool(_normalize(a) == _normalize(b))


def _name(f: Any) -> str:
    return getattr(f, "__qualname__", repr(f))


def _sig(params: Sequence[ParameterDescriptor]) -> str:
    return "(" + ", ".join(f"{p.name}: {p.annotation!r}" for p in params) + ")"
