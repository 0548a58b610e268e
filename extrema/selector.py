"""
Extrema — Strategy selection.

For every parameter of a function under test, independently on every
call, pick one of four strategies uniformly and dispatch:

1. MIN_EXTREME     → ``ExtremeValueTable.minimum``
2. MAX_EXTREME     → ``ExtremeValueTable.maximum``
3. NEAR_ZERO       → ``ExtremeValueTable.near_zero``
4. UNIFORM_RANDOM  → uniform-random fallback

A parameter whose value cannot be produced is logged and left as
whatever the failing lookup returned; the other slots are still filled.

Example::

    def prop(x: Int32) -> bool:
        return abs2(x) >= 0

    check(prop, CheckConfig(values=extreme_values(prop)))
"""
from __future__ import annotations

import logging
import random
from typing import Any, Callable, Sequence

from extrema.inference import describe_parameters
from extrema.kinds import StrategyChoice
from extrema.table import ExtremeValueTable
from extrema.types import ParameterDescriptor, SetupError, ValueGenerator

logger = logging.getLogger("extrema.selector")

_CHOICES: tuple[StrategyChoice, ...] = tuple(StrategyChoice)


def draw_strategy(rnd: random.Random) -> StrategyChoice:
    return _CHOICES[rnd.randrange(len(_CHOICES))]


class StrategySelector:
    """Fills argument lists by rolling a strategy per parameter."""

    def __init__(self, table: ExtremeValueTable | None = None) -> None:
        self.table = table or ExtremeValueTable()

    def select_values(
        self,
        params: Sequence[ParameterDescriptor],
        rnd: random.Random,
    ) -> list[Any]:
        args: list[Any] = []
        for param in params:
            choice = draw_strategy(rnd)
            value, ok = self.dispatch(choice, param, rnd)
            if not ok:
                logger.warning(
                    "Error creating %s value for type %r",
                    choice.name.lower(), param.annotation,
                )
            args.append(value)
        return args

    def dispatch(
        self,
        choice: StrategyChoice,
        param: ParameterDescriptor,
        rnd: random.Random,
    ) -> tuple[Any, bool]:
        if choice is StrategyChoice.MIN_EXTREME:
            return self.table.minimum(param, rnd)
        if choice is StrategyChoice.MAX_EXTREME:
            return self.table.maximum(param, rnd)
        if choice is StrategyChoice.NEAR_ZERO:
            return self.table.near_zero(param, rnd)
        return self.table.fallback(param, rnd)


# ── Entry point ───────────────────────────────────────────────────────

def extreme_values(
    func: Callable[..., Any],
    selector: StrategySelector | None = None,
) -> ValueGenerator | None:
    """Return a value generator biased toward edge cases for *func*.

    The generator is called as ``generate(args, rnd)`` and replaces the
    contents of *args* with one value per positional parameter.
    Returns ``None`` when *func* cannot be described, so the harness
    falls back to its default value source.
    """
    if not callable(func):
        logger.warning("extreme_values: %r is not a function", func)
        return None
    try:
        params = describe_parameters(func)
    except SetupError as exc:
        logger.warning("extreme_values: %s", exc)
        return None

    selector = selector or StrategySelector()

    def generate(args: list, rnd: random.Random) -> None:
        args[:] = selector.select_values(params, rnd)

    return generate
