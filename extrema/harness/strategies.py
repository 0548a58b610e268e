"""
Extrema — Hypothesis strategy adapter.

Lets ``@given`` drive a function under test with edge-biased argument
tuples::

    @given(extreme_arguments(prop))
    def test_prop(args):
        assert prop(*args)

The randomness source is ``st.randoms(use_true_random=False)``, so every
strategy roll is recorded by Hypothesis and replayed from its database.
"""
from __future__ import annotations

import random
from typing import Any, Callable

from hypothesis import strategies as st

from extrema.selector import StrategySelector, extreme_values
from extrema.types import SetupError


def extreme_arguments(
    func: Callable[..., Any],
    selector: StrategySelector | None = None,
) -> st.SearchStrategy[tuple]:
    """Strategy of argument tuples for *func* biased toward extremes."""
    generate = extreme_values(func, selector)
    if generate is None:
        raise SetupError(f"cannot generate arguments for {func!r}")

    def _fill(rnd: random.Random) -> tuple:
        args: list[Any] = []
        generate(args, rnd)
        return tuple(args)

    return st.randoms(note_method_calls=False, use_true_random=False).map(_fill)
