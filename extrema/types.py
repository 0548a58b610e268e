"""
Extrema — Data types and errors.

All data-classes shared between the engine and the harness are
defined here, ensuring zero circular imports.
"""
from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Any, Callable, Optional

from extrema.kinds import ScalarKind, canonical_type, kind_of

# ``ValueGenerator(args, rnd)`` fills *args* in place.
ValueGenerator = Callable[[list, random.Random], None]

# ``Fallback(tp, rnd)`` → ``(value, ok)``.
Fallback = Callable[[Any, random.Random], tuple[Any, bool]]


# ── Errors ────────────────────────────────────────────────────────────

class ExtremaError(Exception):
    """Base class for harness-level failures."""


class SetupError(ExtremaError):
    """Raised when a function under test cannot be exercised at all."""


class CheckError(ExtremaError):
    """Raised when a property returns ``False`` for some input."""

    def __init__(self, count: int, inputs: tuple, message: str = "") -> None:
        self.count = count
        self.inputs = tuple(inputs)
        super().__init__(
            message or f"#{count}: failed on input {self.inputs!r}"
        )


class CheckEqualError(CheckError):
    """Raised when two functions disagree on some input."""

    def __init__(self, count: int, inputs: tuple, out1: Any, out2: Any) -> None:
        self.out1 = out1
        self.out2 = out2
        super().__init__(
            count, inputs,
            f"#{count}: failed on input {tuple(inputs)!r}. "
            f"Output 1: {out1!r}. Output 2: {out2!r}",
        )


# ── ParameterDescriptor ───────────────────────────────────────────────

@dataclass(frozen=True)
class ParameterDescriptor:
    """One positional parameter of a function under test.

    ``kind`` is ``None`` for composite or unrecognized annotations; such
    parameters are always served by the uniform-random fallback.
    """
    name: str
    annotation: Any
    kind: Optional[ScalarKind] = None

    @property
    def recognized(self) -> bool:
        return self.kind is not None

    @classmethod
    def of(cls, annotation: Any, name: str = "") -> ParameterDescriptor:
        return cls(name=name, annotation=annotation,
                   kind=kind_of(annotation))

    @classmethod
    def for_kind(cls, kind: ScalarKind, name: str = "") -> ParameterDescriptor:
        return cls(name=name, annotation=canonical_type(kind), kind=kind)
