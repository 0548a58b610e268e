"""
Extrema — Parameter description from signatures and AST heuristics.

Annotated parameters map straight onto ``ScalarKind`` (or onto the
fallback for composites).  Unannotated ones are guessed from how the
function body uses them: ``len(x)``, ``x[i]``, ``for _ in x`` or list
methods mean ``list[int]``, anything else means ``int``.
"""
from __future__ import annotations

import ast
import inspect
import logging
import re
import textwrap
from typing import Any, Callable

from extrema.types import ParameterDescriptor, SetupError

logger = logging.getLogger("extrema.inference")

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)

_LIST_HINTS = (
    "list", "arr", "nums", "items", "elements", "values",
    "data", "numbers", "seq", "collection",
)

_WORD_SPLIT = re.compile(r"[^a-z]+")

_LIST_METHODS = (
    "append", "extend", "sort", "pop",
    "insert", "remove", "index", "count",
)


# ── Public API ────────────────────────────────────────────────────────

def describe_parameters(func: Callable[..., Any]) -> list[ParameterDescriptor]:
    """Describe the positional parameters of *func*, in order.

    Raises ``SetupError`` if *func* is not callable, has no readable
    signature, or declares a keyword-only parameter without a default.
    ``*args`` / ``**kwargs`` are never filled.
    """
    if not callable(func):
        raise SetupError(f"{func!r} is not callable")
    sig = _signature(func)

    positional: list[inspect.Parameter] = []
    for p in sig.parameters.values():
        if p.kind in _POSITIONAL:
            positional.append(p)
        elif (p.kind is inspect.Parameter.KEYWORD_ONLY
                and p.default is inspect.Parameter.empty):
            raise SetupError(
                f"keyword-only parameter '{p.name}' of {func!r} "
                f"has no default"
            )

    unannotated = [p.name for p in positional
                   if p.annotation is inspect.Parameter.empty]
    inferred = infer_param_types(func, unannotated) if unannotated else {}
    if inferred:
        logger.debug("Inferred param types: %s", inferred)

    descriptors: list[ParameterDescriptor] = []
    for p in positional:
        annotation = p.annotation
        if annotation is inspect.Parameter.empty:
            annotation = inferred[p.name]
        descriptors.append(ParameterDescriptor.of(annotation, p.name))
    return descriptors


def infer_param_types(
    func: Callable[..., Any], param_names: list[str],
) -> dict[str, Any]:
    """Heuristically infer whether each parameter is ``list[int]`` or ``int``."""
    try:
        tree = ast.parse(textwrap.dedent(inspect.getsource(func)))
    except (OSError, TypeError, SyntaxError):
        return {p: int for p in param_names}

    used_as_list = {
        name for name in map(_list_operand, ast.walk(tree)) if name
    }
    return {
        p: list[int] if p in used_as_list or _named_like_list(p) else int
        for p in param_names
    }


# ── Helpers ───────────────────────────────────────────────────────────

def _named_like_list(name: str) -> bool:
    # Whole words only: ``arr_2`` and ``data_points`` match, ``carry`` does not.
    words = [w for w in _WORD_SPLIT.split(name.lower()) if w]
    return any(w.startswith(_LIST_HINTS) for w in words)


def _list_operand(node: ast.AST) -> str | None:
    """Name of the variable *node* treats as a list, if any."""
    if (isinstance(node, ast.Call)
            and isinstance(node.func, ast.Name)
            and node.func.id == "len"
            and len(node.args) == 1
            and isinstance(node.args[0], ast.Name)):
        return node.args[0].id
    if isinstance(node, ast.Subscript) and isinstance(node.value, ast.Name):
        return node.value.id
    if (isinstance(node, (ast.For, ast.comprehension))
            and isinstance(node.iter, ast.Name)):
        return node.iter.id
    if (isinstance(node, ast.Attribute)
            and isinstance(node.value, ast.Name)
            and node.attr in _LIST_METHODS):
        return node.value.id
    return None


def _signature(func: Callable[..., Any]) -> inspect.Signature:
    try:
        try:
            return inspect.signature(func, eval_str=True)
        except (NameError, AttributeError, SyntaxError, TypeError) as exc:
            # Unresolvable string annotations stay strings → fallback.
            logger.warning("Unresolved annotation on %r: %s", func, exc)
            return inspect.signature(func)
    except (TypeError, ValueError) as exc:
        raise SetupError(f"cannot read signature of {func!r}: {exc}") from exc
