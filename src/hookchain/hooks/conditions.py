"""Condition evaluation for conditional hook triggers.

Conditions are single comparisons of the form ``<field> <op> <value>``,
e.g. ``event == 'OnContextCompact'`` or ``session_id == "abc"``. Operators
and fields are looked up in the tables at the bottom of this module.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hookchain.hooks.events import HookContext
    from hookchain.types.hooks import EnhancedHook

logger = logging.getLogger(__name__)

# Result for expressions without any known operator. Unparsed conditions
# let the hook run.
UNPARSED_CONDITION_RESULT = True

_QUOTES = "'\""


def evaluate_condition(condition: str, ctx: HookContext) -> bool:
    """Evaluate *condition* against *ctx*. Never raises."""
    for op, evaluator in _OPERATORS.items():
        if op not in condition:
            continue
        parts = condition.split(op)
        if len(parts) != 2:
            # Chained comparisons are not supported
            return False
        lhs, rhs = parts
        return evaluator(lhs.strip(), rhs.strip().strip(_QUOTES), ctx)

    logger.debug("Unsupported condition %r, defaulting to %s", condition, UNPARSED_CONDITION_RESULT)
    return UNPARSED_CONDITION_RESULT


def should_run(hook: EnhancedHook, ctx: HookContext) -> bool:
    """Whether *hook* passes its condition gate for *ctx*."""
    cond = hook.condition
    if cond is None or not cond.enabled:
        return True
    return evaluate_condition(cond.condition, ctx)


def _equals(field_name: str, value: str, ctx: HookContext) -> bool:
    getter = _FIELDS.get(field_name)
    if getter is None:
        return False
    return getter(ctx) == value


_FIELDS: dict[str, Callable[[HookContext], str]] = {
    "event": lambda ctx: ctx.event,
    "session_id": lambda ctx: ctx.session_id,
}

_OPERATORS: dict[str, Callable[[str, str, HookContext], bool]] = {
    "==": _equals,
}
