"""Evaluation of condition steps against the execution context."""

from __future__ import annotations

import math
from typing import Any, Callable, Dict, Mapping

from .contracts import Step
from .errors import UnsupportedOperatorError, WorkflowExecutionError
from .interpolation import get_context_value, to_text


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _strictly_equal(left: Any, right: Any) -> bool:
    if _is_number(left) and _is_number(right):
        return left == right
    return type(left) is type(right) and left == right


def _to_number(value: Any) -> float:
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if _is_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return 0.0
        try:
            return float(text)
        except ValueError:
            return math.nan
    return math.nan


def _is_empty(value: Any) -> bool:
    # Empty lists and mappings count as present values.
    if value is None or value is False or value == "":
        return True
    return _is_number(value) and (value == 0 or math.isnan(value))


OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "equals": _strictly_equal,
    "not_equals": lambda left, right: not _strictly_equal(left, right),
    "contains": lambda left, right: to_text(right) in to_text(left),
    "greater_than": lambda left, right: _to_number(left) > _to_number(right),
    "less_than": lambda left, right: _to_number(left) < _to_number(right),
    "is_empty": lambda left, _right: _is_empty(left),
    "is_not_empty": lambda left, _right: not _is_empty(left),
}


def evaluate_condition(step: Step, context: Mapping[str, Any]) -> bool:
    """Evaluate the ``field``/``operator``/``value`` predicate of ``step``.

    Raises:
        WorkflowExecutionError: If the step does not name a field.
        UnsupportedOperatorError: If the operator is unknown.
    """
    field = step.config.get("field")
    operator = step.config.get("operator")
    if not field:
        raise WorkflowExecutionError("Condition step requires a field", step)

    compare = OPERATORS.get(operator) if isinstance(operator, str) else None
    if compare is None:
        raise UnsupportedOperatorError(
            f"Unsupported condition operator: {operator}", step
        )
    return compare(get_context_value(field, context), step.config.get("value"))


class ConditionEvaluator:
    """Callable wrapper so the step executor can take a substitute in tests."""

    def evaluate(self, step: Step, context: Mapping[str, Any]) -> bool:
        return evaluate_condition(step, context)


__all__ = ["ConditionEvaluator", "evaluate_condition", "OPERATORS"]
