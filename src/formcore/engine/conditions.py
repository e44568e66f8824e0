"""
Conditional logic evaluation.

A condition compares a source value (resolved from the record by path, or
through another field's binding) with a literal. Conditions are combined by a
logical operator into the boolean that drives a field's conditional action.

Coercion rules are deliberately loose, because records come from external
systems where numbers often arrive as strings:
- equality is strict (``True`` never equals ``1``; ``1`` equals ``1.0``)
- ordering coerces both sides to numbers; ``None`` and ``""`` count as 0,
  anything unparseable is NaN, so the comparison is false
- substring operators coerce both sides to text

Every condition is evaluated eagerly; there is no short-circuiting.
"""

from __future__ import annotations

import math
import re
from typing import Any, Mapping, Optional

from ..logging import logger
from ..models.blueprint import Condition, ConditionalLogic, FieldAnnotation
from ..models.enums import ComparisonOperator as Op
from ..models.enums import LogicalOperator
from .paths import MISSING, ROOT, resolve_path

FieldIndex = Mapping[str, FieldAnnotation]

_DECIMAL = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def end_anchored(pattern: str) -> str:
    """Rewrite ``$`` outside character classes as ``\\Z``.

    Python's ``$`` also matches before a trailing newline, so ``^\\d{9}$``
    would accept ``"123456789\\n"``. Blueprint patterns anchor at the true end
    of the value.
    """
    out: list[str] = []
    escaped = in_class = False
    for char in pattern:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif in_class:
            in_class = char != "]"
        elif char == "[":
            in_class = True
        elif char == "$":
            out.append(r"\Z")
            continue
        out.append(char)
    return "".join(out)


def pattern_matches(pattern: str, text: str) -> bool:
    return re.search(end_anchored(pattern), text) is not None


def strictly_equal(left: Any, right: Any) -> bool:
    if left is MISSING or right is MISSING:
        return left is right
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    return type(left) is type(right) and left == right


def parse_decimal(text: str) -> Optional[float]:
    """Parse plain decimal notation; ``None`` for anything else.

    ``float()`` also accepts ``"1_000"``, ``"inf"`` and ``"nan"``, which
    record data should never be read as.
    """
    text = text.strip()
    if _DECIMAL.match(text) is None:
        return None
    return float(text)


def to_number(value: Any) -> float:
    if value is MISSING:
        return math.nan
    if value is None:
        return 0.0
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        if not value.strip():
            return 0.0
        number = parse_decimal(value)
        return math.nan if number is None else number
    return math.nan


def to_text(value: Any) -> str:
    if value is MISSING or value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(to_text(item) for item in value)
    return str(value)


def is_empty(value: Any) -> bool:
    return value is MISSING or value is None or value == ""


class ConditionEvaluator:
    """
    Evaluate conditions and conditional logic against a record.

    ``field_index`` maps field ids to annotations for every field of the
    blueprint; sources that are not paths are looked up there.
    """

    def resolve_source(self, source: str, record: Any, field_index: Optional[FieldIndex]) -> Any:
        if source.startswith(ROOT):
            return resolve_path(source, record)
        field = (field_index or {}).get(source)
        if field is None:
            logger.debug("Condition source %r is not a known field", source)
            return MISSING
        return resolve_path(field.data_binding.path, record)

    def evaluate_condition(
        self,
        condition: Condition,
        record: Any,
        field_index: Optional[FieldIndex] = None,
    ) -> bool:
        source = self.resolve_source(condition.source, record, field_index)
        # An omitted value is absent, not null: ``eq`` then holds for a missing source.
        target = condition.value if "value" in condition.model_fields_set else MISSING
        return self.compare(source, condition.operator, target)

    def compare(self, source: Any, operator: Op, target: Any) -> bool:
        if operator == Op.EQUALS:
            return strictly_equal(source, target)
        if operator == Op.NOT_EQUALS:
            return not strictly_equal(source, target)
        if operator == Op.GREATER_THAN:
            return to_number(source) > to_number(target)
        if operator == Op.GREATER_THAN_OR_EQUALS:
            return to_number(source) >= to_number(target)
        if operator == Op.LESS_THAN:
            return to_number(source) < to_number(target)
        if operator == Op.LESS_THAN_OR_EQUALS:
            return to_number(source) <= to_number(target)
        if operator == Op.CONTAINS:
            return source is not MISSING and to_text(target) in to_text(source)
        if operator == Op.NOT_CONTAINS:
            return source is MISSING or to_text(target) not in to_text(source)
        if operator == Op.STARTS_WITH:
            return source is not MISSING and to_text(source).startswith(to_text(target))
        if operator == Op.ENDS_WITH:
            return source is not MISSING and to_text(source).endswith(to_text(target))
        if operator == Op.IS_EMPTY:
            return is_empty(source)
        if operator == Op.IS_NOT_EMPTY:
            return not is_empty(source)
        if operator == Op.IN:
            if isinstance(target, list):
                return any(strictly_equal(source, item) for item in target)
            return False
        if operator == Op.NOT_IN:
            if isinstance(target, list):
                return not any(strictly_equal(source, item) for item in target)
            return True
        if operator == Op.MATCHES_PATTERN:
            if isinstance(source, str) and isinstance(target, str):
                return pattern_matches(target, source)
            return False
        logger.debug("Unsupported comparison operator %r", operator)
        return False

    def evaluate_logic(
        self,
        logic: ConditionalLogic,
        record: Any,
        field_index: Optional[FieldIndex] = None,
    ) -> bool:
        results = [
            self.evaluate_condition(condition, record, field_index)
            for condition in logic.conditions
        ]

        if logic.operator == LogicalOperator.AND:
            return all(results)
        if logic.operator == LogicalOperator.OR:
            return any(results)
        if logic.operator == LogicalOperator.NOT:
            # Only the first condition participates; the rest are ignored.
            return not results[0]
        if logic.operator == LogicalOperator.XOR:
            return results.count(True) == 1
        return False


def evaluate_condition(condition: Condition, record: Any, field_index: Optional[FieldIndex] = None) -> bool:
    return ConditionEvaluator().evaluate_condition(condition, record, field_index)


def evaluate_logic(logic: ConditionalLogic, record: Any, field_index: Optional[FieldIndex] = None) -> bool:
    return ConditionEvaluator().evaluate_logic(logic, record, field_index)
