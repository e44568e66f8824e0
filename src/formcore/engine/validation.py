"""
Field and form validation.

Each rule of a field is applied independently and yields at most one
``ValidationError``. A rule that does not apply to the value's type (a range
rule on a string, a length rule on a number) is skipped, not reported.
Failures are collected, never raised; the caller decides whether a result
blocks (error severity) or only informs (warning, info).
"""

from __future__ import annotations

import re
from typing import Any, Callable, Mapping, Optional

from ..blueprints import build_field_index, iter_fields
from ..logging import logger
from ..models.blueprint import FieldAnnotation, FormBlueprint, ValidationRule
from ..models.enums import ComparisonOperator, ConditionalAction, ValidationSeverity, ValidationType
from ..models.results import ValidationError, ValidationResult
from .conditions import ConditionEvaluator, FieldIndex, is_empty, pattern_matches
from .paths import MISSING, resolve_path

CustomValidator = Callable[[Any, ValidationRule], bool]


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def luhn_valid(digits: str) -> bool:
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


class ValidationEngine:
    """
    Apply declared validation rules to resolved field values.

    ``validators`` is the registry behind ``custom`` rules: a mapping of
    validator name to ``callable(value, rule) -> bool``. Unregistered names are
    skipped.
    """

    def __init__(
        self,
        validators: Optional[Mapping[str, CustomValidator]] = None,
        condition_evaluator: Optional[ConditionEvaluator] = None,
    ):
        self.validators = dict(validators or {})
        self.condition_evaluator = condition_evaluator or ConditionEvaluator()

    def validate_field(
        self,
        field: FieldAnnotation,
        value: Any,
        record: Any = None,
        field_index: Optional[FieldIndex] = None,
    ) -> list[ValidationError]:
        errors: list[ValidationError] = []
        for rule in field.validations:
            error = self._check_rule(field, value, rule, record, field_index)
            if error is not None:
                errors.append(error)
        return errors

    def validate_form(self, blueprint: FormBlueprint, record: Any) -> ValidationResult:
        """
        Validate every applicable field of ``blueprint`` against ``record``.

        A field whose conditional action is SHOW and whose logic is false is
        not on the rendered form, so it is skipped entirely.
        """
        field_index = build_field_index(blueprint)
        result = ValidationResult()

        for _page, field in iter_fields(blueprint):
            logic = field.conditional_logic
            if logic is not None and logic.action == ConditionalAction.SHOW:
                if not self.condition_evaluator.evaluate_logic(logic, record, field_index):
                    logger.debug("Skipping validation of hidden field %s", field.id)
                    continue

            value = resolve_path(field.data_binding.path, record)
            for error in self.validate_field(field, value, record, field_index):
                if error.severity == ValidationSeverity.ERROR:
                    result.errors.append(error)
                else:
                    result.warnings.append(error)

        logger.debug(
            "Validated %s: %d errors, %d warnings",
            blueprint.id,
            len(result.errors),
            len(result.warnings),
        )
        return result

    def _check_rule(
        self,
        field: FieldAnnotation,
        value: Any,
        rule: ValidationRule,
        record: Any,
        field_index: Optional[FieldIndex],
    ) -> Optional[ValidationError]:
        label = field.label or field.id

        def fail(default_message: str, actual: Any = None, expected: Any = None) -> ValidationError:
            return ValidationError(
                field_id=field.id,
                line_number=field.line_number,
                rule=rule.type,
                severity=rule.severity,
                message=rule.message or default_message,
                actual_value=None if actual is MISSING else actual,
                expected_value=expected,
            )

        if rule.type == ValidationType.REQUIRED:
            if is_empty(value):
                return fail(f"{label} is required", actual=value)

        elif rule.type == ValidationType.MIN_LENGTH:
            minimum = rule.length or 0
            if isinstance(value, str) and len(value) < minimum:
                return fail(
                    f"{label} must be at least {minimum} characters",
                    actual=len(value),
                    expected=rule.length,
                )

        elif rule.type == ValidationType.MAX_LENGTH:
            if isinstance(value, str) and rule.length is not None and len(value) > rule.length:
                return fail(
                    f"{label} must be at most {rule.length} characters",
                    actual=len(value),
                    expected=rule.length,
                )

        elif rule.type == ValidationType.PATTERN:
            if isinstance(value, str) and rule.pattern:
                if not pattern_matches(rule.pattern, value):
                    return fail(f"{label} has an invalid format", actual=value, expected=rule.pattern)

        elif rule.type == ValidationType.RANGE:
            if _is_number(value):
                if rule.min is not None and value < rule.min:
                    return fail(
                        f"{label} must be at least {rule.min}",
                        actual=value,
                        expected=f"min: {rule.min}",
                    )
                if rule.max is not None and value > rule.max:
                    return fail(
                        f"{label} must be at most {rule.max}",
                        actual=value,
                        expected=f"max: {rule.max}",
                    )

        elif rule.type == ValidationType.LUHN:
            if isinstance(value, str) or _is_number(value):
                digits = re.sub(r"\D", "", str(value))
                if digits and not luhn_valid(digits):
                    return fail(f"{label} failed the checksum", actual=value)

        elif rule.type == ValidationType.CROSS_FIELD:
            if record is None:
                return None
            operator = rule.compare_operator or ComparisonOperator.EQUALS
            for other in rule.compare_fields:
                other_value = self.condition_evaluator.resolve_source(other, record, field_index)
                if not self.condition_evaluator.compare(value, operator, other_value):
                    return fail(
                        f"{label} must be {operator.value} {other}",
                        actual=value,
                        expected=None if other_value is MISSING else other_value,
                    )

        elif rule.type == ValidationType.CUSTOM:
            validator = self.validators.get(rule.custom_validator or "")
            if validator is None:
                logger.debug("No custom validator registered as %r; rule skipped", rule.custom_validator)
                return None
            if not validator(None if value is MISSING else value, rule):
                return fail(f"{label} failed {rule.custom_validator}", actual=value)

        return None


def validate_field(
    field: FieldAnnotation,
    value: Any,
    record: Any = None,
    field_index: Optional[FieldIndex] = None,
) -> list[ValidationError]:
    return ValidationEngine().validate_field(field, value, record, field_index)


def validate_form(blueprint: FormBlueprint, record: Any) -> ValidationResult:
    return ValidationEngine().validate_form(blueprint, record)
