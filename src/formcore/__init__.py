"""
Public API for the formcore package.
"""

from .blueprints import (
    build_field_index,
    clone_blueprint,
    find_field_by_id,
    load_blueprint,
    merge_blueprints,
    summarize_blueprint,
)
from .engine.conditions import ConditionEvaluator, evaluate_condition, evaluate_logic
from .engine.formatters import format_currency, format_date, format_ssn, format_value
from .engine.formatting import FormattingResolver, resolve_formatting
from .engine.paths import MISSING, PathSyntaxError, resolve_path, set_path
from .engine.validation import ValidationEngine, validate_field, validate_form
from .evaluator import FormEvaluator, evaluate
from .models import (
    FieldAnnotation,
    FieldEvaluation,
    FormattingRules,
    FormBlueprint,
    FormEvaluation,
    ValidationError,
    ValidationResult,
)

__all__ = [
    "evaluate",
    "FormEvaluator",
    "ConditionEvaluator",
    "FormattingResolver",
    "ValidationEngine",
    "MISSING",
    "PathSyntaxError",
    "resolve_path",
    "set_path",
    "evaluate_condition",
    "evaluate_logic",
    "validate_field",
    "validate_form",
    "resolve_formatting",
    "format_currency",
    "format_date",
    "format_ssn",
    "format_value",
    "build_field_index",
    "clone_blueprint",
    "find_field_by_id",
    "load_blueprint",
    "merge_blueprints",
    "summarize_blueprint",
    "FieldAnnotation",
    "FieldEvaluation",
    "FormattingRules",
    "FormBlueprint",
    "FormEvaluation",
    "ValidationError",
    "ValidationResult",
]
