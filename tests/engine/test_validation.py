from formcore.engine.paths import MISSING
from formcore.engine.validation import ValidationEngine, luhn_valid, validate_field, validate_form
from formcore.models import (
    FieldAnnotation,
    FormBlueprint,
    ValidationRule,
    ValidationSeverity,
    ValidationType,
)


def _field(*rules: dict, field_id: str = "f1", path: str = "$.value", **extra) -> FieldAnnotation:
    return FieldAnnotation(
        id=field_id,
        label=extra.pop("label", "Field"),
        data_binding={"path": path},
        validations=[ValidationRule(**rule) for rule in rules],
        **extra,
    )


def _blueprint(*fields: FieldAnnotation) -> FormBlueprint:
    return FormBlueprint(id="bp", pages=[{"page_number": 1, "fields": list(fields)}])


def test_required_fails_for_absent_none_and_empty_string():
    field = _field({"type": "required", "message": "needed"})
    for value in (MISSING, None, ""):
        errors = validate_field(field, value)
        assert len(errors) == 1
        assert errors[0].rule == ValidationType.REQUIRED
        assert errors[0].actual_value is None
        assert errors[0].message == "needed"
    assert validate_field(field, 0) == []
    assert validate_field(field, False) == []


def test_length_rules_apply_to_strings_only():
    field = _field({"type": "min_length", "length": 3}, {"type": "max_length", "length": 5})
    assert [e.rule for e in validate_field(field, "ab")] == [ValidationType.MIN_LENGTH]
    assert [e.rule for e in validate_field(field, "abcdef")] == [ValidationType.MAX_LENGTH]
    assert validate_field(field, "abcd") == []
    assert validate_field(field, 12) == []
    error = validate_field(field, "ab")[0]
    assert error.actual_value == 2
    assert error.expected_value == 3


def test_pattern_rule_searches_strings():
    field = _field({"type": "pattern", "pattern": r"^\d{9}$"})
    assert validate_field(field, "123456789") == []
    errors = validate_field(field, "123-45-6789")
    assert errors[0].expected_value == r"^\d{9}$"
    assert validate_field(field, 123) == []


def test_range_reports_min_before_max_and_skips_non_numbers():
    field = _field({"type": "range", "min": 0, "max": 100})
    below = validate_field(field, -5)
    assert len(below) == 1
    assert below[0].expected_value == "min: 0"
    above = validate_field(field, 101.5)
    assert above[0].expected_value == "max: 100"
    assert validate_field(field, 50) == []
    assert validate_field(field, "500") == []
    assert validate_field(field, True) == []


def test_each_failing_rule_reports_once():
    field = _field(
        {"type": "min_length", "length": 9},
        {"type": "pattern", "pattern": r"^\d+$"},
    )
    errors = validate_field(field, "12a")
    assert [e.rule for e in errors] == [ValidationType.MIN_LENGTH, ValidationType.PATTERN]


def test_default_message_and_severity():
    field = _field({"type": "required"}, label="Routing number")
    error = validate_field(field, MISSING)[0]
    assert error.severity == ValidationSeverity.ERROR
    assert error.message == "Routing number is required"


def test_luhn_rule():
    assert luhn_valid("79927398713")
    field = _field({"type": "luhn"})
    assert validate_field(field, "7992-7398-713") == []
    assert len(validate_field(field, "79927398710")) == 1
    assert validate_field(field, MISSING) == []


def test_cross_field_rule_compares_against_other_fields():
    total = _field(field_id="total", path="$.total")
    part = _field(
        {"type": "cross_field", "compare_fields": ["total"], "compare_operator": "lte"},
        field_id="part",
        path="$.part",
    )
    index = {"total": total, "part": part}
    engine = ValidationEngine()
    assert engine.validate_field(part, 10, {"total": 20, "part": 10}, index) == []
    errors = engine.validate_field(part, 30, {"total": 20, "part": 30}, index)
    assert errors[0].rule == ValidationType.CROSS_FIELD
    assert errors[0].expected_value == 20
    # Without a record there is nothing to compare against.
    assert engine.validate_field(part, 30) == []


def test_custom_rule_uses_registered_validator():
    field = _field({"type": "custom", "custom_validator": "even"})
    engine = ValidationEngine(validators={"even": lambda value, rule: value % 2 == 0})
    assert engine.validate_field(field, 4) == []
    assert engine.validate_field(field, 3)[0].rule == ValidationType.CUSTOM
    assert ValidationEngine().validate_field(field, 3) == []


def test_validate_form_single_required_field_bound_to_absent_path():
    blueprint = _blueprint(_field({"type": "required"}, path="$.taxpayer.ssn"))
    result = validate_form(blueprint, {})
    assert result.is_valid is False
    assert len(result.errors) == 1
    assert result.errors[0].rule == ValidationType.REQUIRED
    assert result.warnings == []


def test_validate_form_buckets_by_severity():
    blueprint = _blueprint(
        _field({"type": "required", "severity": "warning"}, field_id="a", path="$.a"),
        _field({"type": "required", "severity": "info"}, field_id="b", path="$.b"),
    )
    result = validate_form(blueprint, {})
    assert result.is_valid is True
    assert [w.field_id for w in result.warnings] == ["a", "b"]


def test_validate_form_skips_fields_hidden_by_show_logic():
    logic = {
        "conditions": [{"source": "$.filingStatus", "operator": "eq", "value": "married_filing_jointly"}],
        "operator": "and",
        "action": "show",
    }
    blueprint = _blueprint(
        _field({"type": "required"}, field_id="spouse_ssn", path="$.spouse.ssn", conditional_logic=logic)
    )
    assert validate_form(blueprint, {"filingStatus": "single"}).is_valid is True
    result = validate_form(blueprint, {"filingStatus": "married_filing_jointly"})
    assert [e.field_id for e in result.errors] == ["spouse_ssn"]


def test_validate_form_does_not_skip_hide_logic():
    logic = {
        "conditions": [{"source": "$.filingStatus", "operator": "eq", "value": "single"}],
        "action": "hide",
    }
    blueprint = _blueprint(
        _field({"type": "required"}, field_id="spouse_ssn", path="$.spouse.ssn", conditional_logic=logic)
    )
    assert validate_form(blueprint, {"filingStatus": "single"}).is_valid is False


def test_validate_form_ignores_fallback():
    field = FieldAnnotation(
        id="wages",
        data_binding={"path": "$.income.wages", "fallback": 0},
        validations=[{"type": "required"}],
    )
    assert validate_form(_blueprint(field), {}).is_valid is False


def test_ssn_example_has_no_errors():
    field = _field({"type": "pattern", "pattern": r"^\d{9}$"}, field_id="ssn", path="$.taxpayer.ssn")
    result = validate_form(_blueprint(field), {"taxpayer": {"ssn": "123456789"}})
    assert result.is_valid
    assert result.errors == []


def test_pattern_rule_rejects_trailing_newline():
    field = _field({"type": "pattern", "pattern": r"^\d{9}$"})
    assert validate_field(field, "123456789") == []
    assert len(validate_field(field, "123456789\n")) == 1
