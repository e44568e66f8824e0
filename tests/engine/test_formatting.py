from formcore.engine.formatting import FormattingResolver, overlay_rules, resolve_formatting
from formcore.models import FieldAnnotation, FormattingRules, FormBlueprint
from formcore.models.enums import CurrencyFormat, FieldDataType, HorizontalAlignment


def _blueprint(field: dict, **extra) -> FormBlueprint:
    return FormBlueprint.model_validate(
        {"id": "bp", "pages": [{"pageNumber": 1, "fields": [field]}], **extra}
    )


def _field(**extra) -> dict:
    return {"id": "total", "dataBinding": {"path": "$.income.total"}, **extra}


def test_tiers_apply_in_precedence_order():
    blueprint = _blueprint(
        _field(dataType="currency", stylePreset="lineTotal", formatting={"fontSize": 12}),
        globalStyles={
            "fontFamily": "Courier",
            "fontSize": 10,
            "typeDefaults": {"currency": {"fontSize": 11, "horizontalAlign": "right"}},
        },
        stylePresets={"lineTotal": {"fontSize": 11.5, "fontWeight": 700}},
    )
    rules = resolve_formatting(blueprint, blueprint.pages[0].fields[0])
    assert rules.font_size == 12
    assert rules.font_family == "Courier"
    assert rules.horizontal_align == HorizontalAlignment.RIGHT
    assert rules.font_weight == 700


def test_type_default_overrides_global():
    blueprint = _blueprint(
        _field(dataType="currency"),
        globalStyles={
            "fontSize": 10,
            "typeDefaults": {"currency": {"fontSize": 11, "currencyFormat": "USD"}},
        },
    )
    rules = resolve_formatting(blueprint, blueprint.pages[0].fields[0])
    assert rules.font_size == 11
    assert rules.currency_format == CurrencyFormat.USD


def test_type_defaults_of_other_types_are_ignored():
    blueprint = _blueprint(
        _field(dataType="string"),
        globalStyles={"fontSize": 10, "typeDefaults": {"currency": {"fontSize": 11}}},
    )
    rules = resolve_formatting(blueprint, blueprint.pages[0].fields[0])
    assert rules.font_size == 10
    assert "type_defaults" not in rules.model_dump()


def test_unknown_preset_is_a_no_op():
    blueprint = _blueprint(_field(stylePreset="missing"), globalStyles={"fontSize": 9})
    assert resolve_formatting(blueprint, blueprint.pages[0].fields[0]).font_size == 9


def test_no_styles_at_all_yields_empty_rules():
    field = FieldAnnotation(id="f", data_binding={"path": "$.a"})
    blueprint = FormBlueprint(id="bp", pages=[{"page_number": 1, "fields": [field]}])
    assert resolve_formatting(blueprint, field) == FormattingRules()


def test_overlay_only_replaces_explicit_keys():
    base = FormattingRules(font_size=10, text_color="#000000")
    top = FormattingRules(text_color="#ff0000")
    merged = overlay_rules(base, None, top)
    assert merged.font_size == 10
    assert merged.text_color == "#ff0000"


def test_explicit_none_still_overrides():
    merged = overlay_rules(FormattingRules(font_size=10), FormattingRules(font_size=None))
    assert merged.font_size is None


def test_resolver_tiers_are_ordered_lowest_first():
    blueprint = _blueprint(
        _field(dataType="currency", stylePreset="p", formatting={"fontSize": 12}),
        globalStyles={"fontSize": 10, "typeDefaults": {"currency": {"fontSize": 11}}},
        stylePresets={"p": {"fontSize": 11.5}},
    )
    tiers = FormattingResolver().tiers(blueprint, blueprint.pages[0].fields[0])
    assert [tier.font_size for tier in tiers] == [10, 11, 11.5, 12]
    assert blueprint.pages[0].fields[0].data_type == FieldDataType.CURRENCY
