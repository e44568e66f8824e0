"""
Blueprint schema models.

A blueprint describes one fixed-layout form: its pages, the fields printed
on them, how each field is bound to the taxpayer record, and how it is styled,
validated and conditionally shown. Blueprints are authored as JSON with
camelCase keys; Python callers may also use the snake_case field names.

Structural invariants are enforced here, at load time:
- field identifiers are unique within a blueprint
- every binding path and ``$``-prefixed condition source parses
- conditional logic has at least one condition
- regular expressions compile
"""

from __future__ import annotations

import re
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from ..engine.paths import ROOT, parse_path
from .enums import (
    CheckboxStyle,
    ComparisonOperator,
    ConditionalAction,
    CoordinateUnit,
    CurrencyFormat,
    DateFormat,
    FieldDataType,
    FieldGroupType,
    FontStyle,
    FontWeight,
    FormStatus,
    HorizontalAlignment,
    LogicalOperator,
    OverflowBehavior,
    PageOrientation,
    TextDecoration,
    TextTransform,
    ValidationSeverity,
    ValidationType,
    VerticalAlignment,
)

Scalar = Union[bool, int, float, str]


def _compile_pattern(pattern: str) -> str:
    try:
        re.compile(pattern)
    except re.error as exc:
        raise ValueError(f"Invalid regular expression {pattern!r}: {exc}") from exc
    return pattern


class SchemaModel(BaseModel):
    """Base for all blueprint entities (camelCase on the wire)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FormMetadata(SchemaModel):
    form_name: str
    form_number: str
    tax_year: int
    issuer: str = "IRS"
    revision_date: Optional[str] = None
    omb_number: Optional[str] = None
    catalog_number: Optional[str] = None
    status: FormStatus = FormStatus.DRAFT
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    author: Optional[str] = None
    notes: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    related_forms: list[str] = Field(default_factory=list)
    instructions_url: Optional[str] = None


class CoordinateSystemDefinition(SchemaModel):
    unit: CoordinateUnit = CoordinateUnit.POINTS
    origin: Literal["top-left", "bottom-left"] = "top-left"
    dpi: Optional[float] = None
    reference_width: Optional[float] = None
    reference_height: Optional[float] = None


class PageDimensions(SchemaModel):
    width: float
    height: float
    paper_size: Optional[Literal["letter", "legal", "a4", "custom"]] = None


class PageMargins(SchemaModel):
    top: float = 0
    right: float = 0
    bottom: float = 0
    left: float = 0


class BoxPadding(SchemaModel):
    top: Optional[float] = None
    right: Optional[float] = None
    bottom: Optional[float] = None
    left: Optional[float] = None


class Positioning(SchemaModel):
    x: float
    y: float
    width: float
    height: float
    rotation: Optional[float] = None
    padding: Optional[BoxPadding] = None


class FormattingRules(SchemaModel):
    """
    Flat display style of a field.

    Every member is optional; an unset member means "inherit from a lower
    tier" when styles are layered (see ``FormattingResolver``).
    """

    font_family: Optional[str] = None
    font_size: Optional[float] = None
    font_weight: Optional[FontWeight] = None
    font_style: Optional[FontStyle] = None
    text_decoration: Optional[TextDecoration] = None
    text_color: Optional[str] = None
    background_color: Optional[str] = None
    horizontal_align: Optional[HorizontalAlignment] = None
    vertical_align: Optional[VerticalAlignment] = None
    line_height: Optional[float] = None
    letter_spacing: Optional[float] = None
    text_transform: Optional[TextTransform] = None
    overflow: Optional[OverflowBehavior] = None
    currency_format: Optional[CurrencyFormat] = None
    decimal_places: Optional[int] = Field(default=None, ge=0)
    thousands_separator: Optional[bool] = None
    date_format: Optional[DateFormat] = None
    checkbox_style: Optional[CheckboxStyle] = None
    checkbox_character: Optional[str] = None
    show_separators: Optional[bool] = None
    mask_value: Optional[bool] = None
    min_font_size: Optional[float] = None
    max_lines: Optional[int] = None


class GlobalStyleDefinition(FormattingRules):
    type_defaults: Optional[dict[FieldDataType, FormattingRules]] = Field(
        default=None,
        description="Per data type style defaults layered above the global style.",
    )


class DataBinding(SchemaModel):
    path: str = Field(description="Path expression locating the value in the record.")
    transform: Optional[str] = Field(
        default=None,
        description="Name of an externally registered transformer.",
    )
    transform_params: Optional[dict[str, Any]] = None
    fallback: Optional[Scalar] = Field(
        default=None,
        description="Value used when the path resolves to nothing.",
    )
    checked_value: Optional[Scalar] = Field(
        default=None,
        description="Checkbox fields are checked when the bound value equals this.",
    )
    repeat_source: Optional[str] = None

    @field_validator("path", "repeat_source")
    @classmethod
    def _check_path(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            parse_path(value)
        return value


class ValidationRule(SchemaModel):
    type: ValidationType
    message: str = ""
    severity: ValidationSeverity = ValidationSeverity.ERROR
    length: Optional[int] = Field(default=None, ge=0)
    min: Optional[Union[int, float]] = None
    max: Optional[Union[int, float]] = None
    pattern: Optional[str] = None
    compare_fields: list[str] = Field(default_factory=list)
    compare_operator: Optional[ComparisonOperator] = None
    custom_validator: Optional[str] = None

    @field_validator("pattern")
    @classmethod
    def _check_pattern(cls, value: Optional[str]) -> Optional[str]:
        if value is not None:
            _compile_pattern(value)
        return value


class Condition(SchemaModel):
    source: str = Field(description="Path expression (``$``-prefixed) or a field id.")
    operator: ComparisonOperator
    value: Optional[Union[Scalar, list[Scalar]]] = Field(
        default=None,
        description="Comparison value; when omitted it compares as an absent value, not null.",
    )

    @field_validator("source")
    @classmethod
    def _check_source(cls, value: str) -> str:
        if value.startswith(ROOT):
            parse_path(value)
        return value

    @model_validator(mode="after")
    def _check_pattern_value(self) -> "Condition":
        if self.operator == ComparisonOperator.MATCHES_PATTERN and isinstance(self.value, str):
            _compile_pattern(self.value)
        return self


class ConditionalLogic(SchemaModel):
    conditions: list[Condition] = Field(min_length=1)
    operator: LogicalOperator = LogicalOperator.AND
    action: ConditionalAction = ConditionalAction.SHOW
    set_value: Optional[Scalar] = None
    apply_styles: Optional[FormattingRules] = None


class FieldMetadata(SchemaModel):
    notes: Optional[str] = None
    last_modified: Optional[str] = None
    modified_by: Optional[str] = None
    irs_reference: Optional[str] = None
    custom_properties: dict[str, Any] = Field(default_factory=dict)


class FieldAnnotation(SchemaModel):
    """
    One field printed on a page: binding, style, validation and visibility.
    """

    id: str
    label: str = ""
    line_number: Optional[str] = None
    data_type: FieldDataType = FieldDataType.STRING
    positioning: Optional[Positioning] = None
    data_binding: DataBinding
    formatting: Optional[FormattingRules] = None
    validations: list[ValidationRule] = Field(default_factory=list)
    conditional_logic: Optional[ConditionalLogic] = None
    style_preset: Optional[str] = None
    group_id: Optional[str] = None
    required: bool = False
    read_only: bool = False
    default_value: Optional[Scalar] = None
    help_text: Optional[str] = None
    z_index: Optional[int] = None
    meta: Optional[FieldMetadata] = None


class PageDefinition(SchemaModel):
    page_number: int = Field(ge=1)
    page_id: Optional[str] = None
    dimensions: Optional[PageDimensions] = None
    orientation: PageOrientation = PageOrientation.PORTRAIT
    background_source: Optional[str] = None
    fields: list[FieldAnnotation] = Field(default_factory=list)
    margins: Optional[PageMargins] = None


class FieldGroup(SchemaModel):
    id: str
    name: str
    type: FieldGroupType = FieldGroupType.SECTION
    field_ids: list[str] = Field(default_factory=list)
    max_instances: Optional[int] = None
    min_instances: Optional[int] = None
    repeat_source: Optional[str] = None
    parent_group_id: Optional[str] = None
    order: Optional[int] = None


class TransformerDefinition(SchemaModel):
    id: str
    name: str
    description: Optional[str] = None
    type: Literal["format", "calculate", "lookup", "custom"] = "custom"
    config: dict[str, Any] = Field(default_factory=dict)


class FormBlueprint(SchemaModel):
    """
    Root schema instance for one form revision.
    """

    id: str
    version: str = "1.0.0"
    schema_version: str = "1.0.0"
    metadata: Optional[FormMetadata] = None
    coordinate_system: CoordinateSystemDefinition = Field(default_factory=CoordinateSystemDefinition)
    pages: list[PageDefinition] = Field(default_factory=list)
    field_groups: list[FieldGroup] = Field(default_factory=list)
    global_styles: Optional[GlobalStyleDefinition] = None
    style_presets: dict[str, FormattingRules] = Field(default_factory=dict)
    global_validations: list[ValidationRule] = Field(default_factory=list)
    transformers: list[TransformerDefinition] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_unique_field_ids(self) -> "FormBlueprint":
        seen: set[str] = set()
        for page in self.pages:
            for field in page.fields:
                if field.id in seen:
                    raise ValueError(f"Duplicate field id {field.id!r} in blueprint {self.id!r}")
                seen.add(field.id)
        return self
