"""
Public result models handed to the rendering collaborator.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ConfigDict, Field, computed_field

from .blueprint import FormattingRules, Positioning, SchemaModel
from .enums import FieldDataType, ValidationSeverity, ValidationType


class ValidationError(SchemaModel):
    """
    One failed validation rule for one field.
    """

    model_config = ConfigDict(frozen=True)

    field_id: str = Field(description="Identifier of the field that failed.")
    line_number: Optional[str] = Field(default=None, description="Form line number, when known.")
    rule: ValidationType = Field(description="Kind of the failing rule.")
    severity: ValidationSeverity = Field(description="error blocks; warning and info do not.")
    message: str = Field(description="Human-readable failure message.")
    actual_value: Any = Field(default=None, description="Value (or length) that was checked.")
    expected_value: Any = Field(default=None, description="Bound or pattern the value failed.")


class ValidationResult(SchemaModel):
    """
    Whole-form validation outcome.

    ``errors`` holds error-severity items; ``warnings`` holds warning and info
    items. The form is valid iff ``errors`` is empty.
    """

    errors: list[ValidationError] = Field(default_factory=list)
    warnings: list[ValidationError] = Field(default_factory=list)

    @computed_field(alias="isValid")
    @property
    def is_valid(self) -> bool:
        return not self.errors


class FieldEvaluation(SchemaModel):
    """
    Render-ready view of one visible field.
    """

    field_id: str
    page_number: int
    data_type: FieldDataType
    value: Any = Field(default=None, description="Resolved raw value (None when absent).")
    display: str = Field(default="", description="Formatted display string.")
    formatting: FormattingRules = Field(default_factory=FormattingRules)
    position: Optional[Positioning] = Field(default=None, description="Field box converted to points.")
    required: bool = False
    enabled: bool = True


class FormEvaluation(SchemaModel):
    """
    Output of evaluating a blueprint against one record.
    """

    blueprint_id: str
    fields: list[FieldEvaluation] = Field(default_factory=list)
    hidden_field_ids: list[str] = Field(default_factory=list)
    validation: ValidationResult = Field(default_factory=ValidationResult)

    @property
    def is_valid(self) -> bool:
        return self.validation.is_valid

    def get(self, field_id: str) -> Optional[FieldEvaluation]:
        for field in self.fields:
            if field.field_id == field_id:
                return field
        return None
