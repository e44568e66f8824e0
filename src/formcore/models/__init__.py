from .blueprint import (
    BoxPadding,
    Condition,
    ConditionalLogic,
    CoordinateSystemDefinition,
    DataBinding,
    FieldAnnotation,
    FieldGroup,
    FieldMetadata,
    FormattingRules,
    FormBlueprint,
    FormMetadata,
    GlobalStyleDefinition,
    PageDefinition,
    PageDimensions,
    PageMargins,
    Positioning,
    TransformerDefinition,
    ValidationRule,
)
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
from .results import (
    FieldEvaluation,
    FormEvaluation,
    ValidationError,
    ValidationResult,
)

__all__ = [
    "BoxPadding",
    "Condition",
    "ConditionalLogic",
    "CoordinateSystemDefinition",
    "DataBinding",
    "FieldAnnotation",
    "FieldGroup",
    "FieldMetadata",
    "FormattingRules",
    "FormBlueprint",
    "FormMetadata",
    "GlobalStyleDefinition",
    "PageDefinition",
    "PageDimensions",
    "PageMargins",
    "Positioning",
    "TransformerDefinition",
    "ValidationRule",
    "CheckboxStyle",
    "ComparisonOperator",
    "ConditionalAction",
    "CoordinateUnit",
    "CurrencyFormat",
    "DateFormat",
    "FieldDataType",
    "FieldGroupType",
    "FontStyle",
    "FontWeight",
    "FormStatus",
    "HorizontalAlignment",
    "LogicalOperator",
    "OverflowBehavior",
    "PageOrientation",
    "TextDecoration",
    "TextTransform",
    "ValidationSeverity",
    "ValidationType",
    "VerticalAlignment",
    "FieldEvaluation",
    "FormEvaluation",
    "ValidationError",
    "ValidationResult",
]
