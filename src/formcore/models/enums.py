"""
Controlled vocabularies for form blueprints.

Every code that a blueprint author can write as a string (data types,
operators, format codes) is a closed ``str`` Enum, so unknown codes are
rejected when the blueprint is loaded instead of silently evaluating to
``False`` at render time.
"""

from enum import Enum


class FieldDataType(str, Enum):
    """
    Semantic data type of a field.

    Drives type-specific style defaults and the formatter chosen for display.
    """

    STRING = "string"
    CURRENCY = "currency"
    NUMBER = "number"
    CHECKBOX = "checkbox"
    DATE = "date"
    SSN = "ssn"
    EIN = "ein"
    PHONE = "phone"
    PERCENTAGE = "percentage"


class CoordinateUnit(str, Enum):
    POINTS = "points"
    PIXELS = "pixels"
    PERCENTAGE = "percentage"
    INCHES = "inches"
    MILLIMETERS = "millimeters"


class HorizontalAlignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "justify"


class VerticalAlignment(str, Enum):
    TOP = "top"
    MIDDLE = "middle"
    BOTTOM = "bottom"
    BASELINE = "baseline"


class OverflowBehavior(str, Enum):
    """
    What the renderer does with text wider than its box.
    """

    TRUNCATE = "truncate"
    WRAP = "wrap"
    SCALE_TO_FIT = "scale_to_fit"
    OVERFLOW = "overflow"
    ERROR = "error"


class FontWeight(int, Enum):
    """
    Numeric weights following CSS ``font-weight``.
    """

    THIN = 100
    EXTRA_LIGHT = 200
    LIGHT = 300
    REGULAR = 400
    MEDIUM = 500
    SEMI_BOLD = 600
    BOLD = 700
    EXTRA_BOLD = 800
    BLACK = 900


class FontStyle(str, Enum):
    NORMAL = "normal"
    ITALIC = "italic"
    OBLIQUE = "oblique"


class TextDecoration(str, Enum):
    NONE = "none"
    UNDERLINE = "underline"
    STRIKETHROUGH = "strikethrough"


class TextTransform(str, Enum):
    UPPERCASE = "uppercase"
    LOWERCASE = "lowercase"
    CAPITALIZE = "capitalize"
    NONE = "none"


class ValidationType(str, Enum):
    """
    Kind of a validation rule.

    CUSTOM rules name an externally registered validator; the engine never
    executes blueprint-supplied code.
    """

    REQUIRED = "required"
    MIN_LENGTH = "min_length"
    MAX_LENGTH = "max_length"
    PATTERN = "pattern"
    RANGE = "range"
    CUSTOM = "custom"
    CROSS_FIELD = "cross_field"
    LUHN = "luhn"


class ValidationSeverity(str, Enum):
    """
    ERROR blocks submission; WARNING and INFO are reported only.
    """

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class ComparisonOperator(str, Enum):
    EQUALS = "eq"
    NOT_EQUALS = "neq"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUALS = "gte"
    LESS_THAN = "lt"
    LESS_THAN_OR_EQUALS = "lte"
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    STARTS_WITH = "starts_with"
    ENDS_WITH = "ends_with"
    IS_EMPTY = "is_empty"
    IS_NOT_EMPTY = "is_not_empty"
    IN = "in"
    NOT_IN = "not_in"
    MATCHES_PATTERN = "matches_pattern"


class LogicalOperator(str, Enum):
    AND = "and"
    OR = "or"
    NOT = "not"  # Negates the first condition only
    XOR = "xor"


class ConditionalAction(str, Enum):
    """
    Effect applied to a field when its conditional logic holds.
    """

    SHOW = "show"
    HIDE = "hide"
    ENABLE = "enable"
    DISABLE = "disable"
    SET_VALUE = "set_value"
    CLEAR_VALUE = "clear_value"
    REQUIRE = "require"
    OPTIONAL = "optional"
    APPLY_STYLE = "apply_style"


class FieldGroupType(str, Enum):
    SECTION = "section"
    REPEATABLE = "repeatable"
    TABLE = "table"
    SCHEDULE = "schedule"
    LINE_ITEM = "line_item"


class FormStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    DEPRECATED = "deprecated"
    ARCHIVED = "archived"


class PageOrientation(str, Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class CheckboxStyle(str, Enum):
    CHECKMARK = "checkmark"
    X_MARK = "x_mark"
    FILLED_SQUARE = "filled_square"
    FILLED_CIRCLE = "filled_circle"
    CUSTOM = "custom"


class DateFormat(str, Enum):
    MM_DD_YYYY = "MM/DD/YYYY"
    YYYY_MM_DD = "YYYY-MM-DD"
    DD_MM_YYYY = "DD/MM/YYYY"
    MMDDYYYY = "MMDDYYYY"
    MONTH_DAY_YEAR = "Month DD, YYYY"


class CurrencyFormat(str, Enum):
    """
    USD: ``$1,234``; USD_NO_SYMBOL: ``1,234``; USD_WITH_CENTS: ``1,234.00``;
    USD_WHOLE: rounded to whole dollars.
    """

    USD = "USD"
    USD_NO_SYMBOL = "USD_NO_SYMBOL"
    USD_WITH_CENTS = "USD_WITH_CENTS"
    USD_WHOLE = "USD_WHOLE"
