"""
Display formatters for US tax forms.

Pure functions: value in, display string out. Inputs that cannot be
formatted (an SSN that is not nine digits, a date string that does not parse)
are returned unchanged rather than rejected, so a renderer always has
something to print.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Optional, Union

from ..logging import logger
from ..models.blueprint import FormattingRules
from ..models.enums import CurrencyFormat, DateFormat, FieldDataType, TextTransform
from .conditions import parse_decimal, to_text
from .paths import MISSING

Number = Union[int, float]

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


def _is_finite(value: Number) -> bool:
    return isinstance(value, int) or math.isfinite(value)


def _fixed(value: Number, places: int) -> str:
    # Half-up on the exact binary value, as printed forms expect.
    exact = Decimal(value)
    quantum = Decimal(1).scaleb(-places)
    context = Context(prec=max(28, exact.adjusted() + places + 2), rounding=ROUND_HALF_UP)
    return format(exact.quantize(quantum, context=context), "f")


def add_thousands_separators(number_text: str) -> str:
    integer, dot, fraction = number_text.partition(".")
    return _THOUSANDS.sub(",", integer) + dot + fraction


def format_currency(
    value: Number,
    format: Union[CurrencyFormat, str] = CurrencyFormat.USD_NO_SYMBOL,
    decimal_places: int = 0,
    thousands_separator: bool = True,
) -> str:
    """Format a dollar amount; negatives are wrapped in parentheses.

    Infinite and NaN amounts cannot be printed as dollars and are returned as
    plain text.
    """
    currency_format = CurrencyFormat(format)
    if not _is_finite(value):
        return to_text(value)
    absolute = abs(value)

    if currency_format == CurrencyFormat.USD_WITH_CENTS:
        text = _fixed(absolute, 2)
    elif currency_format == CurrencyFormat.USD_WHOLE:
        text = _fixed(absolute, 0)
    else:
        text = _fixed(absolute, decimal_places)

    if thousands_separator:
        text = add_thousands_separators(text)
    if currency_format == CurrencyFormat.USD:
        text = f"${text}"

    return f"({text})" if value < 0 else text


def _parse_date(value: Union[date, datetime, str]) -> Optional[date]:
    if isinstance(value, (date, datetime)):
        return value
    try:
        return datetime.fromisoformat(re.sub(r"[zZ]$", "+00:00", value.strip()))
    except ValueError:
        return None


def format_date(
    value: Union[date, datetime, str],
    format: Union[DateFormat, str] = DateFormat.MM_DD_YYYY,
) -> str:
    parsed = _parse_date(value)
    if parsed is None:
        logger.debug("Unparseable date %r left unformatted", value)
        return value

    month = f"{parsed.month:02d}"
    day = f"{parsed.day:02d}"
    year = str(parsed.year)
    date_format = DateFormat(format)

    if date_format == DateFormat.YYYY_MM_DD:
        return f"{year}-{month}-{day}"
    if date_format == DateFormat.DD_MM_YYYY:
        return f"{day}/{month}/{year}"
    if date_format == DateFormat.MMDDYYYY:
        return f"{month}{day}{year}"
    if date_format == DateFormat.MONTH_DAY_YEAR:
        return f"{MONTH_NAMES[parsed.month - 1]} {day}, {year}"
    return f"{month}/{day}/{year}"


def _digits(value: str) -> str:
    return re.sub(r"\D", "", value)


def format_ssn(value: str, show_separators: bool = True, mask: bool = False) -> str:
    """Format a Social Security Number as ``123-45-6789``.

    Masking shows only the last four digits and takes precedence over
    ``show_separators``. Input that is not nine digits is returned as is.
    """
    digits = _digits(value)
    if len(digits) != 9:
        return value
    if mask:
        return f"***-**-{digits[5:]}"
    if show_separators:
        return f"{digits[:3]}-{digits[3:5]}-{digits[5:]}"
    return digits


def format_ein(value: str, show_separators: bool = True, mask: bool = False) -> str:
    """Format an Employer Identification Number as ``12-3456789``."""
    digits = _digits(value)
    if len(digits) != 9:
        return value
    if mask:
        return f"**-***{digits[5:]}"
    if show_separators:
        return f"{digits[:2]}-{digits[2:]}"
    return digits


def format_phone(value: str, show_separators: bool = True) -> str:
    digits = _digits(value)
    if len(digits) == 11 and digits.startswith("1"):
        digits = digits[1:]
    if len(digits) != 10:
        return value
    if show_separators:
        return f"({digits[:3]}) {digits[3:6]}-{digits[6:]}"
    return digits


def format_number(
    value: Number,
    decimal_places: Optional[int] = None,
    thousands_separator: bool = False,
) -> str:
    if not _is_finite(value):
        return to_text(value)
    text = to_text(abs(value)) if decimal_places is None else _fixed(abs(value), decimal_places)
    if thousands_separator:
        text = add_thousands_separators(text)
    return f"-{text}" if value < 0 else text


def format_percentage(value: Number, decimal_places: Optional[int] = None) -> str:
    return f"{format_number(value, decimal_places)}%"


def _as_number(value: Any) -> Optional[Number]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value if _is_finite(value) else None
    if isinstance(value, str):
        number = parse_decimal(value.replace(",", ""))
        return number if number is not None and math.isfinite(number) else None
    return None


def _apply_text_transform(text: str, transform: Optional[TextTransform]) -> str:
    if transform == TextTransform.UPPERCASE:
        return text.upper()
    if transform == TextTransform.LOWERCASE:
        return text.lower()
    if transform == TextTransform.CAPITALIZE:
        return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))
    return text


def format_value(value: Any, data_type: FieldDataType, rules: Optional[FormattingRules] = None) -> str:
    """Render ``value`` for a field of ``data_type`` using resolved ``rules``."""
    rules = rules or FormattingRules()
    if value is MISSING or value is None:
        return ""

    if data_type == FieldDataType.CHECKBOX:
        return (rules.checkbox_character or "X") if value else ""

    number = _as_number(value)
    separators = rules.show_separators is not False
    mask = bool(rules.mask_value)

    if data_type == FieldDataType.CURRENCY and number is not None:
        text = format_currency(
            number,
            rules.currency_format or CurrencyFormat.USD_NO_SYMBOL,
            rules.decimal_places if rules.decimal_places is not None else 0,
            rules.thousands_separator is not False,
        )
    elif data_type == FieldDataType.NUMBER and number is not None:
        text = format_number(number, rules.decimal_places, bool(rules.thousands_separator))
    elif data_type == FieldDataType.PERCENTAGE and number is not None:
        text = format_percentage(number, rules.decimal_places)
    elif data_type == FieldDataType.DATE and isinstance(value, (date, str)):
        text = format_date(value, rules.date_format or DateFormat.MM_DD_YYYY)
    elif data_type == FieldDataType.SSN:
        text = format_ssn(to_text(value), separators, mask)
    elif data_type == FieldDataType.EIN:
        text = format_ein(to_text(value), separators, mask)
    elif data_type == FieldDataType.PHONE:
        text = format_phone(to_text(value), separators)
    else:
        text = to_text(value)

    return _apply_text_transform(text, rules.text_transform)
