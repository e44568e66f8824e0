"""Coordinate unit conversions for field positioning (72 points per inch)."""

from __future__ import annotations

from typing import Union

from .models.enums import CoordinateUnit

POINTS_PER_INCH = 72.0
POINTS_PER_MILLIMETER = POINTS_PER_INCH / 25.4


def to_points(value: float, from_unit: Union[CoordinateUnit, str], dpi: float = 72) -> float:
    unit = CoordinateUnit(from_unit)
    if unit == CoordinateUnit.POINTS:
        return value
    if unit == CoordinateUnit.PIXELS:
        return value * (POINTS_PER_INCH / dpi)
    if unit == CoordinateUnit.INCHES:
        return value * POINTS_PER_INCH
    if unit == CoordinateUnit.MILLIMETERS:
        return value * POINTS_PER_MILLIMETER
    raise ValueError("Cannot convert percentage without reference dimensions")


def from_points(points: float, to_unit: Union[CoordinateUnit, str], dpi: float = 72) -> float:
    unit = CoordinateUnit(to_unit)
    if unit == CoordinateUnit.POINTS:
        return points
    if unit == CoordinateUnit.PIXELS:
        return points * (dpi / POINTS_PER_INCH)
    if unit == CoordinateUnit.INCHES:
        return points / POINTS_PER_INCH
    if unit == CoordinateUnit.MILLIMETERS:
        return points / POINTS_PER_MILLIMETER
    raise ValueError("Cannot convert to percentage without reference dimensions")


def convert_y_origin(y: float, page_height: float, field_height: float = 0) -> float:
    """Flip a Y coordinate between top-left and bottom-left origins."""
    return page_height - y - field_height
