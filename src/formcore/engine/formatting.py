"""
Layered formatting resolution.

The effective style of a field is built from four tiers, lowest precedence
first:

1. blueprint global style (without its ``type_defaults`` table)
2. the type default for the field's data type
3. the named style preset referenced by the field
4. the field's own formatting

Each tier is a shallow overlay: only keys the tier explicitly sets replace
the keys below it. A missing tier (or an unknown preset name) is a no-op.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from ..logging import logger
from ..models.blueprint import FieldAnnotation, FormattingRules, FormBlueprint


def overlay_rules(*tiers: Optional[FormattingRules]) -> FormattingRules:
    """Merge formatting tiers in order; later tiers win on identical keys."""
    merged: dict[str, Any] = {}
    for tier in tiers:
        if tier is None:
            continue
        merged.update(_explicit_keys(tier))
    return FormattingRules.model_validate(merged)


def _explicit_keys(tier: FormattingRules) -> dict[str, Any]:
    keys: Iterable[str] = tier.model_fields_set & set(FormattingRules.model_fields)
    return {key: getattr(tier, key) for key in keys}


class FormattingResolver:
    def tiers(self, blueprint: FormBlueprint, field: FieldAnnotation) -> list[Optional[FormattingRules]]:
        global_styles = blueprint.global_styles
        type_default = None
        if global_styles is not None and global_styles.type_defaults:
            type_default = global_styles.type_defaults.get(field.data_type)

        preset = None
        if field.style_preset:
            preset = blueprint.style_presets.get(field.style_preset)
            if preset is None:
                logger.debug("Style preset %r of field %s not found", field.style_preset, field.id)

        return [global_styles, type_default, preset, field.formatting]

    def resolve(self, blueprint: FormBlueprint, field: FieldAnnotation) -> FormattingRules:
        return overlay_rules(*self.tiers(blueprint, field))


def resolve_formatting(blueprint: FormBlueprint, field: FieldAnnotation) -> FormattingRules:
    return FormattingResolver().resolve(blueprint, field)
