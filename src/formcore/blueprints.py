"""Blueprint loading, lookup and composition helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Union

from loguru import logger
from pydantic.alias_generators import to_camel

from .models.blueprint import FieldAnnotation, FormBlueprint, PageDefinition

BlueprintSource = Union[FormBlueprint, Mapping[str, Any], str, Path]


def load_blueprint(source: BlueprintSource) -> FormBlueprint:
    """Normalize a blueprint given as a model, mapping, JSON text or file path.

    Malformed blueprints raise ``pydantic.ValidationError``.
    """
    if isinstance(source, FormBlueprint):
        return source
    if isinstance(source, Mapping):
        return FormBlueprint.model_validate(dict(source))
    if isinstance(source, str) and source.lstrip().startswith("{"):
        return FormBlueprint.model_validate_json(source)

    path = Path(source)
    blueprint = FormBlueprint.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(f"Loaded blueprint {blueprint.id} v{blueprint.version} from {path}")
    return blueprint


def iter_fields(blueprint: FormBlueprint) -> Iterator[tuple[PageDefinition, FieldAnnotation]]:
    for page in blueprint.pages:
        for field in page.fields:
            yield page, field


def build_field_index(blueprint: FormBlueprint) -> dict[str, FieldAnnotation]:
    """Map field id to annotation across all pages."""
    return {field.id: field for _page, field in iter_fields(blueprint)}


def find_field_by_id(blueprint: FormBlueprint, field_id: str) -> Optional[FieldAnnotation]:
    for _page, field in iter_fields(blueprint):
        if field.id == field_id:
            return field
    return None


def get_fields_by_group(blueprint: FormBlueprint, group_id: str) -> list[FieldAnnotation]:
    return [field for _page, field in iter_fields(blueprint) if field.group_id == group_id]


def get_fields_by_page(blueprint: FormBlueprint, page_number: int) -> list[FieldAnnotation]:
    for page in blueprint.pages:
        if page.page_number == page_number:
            return list(page.fields)
    return []


def clone_blueprint(blueprint: FormBlueprint) -> FormBlueprint:
    return blueprint.model_copy(deep=True)


def _wire(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {to_camel(key) if "_" in key else key: value for key, value in mapping.items()}


def merge_blueprints(base: FormBlueprint, overlay: Mapping[str, Any]) -> FormBlueprint:
    """Apply a partial blueprint on top of ``base`` and return a new blueprint.

    ``version`` is replaced; ``metadata``, ``globalStyles`` and
    ``stylePresets`` are merged key by key; pages are matched by
    ``pageNumber`` and their fields by ``id``, with overlay keys winning.
    Unmatched pages and fields are appended. ``base`` is left untouched.
    """
    merged = base.model_dump(by_alias=True, exclude_unset=True)
    overlay = _wire(overlay)

    if overlay.get("version"):
        merged["version"] = overlay["version"]
    for key in ("metadata", "globalStyles", "stylePresets"):
        if overlay.get(key):
            merged[key] = {**(merged.get(key) or {}), **_wire(overlay[key])}

    pages = merged.setdefault("pages", [])
    for overlay_page in overlay.get("pages") or []:
        overlay_page = _wire(overlay_page)
        base_page = next(
            (page for page in pages if page["pageNumber"] == overlay_page.get("pageNumber")),
            None,
        )
        if base_page is None:
            pages.append(overlay_page)
            continue
        fields = base_page.setdefault("fields", [])
        for overlay_field in overlay_page.get("fields") or []:
            overlay_field = _wire(overlay_field)
            position = next(
                (i for i, field in enumerate(fields) if field["id"] == overlay_field.get("id")),
                None,
            )
            if position is None:
                fields.append(overlay_field)
            else:
                fields[position] = {**fields[position], **overlay_field}

    return FormBlueprint.model_validate(merged)


def summarize_blueprint(blueprint: FormBlueprint) -> dict[str, Any]:
    fields_by_type: dict[str, int] = {}
    total_fields = 0
    for _page, field in iter_fields(blueprint):
        total_fields += 1
        fields_by_type[field.data_type.value] = fields_by_type.get(field.data_type.value, 0) + 1

    return {
        "id": blueprint.id,
        "version": blueprint.version,
        "page_count": len(blueprint.pages),
        "total_fields": total_fields,
        "fields_by_type": fields_by_type,
        "group_count": len(blueprint.field_groups),
    }
