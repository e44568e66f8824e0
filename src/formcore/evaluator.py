"""
Form Evaluator: blueprint + record -> render-ready fields.

Applies a form blueprint to one taxpayer record and produces everything a
renderer needs to print the form, without doing any layout itself.

EVALUATION FLOW
---------------

For every field on every page, in blueprint order:

1. Conditional logic is evaluated once (if the field has any). Its action
   decides visibility (SHOW / HIDE), availability (ENABLE / DISABLE),
   requiredness (REQUIRE / OPTIONAL), value overrides (SET_VALUE /
   CLEAR_VALUE) and extra styling (APPLY_STYLE).
2. The bound value is resolved from the record. Absent values fall back to
   the binding's ``fallback``, then to the field's ``default_value``.
   A named ``transform`` is looked up in the caller's transformer registry;
   checkbox bindings with a ``checked_value`` become booleans.
3. Effective formatting is layered (global, type default, preset, field).
4. The display string is produced by the value formatters.

Validation runs over the whole form separately and is attached to the
result; it always sees the raw bound value, never fallbacks or overrides.

EXTENSION POINTS
----------------

Transformers and custom validators are named in blueprints but implemented
by the caller. Unknown names are logged and ignored; blueprint content is
never executed.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from loguru import logger

from .blueprints import BlueprintSource, build_field_index, iter_fields, load_blueprint
from .engine.conditions import ConditionEvaluator, FieldIndex, strictly_equal
from .engine.formatters import format_value
from .engine.formatting import FormattingResolver, overlay_rules
from .engine.paths import MISSING, resolve_path
from .engine.validation import CustomValidator, ValidationEngine
from .models.blueprint import (
    FieldAnnotation,
    FormattingRules,
    FormBlueprint,
    PageDefinition,
    Positioning,
)
from .models.enums import ConditionalAction, CoordinateUnit, ValidationType
from .models.results import FieldEvaluation, FormEvaluation
from .units import to_points

Transformer = Callable[[Any, dict], Any]


class FormEvaluator:
    """
    Orchestrates path resolution, conditional logic, formatting and
    validation for a whole blueprint.
    """

    def __init__(
        self,
        transformers: Optional[Mapping[str, Transformer]] = None,
        validators: Optional[Mapping[str, CustomValidator]] = None,
    ):
        self.transformers = dict(transformers or {})
        self.condition_evaluator = ConditionEvaluator()
        self.validation_engine = ValidationEngine(validators, self.condition_evaluator)
        self.formatting_resolver = FormattingResolver()

    @classmethod
    def evaluate(
        cls,
        blueprint: BlueprintSource,
        record: Any,
        transformers: Optional[Mapping[str, Transformer]] = None,
        validators: Optional[Mapping[str, CustomValidator]] = None,
    ) -> FormEvaluation:
        """
        Evaluate ``blueprint`` against ``record``.

        Args:
            blueprint: FormBlueprint, mapping, JSON text or path to a JSON file
            record: Nested taxpayer data
            transformers: Registry for ``dataBinding.transform`` names,
                ``callable(value, params) -> value``
            validators: Registry for ``custom`` validation rules,
                ``callable(value, rule) -> bool``

        Returns:
            FormEvaluation with visible fields, hidden field ids and the
            whole-form ValidationResult
        """
        instance = cls(transformers=transformers, validators=validators)
        return instance.evaluate_form(load_blueprint(blueprint), record)

    def evaluate_form(self, blueprint: FormBlueprint, record: Any) -> FormEvaluation:
        field_index = build_field_index(blueprint)
        fields: list[FieldEvaluation] = []
        hidden: list[str] = []

        for page, field in iter_fields(blueprint):
            holds = self._logic_holds(field, record, field_index)
            if not self._is_visible(field, holds):
                hidden.append(field.id)
                continue
            fields.append(self._evaluate_field(blueprint, page, field, record, holds))

        validation = self.validation_engine.validate_form(blueprint, record)
        logger.info(
            f"FormEvaluator: {blueprint.id} -> {len(fields)} visible, {len(hidden)} hidden, "
            f"{len(validation.errors)} errors, {len(validation.warnings)} warnings"
        )
        return FormEvaluation(
            blueprint_id=blueprint.id,
            fields=fields,
            hidden_field_ids=hidden,
            validation=validation,
        )

    def _logic_holds(self, field: FieldAnnotation, record: Any, field_index: FieldIndex) -> Optional[bool]:
        if field.conditional_logic is None:
            return None
        return self.condition_evaluator.evaluate_logic(field.conditional_logic, record, field_index)

    @staticmethod
    def _acts(field: FieldAnnotation, holds: Optional[bool], action: ConditionalAction) -> bool:
        return bool(holds) and field.conditional_logic.action == action

    def _is_visible(self, field: FieldAnnotation, holds: Optional[bool]) -> bool:
        if holds is None:
            return True
        action = field.conditional_logic.action
        if action == ConditionalAction.SHOW:
            return holds
        if action == ConditionalAction.HIDE:
            return not holds
        return True

    def _is_enabled(self, field: FieldAnnotation, holds: Optional[bool]) -> bool:
        if field.read_only:
            return False
        if holds is None:
            return True
        action = field.conditional_logic.action
        if action == ConditionalAction.ENABLE:
            return holds
        if action == ConditionalAction.DISABLE:
            return not holds
        return True

    def _is_required(self, field: FieldAnnotation, holds: Optional[bool]) -> bool:
        if self._acts(field, holds, ConditionalAction.REQUIRE):
            return True
        if self._acts(field, holds, ConditionalAction.OPTIONAL):
            return False
        return field.required or any(rule.type == ValidationType.REQUIRED for rule in field.validations)

    def _resolve_value(self, field: FieldAnnotation, record: Any, holds: Optional[bool]) -> Any:
        if self._acts(field, holds, ConditionalAction.SET_VALUE):
            return field.conditional_logic.set_value
        if self._acts(field, holds, ConditionalAction.CLEAR_VALUE):
            return None

        binding = field.data_binding
        value = resolve_path(binding.path, record)
        if value is MISSING and binding.fallback is not None:
            value = binding.fallback
        if value is MISSING and field.default_value is not None:
            value = field.default_value

        if binding.transform:
            transformer = self.transformers.get(binding.transform)
            if transformer is None:
                logger.warning(f"Transformer {binding.transform!r} for field {field.id} is not registered")
            else:
                value = transformer(None if value is MISSING else value, dict(binding.transform_params or {}))

        if binding.checked_value is not None:
            return strictly_equal(value, binding.checked_value)
        return None if value is MISSING else value

    def _formatting(self, blueprint: FormBlueprint, field: FieldAnnotation, holds: Optional[bool]) -> FormattingRules:
        rules = self.formatting_resolver.resolve(blueprint, field)
        if self._acts(field, holds, ConditionalAction.APPLY_STYLE):
            rules = overlay_rules(rules, field.conditional_logic.apply_styles)
        return rules

    def _position_in_points(self, blueprint: FormBlueprint, field: FieldAnnotation) -> Optional[Positioning]:
        positioning = field.positioning
        system = blueprint.coordinate_system
        if positioning is None or system.unit in (CoordinateUnit.POINTS, CoordinateUnit.PERCENTAGE):
            return positioning
        dpi = system.dpi or 72
        return positioning.model_copy(
            update={
                "x": to_points(positioning.x, system.unit, dpi),
                "y": to_points(positioning.y, system.unit, dpi),
                "width": to_points(positioning.width, system.unit, dpi),
                "height": to_points(positioning.height, system.unit, dpi),
            }
        )

    def _evaluate_field(
        self,
        blueprint: FormBlueprint,
        page: PageDefinition,
        field: FieldAnnotation,
        record: Any,
        holds: Optional[bool],
    ) -> FieldEvaluation:
        value = self._resolve_value(field, record, holds)
        formatting = self._formatting(blueprint, field, holds)
        return FieldEvaluation(
            field_id=field.id,
            page_number=page.page_number,
            data_type=field.data_type,
            value=value,
            display=format_value(value, field.data_type, formatting),
            formatting=formatting,
            position=self._position_in_points(blueprint, field),
            required=self._is_required(field, holds),
            enabled=self._is_enabled(field, holds),
        )


evaluate = FormEvaluator.evaluate
