"""Document composition: resolve, filter, map and paginate."""

from typing import TYPE_CHECKING

from docgen.composition._conditions import ConditionEvaluator
from docgen.composition._models import DocumentPlan, SectionOutput
from docgen.composition._overflow import OverflowPaginator
from docgen.composition._view_models import ViewModelRegistry
from docgen.mapping import SectionMapper, create_strategy_registry
from docgen.templates import interpolate_template_fields
from docgen.utils import get_logger

if TYPE_CHECKING:
    from collections.abc import Mapping

    from structlog.typing import FilteringBoundLogger

    from docgen.mapping import StrategyRegistry
    from docgen.templates import SectionSpec, TemplateResolver


class DocumentComposer:
    """Turns a template id and request data into a DocumentPlan.

    For each section of the resolved template, in order: the condition
    decides inclusion, sections with field mappings are mapped to a flat
    field map (plus overflow indicator fields), other sections carry their
    view model, and every overflow config contributes addendum pages.
    """

    def __init__(
        self,
        resolver: "TemplateResolver",
        strategies: "StrategyRegistry | None" = None,
        view_models: ViewModelRegistry | None = None,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Initialize the composer.

        Args:
            resolver: Resolves and caches templates.
            strategies: Mapping strategies shared by mapping, conditions and
                overflow. Defaults to the built-ins.
            view_models: View-model builders. Defaults to an empty registry.
            logger: Logger for composition events.
        """
        self._resolver: "TemplateResolver" = resolver
        self._logger: "FilteringBoundLogger" = (
            logger if logger is not None else get_logger("composer")
        )
        self._strategies: "StrategyRegistry" = (
            strategies if strategies is not None else create_strategy_registry(self._logger)
        )
        self._mapper: SectionMapper = SectionMapper(self._strategies, self._logger)
        self._conditions: ConditionEvaluator = ConditionEvaluator(
            self._strategies, self._logger
        )
        self._paginator: OverflowPaginator = OverflowPaginator(
            self._strategies, self._logger
        )
        self._view_models: ViewModelRegistry = (
            view_models
            if view_models is not None
            else ViewModelRegistry(logger=self._logger)
        )

    @property
    def resolver(self) -> "TemplateResolver":
        return self._resolver

    @property
    def view_models(self) -> ViewModelRegistry:
        return self._view_models

    def compose(
        self,
        template_id: str,
        data: object,
        variables: "Mapping[str, object] | None" = None,
    ) -> DocumentPlan:
        """Build the document plan for one request.

        Args:
            template_id: Template id, possibly with ``${path}`` placeholders.
            data: Request data.
            variables: Placeholder values. When given, section template
                paths, conditions and header/footer content are interpolated
                too.

        Returns:
            Ordered section outputs and the header/footer configuration.

        Raises:
            TemplateError: If the template cannot be resolved or a
                placeholder has no value.
        """
        resolved = self._resolver.resolve(template_id, variables)
        if variables:
            resolved = interpolate_template_fields(resolved, variables)

        outputs: list[SectionOutput] = []
        skipped: list[str] = []
        for section in resolved.sections:
            if not self._conditions.should_render(section, data):
                skipped.append(section.section_id)
                continue
            outputs.append(self.compose_section(section, data))

        self._logger.info(
            "Composed document",
            template_id=resolved.template_id,
            sections=len(outputs),
            skipped=len(skipped),
        )
        return DocumentPlan(
            template_id=resolved.template_id,
            sections=tuple(outputs),
            header_footer_config=resolved.header_footer_config,
            skipped=tuple(skipped),
        )

    def compose_section(self, section: "SectionSpec", data: object) -> SectionOutput:
        """Map one section that has already passed its condition."""
        overflow = self._paginator.process(
            section.section_id, section.overflow_configs, data
        )

        if section.has_field_mappings:
            values = self._mapper.map_section(section, data)
            values.update(overflow.indicator_fields)
            return SectionOutput(
                section=section, field_values=values, addenda=overflow.addenda
            )

        payload = self._view_models.build(section.view_model_type, data)
        return SectionOutput(section=section, payload=payload, addenda=overflow.addenda)
