"""Template resolution: placeholders, inheritance, fragments and caching.

Resolution turns a template id into a ResolvedTemplate:

1. ``${...}`` placeholders in the id are substituted from the variables.
2. The raw definition is located through the TemplateSource by trying the
   id as-is, under the template prefix, and then with each extension.
3. A base template is resolved recursively and merged section by section.
4. Each included fragment is resolved recursively and its sections appended.
5. The template's remaining own sections are appended and everything is
   stable-sorted by ``order``.

Resolved templates are cached by resolved id and raw bytes by path. Both
caches are injected so callers can share, replace or disable them.
"""

from typing import TYPE_CHECKING

from docgen.exceptions import (
    CyclicTemplateError,
    TemplateError,
    TemplateNotFoundError,
)
from docgen.templates._cache import MemoryCacheStore, NullCacheStore
from docgen.templates._models import (
    ResolvedTemplate,
    SectionSpec,
    TemplateDefinition,
)
from docgen.templates._parser import parse_template
from docgen.templates._placeholders import resolve_placeholders
from docgen.utils import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from structlog.typing import FilteringBoundLogger

    from docgen.templates._cache import CacheStore
    from docgen.templates._sources import TemplateSource

DEFAULT_PREFIX = "templates"
DEFAULT_EXTENSIONS: tuple[str, ...] = (".yaml", ".yml", ".json")


def merge_section(base: SectionSpec, child: SectionSpec) -> SectionSpec:
    """Merge a child section over the base section with the same id.

    The child wins for ``type``, ``templatePath``, ``condition`` and
    ``viewModelType`` when it provides them, for ``mappingType`` when it
    sets one explicitly, for ``order`` when nonzero, and for the mapping and
    overflow collections when they are non-empty.

    Args:
        base: Section inherited from the base template.
        child: Section declared by the inheriting template.

    Returns:
        A new merged section.
    """
    update: dict[str, object] = {}
    if child.type is not None:
        update["type"] = child.type
    if child.template_path is not None:
        update["template_path"] = child.template_path
    if "mapping_type" in child.model_fields_set:
        update["mapping_type"] = child.mapping_type
    if child.condition is not None:
        update["condition"] = child.condition
    if child.order != 0:
        update["order"] = child.order
    if child.view_model_type is not None:
        update["view_model_type"] = child.view_model_type
    if child.field_mappings:
        update["field_mappings"] = child.field_mappings
    if child.field_mapping_groups:
        update["field_mapping_groups"] = child.field_mapping_groups
    if child.overflow_configs:
        update["overflow_configs"] = child.overflow_configs
    return base.model_copy(update=update)


def merge_with_base(
    base: ResolvedTemplate,
    child: TemplateDefinition,
) -> tuple[list[SectionSpec], list[SectionSpec]]:
    """Merge base sections with a child definition.

    Args:
        base: The resolved base template.
        child: The inheriting definition.

    Returns:
        Tuple of (merged base sections, child sections that matched no base
        section), both in declaration order.
    """
    excluded = set(child.excluded_sections)
    own = {section.section_id: section for section in reversed(child.sections)}
    consumed: set[str] = set()

    merged: list[SectionSpec] = []
    for base_section in base.sections:
        section_id = base_section.section_id
        if section_id in excluded:
            continue
        if section_id in own:
            merged.append(merge_section(base_section, own[section_id]))
            consumed.add(section_id)
        elif section_id in child.section_overrides:
            merged.append(
                base_section.model_copy(
                    update={"template_path": child.section_overrides[section_id]}
                )
            )
        else:
            merged.append(base_section)

    remaining = [s for s in child.sections if s.section_id not in consumed]
    return merged, remaining


class TemplateResolver:
    """Resolves template ids into merged, cached ResolvedTemplates.

    Example:
        >>> source = InMemoryTemplateSource()
        >>> source.add("templates/base.yaml", "sections: [{sectionId: a}]")
        >>> resolver = TemplateResolver(source)
        >>> resolver.resolve("base").section_ids
        ['a']
    """

    def __init__(
        self,
        source: "TemplateSource",
        *,
        template_cache: "CacheStore[ResolvedTemplate] | None" = None,
        raw_cache: "CacheStore[bytes] | None" = None,
        prefix: str = DEFAULT_PREFIX,
        extensions: "Sequence[str]" = DEFAULT_EXTENSIONS,
        logger: "FilteringBoundLogger | None" = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            source: Where template and resource bytes come from.
            template_cache: Cache of resolved templates keyed by resolved id.
                Defaults to an in-memory single-flight cache.
            raw_cache: Cache of raw bytes keyed by path. Defaults to an
                in-memory single-flight cache.
            prefix: Directory tried in front of a bare id.
            extensions: Extensions tried after the bare id, in order.
            logger: Logger for resolution events.
        """
        self._source: "TemplateSource" = source
        self._template_cache: "CacheStore[ResolvedTemplate]" = (
            template_cache if template_cache is not None else MemoryCacheStore()
        )
        self._raw_cache: "CacheStore[bytes]" = (
            raw_cache if raw_cache is not None else MemoryCacheStore()
        )
        self._prefix: str = prefix.strip("/")
        self._extensions: tuple[str, ...] = tuple(extensions)
        self._logger: "FilteringBoundLogger" = (
            logger if logger is not None else get_logger("resolver")
        )

    @classmethod
    def uncached(
        cls,
        source: "TemplateSource",
        **kwargs: object,
    ) -> "TemplateResolver":
        """Create a resolver whose caches never store anything."""
        return cls(
            source,
            template_cache=NullCacheStore(),
            raw_cache=NullCacheStore(),
            **kwargs,  # pyright: ignore[reportArgumentType]
        )

    # =========================================================================
    # Lookup
    # =========================================================================

    def candidate_paths(self, template_id: str) -> list[str]:
        """List the paths tried for a template id, in order."""
        prefixed = f"{self._prefix}/{template_id}" if self._prefix else template_id
        candidates = [template_id, prefixed]
        for ext in self._extensions:
            candidates.append(f"{template_id}{ext}")
            candidates.append(f"{prefixed}{ext}")
        # Without a prefix the pairs collapse to duplicates
        return list(dict.fromkeys(candidates))

    def locate(self, template_id: str) -> str | None:
        """Return the first candidate path the source has, or None."""
        for candidate in self.candidate_paths(template_id):
            if self._source.exists(candidate):
                return candidate
        return None

    def get_resource_bytes(self, path: str) -> bytes:
        """Fetch raw bytes for a template or resource through the byte cache.

        Args:
            path: Source-relative path (a form file, a markup template...).

        Returns:
            The resource content.

        Raises:
            FileNotFoundError: If the source has no such path.
        """

        def fetch() -> bytes:
            self._logger.info("Fetching raw resource", path=path)
            return self._source.read_bytes(path)

        return self._raw_cache.get_or_compute(path, fetch)

    def load_definition(self, template_id: str) -> TemplateDefinition:
        """Load and parse the raw definition for an already-resolved id.

        Args:
            template_id: Template id with no placeholders left.

        Returns:
            The parsed definition, before inheritance and fragments.

        Raises:
            TemplateNotFoundError: If no candidate path exists.
            UnsupportedFormatError: If the located path has no known extension.
            InvalidTemplateError: If the content cannot be parsed.
        """
        path = self.locate(template_id)
        if path is None:
            msg = (
                f"Template not found for id '{template_id}'. "
                f"Tried: {', '.join(self.candidate_paths(template_id))}"
            )
            raise TemplateNotFoundError(msg, template_id=template_id)

        try:
            content = self.get_resource_bytes(path)
        except FileNotFoundError as e:
            msg = f"Template '{template_id}' disappeared while reading {path}"
            raise TemplateNotFoundError(msg, template_id=template_id) from e

        try:
            return parse_template(content, path)
        except TemplateError as e:
            e.template_id = template_id
            raise

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve(
        self,
        template_id: str,
        variables: "Mapping[str, object] | None" = None,
    ) -> ResolvedTemplate:
        """Resolve a template id into a merged ResolvedTemplate.

        Results are cached by resolved id alone. Variables used only in
        ``baseTemplateId`` or fragment ids do not reach the key, so a later
        request with different values for them gets the cached template.

        Args:
            template_id: Template id, possibly containing ``${path}``
                placeholders.
            variables: Values for placeholders in the id and in base and
                fragment references.

        Returns:
            The resolved template, shared from the cache when possible.

        Raises:
            UnresolvedPlaceholderError: If a placeholder has no value.
            TemplateNotFoundError: If a template in the chain does not exist.
            UnsupportedFormatError: If a template file has an unknown extension.
            InvalidTemplateError: If a template file cannot be parsed.
            CyclicTemplateError: If base/fragment references form a cycle.
        """
        resolved_id = resolve_placeholders(template_id, variables)
        return self._resolve(resolved_id, variables or {})

    def _resolve(
        self,
        resolved_id: str,
        variables: "Mapping[str, object]",
    ) -> ResolvedTemplate:
        def compute() -> ResolvedTemplate:
            self._logger.info("Resolving template (cache miss)", template_id=resolved_id)
            # Checked before recursing so a cycle never waits on its own flight
            self.check_cycles(resolved_id, variables)
            return self._build(resolved_id, variables)

        return self._template_cache.get_or_compute(resolved_id, compute)

    def check_cycles(
        self,
        template_id: str,
        variables: "Mapping[str, object] | None" = None,
    ) -> None:
        """Fail if base/fragment references from template_id form a cycle.

        Args:
            template_id: Resolved id to start from.
            variables: Values for placeholders in references.

        Raises:
            CyclicTemplateError: If a template is reachable from itself.
        """
        values: "Mapping[str, object]" = variables or {}
        path: list[str] = []
        finished: set[str] = set()

        def visit(current: str) -> None:
            if current in path:
                chain = (*path[path.index(current) :], current)
                msg = f"Template references form a cycle: {' -> '.join(chain)}"
                raise CyclicTemplateError(msg, chain=chain)
            if current in finished:
                return
            path.append(current)
            definition = self.load_definition(current)
            for reference in definition.references:
                visit(resolve_placeholders(reference, values, template_id=current))
            path.pop()
            finished.add(current)

        visit(template_id)

    def _build(
        self,
        resolved_id: str,
        variables: "Mapping[str, object]",
    ) -> ResolvedTemplate:
        definition = self.load_definition(resolved_id)

        sections: list[SectionSpec] = []
        own_sections: list[SectionSpec] = list(definition.sections)
        header_footer = definition.header_footer_config
        description = definition.description
        metadata = dict(definition.metadata)

        if definition.base_template_id:
            base_id = resolve_placeholders(
                definition.base_template_id, variables, template_id=resolved_id
            )
            base = self._resolve(base_id, variables)
            sections, own_sections = merge_with_base(base, definition)
            if header_footer is None:
                header_footer = base.header_footer_config
            if description is None:
                description = base.description
            metadata = {**base.metadata, **metadata}

        seen = {section.section_id for section in sections}

        for fragment_ref in definition.included_fragments:
            fragment_id = resolve_placeholders(
                fragment_ref, variables, template_id=resolved_id
            )
            fragment = self._resolve(fragment_id, variables)
            for section in fragment.sections:
                if section.section_id in seen:
                    self._logger.warning(
                        "Dropping duplicate fragment section",
                        template_id=resolved_id,
                        fragment_id=fragment_id,
                        section_id=section.section_id,
                    )
                    continue
                seen.add(section.section_id)
                sections.append(section)

        for section in own_sections:
            if section.section_id in seen:
                self._logger.warning(
                    "Dropping duplicate section",
                    template_id=resolved_id,
                    section_id=section.section_id,
                )
                continue
            seen.add(section.section_id)
            sections.append(section)

        # list.sort is stable: ties keep base, fragment, own order
        sections.sort(key=lambda section: section.order)

        return ResolvedTemplate(
            template_id=definition.template_id or resolved_id,
            description=description,
            sections=tuple(sections),
            header_footer_config=header_footer,
            metadata=metadata,
        )

    # =========================================================================
    # Cache Management
    # =========================================================================

    def clear_cache(self) -> None:
        """Evict every resolved template and every cached raw resource."""
        self._logger.info("Clearing template and resource caches")
        self._template_cache.clear()
        self._raw_cache.clear()

    def warm(
        self,
        template_ids: "Iterable[str]",
        variables: "Mapping[str, object] | None" = None,
    ) -> list[str]:
        """Resolve templates up front so the first request hits the cache.

        Failures are logged and skipped.

        Args:
            template_ids: Ids to resolve.
            variables: Values for placeholders.

        Returns:
            The ids that resolved successfully.
        """
        warmed: list[str] = []
        for template_id in template_ids:
            try:
                self.resolve(template_id, variables)
            except TemplateError as e:
                self._logger.warning(
                    "Failed to warm template",
                    template_id=template_id,
                    code=e.code,
                    error=e.description,
                )
                continue
            warmed.append(template_id)
        self._logger.info("Template cache warmed", count=len(warmed))
        return warmed
