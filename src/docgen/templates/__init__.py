"""Template models, sources, caches and resolution."""

from docgen.templates._cache import CacheStore, MemoryCacheStore, NullCacheStore
from docgen.templates._factory import create_resolver
from docgen.templates._models import (
    FooterTemplate,
    HeaderFooterConfig,
    HeaderTemplate,
    IndexPosition,
    MappingGroup,
    MappingType,
    OverflowSpec,
    RepeatingGroupSpec,
    ResolvedTemplate,
    SectionSpec,
    TemplateDefinition,
)
from docgen.templates._parser import parse_template
from docgen.templates._placeholders import (
    has_placeholders,
    interpolate_template_fields,
    resolve_placeholders,
)
from docgen.templates._resolver import (
    TemplateResolver,
    merge_section,
    merge_with_base,
)
from docgen.templates._sources import (
    ChainedTemplateSource,
    FileSystemTemplateSource,
    InMemoryTemplateSource,
    PackageTemplateSource,
    TemplateSource,
    create_source,
)

__all__ = [
    "CacheStore",
    "ChainedTemplateSource",
    "FileSystemTemplateSource",
    "FooterTemplate",
    "HeaderFooterConfig",
    "HeaderTemplate",
    "InMemoryTemplateSource",
    "IndexPosition",
    "MappingGroup",
    "MappingType",
    "MemoryCacheStore",
    "NullCacheStore",
    "OverflowSpec",
    "PackageTemplateSource",
    "RepeatingGroupSpec",
    "ResolvedTemplate",
    "SectionSpec",
    "TemplateDefinition",
    "TemplateResolver",
    "TemplateSource",
    "create_resolver",
    "create_source",
    "has_placeholders",
    "interpolate_template_fields",
    "merge_section",
    "merge_with_base",
    "parse_template",
    "resolve_placeholders",
]
