"""Build a TemplateResolver from configuration."""

from typing import TYPE_CHECKING

from docgen.templates._cache import MemoryCacheStore, NullCacheStore
from docgen.templates._resolver import TemplateResolver
from docgen.templates._sources import create_source

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from docgen.config import Config
    from docgen.templates._cache import CacheStore
    from docgen.templates._models import ResolvedTemplate


def create_resolver(
    config: "Config",
    *,
    logger: "FilteringBoundLogger | None" = None,
) -> TemplateResolver:
    """Create a resolver wired to the configured sources and caches.

    Args:
        config: Loaded configuration.
        logger: Optional logger; defaults to the shared docgen logger.

    Returns:
        A ready-to-use TemplateResolver.
    """
    templates = config.templates
    source = create_source(templates.search_paths, package=templates.package)

    template_cache: "CacheStore[ResolvedTemplate]"
    raw_cache: "CacheStore[bytes]"
    if config.cache.enabled:
        template_cache = MemoryCacheStore()
        raw_cache = MemoryCacheStore()
    else:
        template_cache = NullCacheStore()
        raw_cache = NullCacheStore()

    return TemplateResolver(
        source,
        template_cache=template_cache,
        raw_cache=raw_cache,
        prefix=templates.prefix,
        extensions=templates.extensions,
        logger=logger,
    )
