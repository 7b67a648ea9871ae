"""Per-request document composition."""

from docgen.composition._composer import DocumentComposer
from docgen.composition._conditions import ConditionEvaluator, is_truthy
from docgen.composition._models import DocumentPlan, SectionOutput
from docgen.composition._overflow import (
    OVERFLOW_INDICATOR_TEXT,
    AddendumPayload,
    OverflowPaginator,
    OverflowResult,
    page_sizes,
)
from docgen.composition._view_models import (
    ViewModelRegistry,
    create_view_model_registry,
)

__all__ = [
    "OVERFLOW_INDICATOR_TEXT",
    "AddendumPayload",
    "ConditionEvaluator",
    "DocumentComposer",
    "DocumentPlan",
    "OverflowPaginator",
    "OverflowResult",
    "SectionOutput",
    "ViewModelRegistry",
    "create_view_model_registry",
    "is_truthy",
    "page_sizes",
]
