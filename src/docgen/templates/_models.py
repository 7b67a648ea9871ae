# pyright: reportExplicitAny=false
"""Template wire models.

Templates are authored in YAML or JSON with camelCase keys. Every model is a
frozen Pydantic model; merging produces new instances via ``model_copy``.
"""

from enum import StrEnum
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# =============================================================================
# Enums
# =============================================================================


class MappingType(StrEnum):
    """Field-mapping strategy selector.

    The values are the literals used in template files and are written back
    unchanged on re-serialization.
    """

    DIRECT = "DIRECT"
    JSONPATH = "JSONPATH"
    JSONATA = "JSONATA"
    CUSTOM = "CUSTOM"


class IndexPosition(StrEnum):
    """Where the display index goes in a repeating-group field name."""

    BEFORE_FIELD = "BEFORE_FIELD"
    AFTER_FIELD = "AFTER_FIELD"


class _WireModel(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_wire(self) -> dict[str, Any]:
        """Return a JSON-compatible dict with camelCase keys."""
        return self.model_dump(by_alias=True, mode="json", exclude_none=True)


# =============================================================================
# Mapping Configuration
# =============================================================================


class RepeatingGroupSpec(_WireModel):
    """Expands one set of field rules into indexed fields per collection item.

    Field names are ``prefix + index + separator + name + suffix`` for
    BEFORE_FIELD and ``prefix + name + separator + index + suffix`` for
    AFTER_FIELD.
    """

    prefix: str | None = Field(default=None, description="Field name prefix")
    suffix: str | None = Field(default=None, description="Field name suffix")
    start_index: int = Field(default=1, description="Display index of the first item")
    index_separator: str | None = Field(
        default=None, description="Separator between the index and the field name"
    )
    index_position: IndexPosition = Field(
        default=IndexPosition.BEFORE_FIELD,
        description="Whether the index precedes or follows the field name",
    )
    max_items: int | None = Field(
        default=None, description="Maximum number of items to expand"
    )
    fields: dict[str, str] = Field(
        default_factory=dict,
        description="Logical field name to expression relative to one item",
    )


class MappingGroup(_WireModel):
    """A set of field rules sharing one strategy and an optional base path."""

    mapping_type: MappingType = Field(
        default=MappingType.JSONPATH, description="Strategy for this group"
    )
    base_path: str | None = Field(
        default=None, description="Context expression evaluated once per group"
    )
    fields: dict[str, str] = Field(
        default_factory=dict, description="Field name to source expression"
    )
    repeating_group: RepeatingGroupSpec | None = Field(
        default=None, description="Expand fields once per item of base_path"
    )


class OverflowSpec(_WireModel):
    """Splits an oversized collection into a primary page plus addenda."""

    array_path: str | None = Field(default=None, description="Collection expression")
    mapping_type: MappingType = Field(
        default=MappingType.JSONPATH, description="Strategy for array_path"
    )
    max_items_in_main: int = Field(
        default=0, description="Items that fit on the primary page"
    )
    items_per_overflow_page: int = Field(
        default=0, description="Items per addendum page (<= 0 means unbounded)"
    )
    addendum_template_path: str | None = Field(
        default=None, description="Template used for addendum pages"
    )
    overflow_indicator_field: str | None = Field(
        default=None, description="Field set to a notice when overflow occurs"
    )


# =============================================================================
# Header / Footer
# =============================================================================


class HeaderTemplate(_WireModel):
    """Header definition passed through to the rendering layer."""

    render_type: str | None = None
    content: str | None = None
    alignment: str = "CENTER"
    margin_top: float = 50.0
    data: dict[str, Any] = Field(default_factory=dict)


class FooterTemplate(_WireModel):
    """Footer definition passed through to the rendering layer."""

    render_type: str | None = None
    content: str | None = None
    alignment: str = "CENTER"
    margin_bottom: float = 50.0
    include_page_numbers: bool = True
    page_number_format: str = "Page {page} of {total}"
    data: dict[str, Any] = Field(default_factory=dict)


class HeaderFooterConfig(_WireModel):
    """Headers and footers applied to rendered pages."""

    headers: tuple[HeaderTemplate, ...] = ()
    footers: tuple[FooterTemplate, ...] = ()
    apply_to_all_pages: bool = True
    exclude_pages: frozenset[int] = frozenset()


# =============================================================================
# Sections and Templates
# =============================================================================


class SectionSpec(_WireModel):
    """One section of a document template."""

    section_id: str = Field(description="Identifier unique within a template")
    type: str | None = Field(default=None, description="Rendering discriminator")
    template_path: str | None = Field(
        default=None, description="Form, markup or workbook template for the renderer"
    )
    order: int = Field(default=0, description="Ascending sort key")
    condition: str | None = Field(
        default=None, description="Expression deciding whether to render"
    )
    mapping_type: MappingType = Field(
        default=MappingType.JSONPATH, description="Strategy for field_mappings"
    )
    field_mappings: dict[str, str] = Field(
        default_factory=dict, description="Field name to source expression"
    )
    field_mapping_groups: tuple[MappingGroup, ...] = Field(
        default=(), description="Mapping groups; take precedence over field_mappings"
    )
    overflow_configs: tuple[OverflowSpec, ...] = Field(
        default=(), description="Overflow pagination rules"
    )
    view_model_type: str | None = Field(
        default=None, description="Named payload builder for markup sections"
    )

    @property
    def has_mapping_groups(self) -> bool:
        """Whether the section maps through field_mapping_groups."""
        return bool(self.field_mapping_groups)

    @property
    def has_field_mappings(self) -> bool:
        """Whether the section produces a field map at all."""
        return bool(self.field_mapping_groups or self.field_mappings)


class TemplateDefinition(_WireModel):
    """A template as authored, before inheritance and fragments are applied."""

    template_id: str = ""
    description: str | None = None
    base_template_id: str | None = None
    sections: tuple[SectionSpec, ...] = ()
    excluded_sections: tuple[str, ...] = ()
    section_overrides: dict[str, str] = Field(default_factory=dict)
    included_fragments: tuple[str, ...] = ()
    header_footer_config: HeaderFooterConfig | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    @property
    def references(self) -> tuple[str, ...]:
        """Raw ids of the base template and fragments, in resolution order."""
        base = (self.base_template_id,) if self.base_template_id else ()
        return base + tuple(self.included_fragments)


class ResolvedTemplate(_WireModel):
    """A fully merged template with no base or fragment references."""

    template_id: str
    description: str | None = None
    sections: tuple[SectionSpec, ...] = ()
    header_footer_config: HeaderFooterConfig | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)

    def get_section(self, section_id: str) -> SectionSpec | None:
        """Return the section with the given id, or None."""
        for section in self.sections:
            if section.section_id == section_id:
                return section
        return None

    @property
    def section_ids(self) -> list[str]:
        """Section ids in render order."""
        return [section.section_id for section in self.sections]
