"""Composition output: the per-request document plan."""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from docgen.composition._overflow import AddendumPayload
    from docgen.templates import HeaderFooterConfig, SectionSpec


@dataclass(frozen=True, slots=True)
class SectionOutput:
    """One rendered-to-be section.

    Exactly one of ``field_values`` and ``payload`` is meaningful: sections
    with field mappings get a flat field map, other sections carry the raw
    data or the view model built for them.
    """

    section: "SectionSpec"
    field_values: dict[str, str] | None = None
    payload: object = None
    addenda: "tuple[AddendumPayload, ...]" = ()

    @property
    def section_id(self) -> str:
        return self.section.section_id

    def to_dict(self) -> dict[str, Any]:
        """Render as a camelCase dictionary."""
        result: dict[str, Any] = {
            "sectionId": self.section.section_id,
            "type": self.section.type,
            "templatePath": self.section.template_path,
        }
        if self.field_values is not None:
            result["fieldValues"] = self.field_values
        else:
            result["payload"] = self.payload
        if self.addenda:
            result["addenda"] = [addendum.to_dict() for addendum in self.addenda]
        return result


@dataclass(frozen=True, slots=True)
class DocumentPlan:
    """Ordered section outputs for one request."""

    template_id: str
    sections: tuple[SectionOutput, ...] = ()
    header_footer_config: "HeaderFooterConfig | None" = None
    skipped: tuple[str, ...] = field(default=())

    @property
    def section_ids(self) -> list[str]:
        return [output.section_id for output in self.sections]

    @property
    def addenda(self) -> "list[AddendumPayload]":
        """All addendum payloads, in section order."""
        return [addendum for output in self.sections for addendum in output.addenda]

    def get_section(self, section_id: str) -> SectionOutput | None:
        for output in self.sections:
            if output.section_id == section_id:
                return output
        return None

    def to_dict(self) -> dict[str, Any]:
        """Render as a camelCase dictionary."""
        return {
            "templateId": self.template_id,
            "sections": [output.to_dict() for output in self.sections],
            "skipped": list(self.skipped),
            "headerFooterConfig": (
                self.header_footer_config.to_wire()
                if self.header_footer_config is not None
                else None
            ),
        }
