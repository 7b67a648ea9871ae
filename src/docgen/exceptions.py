"""docgen exceptions."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class DocgenError(Exception):
    """Base exception for docgen errors."""


# =============================================================================
# Template Exceptions
# =============================================================================


class TemplateError(DocgenError):
    """Fatal template resolution error carrying a machine-readable code.

    Template errors mean the caller asked for the wrong document (a missing
    id, an unresolvable placeholder, a corrupt source) and always fail the
    whole request.

    Attributes:
        code: Machine-readable error code (e.g. ``TEMPLATE_NOT_FOUND``).
        description: Human-readable description of the failure.
        template_id: The template id involved, if known.
    """

    code: str = "TEMPLATE_ERROR"

    def __init__(
        self,
        description: str,
        *,
        template_id: str | None = None,
        code: str | None = None,
    ) -> None:
        """Initialize with a description and optional template context.

        Args:
            description: Human-readable description of the failure.
            template_id: The template id involved, if known.
            code: Override for the class-level error code.
        """
        if code is not None:
            self.code = code
        super().__init__(f"{self.code}: {description}")
        self.description: str = description
        self.template_id: str | None = template_id

    def to_dict(self) -> dict[str, str]:
        """Return the error as a ``{"code", "description"}`` mapping."""
        return {"code": self.code, "description": self.description}


class TemplateNotFoundError(TemplateError, KeyError):
    """Raised when no source can provide the requested template."""

    code = "TEMPLATE_NOT_FOUND"

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return f"{self.code}: {self.description}"


class UnresolvedPlaceholderError(TemplateError):
    """Raised when a ``${path}`` placeholder has no value in the variables.

    Attributes:
        placeholder: The dotted path that could not be resolved.
    """

    code = "UNRESOLVED_PLACEHOLDER"

    def __init__(
        self,
        description: str,
        *,
        placeholder: str,
        template_id: str | None = None,
    ) -> None:
        """Initialize with the unresolved placeholder path."""
        super().__init__(description, template_id=template_id)
        self.placeholder: str = placeholder


class UnsupportedFormatError(TemplateError):
    """Raised when a template source has no supported file extension."""

    code = "UNSUPPORTED_FORMAT"


class InvalidTemplateError(TemplateError):
    """Raised when a template source cannot be parsed or fails validation.

    Attributes:
        path: The source path that failed to parse.
    """

    code = "INVALID_TEMPLATE"

    def __init__(
        self,
        description: str,
        *,
        path: str | None = None,
        template_id: str | None = None,
    ) -> None:
        """Initialize with the failing source path."""
        super().__init__(description, template_id=template_id)
        self.path: str | None = path


class CyclicTemplateError(TemplateError):
    """Raised when base/fragment references form a cycle.

    Attributes:
        chain: The template ids along the cycle, ending with the repeated id.
    """

    code = "CYCLIC_TEMPLATE"

    def __init__(self, description: str, *, chain: tuple[str, ...]) -> None:
        """Initialize with the offending reference chain."""
        super().__init__(description, template_id=chain[0] if chain else None)
        self.chain: tuple[str, ...] = chain


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(DocgenError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: "Path | None" = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: "Path | None" = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
