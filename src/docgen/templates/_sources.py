# ruff: noqa: TC003  # Path needed at runtime for dataclass fields
"""Template byte sources.

A TemplateSource answers two questions for a slash-separated relative path:
does it exist, and what are its bytes. The resolver only talks to this
protocol, so templates can live on disk, inside an installed package, or
anywhere a caller can adapt.
"""

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from importlib.resources.abc import Traversable


@runtime_checkable
class TemplateSource(Protocol):
    """Protocol for read-only template and resource storage."""

    def exists(self, path: str) -> bool:
        """Check whether a file exists at the relative path.

        Args:
            path: Slash-separated path relative to the source root.

        Returns:
            True if ``read_bytes(path)`` would succeed.
        """
        ...

    def read_bytes(self, path: str) -> bytes:
        """Read the file at the relative path.

        Args:
            path: Slash-separated path relative to the source root.

        Returns:
            The file content.

        Raises:
            FileNotFoundError: If no file exists at the path.
        """
        ...


def _safe_parts(path: str) -> tuple[str, ...] | None:
    """Split a relative path, rejecting absolute paths and parent references."""
    pure = PurePosixPath(path)
    if pure.is_absolute() or ".." in pure.parts or not pure.parts:
        return None
    return pure.parts


@dataclass(frozen=True, slots=True)
class FileSystemTemplateSource:
    """Reads templates from one or more directories, first match wins.

    Attributes:
        search_paths: Root directories searched in order.
    """

    search_paths: tuple[Path, ...] = (Path(),)

    def _locate(self, path: str) -> Path | None:
        parts = _safe_parts(path)
        if parts is None:
            return None
        for root in self.search_paths:
            candidate = root.joinpath(*parts)
            if candidate.is_file():
                return candidate
        return None

    def exists(self, path: str) -> bool:
        """Check whether any search root holds the file."""
        return self._locate(path) is not None

    def read_bytes(self, path: str) -> bytes:
        """Read the file from the first search root that holds it."""
        located = self._locate(path)
        if located is None:
            msg = f"Template resource not found: {path}"
            raise FileNotFoundError(msg)
        return located.read_bytes()


@dataclass(frozen=True, slots=True)
class PackageTemplateSource:
    """Reads templates bundled inside an importable package.

    Attributes:
        package: Dotted name of the package holding the files.
    """

    package: str

    def _locate(self, path: str) -> "Traversable | None":
        parts = _safe_parts(path)
        if parts is None:
            return None
        try:
            candidate = resources.files(self.package).joinpath(*parts)
        except ModuleNotFoundError:
            return None
        return candidate if candidate.is_file() else None

    def exists(self, path: str) -> bool:
        """Check whether the package contains the file."""
        return self._locate(path) is not None

    def read_bytes(self, path: str) -> bytes:
        """Read the file from the package."""
        located = self._locate(path)
        if located is None:
            msg = f"Template resource not found in {self.package}: {path}"
            raise FileNotFoundError(msg)
        return located.read_bytes()


@dataclass(frozen=True, slots=True)
class ChainedTemplateSource:
    """Delegates to the first source that has the requested path.

    Attributes:
        sources: Sources consulted in order.
    """

    sources: tuple[TemplateSource, ...]

    @classmethod
    def of(cls, sources: "Iterable[TemplateSource]") -> "ChainedTemplateSource":
        """Build a chain from any iterable of sources."""
        return cls(sources=tuple(sources))

    def exists(self, path: str) -> bool:
        """Check whether any source has the file."""
        return any(source.exists(path) for source in self.sources)

    def read_bytes(self, path: str) -> bytes:
        """Read the file from the first source that has it."""
        for source in self.sources:
            if source.exists(path):
                return source.read_bytes(path)
        msg = f"Template resource not found: {path}"
        raise FileNotFoundError(msg)


@dataclass(slots=True)
class InMemoryTemplateSource:
    """Template source backed by a dict, for tests and embedding.

    Every successful read is appended to ``reads`` so tests can assert how
    often the underlying store was hit.

    Example:
        >>> source = InMemoryTemplateSource()
        >>> source.add("templates/invoice.yaml", "templateId: invoice")
        >>> source.exists("templates/invoice.yaml")
        True
    """

    files: dict[str, bytes] = field(default_factory=dict)
    reads: list[str] = field(default_factory=list)

    def add(self, path: str, content: str | bytes) -> None:
        """Store a file, encoding text as UTF-8."""
        self.files[path] = content.encode("utf-8") if isinstance(content, str) else content

    def remove(self, path: str) -> None:
        """Delete a file if present."""
        self.files.pop(path, None)

    def exists(self, path: str) -> bool:
        """Check whether the file is stored."""
        return path in self.files

    def read_bytes(self, path: str) -> bytes:
        """Return the stored bytes."""
        try:
            content = self.files[path]
        except KeyError:
            msg = f"Template resource not found: {path}"
            raise FileNotFoundError(msg) from None
        self.reads.append(path)
        return content


def create_source(
    search_paths: "Sequence[Path]" = (),
    *,
    package: str = "",
) -> TemplateSource:
    """Build the default source: filesystem roots, then a bundled package.

    Args:
        search_paths: Filesystem roots searched first, in order.
        package: Optional package whose bundled files are searched last.

    Returns:
        A single source, or a chain when both kinds are configured.
    """
    sources: list[TemplateSource] = []
    if search_paths:
        sources.append(FileSystemTemplateSource(search_paths=tuple(search_paths)))
    if package:
        sources.append(PackageTemplateSource(package=package))
    if len(sources) == 1:
        return sources[0]
    return ChainedTemplateSource.of(sources)
