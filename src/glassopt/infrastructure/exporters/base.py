"""Exporter protocol, format registry and multi-format export."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import TYPE_CHECKING, ClassVar, Protocol, runtime_checkable

if TYPE_CHECKING:
    from glassopt.infrastructure.bin_packing import PackingResult


logger = logging.getLogger(__name__)


@runtime_checkable
class Exporter(Protocol):
    """A document format for packing results.

    ``export_bytes`` builds the document in memory so the web API can
    stream it; ``export`` writes the same document to disk.
    """

    format_name: ClassVar[str]
    file_extension: ClassVar[str]
    media_type: ClassVar[str]

    def export(self, result: PackingResult, path: Path) -> None: ...

    def export_bytes(self, result: PackingResult) -> bytes: ...


class ExporterRegistry:
    """Format name to exporter class lookup, filled by ``@register``."""

    _exporters: ClassVar[dict[str, type[Exporter]]] = {}

    @classmethod
    def register(cls, format_name: str) -> Callable[[type[Exporter]], type[Exporter]]:
        def decorator(exporter_class: type[Exporter]) -> type[Exporter]:
            previous = cls._exporters.get(format_name)
            if previous is not None:
                logger.warning(
                    "Exporter %s replaces %s for format '%s'",
                    exporter_class.__name__,
                    previous.__name__,
                    format_name,
                )
            cls._exporters[format_name] = exporter_class
            return exporter_class

        return decorator

    @classmethod
    def get(cls, format_name: str) -> type[Exporter]:
        """Look up an exporter class.

        Raises:
            KeyError: If nothing is registered under ``format_name``.
        """
        try:
            return cls._exporters[format_name]
        except KeyError:
            known = ", ".join(cls.available_formats()) or "none"
            raise KeyError(
                f"No exporter registered for format '{format_name}'. "
                f"Available formats: {known}"
            ) from None

    @classmethod
    def create(cls, format_name: str) -> Exporter:
        """Instantiate the exporter for ``format_name`` with default options."""
        return cls.get(format_name)()

    @classmethod
    def available_formats(cls) -> list[str]:
        return sorted(cls._exporters)

    @classmethod
    def is_registered(cls, format_name: str) -> bool:
        return format_name in cls._exporters


class ExportManager:
    """Writes one packing result in several formats into ``output_dir``."""

    def __init__(self, output_dir: Path) -> None:
        self.output_dir = Path(output_dir)

    def export_all(
        self,
        formats: Iterable[str],
        result: PackingResult,
        project_name: str = "glassopt",
    ) -> dict[str, Path]:
        """Export ``result`` as ``{project_name}.{extension}`` per format.

        Every format is looked up before anything is written, so an unknown
        name leaves the output directory untouched.

        Returns:
            Mapping of format name to the written file.

        Raises:
            KeyError: If a format is not registered.
            OSError: If a file cannot be written.
        """
        exporters = {name: ExporterRegistry.create(name) for name in formats}
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written: dict[str, Path] = {}
        for name, exporter in exporters.items():
            target = self.output_dir / f"{project_name}.{exporter.file_extension}"
            logger.info("Writing %s export to %s", name, target)
            exporter.export(result, target)
            written[name] = target
        return written
