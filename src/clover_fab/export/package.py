"""
Gerber package generation.

Separates pure encoding (Design -> ordered manifest of named buffers) from
persistence (manifest -> layer files + ZIP on disk). Output is staged in a
temporary directory next to the destination and published with a rename
only once everything succeeded; a failure leaves no partial output behind.

Example::

    from clover_fab.export import GerberPackager

    packager = GerberPackager("manufacturing/")
    result = packager.generate(design)
    print(result.archive_path)
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional

from clover_fab.archive import ZipEntry, build_zip
from clover_fab.exceptions import ArchiveError, CloverFabError, GenerationError
from clover_fab.schema import Design

from .drill import generate_drill_file
from .gerber import generate_copper, generate_edge_cuts, generate_silkscreen, generate_soldermask

logger = logging.getLogger(__name__)

OPERATION = "jlcpcb:generateGerberPackage"


@dataclass(frozen=True)
class LayerJob:
    """One generated file: name suffix and the encoder producing it."""

    suffix: str
    encode: Callable[[Design], str]


# Generation order is archive order
LAYER_PLAN: tuple[LayerJob, ...] = (
    LayerJob("-Edge_Cuts.gbr", generate_edge_cuts),
    LayerJob("-F_Cu.gbr", lambda d: generate_copper(d, "top")),
    LayerJob("-B_Cu.gbr", lambda d: generate_copper(d, "bottom")),
    LayerJob("-F_SilkS.gbr", lambda d: generate_silkscreen(d, "top")),
    LayerJob("-F_Mask.gbr", lambda d: generate_soldermask(d, "top")),
    LayerJob("-B_Mask.gbr", lambda d: generate_soldermask(d, "bottom")),
    LayerJob(".drl", generate_drill_file),
)


@dataclass(frozen=True)
class GeneratedFile:
    """A generated file held in memory."""

    name: str
    data: bytes

    def to_entry(self) -> ZipEntry:
        return ZipEntry(self.name, self.data)


def encode_design(design: Design) -> List[GeneratedFile]:
    """
    Encode every layer and the drill file, in archive order.

    Pure: no filesystem access.
    """
    stem = design.file_stem
    return [
        GeneratedFile(f"{stem}{job.suffix}", job.encode(design).encode("utf-8"))
        for job in LAYER_PLAN
    ]


@dataclass
class PackageResult:
    """Result of a package generation."""

    archive_path: Path
    layer_dir: Optional[Path]
    files: List[str] = field(default_factory=list)
    archive_size: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "archive_path": str(self.archive_path),
            "layer_dir": str(self.layer_dir) if self.layer_dir else None,
            "files": self.files,
            "archive_size": self.archive_size,
        }


def default_output_root() -> Path:
    """Default output location: ``<tmp>/clover-gerber``."""
    return Path(tempfile.gettempdir()) / "clover-gerber"


class GerberPackager:
    """
    Write a design's layer files and ZIP archive.

    Layout under ``output_root``::

        <stem>/            layer files (kept unless keep_layer_files=False)
        <stem>.zip         archive, entries in generation order

    Example::

        packager = GerberPackager("out/", workers=4)
        result = packager.generate(design)
    """

    def __init__(
        self,
        output_root: str | Path | None = None,
        *,
        workers: Optional[int] = None,
        compression_level: int = -1,
        keep_layer_files: bool = True,
    ):
        self.output_root = Path(output_root) if output_root else default_output_root()
        self.workers = workers
        self.compression_level = compression_level
        self.keep_layer_files = keep_layer_files

    def generate(self, design: Design) -> PackageResult:
        """
        Generate the package for a design.

        Raises:
            GenerationError: Encoding or writing a layer file failed
            ArchiveError: Building or publishing the archive failed
        """
        stem = design.file_stem
        logger.info(f"Generating Gerber package for {design.name!r}")

        try:
            files = encode_design(design)
        except CloverFabError as e:
            raise e.with_operation(OPERATION)
        except Exception as e:
            raise GenerationError(
                f"Failed to encode design: {e}", operation=OPERATION, context={"design": design.name}
            ) from e

        try:
            self.output_root.mkdir(parents=True, exist_ok=True)
            staging = Path(tempfile.mkdtemp(prefix=f".{stem}-", dir=self.output_root))
        except OSError as e:
            raise GenerationError(
                f"Cannot create output directory: {e}",
                operation=OPERATION,
                context={"output_root": str(self.output_root)},
            ) from e

        try:
            result = self._generate_staged(files, stem, staging)
        except BaseException:
            shutil.rmtree(staging, ignore_errors=True)
            raise

        shutil.rmtree(staging, ignore_errors=True)
        logger.info(f"Created {result.archive_path} ({result.archive_size} bytes)")
        return result

    def _generate_staged(self, files: List[GeneratedFile], stem: str, staging: Path) -> PackageResult:
        layer_stage = staging / stem
        try:
            layer_stage.mkdir()
        except OSError as e:
            raise GenerationError(
                f"Cannot create layer directory: {e}",
                operation=OPERATION,
                context={"directory": str(layer_stage)},
            ) from e

        # Layer files, written in generation order
        for generated in files:
            target = layer_stage / generated.name
            try:
                target.write_bytes(generated.data)
            except OSError as e:
                raise GenerationError(
                    f"Failed to write layer file: {e}",
                    operation=OPERATION,
                    context={"file": str(target)},
                ) from e
            logger.debug(f"Wrote {generated.name} ({len(generated.data)} bytes)")

        # The archive comes from the in-memory manifest, never a directory listing
        try:
            archive = build_zip(
                [f.to_entry() for f in files],
                level=self.compression_level,
                workers=self.workers,
            )
        except CloverFabError as e:
            raise e.with_operation(OPERATION)
        except Exception as e:
            raise ArchiveError(f"Failed to build archive: {e}", operation=OPERATION) from e

        archive_stage = staging / f"{stem}.zip"
        archive_path = self.output_root / f"{stem}.zip"
        layer_dir = self.output_root / stem if self.keep_layer_files else None

        previous = staging / f"{stem}.previous"
        moved_aside = False
        try:
            archive_stage.write_bytes(archive)
            if layer_dir is not None:
                if layer_dir.exists():
                    os.replace(layer_dir, previous)
                    moved_aside = True
                os.replace(layer_stage, layer_dir)
            os.replace(archive_stage, archive_path)
        except OSError as e:
            if moved_aside:
                self._restore_layers(previous, layer_dir)
            raise ArchiveError(
                f"Failed to publish package: {e}",
                operation=OPERATION,
                context={"archive": str(archive_path)},
            ) from e

        return PackageResult(
            archive_path=archive_path,
            layer_dir=layer_dir,
            files=[f.name for f in files],
            archive_size=len(archive),
        )

    @staticmethod
    def _restore_layers(previous: Path, layer_dir: Path) -> None:
        """Put the previous layer set back beside the previous archive."""
        shutil.rmtree(layer_dir, ignore_errors=True)
        try:
            os.replace(previous, layer_dir)
        except OSError as e:
            logger.error(f"Could not restore previous layer files in {layer_dir}: {e}")


def generate_gerber_package(
    design: Design,
    output_root: str | Path | None = None,
    **kwargs,
) -> Path:
    """
    Convenience function: generate the package and return the archive path.

    Args:
        design: Board design
        output_root: Output directory (default: <tmp>/clover-gerber)
        **kwargs: Passed to GerberPackager (workers, compression_level, ...)

    Returns:
        Path to the ZIP archive
    """
    return GerberPackager(output_root, **kwargs).generate(design).archive_path
