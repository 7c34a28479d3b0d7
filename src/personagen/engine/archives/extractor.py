# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import shutil
import zipfile
import zlib
from pathlib import Path, PurePosixPath

from pydantic import BaseModel, Field

from personagen.config.utils.constants import JSON_EXTENSION, ZIP_EXTENSION
from personagen.engine.archives.errors import ArchiveError, UnsafeArchiveEntryError
from personagen.engine.pipeline.conversion import JsonToParquetConverter, archive_entry_output_path
from personagen.engine.pipeline.report import FileOutcome, OperationType, OutcomeError, OutcomeStatus
from personagen.logging import RandomEmoji

logger = logging.getLogger(__name__)


class ArchiveResult(BaseModel):
    extraction: FileOutcome
    conversions: list[FileOutcome] = Field(default_factory=list)

    @property
    def outcomes(self) -> list[FileOutcome]:
        return [self.extraction, *self.conversions]


def archive_subdir_for(input_root: Path, archive_path: Path) -> Path:
    """Path of the archive relative to ``input_root`` with the ``.zip`` suffix removed.

    ``input/a/c.zip`` gives ``a/c``, so archives sharing a name in different folders
    never share an extraction or output directory.

    Raises:
        ArchiveError: If the archive is not inside ``input_root``.
    """
    try:
        relative = archive_path.relative_to(input_root)
    except ValueError as e:
        raise ArchiveError(f"🛑 Archive {archive_path} is not inside the input directory {input_root}.") from e
    return relative.with_name(relative.name.removesuffix(ZIP_EXTENSION))


def extraction_dir_for(input_root: Path, archive_path: Path) -> Path:
    """Archives extract next to themselves: ``input/a/c.zip`` into ``input/a/c``."""
    return input_root / archive_subdir_for(input_root, archive_path)


class ArchiveExtractor:
    """Extracts zip archives and converts the JSON entries they contain.

    Entries are extracted in archive order. A JSON entry is converted right after it is
    written, before the next entry is read. Entries that would land outside the
    extraction directory are rejected.

    Args:
        input_root: Root of the input tree; each archive is extracted next to itself inside it.
        output_dir: Root directory for converted parquet files.
        converter: Converter applied to every extracted JSON entry.
    """

    def __init__(self, input_root: Path, output_dir: Path, converter: JsonToParquetConverter):
        self._input_root = input_root
        self._output_dir = output_dir
        self._converter = converter

    def extract(self, archive_path: Path) -> ArchiveResult:
        """Extract one archive.

        Raises:
            ArchiveError: If the archive is outside the input root or the extraction
                directory cannot be created.
        """
        archive_subdir = archive_subdir_for(self._input_root, archive_path)
        destination = self._input_root / archive_subdir
        result = ArchiveResult(
            extraction=FileOutcome(path=archive_path, operation=OperationType.EXTRACT, output_path=destination)
        )
        logger.info(f"{RandomEmoji.unpacking()} Unzipping {archive_path} into {destination}")

        try:
            archive = zipfile.ZipFile(archive_path)
        except (OSError, zipfile.BadZipFile) as e:
            logger.error(f"Failed to open archive {archive_path}: {e}")
            result.extraction = FileOutcome.failed(archive_path, OperationType.EXTRACT, e, output_path=destination)
            return result

        with archive:
            try:
                destination.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ArchiveError(f"🛑 Can't create extraction directory {destination}: {e}") from e

            for info in archive.infolist():
                self._extract_entry(archive, info, archive_path, archive_subdir, destination, result)

        if result.extraction.errors:
            result.extraction.status = OutcomeStatus.PARTIAL
        return result

    def _extract_entry(
        self,
        archive: zipfile.ZipFile,
        info: zipfile.ZipInfo,
        archive_path: Path,
        archive_subdir: Path,
        destination: Path,
        result: ArchiveResult,
    ) -> None:
        try:
            target = resolve_entry_target(destination, info.filename)
        except UnsafeArchiveEntryError as e:
            logger.warning(f"Skipping entry of {archive_path}: {e}")
            result.extraction.errors.append(OutcomeError.from_exception(e))
            return

        try:
            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                return
            target.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as source, open(target, "wb") as sink:
                shutil.copyfileobj(source, sink)
        except (OSError, RuntimeError, zipfile.BadZipFile, zlib.error) as e:
            logger.error(f"Failed to extract {info.filename!r} from {archive_path}: {e}")
            result.extraction.errors.append(OutcomeError.from_exception(e))
            return

        logger.debug(f"Extracted {info.filename!r} to {target}")
        if target.name.endswith(JSON_EXTENSION):
            # Same normalized entry path for extraction and output.
            entry_path = target.relative_to(destination.resolve())
            output_path = archive_entry_output_path(self._output_dir, archive_subdir, entry_path)
            result.conversions.append(self._converter.convert(target, output_path))


def resolve_entry_target(destination: Path, entry_name: str) -> Path:
    """Resolve where an archive entry is written, confined to ``destination``.

    Raises:
        UnsafeArchiveEntryError: If the entry name is absolute, contains parent references,
            or otherwise resolves outside ``destination``.
    """
    entry_path = PurePosixPath(entry_name.replace("\\", "/"))
    if entry_path.is_absolute() or ".." in entry_path.parts or not entry_path.parts:
        raise UnsafeArchiveEntryError(f"🛑 Archive entry {entry_name!r} escapes the extraction directory.")

    target = (destination / Path(*entry_path.parts)).resolve()
    if not target.is_relative_to(destination.resolve()):
        raise UnsafeArchiveEntryError(f"🛑 Archive entry {entry_name!r} escapes the extraction directory.")
    return target
