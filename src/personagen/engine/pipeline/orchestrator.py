# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

from personagen.config.errors import InvalidFilePathError
from personagen.config.persona import Personas, RecordVariant
from personagen.config.run_config import RunConfig, RunMode, resolve_run_mode
from personagen.config.utils.constants import (
    GENERATED_FILE_STEM,
    GENERATED_JSON_SUBDIR,
    GENERATED_PARQUET_SUBDIR,
    JSON_EXTENSION,
    PARQUET_EXTENSION,
    ZIP_EXTENSION,
)
from personagen.config.utils.io_helpers import ensure_parent_dir_exists
from personagen.engine.archives.extractor import ArchiveExtractor, ArchiveResult, extraction_dir_for
from personagen.engine.pipeline.concurrency import ConcurrentThreadExecutor
from personagen.engine.pipeline.conversion import JsonToParquetConverter, converted_output_path
from personagen.engine.pipeline.report import FileOutcome, OperationType, RunReport, outcome_from_write_result
from personagen.engine.sampling_gen.persona_generator import PersonaGenerator
from personagen.engine.storage.json_codec import serialize_personas
from personagen.engine.storage.parquet_writer import ParquetRecordWriter
from personagen.errors import PersonaGenError
from personagen.logging import RandomEmoji

logger = logging.getLogger(__name__)


def generated_artifact_paths(generated_dir: Path, count: int) -> tuple[Path, Path]:
    """JSON and parquet paths of a generated batch of ``count`` records."""
    file_name = f"{GENERATED_FILE_STEM}-{count}"
    return (
        generated_dir / GENERATED_JSON_SUBDIR / f"{file_name}{JSON_EXTENSION}",
        generated_dir / GENERATED_PARQUET_SUBDIR / f"{file_name}{PARQUET_EXTENSION}",
    )


def is_hidden(path: Path) -> bool:
    return path.name.startswith(".")


def discover_input_files(input_root: Path) -> Iterator[Path]:
    """Walk ``input_root`` in sorted order and yield every regular, non-hidden file.

    Extraction directories of the archives found in the tree are not descended into;
    their contents are converted by the archive tasks that produce them.
    """
    extraction_dirs = {
        extraction_dir_for(input_root, archive_path)
        for archive_path in input_root.rglob(f"*{ZIP_EXTENSION}")
        if archive_path.is_file() and not is_hidden(archive_path)
    }
    for dir_path, dir_names, file_names in os.walk(input_root):
        current_dir = Path(dir_path)
        dir_names[:] = sorted(name for name in dir_names if current_dir / name not in extraction_dirs)
        for file_name in sorted(file_names):
            path = current_dir / file_name
            if not is_hidden(path) and path.is_file():
                yield path


class PersonaPipeline:
    """Runs the generation and conversion modes.

    Args:
        run_config: Paths, writer settings and concurrency limits for the run.
        generator: Persona generator used by the generation mode. If None, a time-seeded
            generator is created per run.
    """

    def __init__(self, run_config: RunConfig | None = None, *, generator: PersonaGenerator | None = None):
        self._run_config = run_config or RunConfig()
        self._generator = generator

    @property
    def run_config(self) -> RunConfig:
        return self._run_config

    def run(self, mode: RunMode | str, quantity: int = 0) -> RunReport:
        """Run one mode end to end.

        Raises:
            InvalidRunModeError: If ``mode`` is not a supported mode; no work is done.
            PersonaGenerationError: If persona synthesis fails.
        """
        mode = resolve_run_mode(mode)
        if mode == RunMode.GENERATE:
            return self.generate(quantity)
        return self.convert()

    def generate(self, quantity: int) -> RunReport:
        report = RunReport(mode=RunMode.GENERATE)
        generator = self._generator or PersonaGenerator()
        personas = generator.generate(quantity)

        json_path, parquet_path = generated_artifact_paths(self._run_config.generated_dir, len(personas))
        report.add(self._write_json(json_path, personas))
        report.add(self._write_parquet(parquet_path, personas))

        logger.info(f"{RandomEmoji.success()} Generated {len(personas)} persona(s)")
        return report

    def convert(self) -> RunReport:
        report = RunReport(mode=RunMode.CONVERT)
        input_dir = self._run_config.input_dir
        if not input_dir.is_dir():
            error = InvalidFilePathError(f"🛑 Input directory {input_dir} does not exist.")
            logger.error(str(error))
            report.add(FileOutcome.failed(input_dir, OperationType.DISCOVER, error))
            return report

        converter = JsonToParquetConverter(
            ParquetRecordWriter(self._run_config.conversion_writer),
            self._run_config.conversion_variant,
            skip_invalid_records=self._run_config.skip_invalid_records,
        )
        extractor = ArchiveExtractor(input_dir, self._run_config.output_dir, converter)

        logger.info(f"{RandomEmoji.start()} Converting JSON files found in {input_dir}")
        with ConcurrentThreadExecutor(
            max_workers=self._run_config.max_archive_workers,
            task_name="archive extraction",
            result_callback=self._make_archive_result_callback(report),
            error_callback=self._make_archive_error_callback(report),
            shutdown_error_rate=self._run_config.shutdown_error_rate,
            shutdown_error_window=self._run_config.shutdown_error_window,
            disable_early_shutdown=self._run_config.disable_early_shutdown,
        ) as executor:
            for path in discover_input_files(input_dir):
                if path.suffix == JSON_EXTENSION:
                    report.add(converter.convert(path, converted_output_path(self._run_config.output_dir, path)))
                elif path.suffix == ZIP_EXTENSION:
                    executor.submit(extractor.extract, path, context={"archive_path": path})

        logger.info(f"{RandomEmoji.success()} Conversion finished: {report.summary}")
        return report

    def _write_json(self, path: Path, personas: Personas) -> FileOutcome:
        try:
            ensure_parent_dir_exists(path)
            path.write_bytes(serialize_personas(personas))
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            return FileOutcome.failed(path, OperationType.WRITE_JSON, e, output_path=path)
        logger.info(f"{RandomEmoji.writing()} Wrote {len(personas)} persona(s) to {path}")
        return FileOutcome(path=path, operation=OperationType.WRITE_JSON, output_path=path, rows_written=len(personas))

    def _write_parquet(self, path: Path, personas: Personas) -> FileOutcome:
        writer = ParquetRecordWriter(self._run_config.generation_writer)
        try:
            write_result = writer.write(path, personas.persona, RecordVariant.RICH)
        except PersonaGenError as e:
            logger.error(f"Failed to set up parquet writer for {path}: {e}")
            return FileOutcome.failed(path, OperationType.WRITE_PARQUET, e, output_path=path)
        return outcome_from_write_result(write_result, path=path, operation=OperationType.WRITE_PARQUET)

    def _make_archive_result_callback(self, report: RunReport):
        def callback(result: ArchiveResult, *, context: dict | None = None) -> None:
            report.add(*result.outcomes)

        return callback

    def _make_archive_error_callback(self, report: RunReport):
        def callback(exc: Exception, *, context: dict | None = None) -> None:
            archive_path = (context or {}).get("archive_path", Path())
            logger.error(f"Archive task for {archive_path} failed: {exc}")
            report.add(FileOutcome.failed(archive_path, OperationType.EXTRACT, exc))

        return callback
