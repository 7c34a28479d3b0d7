# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from personagen.config.persona import RecordVariant
from personagen.config.utils.constants import PARQUET_EXTENSION
from personagen.engine.pipeline.report import FileOutcome, OperationType, OutcomeError, outcome_from_write_result
from personagen.engine.storage.json_codec import deserialize_records, parse_records
from personagen.engine.storage.parquet_writer import ParquetRecordWriter
from personagen.errors import PersonaGenError
from personagen.logging import RandomEmoji

logger = logging.getLogger(__name__)


def converted_output_path(output_dir: Path, json_path: Path) -> Path:
    """Output path for a JSON file found directly in the input tree: ``<output_dir>/<file name>.parquet``."""
    return output_dir / f"{json_path.name}{PARQUET_EXTENSION}"


def archive_entry_output_path(output_dir: Path, archive_subdir: Path, entry_path: PurePath) -> Path:
    """Output path for a JSON archive entry: ``<output_dir>/<archive subdir>/<entry path>.parquet``.

    Args:
        output_dir: Root directory for converted parquet files.
        archive_subdir: Archive path relative to the input root, without ``.zip``.
        entry_path: Normalized path of the entry inside the archive.
    """
    return output_dir / archive_subdir / entry_path.parent / f"{entry_path.name}{PARQUET_EXTENSION}"


class JsonToParquetConverter:
    """Converts a JSON array of records into a parquet file.

    Args:
        writer: Parquet writer configured for conversion output.
        variant: Record variant the JSON elements are parsed as.
        skip_invalid_records: If True, invalid records are reported and skipped. Otherwise the
            first invalid record aborts the file and nothing is written.
    """

    def __init__(
        self,
        writer: ParquetRecordWriter,
        variant: RecordVariant | str = RecordVariant.FLAT,
        *,
        skip_invalid_records: bool = False,
    ):
        self._writer = writer
        self._variant = RecordVariant(variant)
        self._skip_invalid_records = skip_invalid_records

    def convert(self, json_path: Path, output_path: Path) -> FileOutcome:
        logger.info(f"{RandomEmoji.loading()} Converting {json_path} -> {output_path}")
        try:
            data = json_path.read_bytes()
        except OSError as e:
            logger.error(f"Failed to read input file {json_path}: {e}")
            return FileOutcome.failed(json_path, OperationType.CONVERT, e, output_path=output_path)

        parse_errors: list[OutcomeError] = []
        try:
            if self._skip_invalid_records:
                parsed = parse_records(data, self._variant)
                for record_error in parsed.errors:
                    logger.warning(f"Skipping invalid record in {json_path}: {record_error.describe()}")
                    parse_errors.append(OutcomeError(error_type="RecordParseError", message=record_error.describe()))
                records = parsed.records
            else:
                records = deserialize_records(data, self._variant)
            write_result = self._writer.write(output_path, records, self._variant)
        except PersonaGenError as e:
            logger.error(f"Failed to convert {json_path}: {e}")
            return FileOutcome.failed(json_path, OperationType.CONVERT, e, output_path=output_path)

        return outcome_from_write_result(
            write_result,
            path=json_path,
            operation=OperationType.CONVERT,
            errors=parse_errors,
        )
