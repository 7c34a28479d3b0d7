# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, Field

import personagen.lazy_heavy_imports as lazy
from personagen.config.persona import RecordBase, RecordVariant, record_model_for
from personagen.config.run_config import ParquetWriterSettings
from personagen.config.utils.io_helpers import ensure_parent_dir_exists
from personagen.config.utils.type_helpers import StrEnum
from personagen.engine.storage.errors import ParquetWriteError, SchemaNestingError
from personagen.engine.storage.parquet_schema import build_arrow_schema, record_to_row, schema_nesting_depth
from personagen.logging import RandomEmoji

if TYPE_CHECKING:
    import pyarrow as pa
    import pyarrow.parquet as pq

logger = logging.getLogger(__name__)


class WriteStatus(StrEnum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class RowError(BaseModel):
    index: int
    message: str


class WriteResult(BaseModel):
    path: Path
    variant: RecordVariant
    status: WriteStatus = WriteStatus.SUCCESS
    rows_written: int = 0
    row_errors: list[RowError] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == WriteStatus.SUCCESS


class ParquetRecordWriter:
    """Writes records of one variant to a local parquet file.

    Every record becomes one row, in input order. Rows that cannot be converted to the
    variant's schema are logged and skipped; the remaining rows are still written. A
    file that fails to finalize may be left partially written.
    """

    def __init__(self, settings: ParquetWriterSettings | None = None):
        self._settings = settings or ParquetWriterSettings()

    @property
    def settings(self) -> ParquetWriterSettings:
        return self._settings

    def write(self, path: str | Path, records: Iterable[RecordBase], variant: RecordVariant | str) -> WriteResult:
        """Write records to ``path``.

        Raises:
            SchemaNestingError: If the variant's schema nests deeper than the configured limit.
        """
        path = Path(path)
        variant = RecordVariant(variant)
        result = WriteResult(path=path, variant=variant)

        self._check_nesting_depth(variant)
        schema = build_arrow_schema(variant)

        try:
            ensure_parent_dir_exists(path)
            writer = lazy.pq.ParquetWriter(str(path), schema, compression=self._settings.compression)
        except OSError as e:
            logger.error(f"Can't create parquet file {path}: {e}")
            result.status = WriteStatus.FAILED
            result.error = str(e)
            return result

        try:
            table = lazy.pa.Table.from_batches(self._to_batches(records, variant, schema, result), schema=schema)
            if table.num_rows > 0:
                writer.write_table(table, row_group_size=self._rows_per_group(table))
            result.rows_written = table.num_rows
        except (OSError, lazy.pa.ArrowException) as e:
            logger.error(f"Write error for {path}: {e}")
            result.status = WriteStatus.FAILED
            result.error = str(e)
        finally:
            self._finalize(writer, result)

        if result.status == WriteStatus.SUCCESS and result.row_errors:
            result.status = WriteStatus.PARTIAL
        if result.status != WriteStatus.FAILED:
            logger.info(f"{RandomEmoji.writing()} Write finished: {result.rows_written} row(s) to {path}")
        return result

    def _check_nesting_depth(self, variant: RecordVariant) -> None:
        depth = schema_nesting_depth(variant)
        if depth > self._settings.max_nesting_depth:
            raise SchemaNestingError(
                f"🛑 The {variant.value} record schema nests {depth} level(s) deep, but the writer "
                f"accepts at most {self._settings.max_nesting_depth}."
            )

    def _to_batches(
        self,
        records: Iterable[RecordBase],
        variant: RecordVariant,
        schema: pa.Schema,
        result: WriteResult,
    ) -> list[pa.RecordBatch]:
        model = record_model_for(variant)
        batches = []
        for index, record in enumerate(records):
            try:
                if not isinstance(record, model):
                    raise ParquetWriteError(f"expected a {model.__name__} record, got {type(record).__name__}")
                batches.append(lazy.pa.RecordBatch.from_pylist([record_to_row(record)], schema=schema))
            except (ParquetWriteError, TypeError, ValueError, lazy.pa.ArrowException) as e:
                logger.error(f"Write error at row {index} of {result.path}: {e}")
                result.row_errors.append(RowError(index=index, message=str(e)))
        return batches

    def _rows_per_group(self, table: pa.Table) -> int:
        average_row_bytes = max(table.nbytes / table.num_rows, 1)
        return max(1, int(self._settings.row_group_size_bytes // average_row_bytes))

    def _finalize(self, writer: pq.ParquetWriter, result: WriteResult) -> None:
        try:
            writer.close()
        except (OSError, lazy.pa.ArrowException) as e:
            logger.error(f"Finalize error for {result.path}: {e}")
            result.status = WriteStatus.FAILED
            result.error = result.error or str(e)
