# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import threading
from collections import Counter
from pathlib import Path

from pydantic import BaseModel, Field, PrivateAttr

from personagen.config.run_config import RunMode
from personagen.config.utils.type_helpers import StrEnum
from personagen.engine.storage.parquet_writer import WriteResult, WriteStatus


class OperationType(StrEnum):
    DISCOVER = "discover"
    WRITE_JSON = "write_json"
    WRITE_PARQUET = "write_parquet"
    CONVERT = "convert"
    EXTRACT = "extract"


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class OutcomeError(BaseModel):
    error_type: str
    message: str

    @classmethod
    def from_exception(cls, error: BaseException) -> OutcomeError:
        return cls(error_type=type(error).__name__, message=str(error))


class FileOutcome(BaseModel):
    """Result of one file-level operation of a run."""

    path: Path
    operation: OperationType
    status: OutcomeStatus = OutcomeStatus.SUCCESS
    output_path: Path | None = None
    rows_written: int | None = None
    errors: list[OutcomeError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS

    @classmethod
    def failed(
        cls,
        path: Path,
        operation: OperationType,
        error: BaseException,
        output_path: Path | None = None,
    ) -> FileOutcome:
        return cls(
            path=path,
            operation=operation,
            status=OutcomeStatus.FAILED,
            output_path=output_path,
            errors=[OutcomeError.from_exception(error)],
        )


class RunReport(BaseModel):
    """Aggregate of every file outcome of a run. Safe to extend from worker threads."""

    mode: RunMode
    outcomes: list[FileOutcome] = Field(default_factory=list)
    _lock: threading.Lock = PrivateAttr(default_factory=threading.Lock)

    def add(self, *outcomes: FileOutcome) -> None:
        with self._lock:
            self.outcomes.extend(outcomes)

    @property
    def ok(self) -> bool:
        return all(outcome.ok for outcome in self.outcomes)

    @property
    def failures(self) -> list[FileOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.ok]

    @property
    def summary(self) -> dict[str, int]:
        return dict(Counter(outcome.status.value for outcome in self.outcomes))

    @property
    def error_counts(self) -> dict[str, int]:
        return dict(Counter(error.error_type for outcome in self.outcomes for error in outcome.errors))


def outcome_from_write_result(
    write_result: WriteResult,
    *,
    path: Path,
    operation: OperationType,
    errors: list[OutcomeError] | None = None,
) -> FileOutcome:
    """Fold a parquet write result, plus any earlier errors for the same file, into a file outcome."""
    errors = list(errors or [])
    errors.extend(
        OutcomeError(error_type="RowWriteError", message=f"row {row_error.index}: {row_error.message}")
        for row_error in write_result.row_errors
    )
    if write_result.error is not None:
        errors.append(OutcomeError(error_type="ParquetWriteError", message=write_result.error))

    if write_result.status == WriteStatus.FAILED:
        status = OutcomeStatus.FAILED
    elif errors:
        status = OutcomeStatus.PARTIAL
    else:
        status = OutcomeStatus.SUCCESS

    return FileOutcome(
        path=path,
        operation=operation,
        status=status,
        output_path=write_result.path,
        rows_written=write_result.rows_written,
        errors=errors,
    )
