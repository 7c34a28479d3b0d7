# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import threading
from pathlib import Path

import pytest

from personagen.config.persona import RecordVariant
from personagen.config.run_config import RunMode
from personagen.engine.archives.errors import ArchiveError
from personagen.engine.pipeline.report import (
    FileOutcome,
    OperationType,
    OutcomeError,
    OutcomeStatus,
    RunReport,
    outcome_from_write_result,
)
from personagen.engine.storage.parquet_writer import RowError, WriteResult, WriteStatus


@pytest.fixture
def stub_success_outcome() -> FileOutcome:
    return FileOutcome(path=Path("a.json"), operation=OperationType.CONVERT, output_path=Path("a.parquet"))


@pytest.fixture
def stub_failed_outcome() -> FileOutcome:
    return FileOutcome.failed(Path("b.zip"), OperationType.EXTRACT, ArchiveError("bad zip"))


def test_outcome_error_from_exception():
    error = OutcomeError.from_exception(ValueError("boom"))
    assert error.error_type == "ValueError"
    assert error.message == "boom"


def test_failed_outcome(stub_failed_outcome):
    assert not stub_failed_outcome.ok
    assert stub_failed_outcome.status == OutcomeStatus.FAILED
    assert stub_failed_outcome.errors == [OutcomeError(error_type="ArchiveError", message="bad zip")]


def test_empty_report_is_ok():
    report = RunReport(mode=RunMode.CONVERT)
    assert report.ok
    assert report.failures == []
    assert report.summary == {}


def test_report_aggregates_outcomes(stub_success_outcome, stub_failed_outcome):
    partial = FileOutcome(
        path=Path("c.json"),
        operation=OperationType.CONVERT,
        status=OutcomeStatus.PARTIAL,
        errors=[OutcomeError(error_type="RecordParseError", message="record 1")],
    )
    report = RunReport(mode=RunMode.CONVERT)
    report.add(stub_success_outcome, stub_failed_outcome)
    report.add(partial)

    assert not report.ok
    assert report.failures == [stub_failed_outcome, partial]
    assert report.summary == {"success": 1, "failed": 1, "partial": 1}
    assert report.error_counts == {"ArchiveError": 1, "RecordParseError": 1}


def test_report_add_from_threads(stub_success_outcome):
    report = RunReport(mode=RunMode.CONVERT)

    def add_many():
        for _ in range(100):
            report.add(stub_success_outcome)

    threads = [threading.Thread(target=add_many) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(report.outcomes) == 800


@pytest.mark.parametrize(
    "write_status,row_errors,error,earlier_errors,expected_status,expected_error_types",
    [
        (WriteStatus.SUCCESS, [], None, [], OutcomeStatus.SUCCESS, []),
        (
            WriteStatus.PARTIAL,
            [RowError(index=2, message="bad row")],
            None,
            [],
            OutcomeStatus.PARTIAL,
            ["RowWriteError"],
        ),
        (WriteStatus.FAILED, [], "disk full", [], OutcomeStatus.FAILED, ["ParquetWriteError"]),
        (
            WriteStatus.SUCCESS,
            [],
            None,
            [OutcomeError(error_type="RecordParseError", message="record 0")],
            OutcomeStatus.PARTIAL,
            ["RecordParseError"],
        ),
    ],
)
def test_outcome_from_write_result(
    write_status, row_errors, error, earlier_errors, expected_status, expected_error_types
):
    write_result = WriteResult(
        path=Path("out.parquet"),
        variant=RecordVariant.FLAT,
        status=write_status,
        rows_written=3,
        row_errors=row_errors,
        error=error,
    )

    outcome = outcome_from_write_result(
        write_result, path=Path("in.json"), operation=OperationType.CONVERT, errors=earlier_errors
    )

    assert outcome.path == Path("in.json")
    assert outcome.output_path == Path("out.parquet")
    assert outcome.rows_written == 3
    assert outcome.status == expected_status
    assert [e.error_type for e in outcome.errors] == expected_error_types
