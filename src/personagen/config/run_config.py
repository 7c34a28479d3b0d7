# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pathlib import Path

from pydantic import Field, ValidationError, model_validator
from typing_extensions import Self

from personagen.config.base import ExportableConfigBase
from personagen.config.errors import InvalidConfigError, InvalidEnumValueError, InvalidRunModeError
from personagen.config.persona import RecordVariant
from personagen.config.utils.constants import (
    CONVERSION_MAX_NESTING_DEPTH,
    DEFAULT_GENERATED_DIR,
    DEFAULT_INPUT_DIR,
    DEFAULT_MAX_ARCHIVE_WORKERS,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_ROW_GROUP_SIZE_BYTES,
    GENERATION_MAX_NESTING_DEPTH,
)
from personagen.config.utils.io_helpers import load_config_file
from personagen.config.utils.type_helpers import StrEnum, resolve_string_enum


class ParquetCompression(StrEnum):
    NONE = "none"
    SNAPPY = "snappy"
    GZIP = "gzip"
    ZSTD = "zstd"


class ParquetWriterSettings(ExportableConfigBase):
    """Settings applied when opening a parquet file for writing.

    Attributes:
        row_group_size_bytes: Maximum uncompressed size of a row group before a new one is started.
        compression: Block compression codec applied to column chunks.
        max_nesting_depth: Deepest group nesting the writer accepts. Writer setup fails for record
            schemas that nest deeper.
    """

    row_group_size_bytes: int = Field(default=DEFAULT_ROW_GROUP_SIZE_BYTES, gt=0)
    compression: ParquetCompression = ParquetCompression.NONE
    max_nesting_depth: int = Field(default=GENERATION_MAX_NESTING_DEPTH, ge=0)


def _default_conversion_writer() -> ParquetWriterSettings:
    return ParquetWriterSettings(
        compression=ParquetCompression.SNAPPY,
        max_nesting_depth=CONVERSION_MAX_NESTING_DEPTH,
    )


class RunConfig(ExportableConfigBase):
    """Runtime configuration for a generation or conversion run.

    Attributes:
        input_dir: Directory scanned recursively by the conversion mode. Archives are extracted
            beneath it. Default is ``input``.
        output_dir: Directory that receives converted parquet files. Default is ``output``.
        generated_dir: Directory that receives generated JSON and parquet artifacts. Default is
            ``generatedData``.
        max_archive_workers: Maximum number of archives extracted concurrently. Must be >= 1.
            Default is 4.
        conversion_variant: Record variant that converted JSON files are parsed as. Default is flat.
        skip_invalid_records: If True, records that fail to parse are reported and skipped instead
            of aborting the file. Default is False.
        generation_writer: Parquet settings for generated artifacts (uncompressed by default).
        conversion_writer: Parquet settings for converted files (snappy by default).
        disable_early_shutdown: If True, archive tasks are never cancelled because of the error rate.
            Default is True.
        shutdown_error_rate: Error rate threshold (0.0-1.0) that stops submitting archive tasks when
            early shutdown is enabled. Default is 0.5.
        shutdown_error_window: Minimum number of completed archive tasks before error rate
            monitoring begins. Must be >= 0. Default is 10.
    """

    input_dir: Path = DEFAULT_INPUT_DIR
    output_dir: Path = DEFAULT_OUTPUT_DIR
    generated_dir: Path = DEFAULT_GENERATED_DIR
    max_archive_workers: int = Field(default=DEFAULT_MAX_ARCHIVE_WORKERS, ge=1)
    conversion_variant: RecordVariant = RecordVariant.FLAT
    skip_invalid_records: bool = False
    generation_writer: ParquetWriterSettings = Field(default_factory=ParquetWriterSettings)
    conversion_writer: ParquetWriterSettings = Field(default_factory=_default_conversion_writer)
    disable_early_shutdown: bool = True
    shutdown_error_rate: float = Field(default=0.5, ge=0.0, le=1.0)
    shutdown_error_window: int = Field(default=10, ge=0)

    @model_validator(mode="after")
    def normalize_shutdown_settings(self) -> Self:
        """Normalize shutdown settings for compatibility."""
        if self.disable_early_shutdown:
            self.shutdown_error_rate = 1.0
        return self

    @classmethod
    def from_file(cls, file_path: Path) -> RunConfig:
        """Load and validate a run configuration from a YAML file.

        Raises:
            InvalidConfigError: If the file content does not describe a valid run configuration.
        """
        content = load_config_file(file_path)
        try:
            return cls.model_validate(content)
        except ValidationError as e:
            raise InvalidConfigError(f"🛑 Invalid run configuration in {file_path}: {e}") from e


class RunMode(StrEnum):
    GENERATE = "genData"
    CONVERT = "convertData"


def resolve_run_mode(value: RunMode | str) -> RunMode:
    """Resolve a run mode from its CLI spelling.

    Raises:
        InvalidRunModeError: If ``value`` is not one of the supported modes.
    """
    try:
        return resolve_string_enum(value, RunMode)
    except InvalidEnumValueError as e:
        raise InvalidRunModeError(f"Invalid type: {value}") from e
