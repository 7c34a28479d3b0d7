# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pathlib import Path

DEFAULT_INPUT_DIR = Path("input")
DEFAULT_OUTPUT_DIR = Path("output")
DEFAULT_GENERATED_DIR = Path("generatedData")

GENERATED_JSON_SUBDIR = "JSON"
GENERATED_PARQUET_SUBDIR = "PARQUET"
GENERATED_FILE_STEM = "generated"

JSON_EXTENSION = ".json"
ZIP_EXTENSION = ".zip"
PARQUET_EXTENSION = ".parquet"

DEFAULT_ROW_GROUP_SIZE_BYTES = 128 * 1024 * 1024  # 128 MiB
DEFAULT_MAX_ARCHIVE_WORKERS = 4

GENERATION_MAX_NESTING_DEPTH = 2
CONVERSION_MAX_NESTING_DEPTH = 3

DOCUMENT_TYPES = ("CPF", "RG")
INCOME_MIN = 1000
INCOME_MAX = 9999

DEFAULT_FAKER_LOCALE = "en_US"
