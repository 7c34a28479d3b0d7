# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Derive parquet schemas and rows from the record model's ``ParquetField`` metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import personagen.lazy_heavy_imports as lazy
from personagen.config.persona import (
    ParquetConvertedType,
    ParquetPhysicalType,
    RecordBase,
    RecordField,
    RecordVariant,
    is_nested_record,
    iter_record_fields,
    record_model_for,
)

if TYPE_CHECKING:
    import pyarrow as pa


def build_arrow_schema(variant: RecordVariant | str) -> pa.Schema:
    return lazy.pa.schema(_arrow_fields(record_model_for(variant)))


def schema_nesting_depth(variant: RecordVariant | str) -> int:
    """Number of nested group levels below the record root (0 for a flat record)."""
    return _nesting_depth(record_model_for(variant))


def record_to_row(record: RecordBase) -> dict[str, Any]:
    """Map a record to a row keyed by parquet column names."""
    row = {}
    for record_field in iter_record_fields(type(record)):
        value = getattr(record, record_field.attr_name)
        row[record_field.parquet.name] = record_to_row(value) if isinstance(value, RecordBase) else value
    return row


def _arrow_fields(model: type[RecordBase]) -> list[pa.Field]:
    return [lazy.pa.field(rf.parquet.name, _arrow_type(rf), nullable=False) for rf in iter_record_fields(model)]


def _arrow_type(record_field: RecordField) -> pa.DataType:
    physical_type = record_field.parquet.physical_type
    if physical_type == ParquetPhysicalType.GROUP:
        if not is_nested_record(record_field.annotation):
            raise TypeError(f"Group column {record_field.parquet.name!r} must be declared on a nested record")
        return lazy.pa.struct(_arrow_fields(record_field.annotation))
    if physical_type == ParquetPhysicalType.BYTE_ARRAY:
        if record_field.parquet.converted_type == ParquetConvertedType.UTF8:
            return lazy.pa.string()
        return lazy.pa.binary()
    if physical_type == ParquetPhysicalType.BOOLEAN:
        return lazy.pa.bool_()
    raise TypeError(f"Unsupported parquet physical type: {physical_type}")


def _nesting_depth(model: type[RecordBase]) -> int:
    depths = [
        1 + _nesting_depth(rf.annotation)
        for rf in iter_record_fields(model)
        if rf.parquet.physical_type == ParquetPhysicalType.GROUP
    ]
    return max(depths, default=0)
