# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import logging
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from personagen.config.persona import Personas, RecordBase, RecordVariant, record_model_for
from personagen.config.utils.io_helpers import serialize_data
from personagen.engine.storage.errors import InvalidJsonDocumentError, RecordParseError

logger = logging.getLogger(__name__)


class RecordError(BaseModel):
    index: int
    field: str | None = None
    message: str

    def describe(self) -> str:
        location = f"record {self.index}" if self.field is None else f"record {self.index}, field {self.field!r}"
        return f"{location}: {self.message}"


class ParseResult(BaseModel):
    variant: RecordVariant
    records: list[RecordBase] = Field(default_factory=list)
    errors: list[RecordError] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.errors) == 0


def serialize_personas(personas: Personas) -> bytes:
    """Serialize generated personas to a UTF-8 JSON document of the form ``{"Persona": [...]}``."""
    return serialize_data(personas.model_dump(mode="json", by_alias=True)).encode("utf-8")


def load_json_array(data: bytes | str) -> list[Any]:
    """Decode a JSON document whose root must be an array.

    Raises:
        InvalidJsonDocumentError: If the document is malformed or its root is not an array.
    """
    try:
        document = json.loads(data)
    except ValueError as e:
        raise InvalidJsonDocumentError(f"🛑 Malformed JSON document: {e}") from e

    if not isinstance(document, list):
        raise InvalidJsonDocumentError(
            f"🛑 Expected a top-level JSON array of records, got {type(document).__name__}."
        )
    return document


def parse_records(data: bytes | str, variant: RecordVariant | str) -> ParseResult:
    """Parse a JSON array into records, keeping one outcome per record.

    Records that fail validation are reported in ``ParseResult.errors`` with their
    index and field location; the remaining records are still parsed.

    Args:
        data: The JSON document.
        variant: Record variant every element is validated against.

    Returns:
        The parsed records and per-record errors.

    Raises:
        InvalidJsonDocumentError: If the document itself cannot be decoded as an array.
    """
    model = record_model_for(variant)
    result = ParseResult(variant=variant)
    for index, element in enumerate(load_json_array(data)):
        try:
            result.records.append(model.model_validate(element))
        except ValidationError as e:
            result.errors.append(_to_record_error(index, e))
    return result


def deserialize_records(data: bytes | str, variant: RecordVariant | str) -> list[RecordBase]:
    """Parse a JSON array into records, failing on the first invalid record.

    Raises:
        InvalidJsonDocumentError: If the document cannot be decoded as an array.
        RecordParseError: If any record is missing a field, has an extra field, or has a
            field of the wrong JSON type.
    """
    result = parse_records(data, variant)
    if not result.ok:
        first_error = result.errors[0]
        raise RecordParseError(
            f"🛑 Invalid {RecordVariant(variant).value} record at {first_error.describe()}",
            index=first_error.index,
            field=first_error.field,
        )
    return result.records


def _to_record_error(index: int, error: ValidationError) -> RecordError:
    details = error.errors()[0]
    location = ".".join(str(part) for part in details["loc"]) or None
    return RecordError(index=index, field=location, message=details["msg"])
