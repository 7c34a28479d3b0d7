# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""Persona record model.

Two record variants exist and are never coerced into one another:

* ``RecordVariant.RICH``: :class:`Persona` with nested :class:`Personal` and
  :class:`PersonalDocuments` records. Produced by the persona generator.
* ``RecordVariant.FLAT``: :class:`FlatPersona` with name, email and id only.
  Read by the conversion pipeline by default.

Every leaf field carries a :class:`ParquetField` describing its column, and
fields that the generator fills carry a :class:`FakerDirective`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr
from pydantic.fields import FieldInfo

from personagen.config.utils.constants import DOCUMENT_TYPES, INCOME_MAX, INCOME_MIN
from personagen.config.utils.type_helpers import StrEnum

MetadataT = TypeVar("MetadataT")


class RecordVariant(StrEnum):
    RICH = "rich"
    FLAT = "flat"


class ParquetPhysicalType(StrEnum):
    BYTE_ARRAY = "BYTE_ARRAY"
    BOOLEAN = "BOOLEAN"
    GROUP = "GROUP"


class ParquetConvertedType(StrEnum):
    UTF8 = "UTF8"


@dataclass(frozen=True)
class ParquetField:
    """Column mapping for a record field.

    Composite fields use ``ParquetPhysicalType.GROUP`` and are encoded as a
    nested group whose children come from the nested record's own fields.
    """

    name: str
    physical_type: ParquetPhysicalType
    converted_type: ParquetConvertedType | None = None


@dataclass(frozen=True)
class FakerDirective:
    """How the persona generator fills a field.

    ``method`` names a faker provider method, called with ``kwargs``. The
    result is rendered through ``template`` when the field is a string.
    """

    method: str
    kwargs: Mapping[str, Any] = field(default_factory=dict, hash=False)
    template: str = "{}"


def _utf8(name: str) -> ParquetField:
    return ParquetField(
        name=name,
        physical_type=ParquetPhysicalType.BYTE_ARRAY,
        converted_type=ParquetConvertedType.UTF8,
    )


def _group(name: str) -> ParquetField:
    return ParquetField(name=name, physical_type=ParquetPhysicalType.GROUP)


class RecordBase(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )


class PersonalDocuments(RecordBase):
    document_type: Annotated[
        StrictStr,
        _utf8("documentType"),
        FakerDirective("random_element", {"elements": DOCUMENT_TYPES}),
    ] = Field(alias="DocumentType")
    document_number: Annotated[StrictStr, _utf8("DocumentNumber"), FakerDirective("ssn")] = Field(
        alias="DocumentNumber"
    )


class Personal(RecordBase):
    name: Annotated[StrictStr, _utf8("name"), FakerDirective("name")] = Field(alias="Name")
    email: Annotated[StrictStr, _utf8("email"), FakerDirective("email")] = Field(alias="Email")
    phone: Annotated[StrictStr, _utf8("phone"), FakerDirective("phone_number")] = Field(alias="Phone")
    home_town: Annotated[StrictStr, _utf8("hometown"), FakerDirective("city")] = Field(alias="HomeTown")
    brith_state: Annotated[StrictStr, _utf8("brithState"), FakerDirective("state")] = Field(alias="BrithState")
    profession: Annotated[StrictStr, _utf8("profession"), FakerDirective("job")] = Field(alias="Profession")
    income: Annotated[
        StrictStr,
        _utf8("income"),
        FakerDirective("random_int", {"min": INCOME_MIN, "max": INCOME_MAX}, template="{},00"),
    ] = Field(alias="Income")
    personal_documents: Annotated[PersonalDocuments, _group("personalDocuments")] = Field(alias="PersonalDocuments")


class Persona(RecordBase):
    person_id: Annotated[StrictStr, _utf8("personId"), FakerDirective("uuid4")] = Field(alias="PersonId")
    personal: Annotated[Personal, _group("personal")] = Field(alias="Personal")
    status: Annotated[StrictBool, ParquetField("status", ParquetPhysicalType.BOOLEAN), FakerDirective("pybool")] = (
        Field(alias="Status")
    )


class FlatPersona(RecordBase):
    name: Annotated[StrictStr, _utf8("name")]
    email: Annotated[StrictStr, _utf8("email")]
    id: Annotated[StrictStr, _utf8("id")]


class Personas(RecordBase):
    """JSON document root for generated output: ``{"Persona": [...]}``."""

    persona: list[Persona] = Field(default_factory=list, alias="Persona")

    def __len__(self) -> int:
        return len(self.persona)


class RecordField(NamedTuple):
    attr_name: str
    annotation: Any
    parquet: ParquetField
    faker: FakerDirective | None


_VARIANT_MODELS: dict[RecordVariant, type[RecordBase]] = {
    RecordVariant.RICH: Persona,
    RecordVariant.FLAT: FlatPersona,
}


def record_model_for(variant: RecordVariant | str) -> type[RecordBase]:
    return _VARIANT_MODELS[RecordVariant(variant)]


def get_field_metadata(field_info: FieldInfo, metadata_type: type[MetadataT]) -> MetadataT | None:
    return next((m for m in field_info.metadata if isinstance(m, metadata_type)), None)


def iter_record_fields(model: type[RecordBase]) -> Iterator[RecordField]:
    """Yield the column-mapped fields of a record model in declaration order."""
    for attr_name, field_info in model.model_fields.items():
        parquet_field = get_field_metadata(field_info, ParquetField)
        if parquet_field is None:
            continue
        yield RecordField(
            attr_name=attr_name,
            annotation=field_info.annotation,
            parquet=parquet_field,
            faker=get_field_metadata(field_info, FakerDirective),
        )


def is_nested_record(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, RecordBase)
