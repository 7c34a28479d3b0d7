# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import json

import pytest

from personagen.config.persona import FlatPersona, Persona, Personas, RecordVariant
from personagen.engine.storage.errors import InvalidJsonDocumentError, RecordParseError
from personagen.engine.storage.json_codec import (
    deserialize_records,
    load_json_array,
    parse_records,
    serialize_personas,
)


def test_serialize_empty_personas():
    assert json.loads(serialize_personas(Personas())) == {"Persona": []}


def test_serialize_personas_uses_json_keys(stub_personas):
    document = json.loads(serialize_personas(stub_personas))

    assert list(document) == ["Persona"]
    assert len(document["Persona"]) == len(stub_personas)
    first = document["Persona"][0]
    assert set(first) == {"PersonId", "Personal", "Status"}
    assert set(first["Personal"]) == {
        "Name",
        "Email",
        "Phone",
        "HomeTown",
        "BrithState",
        "Profession",
        "Income",
        "PersonalDocuments",
    }
    assert set(first["Personal"]["PersonalDocuments"]) == {"DocumentType", "DocumentNumber"}


def test_serialized_personas_parse_back(stub_personas):
    document = json.loads(serialize_personas(stub_personas))
    records = deserialize_records(json.dumps(document["Persona"]), RecordVariant.RICH)
    assert records == stub_personas.persona


def test_serialize_personas_keeps_non_ascii(stub_rich_record):
    stub_rich_record["Personal"]["HomeTown"] = "São Paulo"
    personas = Personas(persona=[Persona.model_validate(stub_rich_record)])
    assert "São Paulo" in serialize_personas(personas).decode("utf-8")


def test_deserialize_flat_records(stub_flat_records_json, stub_flat_personas):
    records = deserialize_records(stub_flat_records_json, RecordVariant.FLAT)
    assert records == stub_flat_personas
    assert all(isinstance(record, FlatPersona) for record in records)


def test_deserialize_empty_array():
    assert deserialize_records(b"[]", RecordVariant.FLAT) == []


@pytest.mark.parametrize(
    "data,expected_message",
    [
        pytest.param(b"{not json", "Malformed JSON document", id="malformed"),
        pytest.param(b'{"Persona": []}', "Expected a top-level JSON array", id="object-root"),
        pytest.param(b"null", "Expected a top-level JSON array", id="null-root"),
        pytest.param(b"", "Malformed JSON document", id="empty"),
    ],
)
def test_load_json_array_invalid_documents(data, expected_message):
    with pytest.raises(InvalidJsonDocumentError, match=expected_message):
        load_json_array(data)


@pytest.mark.parametrize(
    "record,expected_field",
    [
        pytest.param({"name": "Ada", "email": "ada@example.com"}, "id", id="missing-field"),
        pytest.param({"name": "Ada", "email": "ada@example.com", "id": 7}, "id", id="wrong-type"),
        pytest.param({"name": "Ada", "email": None, "id": "7"}, "email", id="null-field"),
        pytest.param({"name": "Ada", "email": "a@b.c", "id": "7", "age": 3}, "age", id="extra-field"),
    ],
)
def test_deserialize_invalid_record_is_attributable(stub_flat_records, record, expected_field):
    data = json.dumps([*stub_flat_records, record])

    with pytest.raises(RecordParseError) as exc_info:
        deserialize_records(data, RecordVariant.FLAT)

    assert exc_info.value.index == len(stub_flat_records)
    assert exc_info.value.field == expected_field
    assert f"record {len(stub_flat_records)}" in str(exc_info.value)


def test_deserialize_non_object_element():
    with pytest.raises(RecordParseError) as exc_info:
        deserialize_records(b'["just a string"]', RecordVariant.FLAT)
    assert exc_info.value.index == 0
    assert exc_info.value.field is None


def test_deserialize_nested_field_location(stub_rich_record):
    del stub_rich_record["Personal"]["Email"]

    with pytest.raises(RecordParseError) as exc_info:
        deserialize_records(json.dumps([stub_rich_record]), RecordVariant.RICH)

    assert exc_info.value.field == "Personal.Email"


def test_variants_are_not_interchangeable(stub_flat_records_json):
    with pytest.raises(RecordParseError):
        deserialize_records(stub_flat_records_json, RecordVariant.RICH)


def test_parse_records_keeps_valid_records(stub_flat_records):
    data = json.dumps([stub_flat_records[0], {"name": "broken"}, stub_flat_records[1]])

    result = parse_records(data, "flat")

    assert not result.ok
    assert result.variant == RecordVariant.FLAT
    assert [record.id for record in result.records] == ["1", "2"]
    assert len(result.errors) == 1
    assert result.errors[0].index == 1
    assert result.errors[0].describe().startswith("record 1, field ")


def test_parse_records_all_valid(stub_flat_records_json):
    result = parse_records(stub_flat_records_json, RecordVariant.FLAT)
    assert result.ok
    assert len(result.records) == 3
