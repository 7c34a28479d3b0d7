# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import json
import zipfile
from pathlib import Path

import pytest

from personagen.config.persona import FlatPersona, Personas
from personagen.config.run_config import RunConfig
from personagen.engine.sampling_gen.persona_generator import PersonaGenerator


@pytest.fixture
def stub_flat_records() -> list[dict]:
    return [
        {"name": "Ada Lovelace", "email": "ada@example.com", "id": "1"},
        {"name": "Alan Turing", "email": "alan@example.com", "id": "2"},
        {"name": "Grace Hopper", "email": "grace@example.com", "id": "3"},
    ]


@pytest.fixture
def stub_flat_records_json(stub_flat_records) -> bytes:
    return json.dumps(stub_flat_records).encode("utf-8")


@pytest.fixture
def stub_flat_personas(stub_flat_records) -> list[FlatPersona]:
    return [FlatPersona.model_validate(record) for record in stub_flat_records]


@pytest.fixture
def stub_rich_record() -> dict:
    return {
        "PersonId": "7b0c5f0e-7f3a-4c1e-9a55-1f2d3c4b5a69",
        "Personal": {
            "Name": "Maria Silva",
            "Email": "maria@example.com",
            "Phone": "555-0100",
            "HomeTown": "Springfield",
            "BrithState": "Ohio",
            "Profession": "Engineer",
            "Income": "4321,00",
            "PersonalDocuments": {"DocumentType": "CPF", "DocumentNumber": "123-45-6789"},
        },
        "Status": True,
    }


@pytest.fixture
def stub_persona_generator() -> PersonaGenerator:
    return PersonaGenerator(seed=42)


@pytest.fixture
def stub_personas(stub_persona_generator) -> Personas:
    return stub_persona_generator.generate(5)


@pytest.fixture
def stub_run_config(tmp_path: Path) -> RunConfig:
    return RunConfig(
        input_dir=tmp_path / "input",
        output_dir=tmp_path / "output",
        generated_dir=tmp_path / "generatedData",
    )


@pytest.fixture
def stub_zip_factory():
    """Build a zip archive from a mapping of entry name to content."""

    def _make_zip(path: Path, entries: dict[str, bytes | str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        with zipfile.ZipFile(path, "w") as archive:
            for name, content in entries.items():
                archive.writestr(name, content)
        return path

    return _make_zip
