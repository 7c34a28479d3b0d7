# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

import personagen.lazy_heavy_imports as lazy
from personagen.config.persona import Persona, Personas, RecordBase, RecordField, is_nested_record, iter_record_fields
from personagen.config.utils.constants import DEFAULT_FAKER_LOCALE
from personagen.engine.sampling_gen.errors import PersonaGenerationError
from personagen.logging import RandomEmoji

if TYPE_CHECKING:
    from faker import Faker

logger = logging.getLogger(__name__)


class PersonaGenerator:
    """Synthesizes rich persona records with faker.

    Each field is filled from the ``FakerDirective`` declared on the record model;
    nested records are synthesized recursively.

    Args:
        faker: Faker instance to draw values from. If None, one is created for ``locale``.
        seed: Seed for the faker instance. If None, the current time in nanoseconds is used,
            so repeated runs are not reproducible.
        locale: Faker locale used when ``faker`` is None.
    """

    def __init__(self, faker: Faker | None = None, *, seed: int | None = None, locale: str = DEFAULT_FAKER_LOCALE):
        self._faker = faker if faker is not None else lazy.faker.Faker(locale)
        self._faker.seed_instance(seed if seed is not None else time.time_ns())

    def generate(self, quantity: int) -> Personas:
        if quantity < 0:
            raise ValueError(f"quantity must be >= 0, got {quantity}")

        logger.info(f"{RandomEmoji.generating()} Generating {quantity} persona(s)")
        return Personas(persona=[self._synthesize(Persona) for _ in range(quantity)])

    def _synthesize(self, model: type[RecordBase]) -> RecordBase:
        values: dict[str, Any] = {}
        for record_field in iter_record_fields(model):
            if is_nested_record(record_field.annotation):
                values[record_field.attr_name] = self._synthesize(record_field.annotation)
            else:
                values[record_field.attr_name] = self._fill(model, record_field)

        try:
            return model(**values)
        except ValidationError as e:
            raise PersonaGenerationError(f"🛑 Synthesized values do not fit {model.__name__}: {e}") from e

    def _fill(self, model: type[RecordBase], record_field: RecordField) -> Any:
        field_label = f"{model.__name__}.{record_field.attr_name}"
        directive = record_field.faker
        if directive is None:
            raise PersonaGenerationError(f"🛑 Field {field_label} has no faker directive.")

        try:
            provider = getattr(self._faker, directive.method)
        except AttributeError as e:
            raise PersonaGenerationError(
                f"🛑 Unknown faker method {directive.method!r} for field {field_label}."
            ) from e

        try:
            value = provider(**directive.kwargs)
        except (TypeError, ValueError) as e:
            raise PersonaGenerationError(
                f"🛑 Faker method {directive.method!r} failed for field {field_label}: {e}"
            ) from e

        if record_field.annotation is str:
            return directive.template.format(value)
        return value
