# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum
from typing import Any

from personagen.config.errors import InvalidEnumValueError


class StrEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


def resolve_string_enum(enum_instance: Any, enum_type: type[Enum]) -> Enum:
    if not issubclass(enum_type, Enum):
        raise InvalidEnumValueError(f"🛑 `enum_type` must be a subclass of Enum. You provided: {enum_type}")
    invalid_enum_value_error = InvalidEnumValueError(
        f"🛑 '{enum_instance}' is not a valid string enum of type {enum_type.__name__}. "
        f"Valid options are: {[option.value for option in enum_type]}"
    )
    if isinstance(enum_instance, enum_type):
        return enum_instance
    elif isinstance(enum_instance, str):
        try:
            return enum_type(enum_instance)
        except ValueError:
            raise invalid_enum_value_error
    else:
        raise invalid_enum_value_error
