# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from personagen.errors import PersonaGenError


class InvalidConfigError(PersonaGenError): ...


class InvalidFilePathError(PersonaGenError): ...


class InvalidFileFormatError(PersonaGenError): ...


class InvalidEnumValueError(PersonaGenError): ...


class InvalidRunModeError(InvalidEnumValueError): ...
