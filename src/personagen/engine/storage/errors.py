# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from personagen.errors import PersonaGenError


class InvalidJsonDocumentError(PersonaGenError):
    """Raised when a JSON document is malformed or its root has the wrong shape."""


class RecordParseError(PersonaGenError):
    """Raised when a record in a JSON document does not match its record model."""

    def __init__(self, message: str, *, index: int, field: str | None = None) -> None:
        super().__init__(message)
        self.index = index
        self.field = field


class SchemaNestingError(PersonaGenError):
    """Raised when a record schema nests deeper than the writer accepts."""


class ParquetWriteError(PersonaGenError): ...
