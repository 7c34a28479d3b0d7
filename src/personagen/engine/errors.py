# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, Field

from personagen.errors import PersonaGenError


class PersonaGenRuntimeError(PersonaGenError): ...


class ErrorTrap(BaseModel):
    error_count: int = 0
    task_errors: dict[str, int] = Field(default_factory=dict)

    def _track_error(self, error: PersonaGenError) -> None:
        """
        Track a specific error type.
        """
        error_type = type(error).__name__
        if error_type not in self.task_errors:
            self.task_errors[error_type] = 0
        self.task_errors[error_type] += 1

    def handle_error(self, error: Exception) -> None:
        self.error_count += 1

        if not isinstance(error, PersonaGenError):
            error = PersonaGenError(str(error))

        self._track_error(error)
