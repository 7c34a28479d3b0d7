# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from personagen.errors import PersonaGenError


class PersonaGenerationError(PersonaGenError):
    """Raised when a persona field cannot be synthesized from its faker directive."""
