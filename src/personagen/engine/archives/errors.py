# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from personagen.errors import PersonaGenError


class ArchiveError(PersonaGenError): ...


class UnsafeArchiveEntryError(ArchiveError):
    """Raised for archive entries that would be extracted outside the destination directory."""
