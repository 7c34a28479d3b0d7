# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

"""
Lazy imports facade for heavy third-party dependencies.

The CLI only needs pyarrow and faker for the mode it actually runs, so these
modules are imported on first attribute access instead of at package import.

Usage:
    import personagen.lazy_heavy_imports as lazy

    table = lazy.pa.Table.from_pylist(rows, schema=schema)
    lazy.pq.ParquetWriter(path, schema)

Important:
    Avoid `from personagen.lazy_heavy_imports import pa`.
    That import style resolves the attribute immediately and eagerly imports the heavy dependency.
"""

from __future__ import annotations

import importlib

_LAZY_IMPORTS = {
    "pa": "pyarrow",
    "pq": "pyarrow.parquet",
    "faker": "faker",
}


def __getattr__(name: str) -> object:
    """Lazily import heavy third-party dependencies when accessed."""
    if name in _LAZY_IMPORTS:
        module_name = _LAZY_IMPORTS[name]
        module = importlib.import_module(module_name)
        # Cache so subsequent accesses find a real attribute and skip __getattr__.
        globals()[name] = module
        return module

    raise AttributeError(f"module 'personagen.lazy_heavy_imports' has no attribute {name!r}")


def __dir__() -> list[str]:
    """Return list of available lazy imports."""
    return list(_LAZY_IMPORTS.keys())
