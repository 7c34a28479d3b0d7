# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import typer

from personagen.cli.commands import run

# Single-command app: options are given directly, as in `personagen -type genData -qnt 10`
app = typer.Typer(
    name="personagen",
    help="Persona generator - fake persona records and JSON to parquet conversion",
    add_completion=False,
    rich_markup_mode="rich",
)
app.command(name="run", help="Generate personas or convert JSON input to parquet")(run.run_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
