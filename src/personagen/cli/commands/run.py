# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import click
import typer

from personagen.cli.controllers.pipeline_controller import PipelineController

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def run_command(
    run_type: str = typer.Option(
        "",
        "-type",
        "--type",
        help="Run mode: genData to generate personas, convertData to convert JSON input to parquet.",
    ),
    quantity: int = typer.Option(
        0,
        "-qnt",
        "--qnt",
        help="Number of personas to generate. Ignored by convertData.",
        min=0,
    ),
    config_path: str | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to a YAML run configuration (.yaml/.yml).",
    ),
    log_level: str = typer.Option(
        "INFO",
        "--log-level",
        click_type=click.Choice(LOG_LEVELS, case_sensitive=False),
        help="Level of the personagen logger.",
    ),
    show_config: bool = typer.Option(
        False,
        "--show-config",
        help="Print the effective run configuration as YAML before running.",
    ),
) -> None:
    """Generate fake personas or convert JSON records to parquet.

    Examples:
        # Generate 100 personas into generatedData/
        personagen -type genData -qnt 100

        # Convert every JSON file and zip archive found in input/
        personagen -type convertData

        # Convert with a custom run configuration
        personagen --type convertData --config run.yaml

        # Print the configuration a run will use
        personagen -type convertData --show-config
    """
    controller = PipelineController()
    controller.run(
        run_type=run_type,
        quantity=quantity,
        config_path=config_path,
        log_level=log_level,
        show_config=show_config,
    )
