# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pathlib import Path

import typer

from personagen.cli.ui import (
    console,
    display_run_report,
    print_error,
    print_header,
    print_info,
    print_success,
    print_text,
    print_warning,
)
from personagen.config.errors import (
    InvalidConfigError,
    InvalidFileFormatError,
    InvalidFilePathError,
    InvalidRunModeError,
)
from personagen.config.run_config import RunConfig, RunMode, resolve_run_mode
from personagen.engine.pipeline.orchestrator import PersonaPipeline
from personagen.engine.pipeline.report import OutcomeStatus
from personagen.errors import PersonaGenError
from personagen.logging import LoggerConfig, LoggingConfig, configure_logging

DONE_MESSAGE = "Done"


class PipelineController:
    """Controller for the generation and conversion runs started from the command line."""

    def run(
        self,
        run_type: str,
        quantity: int = 0,
        config_path: str | None = None,
        log_level: str = "INFO",
        show_config: bool = False,
    ) -> None:
        """Configure logging, load the run configuration and run the requested mode.

        ``Done`` is printed whatever the outcome. The process exits with code 1 when the
        type is invalid, the configuration can't be loaded, or any operation of the run failed.

        Args:
            run_type: Either ``genData`` or ``convertData``.
            quantity: Number of personas to generate. Ignored when converting.
            config_path: Optional YAML file with the run configuration.
            log_level: Level of the ``personagen`` logger.
            show_config: If True, print the effective run configuration as YAML.
        """
        self._configure_logging(log_level)

        try:
            mode = resolve_run_mode(run_type)
        except InvalidRunModeError as e:
            console.print(str(e), markup=False, highlight=False)
            self._finish(ok=False)

        try:
            run_config = self._load_run_config(config_path)
        except (InvalidConfigError, InvalidFileFormatError, InvalidFilePathError) as e:
            print_error(f"Failed to load run configuration: {e}")
            self._finish(ok=False)

        print_header("Persona Generator" if mode == RunMode.GENERATE else "JSON to Parquet Conversion")
        if config_path is not None:
            print_info(f"Using run configuration from {config_path}")
        if show_config:
            print_text(run_config.to_yaml())
        if mode == RunMode.CONVERT and quantity:
            print_warning(f"Quantity {quantity} is ignored when converting")
        try:
            report = PersonaPipeline(run_config).run(mode, quantity)
        except PersonaGenError as e:
            print_error(f"Run failed: {e}")
            self._finish(ok=False)

        display_run_report(report)
        if report.ok:
            print_success(f"{len(report.outcomes)} operation(s) completed")
        elif all(outcome.status == OutcomeStatus.PARTIAL for outcome in report.failures):
            print_warning(f"{len(report.failures)} of {len(report.outcomes)} operation(s) completed with errors")
        else:
            print_error(f"{len(report.failures)} of {len(report.outcomes)} operation(s) did not complete")
        self._finish(ok=report.ok)

    def _configure_logging(self, log_level: str) -> None:
        config = LoggingConfig.default()
        config.logger_configs = [LoggerConfig(name="personagen", level=log_level.upper())]
        configure_logging(config)

    def _load_run_config(self, config_path: str | None) -> RunConfig:
        if config_path is None:
            return RunConfig()
        return RunConfig.from_file(Path(config_path))

    def _finish(self, ok: bool) -> None:
        console.print(DONE_MESSAGE, markup=False, highlight=False)
        if not ok:
            raise typer.Exit(code=1)
