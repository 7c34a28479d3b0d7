# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import random
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from pythonjsonlogger.json import JsonFormatter

_DEFAULT_NOISY_LOGGERS = ["faker", "faker.factory"]


@dataclass
class LoggerConfig:
    name: str
    level: str


@dataclass
class OutputConfig:
    destination: TextIO | Path
    structured: bool


@dataclass
class LoggingConfig:
    logger_configs: list[LoggerConfig]
    output_configs: list[OutputConfig]
    root_level: str = "INFO"
    to_silence: list[str] = field(default_factory=lambda: list(_DEFAULT_NOISY_LOGGERS))

    @classmethod
    def default(cls) -> LoggingConfig:
        return cls(
            logger_configs=[LoggerConfig(name="personagen", level="INFO")],
            output_configs=[OutputConfig(destination=sys.stderr, structured=False)],
        )

    @classmethod
    def debug(cls) -> LoggingConfig:
        return cls(
            logger_configs=[LoggerConfig(name="personagen", level="DEBUG")],
            output_configs=[OutputConfig(destination=sys.stderr, structured=False)],
            root_level="DEBUG",
        )


class RandomEmoji:
    """Small set of emoji pickers used to decorate log lines."""

    @staticmethod
    def data() -> str:
        return random.choice(["📊", "📈", "📋", "🗂️"])

    @staticmethod
    def generating() -> str:
        return random.choice(["🏗️", "🏭", "⚙️", "🛠️"])

    @staticmethod
    def loading() -> str:
        return random.choice(["⏳", "📥", "🔄"])

    @staticmethod
    def unpacking() -> str:
        return random.choice(["📦", "🗜️", "🎁"])

    @staticmethod
    def writing() -> str:
        return random.choice(["💾", "✍️", "📝"])

    @staticmethod
    def start() -> str:
        return random.choice(["🚀", "🏁", "🎬"])

    @staticmethod
    def success() -> str:
        return random.choice(["✅", "🎉", "🙌", "👍"])

    @staticmethod
    def working() -> str:
        return random.choice(["🔨", "🔧", "🧰", "👷"])


def configure_logging(config: LoggingConfig) -> None:
    root_logger = logging.getLogger()

    root_logger.handlers.clear()

    for output_config in config.output_configs:
        root_logger.addHandler(_create_handler(output_config))

    root_logger.setLevel(config.root_level)
    for logger_config in config.logger_configs:
        logging.getLogger(logger_config.name).setLevel(logger_config.level)

    for name in config.to_silence:
        quiet_noisy_logger(name)


def quiet_noisy_logger(name: str) -> None:
    logger = logging.getLogger(name)
    logger.handlers.clear()
    logger.setLevel(logging.WARNING)


def _create_handler(output_config: OutputConfig) -> logging.Handler:
    if isinstance(output_config.destination, Path):
        handler = logging.FileHandler(str(output_config.destination))
    else:
        handler = logging.StreamHandler(output_config.destination)

    if output_config.structured:
        formatter = _make_json_formatter()
    else:
        formatter = _make_stream_formatter()

    handler.setFormatter(formatter)
    return handler


def _make_json_formatter() -> logging.Formatter:
    log_format = "%(asctime)s %(levelname)s %(name)s %(message)s"
    return JsonFormatter(log_format)


def _make_stream_formatter() -> logging.Formatter:
    log_format = "[%(asctime)s] [%(levelname)s] %(message)s"
    time_format = "%H:%M:%S"
    return logging.Formatter(log_format, time_format)
