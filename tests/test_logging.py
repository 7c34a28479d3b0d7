# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

import json
import logging
import sys
from pathlib import Path

import pytest
from pythonjsonlogger.json import JsonFormatter

from personagen.logging import (
    LoggerConfig,
    LoggingConfig,
    OutputConfig,
    RandomEmoji,
    configure_logging,
    quiet_noisy_logger,
)


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


def test_logging_config_default():
    config = LoggingConfig.default()
    assert len(config.logger_configs) == 1
    assert config.logger_configs[0].name == "personagen"
    assert config.logger_configs[0].level == "INFO"
    assert config.output_configs[0].destination == sys.stderr
    assert config.output_configs[0].structured is False
    assert config.root_level == "INFO"
    assert config.to_silence == ["faker", "faker.factory"]


def test_logging_config_debug():
    config = LoggingConfig.debug()
    assert config.logger_configs[0].level == "DEBUG"
    assert config.root_level == "DEBUG"


def test_logging_config_to_silence_is_not_shared():
    first = LoggingConfig.default()
    first.to_silence.append("other")
    assert LoggingConfig.default().to_silence == ["faker", "faker.factory"]


def test_configure_logging_basic():
    configure_logging(LoggingConfig.default())

    root_logger = logging.getLogger()
    assert root_logger.level == logging.INFO
    assert len(root_logger.handlers) == 1
    assert logging.getLogger("personagen").level == logging.INFO


def test_configure_logging_with_file(tmp_path: Path):
    log_path = tmp_path / "run.log"
    config = LoggingConfig(
        logger_configs=[LoggerConfig(name="personagen", level="DEBUG")],
        output_configs=[OutputConfig(destination=log_path, structured=False)],
        root_level="DEBUG",
    )
    configure_logging(config)

    root_logger = logging.getLogger()
    assert any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)

    logging.getLogger("personagen.test").debug("hello from the test")
    for handler in root_logger.handlers:
        handler.flush()
    assert "hello from the test" in log_path.read_text()


def test_configure_logging_structured(tmp_path: Path):
    log_path = tmp_path / "run.jsonl"
    config = LoggingConfig(
        logger_configs=[LoggerConfig(name="personagen", level="INFO")],
        output_configs=[OutputConfig(destination=log_path, structured=True)],
    )
    configure_logging(config)

    handler = logging.getLogger().handlers[0]
    assert isinstance(handler.formatter, JsonFormatter)

    logging.getLogger("personagen.test").info("structured message")
    handler.flush()
    record = json.loads(log_path.read_text().strip().splitlines()[-1])
    assert record["message"] == "structured message"
    assert record["levelname"] == "INFO"
    assert record["name"] == "personagen.test"


def test_configure_logging_replaces_existing_handlers():
    configure_logging(LoggingConfig.default())
    configure_logging(LoggingConfig.default())
    assert len(logging.getLogger().handlers) == 1


def test_quiet_noisy_logger():
    logger_name = "test_noisy_logger_unique"
    logger = logging.getLogger(logger_name)
    logger.setLevel(logging.DEBUG)
    logger.addHandler(logging.StreamHandler())

    quiet_noisy_logger(logger_name)

    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 0


def test_configure_logging_silences_faker():
    configure_logging(LoggingConfig.default())

    assert logging.getLogger("faker").level == logging.WARNING
    assert logging.getLogger("faker.factory").level == logging.WARNING


@pytest.mark.parametrize(
    "emoji_method",
    [
        RandomEmoji.data,
        RandomEmoji.generating,
        RandomEmoji.loading,
        RandomEmoji.unpacking,
        RandomEmoji.writing,
        RandomEmoji.start,
        RandomEmoji.success,
        RandomEmoji.working,
    ],
)
def test_random_emoji_methods(emoji_method):
    emoji = emoji_method()
    assert emoji is not None
    assert len(emoji) > 0


def test_random_emoji_randomness():
    emojis = [RandomEmoji.success() for _ in range(100)]
    assert len(set(emojis)) > 1
