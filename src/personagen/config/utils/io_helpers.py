# SPDX-FileCopyrightText: Copyright (c) 2026 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import json
import logging
from decimal import Decimal
from numbers import Number
from pathlib import Path
from typing import Any

import yaml

from personagen.config.errors import InvalidConfigError, InvalidFileFormatError, InvalidFilePathError

logger = logging.getLogger(__name__)

VALID_CONFIG_FILE_EXTENSIONS = {".yaml", ".yml"}


def ensure_parent_dir_exists(file_path: Path) -> None:
    """Create the parent directory of a file if it doesn't exist.

    Args:
        file_path: File whose parent directory should exist.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)


def load_config_file(file_path: Path) -> dict:
    """Load a YAML configuration file.

    Args:
        file_path: Path to the YAML file

    Returns:
        Parsed YAML content as dictionary

    Raises:
        InvalidFilePathError: If file doesn't exist
        InvalidFileFormatError: If YAML is malformed or the extension is not supported
        InvalidConfigError: If file is empty or not a mapping
    """
    if not file_path.is_file():
        raise InvalidFilePathError(f"Configuration file not found: {file_path}")
    if file_path.suffix.lower() not in VALID_CONFIG_FILE_EXTENSIONS:
        raise InvalidFileFormatError(f"🛑 Configuration files must be YAML (.yaml/.yml): {file_path}")

    try:
        with open(file_path) as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise InvalidFileFormatError(f"Invalid YAML format in {file_path}: {e}")

    if content is None:
        raise InvalidConfigError(f"Configuration file is empty: {file_path}")
    if not isinstance(content, dict):
        raise InvalidConfigError(f"Configuration file must contain a mapping, got {type(content).__name__}.")

    return content


def serialize_data(data: dict | list | str | Number, **kwargs) -> str:
    if isinstance(data, (dict, list)):
        return json.dumps(data, ensure_ascii=False, default=_convert_to_serializable, **kwargs)
    elif isinstance(data, str):
        return data
    elif isinstance(data, Number):
        return str(data)
    else:
        raise ValueError(f"Invalid data type: {type(data)}")


def _convert_to_serializable(obj: Any) -> Any:
    """Convert non-JSON-serializable objects to JSON-serializable Python-native types.

    Raises:
        TypeError: If the object type is not supported for serialization.
    """
    if isinstance(obj, (set, tuple)):
        return list(obj)
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, bytes):
        return obj.decode("utf-8", errors="replace")

    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")
