"""
Utility functions for tmxheader.
"""

import datetime
import os
from pathlib import Path
from typing import Optional, Union

from .constants import OUTPUT_SUFFIX
from .errors import InputReadError, TemplateWriteError
from .logging_config import get_logger

logger = get_logger('utils')

PathLike = Union[str, Path]


def file_base_name(filepath: PathLike) -> str:
    """Base name of a map file: directories and the last extension removed."""
    return Path(filepath).stem


def output_path_for(filepath: PathLike, output_dir: PathLike, suffix: str = OUTPUT_SUFFIX) -> Path:
    """Where the generated file for ``filepath`` goes, e.g. out/level1Map.h."""
    return Path(output_dir) / f"{file_base_name(filepath)}{suffix}"


def format_date(date: Optional[datetime.date] = None) -> str:
    """Format a date as YYYY-M-D (no zero padding), defaulting to today."""
    if date is None:
        date = datetime.date.today()
    return f"{date.year}-{date.month}-{date.day}"


def load_text(filepath: PathLike) -> str:
    """Read a UTF-8 text file, keeping its line endings as they are."""
    try:
        with open(filepath, 'r', encoding='utf-8', newline='') as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(f"cannot read file: {e}", str(filepath)) from e


def save_text(text: str, filepath: PathLike) -> None:
    """Write ``text`` to ``filepath``, creating parent directories and overwriting."""
    try:
        os.makedirs(os.path.dirname(os.path.abspath(filepath)), exist_ok=True)
        with open(filepath, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
    except OSError as e:
        raise TemplateWriteError(f"cannot write file: {e}", str(filepath)) from e
