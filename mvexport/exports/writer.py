"""
CSV writer for export tables.
"""

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from mvexport.components.config import Config, ConfigManager
from mvexport.errors import IOFailure
from mvexport.utils.general import timestamp_string

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _file_mode() -> int:
    """Mode a plain open() would give a new file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def default_output_path(config: Optional[Config] = None) -> Path:
    """
    Build the output path used when none is given.

    The file is named '<prefix>_<timestamp>.csv' and placed in the configured
    output directory.

    Args:
        config: Configuration (defaults to the shared configuration)

    Returns:
        Output path
    """
    config = config or ConfigManager.get_config()
    prefix = config.get('output.prefix', 'mvmapper_data')
    stamp = timestamp_string(config.get('output.timestamp-format', '%Y-%m-%d_%H-%M-%S-%f'))
    directory = Path(config.get('output.directory', '.'))
    return directory / f"{prefix}_{stamp}.csv"


def write_export(table: pd.DataFrame,
                 out_file: Optional[PathLike] = None,
                 config: Optional[Config] = None) -> Path:
    """
    Write an export table to a CSV file.

    The table is written to a temporary file next to the target and moved into
    place, so a failed write leaves any existing file untouched.

    Args:
        table: Table to write
        out_file: Output path; a timestamped name is used when None
        config: Configuration (defaults to the shared configuration)

    Returns:
        Path of the written file

    Raises:
        IOFailure: if the file cannot be written
    """
    path = Path(out_file) if out_file is not None else default_output_path(config)
    logger.info(f"Writing output to the file: {path}")

    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=path.parent
        )
        with os.fdopen(fd, 'w', encoding='utf-8', newline='') as f:
            table.to_csv(f, index=False)
        # mkstemp creates owner-only files
        os.chmod(tmp_name, _file_mode())
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)
        raise IOFailure(path, f"Could not write output to '{path}': {e}") from e

    return path
