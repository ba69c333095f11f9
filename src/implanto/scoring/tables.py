"""SHAP table loading"""

# Copyright 2025 Netskope, Inc.
# Redistribution and use in source and binary forms, with or without modification, are permitted provided that the
# following conditions are met:

# 1. Redistributions of source code must retain the above copyright notice, this list of conditions and the following
# disclaimer.

# 2. Redistributions in binary form must reproduce the above copyright notice, this list of conditions and the following
# disclaimer in the documentation and/or other materials provided with the distribution.

# 3. Neither the name of the copyright holder nor the names of its contributors may be used to endorse or promote
# products derived from this software without specific prior written permission.

# THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS" AND ANY EXPRESS OR IMPLIED WARRANTIES,
# INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT HOLDER OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL,
# SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR
# SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY,
# WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE
# OF THIS SOFTWARE, EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.

import logging
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd
from pydantic import BaseModel

from implanto import constants

from .errors import ParseError, ResourceNotFound


class ShapTableSource(BaseModel):
    """A delimited SHAP table shipped as a static resource."""

    name: str
    delimiter: str = ","


DEFAULT_SHAP_TABLES = [
    ShapTableSource(name=name, delimiter=delimiter)
    for name, delimiter in constants.SHAP_TABLES
]


def resolve_table_path(name: str, directory: Optional[Union[str, Path]] = None) -> Path:
    """
    Locate a SHAP table by name.

    Args:
        name (str): The table identifier (file name).
        directory (str | Path): The directory to search, defaults to the configured SHAP directory.

    Returns:
        Path: The path of the table.

    Raises:
        ResourceNotFound: If no file with that name exists in the directory.
    """
    base = Path(directory) if directory is not None else constants.SHAP_DIR
    table_path = base / name
    if not table_path.is_file():
        raise ResourceNotFound(f"Resource not found: {name} (looked in {base})")
    return table_path


def load_shap_table(
    name: str, delimiter: str, directory: Optional[Union[str, Path]] = None
) -> List[List[str]]:
    """
    Read a delimited SHAP table into rows of raw string cells.

    The first row holds the column names. Cells are returned untouched so that
    numeric parsing problems can be reported per cell by the caller.

    Args:
        name (str): The table identifier (file name).
        delimiter (str): The field delimiter used by the table.
        directory (str | Path): Optional directory holding the table.

    Returns:
        List[List[str]]: The header row followed by the data rows.

    Raises:
        ResourceNotFound: If the table cannot be located.
        ParseError: If the table cannot be split into rows.
    """
    logger = logging.getLogger(__name__)
    table_path = resolve_table_path(name, directory)
    logger.debug("[x] Loading SHAP table %s with delimiter %r", table_path, delimiter)
    try:
        frame = pd.read_csv(
            table_path,
            sep=delimiter,
            header=None,
            dtype=str,
            na_filter=False,
            skip_blank_lines=True,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not parse {name}: {e}") from e

    rows = frame.values.tolist()
    logger.debug("[x] Loaded %d rows from %s", len(rows), name)
    return rows
