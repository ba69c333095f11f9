"""Time-windowed SHAP value extraction"""

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
from typing import Dict, List, Optional, Sequence, Tuple, Union

from implanto import constants

from .models import ShapValueSet, validate_time
from .tables import DEFAULT_SHAP_TABLES, ShapTableSource, load_shap_table


def bucket_bounds(time_h: int) -> Tuple[int, int]:
    """Return the [start, end) hours of the bucket holding time_h."""
    start = (time_h // constants.BUCKET_HOURS) * constants.BUCKET_HOURS
    return start, start + constants.BUCKET_HOURS


def parse_time_label(label: str) -> Optional[int]:
    """
    Parse the leading hour of a time-range label such as "24-32".

    Args:
        label (str): The first cell of a SHAP row.

    Returns:
        Optional[int]: The hour before the first "-", or None if it is not an integer.
    """
    try:
        return int(str(label).split("-")[0].strip())
    except ValueError:
        return None


def parse_cell(cell: str) -> float:
    """
    Parse a SHAP cell. Cells encoded as "label:value" keep only the value part.

    Raises:
        ValueError: If the cell is not numeric.
    """
    if ":" in cell:
        cell = cell.split(":", 1)[1]
    return float(cell.strip())


class ShapWindowExtractor:
    """Collapses the SHAP tables into one value set per 8-hour bucket"""

    def __init__(
        self,
        tables: Optional[Sequence[ShapTableSource]] = None,
        directory: Optional[Union[str, Path]] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the extractor.

        Args:
            tables: The tables to read, in order. Later tables win on name collisions.
            directory: Directory holding the tables, defaults to the configured SHAP directory.
            logger: Optional logger instance
        """
        self.tables = list(tables) if tables is not None else list(DEFAULT_SHAP_TABLES)
        self.directory = directory
        self.logger = logger or logging.getLogger(__name__)

    def extract(self, time_h: int) -> ShapValueSet:
        """
        Extract the SHAP values of the bucket containing time_h.

        Args:
            time_h (int): Observation time in hours, 0 to 143.

        Returns:
            ShapValueSet: Name -> value for every matching row of every table.

        Raises:
            InvalidTimeError: If time_h is out of range.
            ResourceNotFound: If a table is missing.
            ParseError: If a table cannot be parsed.
        """
        time_h = validate_time(time_h)
        start, end = bucket_bounds(time_h)
        self.logger.info("[x] Extracting SHAP values for %dh (bucket %d-%d)", time_h, start, end)

        values: Dict[str, float] = {}
        for table in self.tables:
            rows = load_shap_table(table.name, table.delimiter, self.directory)
            self._collect_window(rows, start, end, values, table.name)

        self.logger.info("[x] Extracted %d SHAP values", len(values))
        return ShapValueSet(bucket_start=start, bucket_end=end, values=values)

    def _collect_window(
        self,
        rows: List[List[str]],
        start: int,
        end: int,
        values: Dict[str, float],
        table_name: str,
    ) -> None:
        """Upsert the cells of every row in [start, end) into values."""
        if not rows:
            self.logger.warning("[x] SHAP table %s is empty", table_name)
            return

        headers = rows[0]
        for row_number, row in enumerate(rows[1:], start=2):
            if not row:
                continue
            hour = parse_time_label(row[0])
            if hour is None:
                self.logger.warning(
                    "Time parsing error in %s: %r (row %d)", table_name, row[0], row_number
                )
                continue
            if not start <= hour < end:
                continue

            for col in range(1, len(row)):
                cell = row[col]
                if not isinstance(cell, str) or not cell.strip():
                    continue
                column_name = headers[col] if col < len(headers) else None
                if not isinstance(column_name, str) or not column_name:
                    self.logger.debug(
                        "Skipping unnamed column %d in %s (row %d)", col + 1, table_name, row_number
                    )
                    continue
                try:
                    value = parse_cell(cell)
                except ValueError:
                    self.logger.warning(
                        "Parsing error at: %s (row %d, col %d) in %s",
                        cell,
                        row_number,
                        col + 1,
                        table_name,
                    )
                    continue
                # Re-insert so key order follows the latest write
                values.pop(column_name, None)
                values[column_name] = value
