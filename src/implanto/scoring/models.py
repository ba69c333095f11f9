"""
Contains Pydantic models for the scoring pipeline
"""

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

from typing import Dict, List, Optional

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError, field_validator

from implanto import constants

from .errors import InvalidTimeError


class ScoreRequest(BaseModel):
    """A scoring request for one observation time."""

    time_h: StrictInt = Field(ge=constants.MIN_TIME_H, le=constants.MAX_TIME_H)


def validate_time(time_h) -> int:
    """
    Check that the observation time is an integer number of hours in range.

    Args:
        time_h (int): The observation time in hours.

    Returns:
        int: The validated time.

    Raises:
        InvalidTimeError: If the value is not an integer between 0 and 143.
    """
    try:
        return ScoreRequest(time_h=time_h).time_h
    except ValidationError as e:
        raise InvalidTimeError(
            f"Time must be an integer between {constants.MIN_TIME_H} and "
            f"{constants.MAX_TIME_H}, got {time_h!r}"
        ) from e


class ShapValueSet(BaseModel):
    """SHAP values of one 8-hour bucket, keyed by column or interaction name."""

    bucket_start: int
    bucket_end: int
    values: Dict[str, float] = {}

    def to_frame(self) -> pd.DataFrame:
        """Render the values as a Parameter/Value table."""
        return pd.DataFrame(
            {"Parameter": list(self.values.keys()), "Value": list(self.values.values())}
        )


class LogisticParams(BaseModel):
    """Global logistic parameters of the calibration curve."""

    b0: float
    b1: float
    k: float
    x0: float


class CalibrationArtifact(BaseModel):
    """Schema of the calibration JSON document."""

    model_config = ConfigDict(populate_by_name=True)

    version: Optional[str] = None
    params: LogisticParams
    time_grid: List[int]
    med_A: List[float]
    iqr_A: List[float]
    delta: List[List[float]] = Field(alias="Δ")

    @field_validator("version", mode="before")
    @classmethod
    def convert_version(cls, v):
        """Accept numeric versions such as 11.2"""
        return None if v is None else str(v)

    @field_validator("delta")
    @classmethod
    def check_group_rows(cls, v):
        """One offset row is required per calibration group"""
        if len(v) < len(constants.CALIBRATION_GROUPS):
            raise ValueError(
                f"expected {len(constants.CALIBRATION_GROUPS)} offset rows, got {len(v)}"
            )
        return v


class InvasionFactorResult(BaseModel):
    """Outcome of one scoring request"""

    time_h: int
    invasion_factor: float
    raw_score: float
    group: str
    calibrated: bool

    @field_validator("invasion_factor", "raw_score", mode="before")
    @classmethod
    def convert_to_float(cls, v):
        """Convert numpy types to native Python float"""
        return float(v)

    def to_frame(self) -> pd.DataFrame:
        """Render the result as a single-row results table."""
        return pd.DataFrame([{"Time_h": self.time_h, "Invasion Factor": self.invasion_factor}])
