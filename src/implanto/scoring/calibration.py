"""Time- and group-specific sigmoid calibration of the raw score"""

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

import json
import logging
import math
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

from pydantic_core import ValidationError

from implanto import constants
from implanto.utils import load_json_file

from .models import CalibrationArtifact


class GridModel(NamedTuple):
    """Calibration parameters at one time grid point for one group."""

    params: Tuple[float, float, float, float]
    med: float
    iqr: float


class CalibrationModel:
    """
    Logistic recalibration driven by a static artifact.

    The model is either Loaded (built from an artifact) or Unavailable; the
    state never changes after construction. An Unavailable model returns raw
    scores unchanged.
    """

    def __init__(
        self,
        time_grid: Optional[List[int]] = None,
        group_models: Optional[Dict[str, Dict[int, GridModel]]] = None,
        version: Optional[str] = None,
        source: Optional[str] = None,
    ):
        self.time_grid = list(time_grid) if time_grid is not None else []
        self.group_models = group_models
        self.version = version
        self.source = source

    @property
    def available(self) -> bool:
        return self.group_models is not None

    @classmethod
    def unavailable(cls, source: Optional[str] = None) -> "CalibrationModel":
        return cls(source=source)

    @classmethod
    def from_artifact(
        cls, artifact: CalibrationArtifact, source: Optional[str] = None
    ) -> "CalibrationModel":
        """
        Expand an artifact into per-group, per-grid-point parameters.

        Each group row of the offset matrix shifts b0. Rows are truncated to the
        shortest of time_grid, med_A, iqr_A and the group's offsets.

        Args:
            artifact (CalibrationArtifact): The parsed artifact.
            source (str): Where the artifact came from, for logging.

        Returns:
            CalibrationModel: A Loaded model.
        """
        p = artifact.params
        aligned = min(len(artifact.med_A), len(artifact.iqr_A), len(artifact.time_grid))

        group_models: Dict[str, Dict[int, GridModel]] = {}
        for group, offsets in zip(constants.CALIBRATION_GROUPS, artifact.delta):
            models: Dict[int, GridModel] = {}
            for t in range(min(aligned, len(offsets))):
                models[artifact.time_grid[t]] = GridModel(
                    params=(p.b0 + offsets[t], p.b1, p.k, p.x0),
                    med=artifact.med_A[t],
                    iqr=artifact.iqr_A[t],
                )
            group_models[group] = models

        return cls(
            time_grid=artifact.time_grid,
            group_models=group_models,
            version=artifact.version,
            source=source,
        )

    def nearest_time(self, time_h: int) -> Optional[int]:
        """Return the grid point closest to time_h; the first one wins on ties."""
        if not self.time_grid:
            return None
        return min(self.time_grid, key=lambda t: abs(t - time_h))

    def lookup(self, time_h: int, group: str) -> Optional[GridModel]:
        if not self.available:
            return None
        closest = self.nearest_time(time_h)
        if closest is None:
            return None
        return self.group_models.get(group, {}).get(closest)

    def can_apply(self, time_h: int, group: str) -> bool:
        model = self.lookup(time_h, group)
        return model is not None and model.iqr != 0.0

    def apply(self, raw_score: float, time_h: int, group: str) -> float:
        """
        Map a raw score onto the calibrated scale.

        Args:
            raw_score (float): The raw invasion score.
            time_h (int): Observation time in hours.
            group (str): Calibration group, "A", "D" or "E".

        Returns:
            float: b0' + b1 / (1 + exp(-k * (z - x0))) with z the score
            standardized by the grid point's median and IQR, or raw_score
            unchanged when no usable grid point exists.
        """
        model = self.lookup(time_h, group)
        if model is None or model.iqr == 0.0:
            return raw_score

        b0, b1, k, x0 = model.params
        z = (raw_score - model.med) / model.iqr
        arg = -k * (z - x0)
        arg = max(min(arg, constants.LOGISTIC_ARG_CLAMP), -constants.LOGISTIC_ARG_CLAMP)
        return b0 + b1 / (1.0 + math.exp(arg))

    def __repr__(self):
        state = "Loaded" if self.available else "Unavailable"
        return f"CalibrationModel({state}, version={self.version}, source={self.source})"


def load_calibration_model(
    path: Union[str, Path], logger: Optional[logging.Logger] = None
) -> CalibrationModel:
    """
    Load the calibration artifact, degrading to an Unavailable model on failure.

    Args:
        path (str | Path): The path to the calibration JSON document.
        logger (logging.Logger): Optional logger instance.

    Returns:
        CalibrationModel: Loaded on success, Unavailable otherwise. Never raises.
    """
    logger = logger or logging.getLogger(__name__)
    source = str(path)
    try:
        artifact = CalibrationArtifact.model_validate(load_json_file(source))
    except FileNotFoundError:
        logger.error("[x] Calibration model file not found: %s", source)
        return CalibrationModel.unavailable(source)
    except (json.JSONDecodeError, UnicodeDecodeError, ValidationError, OSError) as e:
        logger.error("[x] Failed to load calibration model %s: %s", source, e)
        return CalibrationModel.unavailable(source)

    model = CalibrationModel.from_artifact(artifact, source=source)
    logger.info(
        "[x] Loaded calibration model %s (version %s, %d grid points)",
        source,
        artifact.version,
        len(artifact.time_grid),
    )
    return model


@lru_cache(maxsize=None)
def _cached_model(source: str) -> CalibrationModel:
    return load_calibration_model(source)


def get_calibration_model(path: Optional[Union[str, Path]] = None) -> CalibrationModel:
    """Load the calibration model once per path and share it afterwards."""
    source = path if path is not None else constants.CALIBRATION_MODEL
    return _cached_model(str(Path(source)))
