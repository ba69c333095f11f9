"""Shared fixtures: SHAP tables and calibration artifacts written to temporary directories."""

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

import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parent.parent / "src"

if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from implanto.utils import save_json_data  # noqa: E402

MODEL_A = """time;Cell Radius;Area
0-8;0.10;0.20
24-32;0.50;-0.25
26-32;0.60;x:-0.30
bad-row;9.0;9.0
32-40;0.70;0.80
"""

MODEL_B = """time;Migration Radius;Number of Projections;Area
24-32;-0.40;0.10;
32-40;0.0;0.0;0.9
40-48;1.0;1.0;1.0
"""

INTERACTIONS = """time,Area-Feature_1,Cell Radius-Feature_2,Circularity-Feature_3,Area-Feature_x
0-8,0.01,0.02,0.03,0.04
24-32,0.11,0.12,0.13,0.14
"""


@pytest.fixture
def shap_dir(tmp_path):
    """Directory holding the three SHAP tables."""
    directory = tmp_path / "shap"
    directory.mkdir()
    (directory / "Model-A.csv").write_text(MODEL_A, encoding="utf-8")
    (directory / "Model-B.csv").write_text(MODEL_B, encoding="utf-8")
    (directory / "interaction_intervals.csv").write_text(INTERACTIONS, encoding="utf-8")
    return directory


@pytest.fixture
def midpoint_artifact():
    """Calibration artifact whose curve is 0.5 at a raw score of 0."""
    return {
        "version": "test",
        "params": {"b0": 0.0, "b1": 1.0, "k": 1.0, "x0": 0.0},
        "time_grid": [0, 8],
        "med_A": [0.0, 0.0],
        "iqr_A": [1.0, 1.0],
        "Δ": [[0.0, 0.0], [0.0, 0.0], [0.0, 0.0]],
    }


@pytest.fixture
def artifact_path(tmp_path, midpoint_artifact):
    path = tmp_path / "sigmoid.json"
    save_json_data(midpoint_artifact, str(path))
    return path
