"""Constants module"""

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

from os import environ
from pathlib import Path


def get_project_root() -> Path:
    """
    Returns the project root path.

    Args:
        None

    Returns:
        Path: The root path of the project, or the working directory when the
        package is not running from a source checkout.

    Raises:
        None
    """
    cmd = Path(__file__)
    src_parents = [i for i in cmd.parents if i.as_uri().endswith("src")]
    if not src_parents:
        return Path.cwd()
    return Path(src_parents[0]).parent


PROJECT_DIR = get_project_root()

DATA_DIR = PROJECT_DIR / "data"

LOG_CONFIG = Path(__file__).parent / "logging.conf"

SHAP_DIR = Path(environ.get("IMPLANTO_SHAP_DIR", DATA_DIR / "shap"))
CALIBRATION_MODEL = Path(
    environ.get("IMPLANTO_CALIBRATION_MODEL", DATA_DIR / "sigmoid_global_v11.2.json")
)

# (file name, delimiter), read in this order; later tables win on name collisions
SHAP_TABLES = [
    ("Model-A.csv", ";"),
    ("Model-B.csv", ";"),
    ("interaction_intervals.csv", ","),
]

MIN_TIME_H = 0
MAX_TIME_H = 143
BUCKET_HOURS = 8

INTERACTION_MARKER = "-Feature_"

SHAP_WEIGHT = 2.0
SHAP_NORM_FLOOR = 1e-3
DENOMINATOR_FLOOR = 1e-9

TREND_WINDOW = 4
DEFAULT_GROUP = "A"
DECLINING_GROUP = "D"
RISING_GROUP = "E"
CALIBRATION_GROUPS = [DEFAULT_GROUP, DECLINING_GROUP, RISING_GROUP]

LOGISTIC_ARG_CLAMP = 700.0

# Below this value the extractor output is treated as a failed migration measurement
DISTRIBUTION_FAILURE_CUTOFF = -0.01
