"""Tests for the raw invasion score"""

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

import math

import pytest

from implanto.scoring.errors import MissingParameterError
from implanto.scoring.names import (
    MIGRATION_RADIUS,
    PROJECTION_COUNT,
    SCORING_PARAMETERS,
    SPHEROID_RADIUS,
    TOTAL_AREA,
)
from implanto.scoring.raw_score import (
    parameter_contributions,
    project_values,
    raw_invasion_score,
    shap_weights_for,
)


def reference_score(shap_values, measured):
    max_shap = max(max(abs(s) for s in shap_values), 1e-3)
    numerator = denominator = 0.0
    for raw, value in zip(shap_values, measured):
        norm = max(abs(raw) / max_shap, 1e-3)
        amp = 2.0 * norm**2
        sign = 1 if raw >= 0 else -1
        numerator += sign * amp * value
        denominator += value**2 + amp**2
    return numerator / math.sqrt(max(denominator, 1e-9))


def test_opposite_weights_cancel():
    assert raw_invasion_score([1.0, -1.0], [10.0, 10.0]) == pytest.approx(0.0, abs=1e-12)


def test_matches_reference_formula():
    shap_values = [0.6, -0.3, -0.4, 0.1]
    measured = [120.0, 3400.0, 210.0, 7.0]
    assert raw_invasion_score(shap_values, measured) == pytest.approx(
        reference_score(shap_values, measured)
    )


def test_single_positive_weight():
    # amp = 2, score = 2 * 3 / sqrt(9 + 4)
    assert raw_invasion_score([0.5], [3.0]) == pytest.approx(6.0 / math.sqrt(13.0))


def test_all_zero_shap_is_finite():
    score = raw_invasion_score([0.0, 0.0, 0.0, 0.0], [1.0, 2.0, 3.0, 4.0])
    assert math.isfinite(score)
    assert score > 0


def test_all_zero_inputs_are_finite():
    assert raw_invasion_score([0.0, 0.0], [0.0, 0.0]) == pytest.approx(0.0)


def test_only_leading_shap_values_are_scored():
    # extra SHAP values still take part in the max-abs scaling
    assert raw_invasion_score([0.5, 1.0], [3.0]) == pytest.approx(
        2.0 * 0.25 * 3.0 / math.sqrt(9.0 + 0.25)
    )


def test_too_few_shap_values():
    with pytest.raises(ValueError):
        raw_invasion_score([0.5], [1.0, 2.0])


def test_contributions_sum_to_score():
    shap_values = [0.6, -0.3, -0.4, 0.1]
    measured = [12.0, 34.0, 21.0, 7.0]
    frame = parameter_contributions(shap_values, measured)
    assert list(frame["Parameter"]) == SCORING_PARAMETERS
    assert frame["Contribution"].sum() == pytest.approx(raw_invasion_score(shap_values, measured))


def test_project_values_uses_fixed_order():
    values = {
        PROJECTION_COUNT: 4.0,
        MIGRATION_RADIUS: 3.0,
        SPHEROID_RADIUS: 1.0,
        TOTAL_AREA: 2.0,
        "circularity": 9.0,
    }
    assert project_values(values) == [1.0, 2.0, 3.0, 4.0]


def test_project_values_missing_parameter():
    with pytest.raises(MissingParameterError):
        project_values({SPHEROID_RADIUS: 1.0})


def test_shap_weights_normalize_names_and_skip_interactions():
    shap_values = {
        "Number of Projections": 0.1,
        "Area-Feature_1": 5.0,
        "Cell Radius": 0.6,
        "Area": -0.3,
    }
    assert shap_weights_for(shap_values) == [0.6, -0.3, 0.0, 0.1]
