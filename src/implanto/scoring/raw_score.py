"""Raw invasion score from SHAP-weighted morphological parameters"""

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
import math
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from implanto import constants

from .errors import MissingParameterError
from .names import SCORING_PARAMETERS, normalize_mapping


def _weights(shap_values: Sequence[float], count: int) -> Tuple[np.ndarray, np.ndarray]:
    """Return the signed amplitude for the first `count` SHAP values."""
    shap = np.asarray(shap_values, dtype=float)
    if len(shap) < count:
        raise ValueError(
            f"Got {len(shap)} SHAP values for {count} measured parameters"
        )
    max_abs = float(np.max(np.abs(shap))) if len(shap) else 1.0
    max_shap = max(max_abs, constants.SHAP_NORM_FLOOR)

    raw = shap[:count]
    norm = np.maximum(np.abs(raw) / max_shap, constants.SHAP_NORM_FLOOR)
    amp = constants.SHAP_WEIGHT * norm**2
    sign = np.where(raw >= 0, 1.0, -1.0)
    return sign, amp


def _terms(
    shap_values: Sequence[float], measured_params: Sequence[float]
) -> Tuple[np.ndarray, float]:
    measured = np.asarray(measured_params, dtype=float)
    sign, amp = _weights(shap_values, len(measured))
    numerators = sign * amp * measured
    denominator = float(np.sum(measured**2 + amp**2))
    return numerators, math.sqrt(max(denominator, constants.DENOMINATOR_FLOOR))


def raw_invasion_score(
    shap_values: Sequence[float], measured_params: Sequence[float]
) -> float:
    """
    Combine SHAP weights and measured parameters into the raw invasion score.

    Both sequences are aligned by position. Each SHAP value is scaled by the
    largest absolute value, floored at 1e-3 and squared into an amplitude; the
    signed amplitudes weight the measured values and the sum is divided by the
    norm of (measured, amplitude).

    Args:
        shap_values (Sequence[float]): SHAP weights, at least one per measured value.
        measured_params (Sequence[float]): Measured parameter values.

    Returns:
        float: The unbounded raw score.

    Raises:
        ValueError: If there are fewer SHAP values than measured values.
    """
    numerators, norm = _terms(shap_values, measured_params)
    return float(np.sum(numerators)) / norm


def parameter_contributions(
    shap_values: Sequence[float],
    measured_params: Sequence[float],
    names: Optional[Sequence[str]] = None,
) -> pd.DataFrame:
    """
    Break the raw score down into per-parameter contributions.

    The Contribution column sums to raw_invasion_score(shap_values, measured_params).
    """
    names = list(names) if names is not None else list(SCORING_PARAMETERS)
    numerators, norm = _terms(shap_values, measured_params)
    frame = pd.DataFrame(
        {
            "Parameter": names[: len(numerators)],
            "SHAP": list(shap_values)[: len(numerators)],
            "Value": list(measured_params),
            "Contribution": numerators / norm,
        }
    )
    return frame


def project_values(
    values: Mapping[str, float],
    names: Sequence[str] = SCORING_PARAMETERS,
    default: Optional[float] = None,
) -> List[float]:
    """
    Project a name-keyed mapping onto a fixed, ordered list of names.

    Args:
        values (Mapping[str, float]): Values keyed by canonical name.
        names (Sequence[str]): The order to project onto.
        default (float): Value for absent names. When None, absent names raise.

    Returns:
        List[float]: One value per name, in order.

    Raises:
        MissingParameterError: If a name is absent and no default is given.
    """
    projected = []
    for name in names:
        if name in values:
            projected.append(float(values[name]))
        elif default is not None:
            projected.append(float(default))
        else:
            raise MissingParameterError(f"Missing measured parameter: {name}")
    return projected


def shap_weights_for(
    shap_values: Mapping[str, float], names: Sequence[str] = SCORING_PARAMETERS
) -> List[float]:
    """Project the per-parameter SHAP values onto names; absent parameters get 0.0."""
    logger = logging.getLogger(__name__)
    plain = {
        key: value
        for key, value in shap_values.items()
        if constants.INTERACTION_MARKER not in key
    }
    normalized: Dict[str, float] = normalize_mapping(plain)
    missing = [name for name in names if name not in normalized]
    if missing:
        logger.warning("No SHAP value for %s, using 0.0", ", ".join(missing))
    return project_values(normalized, names, default=0.0)
