"""Invasion Factor scoring entry point"""

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
from typing import Dict, List, Optional

from numpy.typing import NDArray

from .calibration import CalibrationModel
from .interactions import build_interaction_matrix
from .models import InvasionFactorResult, ShapValueSet, validate_time
from .names import SCORING_PARAMETERS, normalize_mapping
from .providers import FeatureProvider, ParameterProvider, sanitize_parameters
from .raw_score import project_values, raw_invasion_score, shap_weights_for
from .shap_window import ShapWindowExtractor
from .trend import ScoringSession


class InvasionFactorEngine:
    """Computes the calibrated Invasion Factor for an observation time"""

    def __init__(
        self,
        parameter_provider: ParameterProvider,
        calibration: CalibrationModel,
        feature_provider: Optional[FeatureProvider] = None,
        extractor: Optional[ShapWindowExtractor] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            parameter_provider: Source of the measured parameters.
            calibration: The shared calibration model (may be Unavailable).
            feature_provider: Optional source of the feature vector.
            extractor: SHAP window extractor, defaults to the configured tables.
            logger: Optional logger instance
        """
        self.parameter_provider = parameter_provider
        self.feature_provider = feature_provider
        self.calibration = calibration
        self.extractor = extractor or ShapWindowExtractor()
        self.logger = logger or logging.getLogger(__name__)

        # Populated by each call for inspection; not consumed by the score
        self.last_shap_values: Optional[ShapValueSet] = None
        self.last_interactions: Optional[NDArray] = None
        self.last_weights: Optional[List[float]] = None
        self.last_measured: Optional[List[float]] = None

    def read_parameters(self) -> Dict[str, float]:
        parameters = normalize_mapping(self.parameter_provider.get_parameters())
        return sanitize_parameters(parameters)

    def read_features(self) -> Dict[str, float]:
        """Read the feature vector; a failing provider yields no features."""
        if self.feature_provider is None:
            return {}
        try:
            return dict(self.feature_provider.get_features())
        except Exception as e:
            self.logger.warning(f"Feature extraction failed: {e}")
            return {}

    def compute_invasion_factor(
        self, time_h: int, session: Optional[ScoringSession] = None
    ) -> InvasionFactorResult:
        """
        Score one observation time.

        Args:
            time_h (int): Observation time in hours, 0 to 143.
            session (ScoringSession): Session whose history drives the trend
                group. A new session is used when omitted, which yields group "A".

        Returns:
            InvasionFactorResult: The calibrated score and its inputs.

        Raises:
            InvalidTimeError: If time_h is not an integer between 0 and 143.
            ProcessingError: If the SHAP tables or measured parameters are unusable.
        """
        time_h = validate_time(time_h)
        session = session if session is not None else ScoringSession()

        parameters = self.read_parameters()
        features = self.read_features()
        shap_values = self.extractor.extract(time_h)

        self.last_shap_values = shap_values
        self.last_interactions = build_interaction_matrix(
            shap_values.values, max(len(features), 1)
        )

        weights = shap_weights_for(shap_values.values, SCORING_PARAMETERS)
        measured = project_values(parameters, SCORING_PARAMETERS)
        raw_score = raw_invasion_score(weights, measured)
        self.last_weights, self.last_measured = weights, measured

        group = session.record(raw_score)
        invasion_factor = self.calibration.apply(raw_score, time_h, group)
        self.logger.info(
            "[x] %dh: raw score %.6f, group %s, invasion factor %.6f",
            time_h,
            raw_score,
            group,
            invasion_factor,
        )

        return InvasionFactorResult(
            time_h=time_h,
            invasion_factor=invasion_factor,
            raw_score=raw_score,
            group=group,
            calibrated=self.calibration.can_apply(time_h, group),
        )
