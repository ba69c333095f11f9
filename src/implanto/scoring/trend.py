"""Trend-based calibration group selection"""

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

from typing import Iterable, List, Optional, Sequence

from implanto import constants


def classify_trend(history: Sequence[float]) -> str:
    """
    Assign a calibration group from the most recent raw scores.

    Args:
        history (Sequence[float]): Raw scores in the order they were computed.

    Returns:
        str: "A" with fewer than 4 scores, otherwise "D" when the average step
        over the last 4 scores is negative and "E" when it is not.
    """
    window = constants.TREND_WINDOW
    if len(history) < window:
        return constants.DEFAULT_GROUP
    slope = (history[-1] - history[-window]) / float(window - 1)
    return constants.DECLINING_GROUP if slope < 0 else constants.RISING_GROUP


class ScoreHistory:
    """Append-only record of the raw scores of one scoring session."""

    def __init__(self, scores: Optional[Iterable[float]] = None):
        self._scores: List[float] = [float(s) for s in scores] if scores is not None else []

    def append(self, score: float) -> None:
        self._scores.append(float(score))

    def classify(self) -> str:
        return classify_trend(self._scores)

    def to_list(self) -> List[float]:
        return list(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __iter__(self):
        return iter(self._scores)


class ScoringSession:
    """
    Holds the score history shared by consecutive scoring calls.

    A session is not thread safe; callers that want trend continuity reuse the
    same session and serialize their calls to it.
    """

    def __init__(self, history: Optional[ScoreHistory] = None):
        self.history = history if history is not None else ScoreHistory()

    def record(self, raw_score: float) -> str:
        """Append a raw score and return the group for the updated history."""
        self.history.append(raw_score)
        return self.history.classify()
