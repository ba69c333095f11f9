"""Parameter x feature interaction matrix"""

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
from typing import Mapping

import numpy as np
from numpy.typing import NDArray

from implanto import constants

from .names import INTERACTION_INDEX, normalize_name


def build_interaction_matrix(values: Mapping[str, float], feature_count: int) -> NDArray:
    """
    Build a symmetric interaction matrix from keys like "Area-Feature_4".

    The parameter part selects the row from the fixed interaction index and the
    1-based feature number selects the column. Every write is mirrored, so the
    matrix stays symmetric. Keys that do not fit the matrix are skipped.

    Args:
        values (Mapping[str, float]): SHAP values keyed by column name.
        feature_count (int): Size of the square matrix, at least 1.

    Returns:
        NDArray: A (feature_count, feature_count) float array.
    """
    logger = logging.getLogger(__name__)
    size = max(int(feature_count), 1)
    matrix = np.zeros((size, size), dtype=float)

    for key, value in values.items():
        if constants.INTERACTION_MARKER not in key:
            continue
        parts = key.split(constants.INTERACTION_MARKER)
        if len(parts) != 2:
            logger.debug("Skipping interaction key with unexpected shape: %s", key)
            continue

        i = INTERACTION_INDEX.get(normalize_name(parts[0].strip()))
        try:
            j = int(parts[1]) - 1
        except ValueError:
            logger.debug("Skipping interaction key with bad feature index: %s", key)
            continue

        if i is None or i >= size or not 0 <= j < size:
            logger.debug("Skipping interaction key outside the matrix: %s", key)
            continue
        matrix[i, j] = matrix[j, i] = value

    return matrix
