"""Canonical morphological parameter names"""

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

from typing import Dict, Mapping, Optional

SPHEROID_RADIUS = "spheroid radius"
TOTAL_AREA = "total spheroid and cell projections area"
MIGRATION_RADIUS = "the migration/invasion radius"
MIGRATION_DISTRIBUTION = "the distribution of migration/invasion"
PROJECTION_COUNT = "the number of cell projections"
CIRCULARITY = "circularity"

PARAMETER_VOCABULARY = [
    SPHEROID_RADIUS,
    TOTAL_AREA,
    MIGRATION_RADIUS,
    MIGRATION_DISTRIBUTION,
    PROJECTION_COUNT,
    CIRCULARITY,
]

# Order shared by the SHAP weights and the measured values in the raw score
SCORING_PARAMETERS = [
    SPHEROID_RADIUS,
    TOTAL_AREA,
    MIGRATION_RADIUS,
    PROJECTION_COUNT,
]

# Row index of each parameter in the interaction matrix
INTERACTION_INDEX = {
    name: index
    for index, name in enumerate(
        [SPHEROID_RADIUS, TOTAL_AREA, MIGRATION_RADIUS, PROJECTION_COUNT, CIRCULARITY]
    )
}

SYNONYMS = {
    "cell radius": SPHEROID_RADIUS,
    "radius": SPHEROID_RADIUS,
    "spheroid size": SPHEROID_RADIUS,
    "area": TOTAL_AREA,
    "spheroid area": TOTAL_AREA,
    "cell area": TOTAL_AREA,
    "migration radius": MIGRATION_RADIUS,
    "invasion radius": MIGRATION_RADIUS,
    "migration/invasion radius": MIGRATION_RADIUS,
    "distribution of migration": MIGRATION_DISTRIBUTION,
    "distribution of invasion": MIGRATION_DISTRIBUTION,
    "number of projections": PROJECTION_COUNT,
    "projection count": PROJECTION_COUNT,
    "cell projections": PROJECTION_COUNT,
}

_LOOKUP = {**{name: name for name in PARAMETER_VOCABULARY}, **SYNONYMS}


def normalize_name(name: Optional[str]) -> str:
    """
    Map a free-text parameter name onto the canonical vocabulary.

    Matching ignores case and surrounding whitespace. Names that are neither a
    canonical entry nor a known synonym are returned unchanged.

    Args:
        name (str): The name to normalize.

    Returns:
        str: The canonical name, the input itself when unmatched, or "" for None.
    """
    if name is None:
        return ""
    return _LOOKUP.get(name.strip().lower(), name)


def normalize_mapping(values: Mapping[str, float]) -> Dict[str, float]:
    """Normalize every key of a name -> value mapping. Later keys win on collisions."""
    return {normalize_name(key): value for key, value in values.items()}
