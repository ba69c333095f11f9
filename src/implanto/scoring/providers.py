"""Measured-parameter and feature providers"""

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
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Mapping, Union

from implanto import constants
from implanto.utils import load_json_file

from .errors import ParseError, ResourceNotFound
from .names import MIGRATION_DISTRIBUTION, MIGRATION_RADIUS, PROJECTION_COUNT

"""
****************************************************
Provider interfaces
****************************************************
"""


class ParameterProvider(ABC):
    """Source of the measured morphological parameters."""

    @abstractmethod
    def get_parameters(self) -> Dict[str, float]:
        """
        Return the measured parameters keyed by (possibly non-canonical) name.

        Raises:
            NotImplementedError: If called on the base class directly.
        """
        raise NotImplementedError("get_parameters must be implemented in a subclass")


class FeatureProvider(ABC):
    """Source of the learned feature vector."""

    @abstractmethod
    def get_features(self) -> Dict[str, float]:
        """
        Return the feature vector keyed by feature name.

        Raises:
            NotImplementedError: If called on the base class directly.
        """
        raise NotImplementedError("get_features must be implemented in a subclass")


"""
****************************************************
Implementations
****************************************************
"""


def load_value_mapping(file_path: Union[str, Path]) -> Dict[str, float]:
    """
    Read a JSON object of name -> number.

    Args:
        file_path (str | Path): The path to the JSON file.

    Returns:
        Dict[str, float]: The values as floats.

    Raises:
        ResourceNotFound: If the file does not exist.
        ParseError: If the file is not a JSON object of numbers.
    """
    try:
        data = load_json_file(str(file_path))
    except FileNotFoundError as e:
        raise ResourceNotFound(f"Resource not found: {file_path}") from e
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ParseError(f"Could not parse {file_path}: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Expected a JSON object in {file_path}, got {type(data).__name__}")
    try:
        return {str(key): float(value) for key, value in data.items()}
    except (TypeError, ValueError) as e:
        raise ParseError(f"Non-numeric value in {file_path}: {e}") from e


class StaticParameterProvider(ParameterProvider):
    def __init__(self, parameters: Mapping[str, float]):
        self.parameters = dict(parameters)

    def get_parameters(self) -> Dict[str, float]:
        return dict(self.parameters)


class StaticFeatureProvider(FeatureProvider):
    def __init__(self, features: Mapping[str, float]):
        self.features = dict(features)

    def get_features(self) -> Dict[str, float]:
        return dict(self.features)


class JsonParameterProvider(ParameterProvider):
    """Reads the measured parameters from a JSON file written by the extractor."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = file_path

    def get_parameters(self) -> Dict[str, float]:
        return load_value_mapping(self.file_path)


class JsonFeatureProvider(FeatureProvider):
    """Reads the feature vector ("Feature_1", "Feature_2", ...) from a JSON file."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = file_path

    def get_features(self) -> Dict[str, float]:
        return load_value_mapping(self.file_path)


def sanitize_parameters(parameters: Mapping[str, float]) -> Dict[str, float]:
    """
    Zero the migration measurements when the extractor reports a failed migration.

    A distribution of migration/invasion below -0.01 means no migration front was
    found, so the migration radius, the distribution and the projection count are
    all set to 0.0. Expects canonical names.
    """
    logger = logging.getLogger(__name__)
    sanitized = dict(parameters)
    distribution = sanitized.get(MIGRATION_DISTRIBUTION)
    if distribution is not None and distribution < constants.DISTRIBUTION_FAILURE_CUTOFF:
        logger.info(
            "[x] Distribution of migration is %.4f, zeroing migration parameters", distribution
        )
        for name in (MIGRATION_RADIUS, MIGRATION_DISTRIBUTION, PROJECTION_COUNT):
            sanitized[name] = 0.0
    return sanitized
