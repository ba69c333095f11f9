"""Command line scoring of a single observation time"""

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

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from implanto import constants
from implanto.scoring.calibration import get_calibration_model
from implanto.scoring.engine import InvasionFactorEngine
from implanto.scoring.errors import InvalidTimeError, ProcessingError
from implanto.scoring.models import InvasionFactorResult
from implanto.scoring.providers import JsonFeatureProvider, JsonParameterProvider
from implanto.scoring.raw_score import parameter_contributions
from implanto.scoring.shap_window import ShapWindowExtractor
from implanto.scoring.trend import ScoreHistory, ScoringSession
from implanto.utils import load_json_file, safe_create_path, save_json_data


def load_history(history_path: Optional[str], logger: logging.Logger) -> ScoreHistory:
    """
    Load a persisted score history.

    Args:
        history_path (str): JSON file holding a list of raw scores, or None.
        logger (logging.Logger): Logger instance for capturing log messages.

    Returns:
        ScoreHistory: The stored history, or an empty one when there is none yet.

    Raises:
        ProcessingError: If the file exists but does not hold a list of numbers.
    """
    if not history_path or not Path(history_path).exists():
        return ScoreHistory()
    try:
        scores = load_json_file(history_path)
        if not isinstance(scores, list):
            raise TypeError(f"expected a JSON list, got {type(scores).__name__}")
        history = ScoreHistory(scores)
    except (ValueError, TypeError) as e:
        raise ProcessingError(f"Invalid score history in {history_path}: {e}") from e
    logger.info("[x] Loaded %d previous raw scores from %s", len(history), history_path)
    return history


def write_result(result: InvasionFactorResult, output_path: str, logger: logging.Logger) -> None:
    """
    Save the result table. ".json" outputs get the full result, anything else a CSV table.
    """
    if output_path.endswith(".json"):
        save_json_data(result.model_dump(), output_path)
    else:
        safe_create_path(output_path)
        result.to_frame().to_csv(output_path, index=False)
    logger.info("[x] Saved the result to %s", output_path)


def score_time_point(
    time_h: int,
    parameters_path: str,
    logger: logging.Logger,
    features_path: Optional[str] = None,
    shap_dir: Optional[str] = None,
    calibration_path: Optional[str] = None,
    history_path: Optional[str] = None,
    output_path: Optional[str] = None,
    show_shap: bool = False,
    explain: bool = False,
) -> InvasionFactorResult:
    """
    Compute the Invasion Factor for one observation time.

    Args:
        time_h (int): Observation time in hours, 0 to 143.
        parameters_path (str): JSON file with the measured parameters.
        logger (logging.Logger): Logger instance for capturing log messages.
        features_path (str): Optional JSON file with the feature vector.
        shap_dir (str): Directory holding the SHAP tables.
        calibration_path (str): The calibration artifact.
        history_path (str): Optional JSON file persisting the score history across runs.
        output_path (str): Optional CSV or JSON file for the result.
        show_shap (bool): Print the extracted SHAP values.
        explain (bool): Print the per-parameter contributions to the raw score.

    Returns:
        InvasionFactorResult: The scored result.

    Raises:
        InvalidTimeError: If time_h is out of range.
        ProcessingError: If an input cannot be read.
    """
    calibration = get_calibration_model(calibration_path)
    if not calibration.available:
        logger.warning("[x] Calibration unavailable, reporting the raw score")

    engine = InvasionFactorEngine(
        parameter_provider=JsonParameterProvider(parameters_path),
        feature_provider=JsonFeatureProvider(features_path) if features_path else None,
        calibration=calibration,
        extractor=ShapWindowExtractor(directory=shap_dir),
        logger=logger,
    )
    session = ScoringSession(load_history(history_path, logger))
    result = engine.compute_invasion_factor(time_h, session=session)

    if history_path:
        save_json_data(session.history.to_list(), history_path)

    if show_shap and engine.last_shap_values is not None:
        print(engine.last_shap_values.to_frame().to_string(index=False))
        print()
    if explain:
        print(parameter_contributions(engine.last_weights, engine.last_measured).to_string(index=False))
        print()

    print(result.to_frame().to_string(index=False))

    if output_path:
        write_result(result, output_path, logger)
    return result


def run(logger: logging.Logger, argv: Optional[List[str]] = None) -> int:
    """
    Parse the command line and score the requested time point.

    Args:
        logger (logging.Logger): Logger instance for capturing log messages.
        argv (List[str]): Arguments to parse, defaults to sys.argv.

    Returns:
        int: 0 on success, 1 on invalid input, a processing error or an I/O failure.
    """
    parser = argparse.ArgumentParser(description="Invasion Factor scoring")

    parser.add_argument(
        "-t",
        "--time",
        help="Observation time in hours (0-143)",
        required=True,
        type=int,
    )
    parser.add_argument(
        "-p",
        "--parameters",
        help="JSON file with the measured morphological parameters",
        required=True,
    )
    parser.add_argument(
        "-f",
        "--features",
        help="JSON file with the extracted feature vector",
        required=False,
        default=None,
    )
    parser.add_argument(
        "--shap_dir",
        help="Directory containing the SHAP tables",
        required=False,
        default=str(constants.SHAP_DIR),
    )
    parser.add_argument(
        "--calibration",
        help="Path to the calibration model JSON",
        required=False,
        default=str(constants.CALIBRATION_MODEL),
    )
    parser.add_argument(
        "--history_file",
        help="JSON file that keeps the raw score history between runs",
        required=False,
        default=None,
    )
    parser.add_argument(
        "-o",
        "--output",
        help="Write the result to this CSV or JSON file",
        required=False,
        default=None,
    )
    parser.add_argument(
        "--show_shap",
        help="Print the SHAP values of the selected time bucket",
        required=False,
        action="store_true",
    )
    parser.add_argument(
        "--explain",
        help="Print the contribution of each parameter to the raw score",
        required=False,
        action="store_true",
    )
    parser.add_argument(
        "-l",
        "--log_level",
        help="The log level to use for logging",
        required=False,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    )

    args = vars(parser.parse_args(argv))
    logger.setLevel(args["log_level"])

    try:
        score_time_point(
            time_h=args["time"],
            parameters_path=args["parameters"],
            logger=logger,
            features_path=args["features"],
            shap_dir=args["shap_dir"],
            calibration_path=args["calibration"],
            history_path=args["history_file"],
            output_path=args["output"],
            show_shap=args["show_shap"],
            explain=args["explain"],
        )
    except InvalidTimeError as e:
        logger.error(f"Invalid time: {e}")
        print(f"Invalid time: {e}")
        return 1
    except ProcessingError as e:
        logger.error(f"Processing error: {e}")
        print(f"Processing error: {e}")
        return 1
    except OSError as e:
        logger.error(f"I/O error: {e}")
        print(f"I/O error: {e}")
        return 1
    return 0
