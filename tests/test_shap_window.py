"""Tests for SHAP table loading and time-window extraction"""

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

import pytest

from implanto.scoring.errors import InvalidTimeError, ParseError, ResourceNotFound
from implanto.scoring.raw_score import shap_weights_for
from implanto.scoring.shap_window import (
    ShapWindowExtractor,
    bucket_bounds,
    parse_cell,
    parse_time_label,
)
from implanto.scoring.tables import ShapTableSource, load_shap_table


def test_load_shap_table_returns_header_and_rows(shap_dir):
    rows = load_shap_table("Model-A.csv", ";", shap_dir)
    assert rows[0] == ["time", "Cell Radius", "Area"]
    assert rows[1] == ["0-8", "0.10", "0.20"]
    assert len(rows) == 6


def test_load_shap_table_missing_resource(tmp_path):
    with pytest.raises(ResourceNotFound):
        load_shap_table("Model-A.csv", ";", tmp_path)


def test_load_shap_table_ragged_rows_fail(tmp_path):
    (tmp_path / "broken.csv").write_text("time,a\n0-8,1,2,3\n", encoding="utf-8")
    with pytest.raises(ParseError):
        load_shap_table("broken.csv", ",", tmp_path)


def test_load_shap_table_empty_file(tmp_path):
    (tmp_path / "empty.csv").write_text("", encoding="utf-8")
    with pytest.raises(ParseError):
        load_shap_table("empty.csv", ",", tmp_path)


@pytest.mark.parametrize(
    "time_h, expected",
    [(0, (0, 8)), (7, (0, 8)), (8, (8, 16)), (30, (24, 32)), (143, (136, 144))],
)
def test_bucket_bounds(time_h, expected):
    assert bucket_bounds(time_h) == expected


def test_parse_time_label():
    assert parse_time_label("24-32") == 24
    assert parse_time_label(" 8 - 16") == 8
    assert parse_time_label("bad-row") is None
    assert parse_time_label("") is None


def test_parse_cell_label_value_encoding():
    assert parse_cell("0.5") == 0.5
    assert parse_cell("Area: -0.25") == -0.25
    with pytest.raises(ValueError):
        parse_cell("n/a")


def test_extract_collapses_all_tables(shap_dir):
    extractor = ShapWindowExtractor(directory=shap_dir)
    result = extractor.extract(24)

    assert (result.bucket_start, result.bucket_end) == (24, 32)
    # later rows win inside a table; empty cells never overwrite
    assert result.values["Cell Radius"] == pytest.approx(0.60)
    assert result.values["Area"] == pytest.approx(-0.30)
    assert result.values["Migration Radius"] == pytest.approx(-0.40)
    assert result.values["Number of Projections"] == pytest.approx(0.10)
    assert result.values["Area-Feature_1"] == pytest.approx(0.11)
    assert len(result.values) == 8


def test_extract_depends_only_on_bucket(shap_dir):
    extractor = ShapWindowExtractor(directory=shap_dir)
    assert extractor.extract(24).values == extractor.extract(30).values
    assert extractor.extract(24).values != extractor.extract(32).values


def test_extract_later_tables_win(shap_dir):
    extractor = ShapWindowExtractor(directory=shap_dir)
    result = extractor.extract(33)
    assert result.values == {
        "Cell Radius": 0.7,
        "Area": 0.9,
        "Migration Radius": 0.0,
        "Number of Projections": 0.0,
    }


def test_extract_reads_bucket_only_in_second_table(shap_dir):
    result = ShapWindowExtractor(directory=shap_dir).extract(47)
    assert result.values == {
        "Migration Radius": 1.0,
        "Number of Projections": 1.0,
        "Area": 1.0,
    }


def test_extract_skips_malformed_cells(tmp_path):
    (tmp_path / "only.csv").write_text(
        "time,good,bad\n16-24,0.3,oops\nnot-a-time,9,9\n", encoding="utf-8"
    )
    extractor = ShapWindowExtractor(
        tables=[ShapTableSource(name="only.csv", delimiter=",")], directory=tmp_path
    )
    assert extractor.extract(16).values == {"good": 0.3}


def test_extract_empty_bucket(shap_dir):
    extractor = ShapWindowExtractor(directory=shap_dir)
    assert extractor.extract(100).values == {}


@pytest.mark.parametrize("time_h", [-1, 144, 12.5, "24", None])
def test_extract_rejects_invalid_time(shap_dir, time_h):
    extractor = ShapWindowExtractor(directory=shap_dir)
    with pytest.raises(InvalidTimeError):
        extractor.extract(time_h)


def test_extract_missing_table(tmp_path):
    extractor = ShapWindowExtractor(directory=tmp_path)
    with pytest.raises(ResourceNotFound):
        extractor.extract(0)


def test_value_set_frame(shap_dir):
    frame = ShapWindowExtractor(directory=shap_dir).extract(0).to_frame()
    assert list(frame.columns) == ["Parameter", "Value"]
    assert dict(zip(frame["Parameter"], frame["Value"]))["Cell Radius"] == pytest.approx(0.10)


def test_extract_synonym_headers_follow_latest_write(tmp_path):
    (tmp_path / "first.csv").write_text("time,Area,Cell Area\n0-8,0.1,0.2\n", encoding="utf-8")
    (tmp_path / "second.csv").write_text("time,Area\n0-8,-0.9\n", encoding="utf-8")
    extractor = ShapWindowExtractor(
        tables=[
            ShapTableSource(name="first.csv", delimiter=","),
            ShapTableSource(name="second.csv", delimiter=","),
        ],
        directory=tmp_path,
    )
    values = extractor.extract(0).values

    assert list(values) == ["Cell Area", "Area"]
    # "Area" and "Cell Area" share a canonical name; the second table wrote last
    assert shap_weights_for(values)[1] == pytest.approx(-0.9)
