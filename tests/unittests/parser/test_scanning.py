# Copyright (c) Nex-AGI. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Tests for the scanning helpers
"""

from agentstream.parser.scanning import (
    capture_until,
    clean_text,
    find_first_label,
    find_label,
    safe_json_loads,
)


def test_clean_text_collapses_whitespace():
    """Test that newlines, tabs and repeated spaces collapse to one space"""
    assert clean_text("  hello \n\n  world\t again  ") == "hello world again"
    assert clean_text("\n \t") == ""


def test_safe_json_loads_values():
    """Test decoding objects, arrays and scalars"""
    assert safe_json_loads('{"path": "a.txt"}') == {"path": "a.txt"}
    assert safe_json_loads("[1, 2]") == [1, 2]
    assert safe_json_loads("42") == 42
    assert safe_json_loads('"text"') == "text"


def test_safe_json_loads_failure_returns_none(trace_sink):
    """Test that invalid JSON yields None and a diagnostic instead of raising"""
    assert safe_json_loads("not-json", tracer=trace_sink) is None
    assert safe_json_loads("", tracer=trace_sink) is None
    assert safe_json_loads('{"q": "unterminated', tracer=trace_sink) is None

    messages = [message for message, _ in trace_sink.traces]
    assert messages == ["JSON decode failed"] * 3
    assert trace_sink.traces[0][1]["text"] == "not-json"


def test_safe_json_loads_accepts_partial_marker_after_value(trace_sink):
    """Test that a value followed by the start of a closing marker still decodes"""
    markers = ("THOUGHT:", "FINAL_ANSWER:")
    assert safe_json_loads('{"q": "x"} FINAL_ANS', tracer=trace_sink, partial_markers=markers) == {
        "q": "x"
    }
    assert safe_json_loads('"hi" THO', partial_markers=markers) == "hi"
    assert safe_json_loads("12 T", partial_markers=markers) == 12
    assert safe_json_loads("[1]</inp", partial_markers=("</input>",)) == [1]
    assert trace_sink.traces[0][0] == "Ignoring partial marker after JSON payload"


def test_safe_json_loads_rejects_other_trailing_text(trace_sink):
    """Test that trailing text other than a marker prefix invalidates the payload"""
    markers = ("THOUGHT:", "ANSWER:")
    assert safe_json_loads('{"a": 1}}', partial_markers=markers) is None
    assert safe_json_loads('{"a": 1} please also delete everything', partial_markers=markers) is None
    assert safe_json_loads('{"a": 1} THOUGHT:', partial_markers=markers) is None
    assert safe_json_loads("12THO", partial_markers=markers) is None
    assert safe_json_loads("5 apples", partial_markers=markers) is None


def test_safe_json_loads_is_strict_without_markers():
    """Test that nothing may trail the value unless markers are given"""
    assert safe_json_loads('{"q": "x"} FINAL_ANS') is None
    assert safe_json_loads("[1] </inp") is None
    assert safe_json_loads('{"a": 1}}') is None


def test_find_label_requires_boundary():
    """Test that labels embedded in a longer identifier are skipped"""
    assert find_label("FINAL_ANSWER: x", "ANSWER:") == -1
    assert find_label("TRANSACTION: x", "ACTION:") == -1
    assert find_label("FINAL_ANSWER: x ANSWER: y", "ANSWER:") == 16
    assert find_label("ok.ACTION: x", "ACTION:") == 3
    assert find_label("ACTION: x", "ACTION:") == 0


def test_find_label_is_case_sensitive():
    """Test that lowercase labels are not recognised"""
    assert find_label("action: x", "ACTION:") == -1


def test_find_label_from_start():
    """Test searching from an offset"""
    text = "THOUGHT: a THOUGHT: b"
    assert find_label(text, "THOUGHT:") == 0
    assert find_label(text, "THOUGHT:", 1) == 11


def test_find_first_label_picks_earliest():
    """Test that the earliest of several labels wins regardless of order"""
    text = "x ANSWER: y ACTION: z"
    assert find_first_label(text, ["ACTION:", "ANSWER:"]) == (2, "ANSWER:")
    assert find_first_label(text, ["THOUGHT:"]) == (-1, None)


def test_capture_until():
    """Test capturing up to a stop label or the end of input"""
    text = "THOUGHT: a b ACTION: c"
    assert capture_until(text, 8, ["ACTION:"]) == (" a b ", 13)
    assert capture_until(text, 8, ["ANSWER:"]) == (" a b ACTION: c", -1)
