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
Scanning helpers shared by the format parsers

The parsers locate literal markers with explicit index scans instead of compound
regular expressions, so every capture boundary is visible in the code.
"""

import json
import logging
import re
from collections.abc import Sequence
from typing import Any

from .core_types import TraceCallback

logger = logging.getLogger(__name__)

_WHITESPACE_RUN = re.compile(r"\s+")
_JSON_DECODER = json.JSONDecoder()


def clean_text(text: str) -> str:
    """Strip surrounding whitespace and collapse inner whitespace runs to one space."""
    return _WHITESPACE_RUN.sub(" ", text.strip())


def safe_json_loads(
    text: str, tracer: TraceCallback | None = None, partial_markers: Sequence[str] = ()
) -> Any:
    """
    Decode text as JSON without ever raising.

    A field that is still open at the end of the stream can hold the first few
    characters of the marker that will close it ("THO", "</inp"). When
    partial_markers is given, a complete JSON value followed only by such a
    proper marker prefix is still decoded. Any other trailing text makes the
    payload invalid.

    Args:
        text: The candidate JSON text
        tracer: Optional sink notified when decoding fails
        partial_markers: Markers whose leading characters may trail the value

    Returns:
        Any: The decoded value, or None if the text is not valid JSON
    """
    try:
        return json.loads(text)
    except ValueError as e:
        error = e

    stripped = text.strip()
    if partial_markers and stripped:
        try:
            value, end = _JSON_DECODER.raw_decode(stripped)
        except ValueError:
            pass
        else:
            trailing = stripped[end:]
            tail = trailing.lstrip()
            # A marker glued to an identifier character is not a marker
            separated = len(tail) < len(trailing) or not _is_identifier_char(stripped[end - 1])
            if separated and _is_marker_prefix(tail, partial_markers):
                if tracer is not None:
                    tracer("Ignoring partial marker after JSON payload", {"trailing": tail})
                return value

    if tracer is not None:
        tracer("JSON decode failed", {"text": text, "error": str(error)})
    return None


def _is_marker_prefix(text: str, markers: Sequence[str]) -> bool:
    return bool(text) and any(
        len(text) < len(marker) and marker.startswith(text) for marker in markers
    )


def _is_identifier_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def find_label(text: str, label: str, start: int = 0) -> int:
    """
    Find the first standalone occurrence of a literal label.

    A match preceded by a letter, digit or underscore is skipped, so "ANSWER:"
    is not found inside "FINAL_ANSWER:".

    Args:
        text: The text to search
        label: Case-sensitive literal label, e.g. "ACTION:"
        start: Index to start searching from

    Returns:
        int: Index of the label, or -1 if not found
    """
    idx = text.find(label, start)
    while idx != -1:
        if idx == 0 or not _is_identifier_char(text[idx - 1]):
            return idx
        idx = text.find(label, idx + 1)
    return -1


def find_first_label(text: str, labels: Sequence[str], start: int = 0) -> tuple[int, str | None]:
    """
    Find whichever of the labels occurs earliest at or after start.

    Returns:
        tuple[int, str | None]: (index, label), or (-1, None) if none occurs
    """
    best_idx, best_label = -1, None
    for label in labels:
        idx = find_label(text, label, start)
        if idx != -1 and (best_idx == -1 or idx < best_idx):
            best_idx, best_label = idx, label
    return best_idx, best_label


def capture_until(text: str, start: int, stop_labels: Sequence[str]) -> tuple[str, int]:
    """
    Capture text from start up to the earliest stop label or end of input.

    Args:
        text: The full text
        start: Index where the capture begins
        stop_labels: Labels that terminate the capture

    Returns:
        tuple[str, int]: The raw captured text and the stop label index (-1 when
            the capture ran to end of input)
    """
    stop_idx, _ = find_first_label(text, stop_labels, start)
    if stop_idx == -1:
        return text[start:], -1
    return text[start:stop_idx], stop_idx
