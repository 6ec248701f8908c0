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
Labeled-line Parser - Parses THOUGHT: / ACTION: / ACTION_INPUT: / <terminal>: responses

Expected format:
    THOUGHT: I need to read the file first
    ACTION: read_file
    ACTION_INPUT: {"path": "a.txt"}

or, once the model is done:
    THOUGHT: I know the answer now
    ANSWER: The result is 42

Each label introduces one field that runs until the next recognised label or the
end of the text streamed so far. The text and single-token formats share this
algorithm and differ only in the spelling of the terminal label.
"""

import logging
from collections.abc import Sequence

from .base_parser import ParserTracer, is_result_complete
from .core_types import ParseResult, ParserConfig
from .scanning import capture_until, clean_text, find_first_label, safe_json_loads

logger = logging.getLogger(__name__)

THOUGHT_LABEL = "THOUGHT:"
ACTION_LABEL = "ACTION:"
ACTION_INPUT_LABEL = "ACTION_INPUT:"


class LabeledLineParser:
    """
    Streaming parser for uppercase "LABEL:" formatted agent output.

    Labels are matched literally and case-sensitively. When a label occurs more
    than once, the first occurrence wins and later ones are treated as part of
    whichever field they fall into.

    Args:
        config: Session configuration
        format_tag: The tag reported by get_format()
        terminal_labels: Spellings of the final answer label, e.g. ("ANSWER:",)
    """

    def __init__(self, config: ParserConfig, format_tag: str, terminal_labels: Sequence[str]):
        if not terminal_labels:
            raise ValueError("At least one terminal label is required")
        self.config = config
        self._format_tag = format_tag
        self.terminal_labels = tuple(terminal_labels)
        self._tracer = ParserTracer(config, name=f"{format_tag}Parser")

        self._thought_stops = (ACTION_LABEL, ACTION_INPUT_LABEL, *self.terminal_labels)
        self._action_stops = (ACTION_INPUT_LABEL, THOUGHT_LABEL, *self.terminal_labels)
        self._action_input_stops = (THOUGHT_LABEL, *self.terminal_labels)

    def get_format(self) -> str:
        return self._format_tag

    def reset(self) -> None:
        # Stateless: every parse() works on the full text
        self._tracer.trace("Parser reset")

    def is_complete(self, result: ParseResult) -> bool:
        return is_result_complete(result)

    def parse(self, text: str) -> ParseResult:
        """
        Extract every labeled field from the text streamed so far.

        Args:
            text: The full accumulated response text

        Returns:
            ParseResult: A fresh snapshot of the extracted fields
        """
        result = ParseResult()
        self._tracer.trace_input(text)

        self._parse_thought(text, result)
        self._parse_action(text, result)
        self._parse_action_input(text, result)
        self._parse_final_answer(text, result)

        return result

    def _capture_field(
        self, text: str, label: str, stop_labels: Sequence[str]
    ) -> tuple[str | None, bool]:
        """
        Capture the cleaned value after the first occurrence of label.

        Returns:
            tuple[str | None, bool]: The value (None when the label is missing or
                nothing non-blank follows it yet) and whether a stop label closed it
        """
        label_idx, _ = find_first_label(text, (label,))
        if label_idx == -1:
            return None, False

        raw, stop_idx = capture_until(text, label_idx + len(label), stop_labels)
        value = clean_text(raw)
        if not value:
            return None, False
        return value, stop_idx != -1

    def _parse_thought(self, text: str, result: ParseResult) -> None:
        thought, closed = self._capture_field(text, THOUGHT_LABEL, self._thought_stops)
        if thought is None:
            return

        # A thought at the tail of the stream may still be growing
        result.thought = thought
        result.is_thought_complete = closed
        self._tracer.trace("Found thought", thought=thought, is_complete=closed)

    def _parse_action(self, text: str, result: ParseResult) -> None:
        action, _ = self._capture_field(text, ACTION_LABEL, self._action_stops)
        if action is None:
            return

        result.action = action
        self._tracer.trace("Found action", action=action)

    def _parse_action_input(self, text: str, result: ParseResult) -> None:
        raw_input, closed = self._capture_field(
            text, ACTION_INPUT_LABEL, self._action_input_stops
        )
        if raw_input is None:
            return

        # At the tail of the stream the next label may be half written
        partial_markers = () if closed else self._action_input_stops
        result.has_action_input = True
        result.action_input = safe_json_loads(
            raw_input, tracer=self._tracer, partial_markers=partial_markers
        )
        result.is_action_complete = result.action is not None and result.action_input is not None
        self._tracer.trace(
            "Found action input",
            raw=raw_input,
            parsed=result.action_input,
            is_complete=result.is_action_complete,
        )

    def _parse_final_answer(self, text: str, result: ParseResult) -> None:
        label_idx, label = find_first_label(text, self.terminal_labels)
        if label_idx == -1 or label is None:
            return

        # Nothing can follow the terminal label, so it runs to the end of input
        answer = clean_text(text[label_idx + len(label) :])
        if not answer:
            return

        result.final_answer = answer
        result.is_answer_complete = True
        self._tracer.trace("Found final answer", answer=answer, is_complete=True)
