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
XML Format Parser - Parses <thought>, <answer> and <action> tagged responses

Expected format:
    <thought>I need to search first</thought>
    <action><name>search</name><input>{"q": "x"}</input></action>

or, once the model is done:
    <thought>...</thought>
    <answer>The result is 42</answer>

Any tag may still be open in the current snapshot. Its content then runs to the
end of the text streamed so far and the field is reported as incomplete.
"""

import logging
from dataclasses import dataclass

from .base_parser import ParserTracer, is_result_complete
from .core_types import ParseResult, ParserConfig, ResponseFormat
from .scanning import clean_text, safe_json_loads

logger = logging.getLogger(__name__)


@dataclass
class TagMatch:
    """Raw content of a tag and whether its closing tag was seen."""

    content: str
    closed: bool


def extract_tag(text: str, tag: str) -> TagMatch | None:
    """
    Extract the content of the first <tag> element.

    The content runs to the first </tag> after the opening tag, or to the end of
    the text when the closing tag has not arrived yet. Nested elements with the
    same name are not supported: the first closing tag always ends the element.

    Args:
        text: The text to search
        tag: Tag name without angle brackets

    Returns:
        TagMatch | None: The raw content, or None if the opening tag is missing
    """
    open_tag = f"<{tag}>"
    close_tag = f"</{tag}>"

    open_idx = text.find(open_tag)
    if open_idx == -1:
        return None

    start = open_idx + len(open_tag)
    close_idx = text.find(close_tag, start)
    if close_idx == -1:
        return TagMatch(content=text[start:], closed=False)
    return TagMatch(content=text[start:close_idx], closed=True)


class XmlFormatParser:
    """Streaming parser for XML-tagged agent output."""

    def __init__(self, config: ParserConfig):
        self.config = config
        self._tracer = ParserTracer(config, name=f"{self.get_format()}Parser")

    def get_format(self) -> str:
        return ResponseFormat.XML.value

    def reset(self) -> None:
        # Stateless: every parse() works on the full text
        self._tracer.trace("Parser reset")

    def is_complete(self, result: ParseResult) -> bool:
        return is_result_complete(result)

    def parse(self, text: str) -> ParseResult:
        """
        Extract every tagged field from the text streamed so far.

        Args:
            text: The full accumulated response text

        Returns:
            ParseResult: A fresh snapshot of the extracted fields
        """
        result = ParseResult()
        self._tracer.trace_input(text)

        thought = extract_tag(text, "thought")
        if thought is not None:
            result.thought = clean_text(thought.content)
            result.is_thought_complete = thought.closed
            self._tracer.trace(
                "Found thought", thought=result.thought, is_complete=thought.closed
            )

        answer = extract_tag(text, "answer")
        if answer is not None:
            result.final_answer = clean_text(answer.content)
            result.is_answer_complete = answer.closed
            self._tracer.trace("Found answer", answer=result.final_answer, is_complete=answer.closed)

        action = extract_tag(text, "action")
        if action is not None:
            self._parse_action(action, result)

        return result

    def _parse_action(self, action: TagMatch, result: ParseResult) -> None:
        # <name> and <input> are read even while </action> is still missing, so
        # the caller can see the call taking shape before it is complete
        name = extract_tag(action.content, "name")
        if name is not None:
            result.action = clean_text(name.content)
            self._tracer.trace("Found action name", action=result.action)

        tool_input = extract_tag(action.content, "input")
        if tool_input is not None:
            raw_input = clean_text(tool_input.content)
            result.has_action_input = True
            # An open <input> may end in the first characters of its closing tag
            partial_markers = () if tool_input.closed else ("</input>",)
            result.action_input = safe_json_loads(
                raw_input, tracer=self._tracer, partial_markers=partial_markers
            )
            self._tracer.trace("Found action input", raw=raw_input, parsed=result.action_input)

        # The outer closing tag alone is not enough: a non-empty name and a
        # decoded input must both be present too
        result.is_action_complete = (
            action.closed and bool(result.action) and result.action_input is not None
        )
        self._tracer.trace(
            "Action completeness check",
            is_action_complete=result.is_action_complete,
            has_action=result.action is not None,
            has_input=result.action_input is not None,
            has_closing_tag=action.closed,
        )
