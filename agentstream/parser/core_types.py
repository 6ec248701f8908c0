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
Core types for streaming agent-output parsing
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any

# Diagnostic sink signature: (message, data)
TraceCallback = Callable[[str, dict[str, Any]], None]


class ResponseFormat(str, Enum):
    """Wire formats a model can be prompted to answer in."""

    TEXT = "text"
    XML = "xml"
    SINGLE_TOKEN = "single-token"


@dataclass
class ParseResult:
    """
    Snapshot of the fields extracted from the text streamed so far.

    Every field stays None until its marker has been seen. A completeness flag is
    only meaningful when the matching field is present.

    Attributes:
        thought: Reasoning text
        action: Tool name
        action_input: Decoded JSON arguments, None when absent or undecodable
        final_answer: Terminal answer text
        is_thought_complete: Whether the thought has been closed
        is_answer_complete: Whether the answer has been closed
        is_action_complete: Whether the tool call is fully formed
        has_action_input: Whether an action input marker was found at all
    """

    thought: str | None = None
    action: str | None = None
    action_input: Any = None
    final_answer: str | None = None
    is_thought_complete: bool | None = None
    is_answer_complete: bool | None = None
    is_action_complete: bool | None = None
    has_action_input: bool = False

    def to_dict(self) -> dict[str, Any]:
        """
        Convert the populated fields to a dict keyed by the camel-case wire names.

        action_input is emitted whenever its marker was found, so an undecodable
        payload shows up as an explicit null.
        """
        ret: dict[str, Any] = {}
        if self.thought is not None:
            ret["thought"] = self.thought
        if self.action is not None:
            ret["action"] = self.action
        if self.has_action_input:
            ret["actionInput"] = self.action_input
        if self.final_answer is not None:
            ret["finalAnswer"] = self.final_answer
        if self.is_thought_complete is not None:
            ret["isThoughtComplete"] = self.is_thought_complete
        if self.is_answer_complete is not None:
            ret["isAnswerComplete"] = self.is_answer_complete
        if self.is_action_complete is not None:
            ret["isActionComplete"] = self.is_action_complete
        return ret


@dataclass(frozen=True)
class ParserConfig:
    """
    Per-session parser configuration.

    Attributes:
        format: Format tag, either a ResponseFormat or its string value. Unknown
            tags are accepted here and resolved by the factory.
        debug: Emit diagnostic traces while parsing
        options: Opaque options passed through to the parser untouched
        tracer: Optional diagnostic sink used instead of the module logger
    """

    format: ResponseFormat | str = ResponseFormat.TEXT
    debug: bool = False
    options: Mapping[str, Any] = field(default_factory=dict)
    tracer: TraceCallback | None = None

    def __post_init__(self):
        # Freeze the options bag so the parser cannot mutate caller state
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    @property
    def format_tag(self) -> str:
        if isinstance(self.format, ResponseFormat):
            return self.format.value
        return str(self.format)
