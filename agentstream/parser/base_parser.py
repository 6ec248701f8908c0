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
Base Parser - Capability interface shared by all streaming format parsers
"""

import logging
from typing import Any, Protocol, runtime_checkable

from .core_types import ParseResult, ParserConfig

logger = logging.getLogger(__name__)

# Length of the text preview attached to parse traces
PREVIEW_LENGTH = 100


@runtime_checkable
class StreamingParser(Protocol):
    """
    Interface every streaming format parser implements.

    A caller holds one parser per streaming session and feeds it the entire text
    accumulated so far on every new chunk, never just the delta.
    """

    def parse(self, text: str) -> ParseResult:
        """
        Parse the full accumulated response text.

        Args:
            text: Everything the model has produced so far

        Returns:
            ParseResult: A fresh snapshot of the extracted fields
        """
        ...

    def get_format(self) -> str:
        """Return the fixed format tag of this parser."""
        ...

    def reset(self) -> None:
        """Clear any per-session state."""
        ...

    def is_complete(self, result: ParseResult) -> bool:
        """Return True when the caller can stop waiting and act on the result."""
        ...


def is_result_complete(result: ParseResult) -> bool:
    """
    Check whether a snapshot carries a finished answer or a finished tool call.

    Args:
        result: The snapshot to check

    Returns:
        bool: True if the answer is closed, or the action name, decoded input and
            action completeness are all present
    """
    has_complete_answer = result.final_answer is not None and bool(result.is_answer_complete)
    has_complete_action = (
        result.action is not None
        and result.action_input is not None
        and bool(result.is_action_complete)
    )
    return has_complete_answer or has_complete_action


class ParserTracer:
    """
    Diagnostic sink for a single parser instance.

    Traces are dropped unless the config enables debug mode. When the config
    carries a tracer callback, traces go there instead of the module logger.
    """

    def __init__(self, config: ParserConfig, name: str):
        self.enabled = config.debug
        self.name = name
        self._callback = config.tracer

    def __call__(self, message: str, data: dict[str, Any] | None = None) -> None:
        self.trace(message, **(data or {}))

    def trace(self, message: str, **data: Any) -> None:
        if not self.enabled:
            return
        if self._callback is not None:
            self._callback(f"[{self.name}] {message}", data)
        else:
            logger.debug(f"[{self.name}] {message}: {data}")

    def trace_input(self, text: str) -> None:
        if not self.enabled:
            return
        preview = text[:PREVIEW_LENGTH]
        if len(text) > PREVIEW_LENGTH:
            preview += "..."
        self.trace("Parsing partial response", length=len(text), preview=preview)
