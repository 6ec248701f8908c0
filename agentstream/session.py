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
Streaming session - accumulates response deltas and re-parses the full text
"""

import logging

from .parser.base_parser import StreamingParser
from .parser.core_types import ParseResult

logger = logging.getLogger(__name__)


class StreamingSession:
    """
    Feeds a parser the whole response accumulated so far, one delta at a time.

    AI clients usually hand out deltas, while the parsers expect the full text on
    every call. A session owns that buffer for one streamed response.

    Args:
        parser: The parser used for this session
    """

    def __init__(self, parser: StreamingParser):
        self.parser = parser
        self._chunks: list[str] = []
        self._last_result: ParseResult | None = None

    @property
    def text(self) -> str:
        return "".join(self._chunks)

    @property
    def last_result(self) -> ParseResult | None:
        return self._last_result

    @property
    def is_complete(self) -> bool:
        if self._last_result is None:
            return False
        return self.parser.is_complete(self._last_result)

    def feed(self, delta: str) -> ParseResult:
        """
        Append a delta and parse the accumulated text.

        Args:
            delta: The newly streamed text

        Returns:
            ParseResult: Snapshot of the response so far
        """
        if delta:
            self._chunks.append(delta)
        self._last_result = self.parser.parse(self.text)
        return self._last_result

    def reset(self) -> None:
        """Drop the buffered text so the session can be reused for a new response."""
        self._chunks.clear()
        self._last_result = None
        self.parser.reset()
