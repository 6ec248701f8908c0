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
Streaming Parser - Framework for parsing agent responses while they stream in

A model can be prompted to answer in one of several wire formats:

- text: THOUGHT: ... ACTION: ... ACTION_INPUT: {...} / FINAL_ANSWER: ...
- single-token: THOUGHT: ... ACTION: ... ACTION_INPUT: {...} / ANSWER: ...
- xml: <thought>...</thought><action><name>...</name><input>{...}</input></action>

Usage:
    # Create a parser for the session
    parser = create_parser("xml")

    # Feed it the whole text accumulated so far on every chunk
    result = parser.parse(accumulated_text)
    if parser.is_complete(result):
        if result.final_answer is not None:
            print(result.final_answer)
        else:
            print(f"Call {result.action} with {result.action_input}")
"""

import logging
from collections.abc import Mapping
from typing import Any

from ..utils.config_utils import load_parser_config
from .base_parser import StreamingParser, is_result_complete
from .core_types import ParseResult, ParserConfig, ResponseFormat
from .labeled_line_parser import LabeledLineParser
from .single_token_parser import SingleTokenParser
from .text_format_parser import TextFormatParser
from .xml_format_parser import XmlFormatParser

logger = logging.getLogger(__name__)

__all__ = [
    "StreamingParser",
    "ParseResult",
    "ParserConfig",
    "ResponseFormat",
    "LabeledLineParser",
    "TextFormatParser",
    "SingleTokenParser",
    "XmlFormatParser",
    "is_result_complete",
    "create_parser",
    "create_debug_parser",
    "get_supported_formats",
    "is_format_supported",
]

_PARSER_REGISTRY: dict[str, type[StreamingParser]] = {
    ResponseFormat.TEXT.value: TextFormatParser,
    ResponseFormat.XML.value: XmlFormatParser,
    ResponseFormat.SINGLE_TOKEN.value: SingleTokenParser,
}


def get_supported_formats() -> list[str]:
    """Return the format tags create_parser() understands."""
    return list(_PARSER_REGISTRY.keys())


def is_format_supported(format: str) -> bool:
    """Check whether a format tag is one of the supported formats."""
    if isinstance(format, ResponseFormat):
        format = format.value
    return format in _PARSER_REGISTRY


def create_parser(config: ParserConfig | Mapping[str, Any] | str) -> StreamingParser:
    """
    Factory function to create a streaming parser for a response format.

    Args:
        config: A ParserConfig, a mapping / DictConfig with "format", "debug" and
            "options" keys, or a bare format tag. Supported tags:
            - "text": labeled lines ending in FINAL_ANSWER: (or ANSWER:)
            - "single-token": labeled lines ending in ANSWER:
            - "xml": <thought>, <answer> and <action> tags

    Returns:
        StreamingParser: The parser for the requested format. Unknown format tags
            fall back to the text parser instead of failing.
    """
    if isinstance(config, str):
        config = ParserConfig(format=config)
    elif not isinstance(config, ParserConfig):
        try:
            config = load_parser_config(config)
        except ValueError as e:
            logger.warning(f"Invalid parser config: {e}. Falling back to {ResponseFormat.TEXT.value}")
            config = ParserConfig(format=ResponseFormat.TEXT)

    format_tag = config.format_tag
    logger.info(f"Creating parser for format: {format_tag}")

    parser_class = _PARSER_REGISTRY.get(format_tag)
    if parser_class is None:
        logger.warning(
            f"Unknown response format: {format_tag}. Falling back to "
            f"{ResponseFormat.TEXT.value}. Supported formats: {', '.join(get_supported_formats())}"
        )
        parser_class = TextFormatParser

    return parser_class(config)  # type: ignore[call-arg]


def create_debug_parser(
    format: ResponseFormat | str, options: Mapping[str, Any] | None = None
) -> StreamingParser:
    """Create a parser with debug tracing enabled."""
    return create_parser(ParserConfig(format=format, debug=True, options=options or {}))
