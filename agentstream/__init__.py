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
agentstream - Incremental parsing of streamed LLM agent responses
"""

from .parser import (
    ParseResult,
    ParserConfig,
    ResponseFormat,
    SingleTokenParser,
    StreamingParser,
    TextFormatParser,
    XmlFormatParser,
    create_debug_parser,
    create_parser,
    get_supported_formats,
    is_format_supported,
)
from .session import StreamingSession
from .utils.config_utils import load_parser_config

__version__ = "0.1.0"

__all__ = [
    "ParseResult",
    "ParserConfig",
    "ResponseFormat",
    "StreamingParser",
    "TextFormatParser",
    "SingleTokenParser",
    "XmlFormatParser",
    "StreamingSession",
    "create_parser",
    "create_debug_parser",
    "get_supported_formats",
    "is_format_supported",
    "load_parser_config",
]
