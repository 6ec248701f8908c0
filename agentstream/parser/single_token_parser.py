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
Single Token Parser - THOUGHT: / ACTION: / ACTION_INPUT: / ANSWER: format
"""

from .core_types import ParserConfig, ResponseFormat
from .labeled_line_parser import LabeledLineParser
from .text_format_parser import ANSWER_LABEL


class SingleTokenParser(LabeledLineParser):
    """Labeled-line parser that only recognises the terse ANSWER: terminal label."""

    def __init__(self, config: ParserConfig):
        super().__init__(
            config,
            format_tag=ResponseFormat.SINGLE_TOKEN.value,
            terminal_labels=(ANSWER_LABEL,),
        )
