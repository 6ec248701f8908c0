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
Pytest configuration and shared fixtures
"""

import pytest
from omegaconf import OmegaConf

from agentstream.parser import ParserConfig, ResponseFormat


@pytest.fixture
def text_config():
    """Default labeled-line configuration"""
    return ParserConfig(format=ResponseFormat.TEXT)


@pytest.fixture
def single_token_config():
    """Terse labeled-line configuration"""
    return ParserConfig(format=ResponseFormat.SINGLE_TOKEN)


@pytest.fixture
def xml_config():
    """XML tag configuration"""
    return ParserConfig(format=ResponseFormat.XML)


@pytest.fixture
def settings_config():
    """Host settings with the parser section nested under "parser\""""
    return OmegaConf.create(
        {
            "model": "test_model",
            "parser": {
                "format": "xml",
                "debug": True,
                "options": {"max_steps": 5},
            },
        }
    )


@pytest.fixture
def trace_sink():
    """Collects (message, data) traces emitted by a parser"""
    traces: list[tuple[str, dict]] = []

    def sink(message, data):
        traces.append((message, data))

    sink.traces = traces  # type: ignore[attr-defined]
    return sink


@pytest.fixture
def tool_call_response():
    """A complete labeled-line tool call response"""
    return 'THOUGHT: check file\nACTION: read_file\nACTION_INPUT: {"path": "a.txt"}'


@pytest.fixture
def xml_tool_call_response():
    """A complete XML tool call response"""
    return (
        "<thought>I should search first</thought>\n"
        '<action><name>search</name><input>{"q": "x"}</input></action>'
    )
