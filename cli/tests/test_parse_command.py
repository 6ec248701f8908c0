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
Unit tests for the parse and formats commands
"""

import json
import unittest
from unittest.mock import patch

import yaml  # type: ignore
from click.testing import CliRunner

from cli.main import cli

TOOL_CALL = 'THOUGHT: check file\nACTION: read_file\nACTION_INPUT: {"path": "a.txt"}'


@patch("cli.main.set_logging_basic_config")
class TestParseCommand(unittest.TestCase):
    """Test cases for the CLI commands"""

    def setUp(self):
        self.runner = CliRunner()

    def test_formats(self, mock_logging):
        """Test listing supported formats"""
        result = self.runner.invoke(cli, ["formats"])

        self.assertEqual(result.exit_code, 0)
        self.assertEqual(result.output.split(), ["text", "xml", "single-token"])

    def test_parse_stdin(self, mock_logging):
        """Test parsing a response from stdin"""
        result = self.runner.invoke(cli, ["parse"], input=TOOL_CALL)

        self.assertEqual(result.exit_code, 0, result.output)
        snapshot = json.loads(result.output)
        self.assertEqual(snapshot["action"], "read_file")
        self.assertEqual(snapshot["actionInput"], {"path": "a.txt"})
        self.assertTrue(snapshot["isActionComplete"])
        self.assertTrue(snapshot["complete"])

    def test_parse_file_with_format(self, mock_logging):
        """Test parsing an XML response file"""
        with self.runner.isolated_filesystem():
            with open("response.txt", "w", encoding="utf-8") as f:
                f.write("<thought>done</thought><answer>42")

            result = self.runner.invoke(cli, ["parse", "response.txt", "--format", "xml"])

        self.assertEqual(result.exit_code, 0, result.output)
        snapshot = json.loads(result.output)
        self.assertEqual(snapshot["finalAnswer"], "42")
        self.assertFalse(snapshot["isAnswerComplete"])
        self.assertFalse(snapshot["complete"])

    def test_parse_in_chunks(self, mock_logging):
        """Test replaying a response as a stream of chunks"""
        result = self.runner.invoke(cli, ["parse", "--chunk-size", "10"], input=TOOL_CALL)

        self.assertEqual(result.exit_code, 0, result.output)
        snapshots = [json.loads(line) for line in result.output.splitlines()]
        self.assertEqual(len(snapshots), (len(TOOL_CALL) + 9) // 10)
        self.assertEqual([s["step"] for s in snapshots], list(range(len(snapshots))))
        self.assertEqual(snapshots[-1]["length"], len(TOOL_CALL))
        self.assertFalse(snapshots[0]["complete"])
        self.assertTrue(snapshots[-1]["complete"])

    def test_parse_empty_input_in_chunks(self, mock_logging):
        """Test that empty input still prints one snapshot when chunked"""
        result = self.runner.invoke(cli, ["parse", "--chunk-size", "4"], input="")

        self.assertEqual(result.exit_code, 0, result.output)
        lines = result.output.splitlines()
        self.assertEqual(len(lines), 1)
        self.assertEqual(json.loads(lines[0]), {"step": 0, "length": 0, "complete": False})

    def test_parse_with_config_file(self, mock_logging):
        """Test that the format is read from a config file and flags override it"""
        with self.runner.isolated_filesystem():
            with open("parser.yaml", "w", encoding="utf-8") as f:
                f.write("parser:\n  format: single-token\n")

            result = self.runner.invoke(
                cli, ["parse", "--config", "parser.yaml"], input="THOUGHT: x\nFINAL_ANSWER: 1"
            )
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertNotIn("finalAnswer", json.loads(result.output))

            result = self.runner.invoke(
                cli,
                ["parse", "--config", "parser.yaml", "--format", "text"],
                input="THOUGHT: x\nFINAL_ANSWER: 1",
            )
            self.assertEqual(result.exit_code, 0, result.output)
            self.assertEqual(json.loads(result.output)["finalAnswer"], "1")

    def test_parse_invalid_config(self, mock_logging):
        """Test that an invalid config file is reported as a usage error"""
        with self.runner.isolated_filesystem():
            with open("parser.yaml", "w", encoding="utf-8") as f:
                f.write("format: [1, 2]\n")

            result = self.runner.invoke(cli, ["parse", "--config", "parser.yaml"], input="")

        self.assertEqual(result.exit_code, 2)
        self.assertIn("format", result.output)

    def test_parse_yaml_output(self, mock_logging):
        """Test YAML snapshot output"""
        result = self.runner.invoke(
            cli, ["parse", "--output", "yaml", "--format", "single-token"], input="ANSWER: yes"
        )

        self.assertEqual(result.exit_code, 0, result.output)
        snapshot = yaml.safe_load(result.output)
        self.assertEqual(snapshot, {"finalAnswer": "yes", "isAnswerComplete": True, "complete": True})

    def test_parse_malformed_input_does_not_fail(self, mock_logging):
        """Test that malformed JSON is reported as a null input, not an error"""
        result = self.runner.invoke(cli, ["parse"], input="ACTION: calc\nACTION_INPUT: not-json")

        self.assertEqual(result.exit_code, 0, result.output)
        snapshot = json.loads(result.output)
        self.assertIsNone(snapshot["actionInput"])
        self.assertFalse(snapshot["isActionComplete"])


if __name__ == "__main__":
    unittest.main()
