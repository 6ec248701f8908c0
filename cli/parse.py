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
Parse command for the agentstream CLI

Replays a saved model response through a streaming parser and prints the
snapshots a caller would have seen.
"""

import json
import logging
from pathlib import Path
from typing import Any

import click
import yaml  # type: ignore

from agentstream.parser import create_parser, get_supported_formats
from agentstream.session import StreamingSession
from agentstream.utils.config_utils import load_parser_config

logger = logging.getLogger(__name__)


def iter_chunks(text: str, chunk_size: int):
    """Split text into consecutive chunks of at most chunk_size characters."""
    for start in range(0, len(text), chunk_size):
        yield text[start : start + chunk_size]


def render_snapshot(snapshot: dict[str, Any], output_format: str) -> str:
    """Render one snapshot as a JSON line or a YAML document."""
    if output_format == "yaml":
        return "---\n" + yaml.safe_dump(snapshot, sort_keys=False, allow_unicode=True).rstrip()
    return json.dumps(snapshot, ensure_ascii=False)


@click.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
@click.option(
    "--format",
    "format_tag",
    type=str,
    default=None,
    help=f"Response format ({', '.join(get_supported_formats())}). Overrides --config.",
)
@click.option("--debug", is_flag=True, default=False, help="Emit parser debug traces")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML file holding the parser configuration",
)
@click.option(
    "--chunk-size",
    type=click.IntRange(min=1),
    default=None,
    help="Replay the response in chunks of N characters, printing every snapshot",
)
@click.option(
    "--output",
    "output_format",
    type=click.Choice(["json", "yaml"]),
    default="json",
    show_default=True,
    help="Snapshot output format",
)
def parse(input_file, format_tag, debug, config_path, chunk_size, output_format):
    """
    Parse a model response read from INPUT_FILE (or stdin).

    Examples:
      # Final snapshot only
      agentstream parse response.txt --format xml

      # Show how the snapshot evolves while streaming, 16 characters at a time
      agentstream parse response.txt --chunk-size 16
    """
    try:
        config = load_parser_config(config_path, format=format_tag, debug=debug or None)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--config")

    if config.debug:
        # Parser traces are logged at DEBUG level
        logging.getLogger("agentstream").setLevel(logging.DEBUG)

    parser = create_parser(config)
    session = StreamingSession(parser)
    text = input_file.read()

    # Empty input still yields one (empty) snapshot in both modes
    chunks = iter_chunks(text, chunk_size) if chunk_size and text else [text]
    for step, chunk in enumerate(chunks):
        result = session.feed(chunk)
        snapshot = result.to_dict()
        snapshot["complete"] = session.is_complete
        if chunk_size:
            snapshot = {"step": step, "length": len(session.text), **snapshot}
        click.echo(render_snapshot(snapshot, output_format))

    logger.debug(f"Parsed {len(text)} characters with the {parser.get_format()} parser")


@click.command()
def formats():
    """List the supported response formats."""
    for format_tag in get_supported_formats():
        click.echo(format_tag)
