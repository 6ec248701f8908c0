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
agentstream CLI - Main Entry Point

Command-line interface for inspecting how streamed agent responses are parsed.
"""

import click

from agentstream import __version__
from agentstream.utils.logging_utils import set_logging_basic_config

from . import parse


@click.group()
@click.version_option(version=__version__)
def cli():
    """
    agentstream CLI - Replay agent responses through the streaming parsers.

    Commands:
      formats  List the supported response formats
      parse    Parse a saved response, optionally chunk by chunk

    Examples:
      # List formats
      agentstream formats

      # Parse a response file in the XML format
      agentstream parse response.txt --format xml

      # Replay stdin as a stream of 8-character chunks
      cat response.txt | agentstream parse --chunk-size 8
    """
    set_logging_basic_config()


# Register commands
cli.add_command(parse.formats, name="formats")
cli.add_command(parse.parse, name="parse")


if __name__ == "__main__":
    cli()
