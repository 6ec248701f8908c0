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

import logging
import os
import sys

LOG_FORMAT = "[%(asctime)s][%(name)s][%(levelname)s] - %(message)s"

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def set_logging_basic_config():
    """
    Configure root logging for the CLI from LOG_LEVEL (default INFO) and
    LOG_STREAM ("stdout" to log to stdout instead of stderr).
    """
    level = LOG_LEVELS.get(os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    stream = sys.stdout if os.getenv("LOG_STREAM", "") == "stdout" else sys.stderr
    logging.basicConfig(level=level, format=LOG_FORMAT, stream=stream, force=True)
