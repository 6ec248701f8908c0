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
Configuration utilities for building a ParserConfig from OmegaConf / YAML sources.

The parser configuration normally lives in the host application's settings
store. It can be supplied either at the top level:

    format: xml
    debug: false
    options: {}

or nested under a "parser" key of a larger config file.
"""

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

from ..parser.core_types import ParserConfig, ResponseFormat, TraceCallback

logger = logging.getLogger(__name__)

DEFAULT_PARSER_CONFIG = {
    "format": ResponseFormat.TEXT.value,
    "debug": False,
    "options": {},
}


def load_parser_config(
    source: str | Path | Mapping[str, Any] | DictConfig | None = None,
    tracer: TraceCallback | None = None,
    **overrides: Any,
) -> ParserConfig:
    """
    Build a ParserConfig from a YAML file, a dict or a DictConfig.

    Args:
        source: Path to a YAML file, or an in-memory mapping. None uses defaults.
        tracer: Optional diagnostic sink attached to the resulting config
        **overrides: Values that take precedence over the source, e.g. format="xml".
            None values are ignored so unset CLI flags do not clobber the file.

    Returns:
        ParserConfig: The merged, immutable parser configuration

    Raises:
        FileNotFoundError: If source is a path that does not exist
        ValueError: If format is not a string or options is not a mapping

    Example:
        >>> cfg = load_parser_config({"parser": {"format": "xml"}}, debug=True)
        >>> cfg.format_tag, cfg.debug
        ('xml', True)
    """
    if source is None:
        loaded = OmegaConf.create({})
    elif isinstance(source, (str, Path)):
        path = Path(source)
        if not path.exists():
            raise FileNotFoundError(f"Parser config file not found: {path}")
        loaded = OmegaConf.load(path)
        logger.debug(f"Loaded parser config from {path}")
    elif isinstance(source, DictConfig):
        loaded = source
    else:
        loaded = OmegaConf.create(dict(source))

    if not isinstance(loaded, DictConfig):
        raise ValueError(f"Parser config must be a mapping, got {type(loaded).__name__}")

    if "parser" in loaded and isinstance(loaded.parser, DictConfig):
        loaded = loaded.parser

    loaded_values = OmegaConf.to_container(loaded, resolve=True)
    assert isinstance(loaded_values, dict)
    values = {
        **DEFAULT_PARSER_CONFIG,
        **loaded_values,
        **{k: v for k, v in overrides.items() if v is not None},
    }

    format_tag = values["format"]
    if not isinstance(format_tag, str):
        raise ValueError(f"Parser format must be a string, got {format_tag!r}")

    options = values["options"] or {}
    if not isinstance(options, dict):
        raise ValueError(f"Parser options must be a mapping, got {options!r}")

    return ParserConfig(
        format=format_tag,
        debug=bool(values["debug"]),
        options=options,
        tracer=tracer,
    )
