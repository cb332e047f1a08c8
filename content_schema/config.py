# Copyright 2025 TIER IV, inc.
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

"""Configuration management for the content schema validator."""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from .models.field_types import FieldTypeRegistry, default_registry
from .utils.logging_utils import configure_split_stream_logging
from .validator import Validator


def _env_flag(env: Mapping[str, str], name: str, default: str) -> bool:
    return env.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class ValidatorConfig:
    """Configuration for validation runs and the document checker."""
    log_level: str = "INFO"
    print_level: str = "ERROR"
    # Reference values must carry an id-shaped '_ref'.
    check_reference_ids: bool = True
    # Warnings fail the checker exit status too.
    strict: bool = False

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        if env is None:
            env = os.environ
        return cls(
            log_level=env.get('CONTENT_SCHEMA_LOG_LEVEL', 'INFO'),
            print_level=env.get('CONTENT_SCHEMA_PRINT_LEVEL', 'ERROR'),
            check_reference_ids=_env_flag(env, 'CONTENT_SCHEMA_CHECK_REFERENCE_IDS', 'true'),
            strict=_env_flag(env, 'CONTENT_SCHEMA_STRICT', 'false'),
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.INFO)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            logger_name='content_schema',
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
        )

    def make_validator(self, registry: FieldTypeRegistry = default_registry) -> Validator:
        return Validator(registry, check_reference_ids=self.check_reference_ids)
