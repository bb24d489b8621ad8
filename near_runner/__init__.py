from __future__ import annotations

from .constants import BASE_DIR, COMMAND_FILE, ENV_FILE_NAME, LOG_FILE_NAME
from .calls import ContractCall, default_sequence
from .cmd_parser import parse_command_file
from .errors import ConfigurationError, NearRunnerError
from .executor import execute_calls, execute_commands
