from __future__ import annotations

from decimal import Decimal
from pathlib import Path
import re


# Checkout root; only the in-repo wrappers run against it
BASE_DIR = Path(__file__).resolve().parent.parent
COMMAND_FILE_NAME = "nft_commands.sh"
COMMAND_FILE = BASE_DIR / COMMAND_FILE_NAME

# Resolved against the project directory at run time
LOG_FILE_NAME = "nft_command_results.log"
# Written by `near dev-deploy`
ENV_FILE_NAME = Path("neardev") / "dev-account.env"
DOTENV_FILE_NAME = ".env"

PLACEHOLDER_MARKERS = ("YOUR", "REPLACE", "<", ">")
ENV_VAR_PATTERN = re.compile(r"(?<!\\)\$\{?([A-Za-z_][A-Za-z0-9_]*)\}?")

NEAR_CLI = "near"
DEFAULT_MINT_DEPOSIT = "0.1"
DEFAULT_MAX_DEPOSIT = Decimal("1")
YOCTO_PER_NEAR = 24
SECOND_RECEIVER = "isparx.testnet"
MEDIA_URL = "https://tinyurl.com/bddjmwk4"
# Exit code reported when the CLI could not be started, as a shell would
LAUNCH_FAILED = 127


__all__ = [
    "BASE_DIR",
    "COMMAND_FILE_NAME",
    "COMMAND_FILE",
    "LOG_FILE_NAME",
    "ENV_FILE_NAME",
    "DOTENV_FILE_NAME",
    "PLACEHOLDER_MARKERS",
    "ENV_VAR_PATTERN",
    "NEAR_CLI",
    "DEFAULT_MINT_DEPOSIT",
    "DEFAULT_MAX_DEPOSIT",
    "YOCTO_PER_NEAR",
    "SECOND_RECEIVER",
    "MEDIA_URL",
    "LAUNCH_FAILED",
]
