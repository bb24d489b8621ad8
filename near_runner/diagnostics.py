"""Configuration checks run before touching the network."""

from __future__ import annotations

import shutil
import subprocess
from pathlib import Path
from typing import Dict, List, Optional

from .constants import DOTENV_FILE_NAME, NEAR_CLI
from .env_utils import build_environment, default_env_file, is_placeholder, resolve_env_value
from .logging_utils import get_runner_logger

logger = get_runner_logger()

REQUIRED_VARS = {
    "CONTRACT_NAME": "Deployed NFT contract account",
}
OPTIONAL_VARS = {
    "ACCOUNT_ID": "Signer for the second mint (defaults to CONTRACT_NAME)",
    "NEAR_CLI": "near CLI executable",
    "NEAR_MAX_DEPOSIT": "Largest deposit a single call may attach, in NEAR",
    "NFT_SECOND_RECEIVER": "Receiver of the second token",
}


def check_near_cli(near_cli: str) -> Optional[str]:
    """Return the CLI version string, or None when it is unavailable."""

    if shutil.which(near_cli) is None:
        return None
    try:
        result = subprocess.run(
            [near_cli, "--version"],
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError:
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip() or "unknown version"


def run_diagnostics(
    env_file: Path,
    env: Optional[Dict[str, str]] = None,
    dotenv_file: Optional[Path] = None,
) -> List[str]:
    issues: List[str] = []

    if env_file.exists():
        logger.info("✓ Found env file: %s", env_file)
    else:
        logger.warning("✗ Env file not found: %s (run `near dev-deploy` first)", env_file)
        issues.append(f"env file not found: {env_file}")

    if env is None:
        env = build_environment(env_file, dotenv_file)

    for var, desc in REQUIRED_VARS.items():
        value = resolve_env_value(var, env)
        if not value:
            logger.warning("  ✗ %-20s = NOT SET", var)
            issues.append(f"missing required variable: {var} ({desc})")
        elif is_placeholder(value):
            logger.warning("  ✗ %-20s = %s (placeholder)", var, value)
            issues.append(f"placeholder value for {var}: {value}")
        else:
            logger.info("  ✓ %-20s = %s", var, value)

    for var in OPTIONAL_VARS:
        value = resolve_env_value(var, env)
        if not value:
            logger.info("  ○ %-20s = not set (optional)", var)
        elif is_placeholder(value):
            logger.warning("  ✗ %-20s = %s (placeholder)", var, value)
            issues.append(f"placeholder value for {var}: {value}")
        else:
            logger.info("  ✓ %-20s = %s", var, value)

    near_cli = env.get("NEAR_CLI") or NEAR_CLI
    version = check_near_cli(near_cli)
    if version is None:
        logger.warning("✗ near CLI not available: %s", near_cli)
        issues.append(f"near CLI not found or not working: {near_cli} (npm install -g near-cli)")
    else:
        logger.info("✓ near CLI: %s", version)

    return issues


def main(project_dir: Optional[Path] = None) -> int:
    project_dir = project_dir or Path.cwd()
    issues = run_diagnostics(
        default_env_file(project_dir), dotenv_file=project_dir / DOTENV_FILE_NAME
    )
    if issues:
        logger.warning("Found %d issue(s):", len(issues))
        for issue in issues:
            logger.warning("  - %s", issue)
        return 1
    logger.info("Configuration looks good.")
    return 0
