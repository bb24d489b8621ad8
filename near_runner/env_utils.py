from __future__ import annotations

import os
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Dict, Optional

from dotenv import dotenv_values

from .constants import (
    DEFAULT_MAX_DEPOSIT,
    DOTENV_FILE_NAME,
    ENV_FILE_NAME,
    NEAR_CLI,
    PLACEHOLDER_MARKERS,
    SECOND_RECEIVER,
)
from .errors import ConfigurationError

# Map canonical env names to alternative aliases that may appear in env files
ENV_ALIASES: Dict[str, list[str]] = {
    "CONTRACT_NAME": ["CONTRACT_ID", "NEAR_CONTRACT"],
    "ACCOUNT_ID": ["NEAR_ACCOUNT_ID", "MASTER_ACCOUNT"],
}


@dataclass(frozen=True)
class RunnerSettings:
    contract_id: str
    account_id: str
    near_cli: str = NEAR_CLI
    max_deposit: Decimal = DEFAULT_MAX_DEPOSIT
    second_receiver: str = SECOND_RECEIVER


def parse_env_file(path: Path, env: Dict[str, str]) -> None:
    """Load KEY=VALUE pairs from a .env-style file into ``env``.

    Missing files are ignored. ``export`` prefixes, comments and quoting are
    handled by python-dotenv; keys declared without a value are skipped.
    """

    if not path.exists():
        return

    for key, value in dotenv_values(path).items():
        if value is None:
            continue
        env[key] = value


def is_placeholder(value: str) -> bool:
    upper_value = value.upper()
    return any(marker in upper_value for marker in PLACEHOLDER_MARKERS)


def resolve_env_value(name: str, env: Dict[str, str]) -> str | None:
    value = env.get(name)
    if value:
        return value
    for alias in ENV_ALIASES.get(name, []):
        alias_value = env.get(alias)
        if alias_value:
            env[name] = alias_value
            return alias_value
    return None


def set_environment_variable(env: Dict[str, str], assignment: str) -> tuple[str, str, bool]:
    key, _, value = assignment.partition("=")
    key = key.strip()
    value = value.strip()
    if (value.startswith("\"") and value.endswith("\"")) or (
        value.startswith("'") and value.endswith("'")
    ):
        value = value[1:-1]
    placeholder = is_placeholder(value)
    if not placeholder:
        env[key] = value
        os.environ[key] = value
    return key, value, placeholder


def default_env_file(project_dir: Optional[Path] = None) -> Path:
    return (project_dir or Path.cwd()) / ENV_FILE_NAME


def build_environment(
    env_file: Path, dotenv_file: Optional[Path] = None
) -> Dict[str, str]:
    """Process environment overlaid with ``.env`` and then the dev-account file.

    ``dotenv_file`` defaults to ``.env`` in the current working directory.
    """

    if dotenv_file is None:
        dotenv_file = Path.cwd() / DOTENV_FILE_NAME
    env: Dict[str, str] = dict(os.environ)
    parse_env_file(dotenv_file, env)
    parse_env_file(env_file, env)
    return env


def max_deposit_from_env(env: Dict[str, str]) -> Decimal:
    raw_max = env.get("NEAR_MAX_DEPOSIT")
    if not raw_max:
        return DEFAULT_MAX_DEPOSIT
    try:
        max_deposit = Decimal(raw_max.replace("_", ""))
    except InvalidOperation as exc:
        raise ConfigurationError(f"NEAR_MAX_DEPOSIT is not a number: {raw_max}") from exc
    if not max_deposit.is_finite() or max_deposit < 0:
        raise ConfigurationError(f"NEAR_MAX_DEPOSIT must be a non-negative amount: {raw_max}")
    return max_deposit


def load_settings(
    env_file: Path, env: Optional[Dict[str, str]] = None
) -> RunnerSettings:
    if env is None:
        env = build_environment(env_file)

    contract_id = resolve_env_value("CONTRACT_NAME", env)
    if not contract_id:
        raise ConfigurationError(
            f"CONTRACT_NAME is not set (looked in {env_file} and the environment)"
        )
    if is_placeholder(contract_id):
        raise ConfigurationError(f"CONTRACT_NAME is a placeholder: {contract_id}")

    account_id = resolve_env_value("ACCOUNT_ID", env)
    if not account_id or is_placeholder(account_id):
        account_id = contract_id

    return RunnerSettings(
        contract_id=contract_id,
        account_id=account_id,
        near_cli=env.get("NEAR_CLI") or NEAR_CLI,
        max_deposit=max_deposit_from_env(env),
        second_receiver=env.get("NFT_SECOND_RECEIVER") or SECOND_RECEIVER,
    )
