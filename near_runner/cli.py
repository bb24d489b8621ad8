from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Dict, List, Optional

from .calls import ContractCall, cure_sequence, default_sequence, inspect_sequence, vaxxx_sequence
from .cmd_parser import parse_command_file
from .constants import DOTENV_FILE_NAME, ENV_FILE_NAME, LOG_FILE_NAME
from .env_utils import RunnerSettings, build_environment, load_settings, max_deposit_from_env
from .errors import NearRunnerError
from .executor import execute_calls, execute_commands
from .logging_utils import get_runner_logger

logger = get_runner_logger()

SEQUENCES: Dict[str, Callable[[RunnerSettings], List[ContractCall]]] = {
    "mint": lambda s: default_sequence(
        s.contract_id,
        second_account_id=s.account_id,
        second_receiver_id=s.second_receiver,
    ),
    "inspect": lambda s: inspect_sequence(s.contract_id),
    "cure": lambda s: cure_sequence(s.contract_id, s.account_id),
    "vaxxx": lambda s: vaxxx_sequence(s.contract_id, s.account_id),
}


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Initialize a NEAR NFT contract, mint tokens and list them via the near CLI"
    )
    p.add_argument(
        "--project-dir",
        type=Path,
        default=None,
        help="Directory holding neardev/ and .env; commands run here (default: current directory).",
    )
    p.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help=f"Env file providing CONTRACT_NAME (default: <project-dir>/{ENV_FILE_NAME}).",
    )
    p.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help=f"Where to write detailed command output (default: <project-dir>/{LOG_FILE_NAME}).",
    )
    p.add_argument(
        "--dry-run",
        action="store_true",
        help="Log the commands without executing them.",
    )

    source = p.add_mutually_exclusive_group()
    source.add_argument(
        "--sequence",
        choices=sorted(SEQUENCES),
        default="mint",
        help="Built-in call sequence to run (default: mint).",
    )
    source.add_argument(
        "--command-file",
        type=Path,
        default=None,
        help="Run a shell-style command file instead of a built-in sequence.",
    )
    return p.parse_args(argv)


def build_sequence(name: str, settings: RunnerSettings) -> List[ContractCall]:
    try:
        builder = SEQUENCES[name]
    except KeyError:
        raise ValueError(f"unknown sequence: {name}") from None
    return builder(settings)


def _exit_code(results: List[Optional[int]]) -> int:
    # None marks skipped or dry-run calls; launch failures carry a non-zero code
    return 0 if all(code == 0 for code in results if code is not None) else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)

    project_dir = (args.project_dir or Path.cwd()).resolve()
    env_file = args.env_file or project_dir / ENV_FILE_NAME
    dotenv_file = project_dir / DOTENV_FILE_NAME
    log_file = args.log_file or project_dir / LOG_FILE_NAME

    try:
        env = build_environment(env_file, dotenv_file)
        if args.command_file is not None:
            if not args.command_file.exists():
                raise FileNotFoundError(f"Command file not found: {args.command_file}")
            entries = parse_command_file(args.command_file)
            results = execute_commands(
                entries,
                env_file=env_file,
                dotenv_file=dotenv_file,
                log_file=log_file,
                workdir=project_dir,
                max_deposit=max_deposit_from_env(env),
                dry_run=args.dry_run,
            )
        else:
            settings = load_settings(env_file, env)
            calls = build_sequence(args.sequence, settings)
            results = execute_calls(
                calls,
                settings.contract_id,
                near_cli=settings.near_cli,
                env=env,
                max_deposit=settings.max_deposit,
                dry_run=args.dry_run,
                log_file=log_file,
                workdir=project_dir,
            )
    except (NearRunnerError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 2

    return _exit_code(results)


if __name__ == "__main__":
    sys.exit(main())
