from __future__ import annotations

import datetime
import logging
import os
import shlex
import subprocess
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, TextIO, Tuple, Union

from .calls import ContractCall
from .constants import (
    DEFAULT_MAX_DEPOSIT,
    ENV_VAR_PATTERN,
    LAUNCH_FAILED,
    LOG_FILE_NAME,
    NEAR_CLI,
)
from .env_utils import (
    build_environment,
    default_env_file,
    is_placeholder,
    parse_env_file,
    resolve_env_value,
    set_environment_variable,
)
from .limits import check_call_limits, check_deposit_limits
from .logging_utils import get_runner_logger, log_section

logger = get_runner_logger()


def _now() -> str:
    return datetime.datetime.now(datetime.timezone.utc).isoformat()


def extract_env_vars(command: str) -> set[str]:
    return set(ENV_VAR_PATTERN.findall(command))


def _write_header(log: TextIO, workdir: Path, source: str) -> None:
    log.write(f"Run started at {_now()}\n")
    log.write(f"Project directory: {workdir}\n")
    log.write(f"Source: {source}\n")
    log.write("=" * 80 + "\n")


def _write_command(log: TextIO, display: str, cwd: Path) -> None:
    logger.info("→ %s", display)
    log.write("\n" + "-" * 80 + "\n")
    log.write(f"Timestamp: {_now()}\n")
    log.write(f"Working directory: {cwd}\n")
    log.write(f"Command: {display}\n")


def _run(
    command: Union[str, Sequence[str]],
    log: TextIO,
    log_file: Path,
    env: Dict[str, str],
    cwd: Path,
) -> int:
    """Run one command to completion and record its output.

    Returns the exit code, or ``LAUNCH_FAILED`` when the process could not be
    started at all.
    """

    try:
        result = subprocess.run(
            command,
            shell=isinstance(command, str),
            capture_output=True,
            text=True,
            env=env,
            cwd=str(cwd),
            check=False,
        )
    except OSError as exc:
        log.write(f"Exit code: {LAUNCH_FAILED}\n")
        log_section(log, "Execution failed", repr(exc), level=logging.ERROR)
        return LAUNCH_FAILED

    log.write(f"Exit code: {result.returncode}\n")
    stdout = result.stdout or ""
    stderr = result.stderr or ""
    log.write("STDOUT:\n")
    log.write(stdout if stdout else "<empty>\n")
    log.write("STDERR:\n")
    log.write(stderr if stderr else "<empty>\n")
    log.flush()

    status = "completed" if result.returncode == 0 else f"completed with exit code {result.returncode}"
    logger.info("← %s. See %s for details.", status, log_file)
    return result.returncode


def execute_calls(
    calls: Iterable[ContractCall],
    contract_id: str,
    *,
    near_cli: str = NEAR_CLI,
    env: Optional[Dict[str, str]] = None,
    max_deposit: Decimal = DEFAULT_MAX_DEPOSIT,
    dry_run: bool = False,
    log_file: Optional[Path] = None,
    workdir: Optional[Path] = None,
) -> List[Optional[int]]:
    """Invoke each call in order through the near CLI.

    Calls are independent: a failing call is logged and the next one still
    runs. The returned list holds one exit code per call, ``None`` for calls
    that were skipped or dry-run. ``workdir`` defaults to the current working
    directory and also holds the log file unless ``log_file`` is given.
    """

    workdir = workdir or Path.cwd()
    log_file = log_file or workdir / LOG_FILE_NAME
    if env is None:
        env = dict(os.environ)

    results: List[Optional[int]] = []
    logger.info("Logging detailed output to %s", log_file)
    with log_file.open("w", encoding="utf-8") as log:
        _write_header(log, workdir, f"call sequence for {contract_id}")

        for call in calls:
            argv = call.to_argv(contract_id, near_cli)
            _write_command(log, shlex.join(argv), workdir)

            limit_error = check_call_limits(call, max_deposit)
            if limit_error:
                log_section(log, "Skipped command (deposit limit)", limit_error)
                results.append(None)
                continue

            if dry_run:
                log_section(log, "Dry run: command not executed")
                results.append(None)
                continue

            results.append(_run(argv, log, log_file, env, workdir))

    return results


def execute_commands(
    entries: Iterable[Tuple[str, str]],
    *,
    env_file: Optional[Path] = None,
    dotenv_file: Optional[Path] = None,
    log_file: Optional[Path] = None,
    workdir: Optional[Path] = None,
    max_deposit: Decimal = DEFAULT_MAX_DEPOSIT,
    dry_run: bool = False,
) -> List[Optional[int]]:
    workdir = workdir or Path.cwd()
    env_file = env_file or default_env_file(workdir)
    log_file = log_file or workdir / LOG_FILE_NAME

    env = build_environment(env_file, dotenv_file)
    os.environ.update(env)

    current_dir = workdir
    results: List[Optional[int]] = []

    logger.info("Logging detailed output to %s", log_file)
    with log_file.open("w", encoding="utf-8") as log:
        _write_header(log, workdir, f"command file (env: {env_file})")

        for entry_type, content in entries:
            if entry_type == "comment":
                log_section(log, f"# {content}")
                continue

            if entry_type == "source":
                _write_command(log, f"source {content}", current_dir)
                env_path = Path(content)
                if not env_path.is_absolute():
                    env_path = (current_dir / env_path).resolve()
                parse_env_file(env_path, env)
                os.environ.update(env)
                log_section(log, "Result: sourced env file", str(env_path))
                continue

            command = content.strip()
            if not command:
                continue

            _write_command(log, command, current_dir)

            # Handle built-in directives before invoking the shell
            if command.startswith("cd "):
                target = command[3:].strip()
                new_dir = Path(target)
                if not new_dir.is_absolute():
                    new_dir = (current_dir / new_dir).resolve()
                current_dir = new_dir
                log_section(log, "Result: changed directory", str(current_dir))
                continue

            if command.startswith("export "):
                assignment = command[len("export ") :].strip()
                key, value, placeholder = set_environment_variable(env, assignment)
                if placeholder:
                    current_value = env.get(key)
                    if current_value:
                        log_section(
                            log,
                            "Skipped placeholder export",
                            f"{key} retains existing value: {current_value}",
                        )
                    else:
                        log_section(
                            log,
                            "Skipped placeholder export",
                            f"{key} remains unset (placeholder provided: {value})",
                        )
                else:
                    log_section(log, "Result: set environment variable", f"{key}={value}")
                continue

            missing_vars = []
            placeholder_vars = []
            for var in sorted(extract_env_vars(command)):
                value = resolve_env_value(var, env)
                if not value:
                    missing_vars.append(var)
                    continue
                if is_placeholder(value):
                    placeholder_vars.append((var, value))

            if missing_vars:
                log_section(
                    log,
                    "Skipped command (missing env)",
                    ", ".join(f"${name}" for name in missing_vars),
                )
                results.append(None)
                continue

            if placeholder_vars:
                log_section(
                    log,
                    "Skipped command (placeholder env)",
                    ", ".join(f"${var}={value}" for var, value in placeholder_vars),
                )
                results.append(None)
                continue

            limit_error = check_deposit_limits(command, max_deposit)
            if limit_error:
                log_section(log, "Skipped command (deposit limit)", limit_error)
                results.append(None)
                continue

            if dry_run:
                log_section(log, "Dry run: command not executed")
                results.append(None)
                continue

            results.append(_run(command, log, log_file, env, current_dir))

    return results
