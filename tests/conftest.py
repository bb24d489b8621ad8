import os
import subprocess
from pathlib import Path
from typing import List, Union

import pytest

CONTRACT = "dev-1650000000000-12345678901234"
SIGNER = "alice.testnet"

RUNNER_ENV_KEYS = (
    "CONTRACT_NAME",
    "CONTRACT_ID",
    "NEAR_CONTRACT",
    "ACCOUNT_ID",
    "NEAR_ACCOUNT_ID",
    "MASTER_ACCOUNT",
    "NEAR_CLI",
    "NEAR_MAX_DEPOSIT",
    "NFT_SECOND_RECEIVER",
)


class Recorder:
    """Stands in for ``subprocess.run`` and remembers every command."""

    def __init__(self, returncodes=None):
        self.commands: List[Union[str, List[str]]] = []
        self.kwargs: List[dict] = []
        self.returncodes = list(returncodes or [])

    def __call__(self, command, **kwargs):
        self.commands.append(command)
        self.kwargs.append(kwargs)
        code = self.returncodes.pop(0) if self.returncodes else 0
        return subprocess.CompletedProcess(command, code, stdout="ok\n", stderr="")


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    saved = dict(os.environ)
    for key in RUNNER_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # Defaults (.env, neardev/, the results log) resolve against the working directory
    monkeypatch.chdir(tmp_path)
    yield
    os.environ.clear()
    os.environ.update(saved)


@pytest.fixture
def env_file(tmp_path) -> Path:
    path = tmp_path / "dev-account.env"
    path.write_text(f"CONTRACT_NAME={CONTRACT}\nACCOUNT_ID={SIGNER}\n")
    return path


@pytest.fixture
def log_file(tmp_path) -> Path:
    return tmp_path / "results.log"


@pytest.fixture
def recorder(monkeypatch) -> Recorder:
    rec = Recorder()
    monkeypatch.setattr(subprocess, "run", rec)
    return rec
