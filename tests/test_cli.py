import subprocess
from pathlib import Path

from near_runner.cli import SEQUENCES, build_sequence, main
from near_runner.env_utils import RunnerSettings

from .conftest import CONTRACT, SIGNER


def _args(env_file, log_file, *extra):
    return ["--env-file", str(env_file), "--log-file", str(log_file), *extra]


def test_default_run(recorder, env_file, log_file):
    assert main(_args(env_file, log_file)) == 0
    assert len(recorder.commands) == 5
    assert recorder.commands[2][recorder.commands[2].index("--accountId") + 1] == "alice.testnet"


def test_failed_call_sets_exit_code(recorder, env_file, log_file):
    recorder.returncodes = [0, 1]
    assert main(_args(env_file, log_file)) == 1
    assert len(recorder.commands) == 5


def test_dry_run(recorder, env_file, log_file):
    assert main(_args(env_file, log_file, "--dry-run")) == 0
    assert recorder.commands == []
    assert CONTRACT in log_file.read_text()


def test_inspect_sequence(recorder, env_file, log_file):
    assert main(_args(env_file, log_file, "--sequence", "inspect")) == 0
    assert [argv[3] for argv in recorder.commands] == [
        "nft_metadata",
        "nft_total_supply",
        "nft_supply_for_owner",
    ]


def test_missing_contract_is_a_configuration_error(recorder, tmp_path, log_file):
    assert main(_args(tmp_path / "absent.env", log_file)) == 2
    assert recorder.commands == []


def test_missing_command_file(recorder, env_file, log_file, tmp_path):
    assert main(_args(env_file, log_file, "--command-file", str(tmp_path / "nope.sh"))) == 2


def test_command_file(recorder, env_file, log_file, tmp_path):
    commands = tmp_path / "commands.sh"
    commands.write_text("near view $CONTRACT_NAME nft_tokens\n")
    assert main(_args(env_file, log_file, "--command-file", str(commands))) == 0
    assert recorder.commands == ["near view $CONTRACT_NAME nft_tokens"]


def _write_dev_account(project_dir: Path, extra: str = "") -> None:
    (project_dir / "neardev").mkdir(parents=True, exist_ok=True)
    (project_dir / "neardev" / "dev-account.env").write_text(f"CONTRACT_NAME={CONTRACT}\n{extra}")


def test_defaults_come_from_working_directory(recorder, tmp_path):
    _write_dev_account(tmp_path)

    assert main([]) == 0
    assert len(recorder.commands) == 5
    assert all(kwargs["cwd"] == str(Path.cwd().resolve()) for kwargs in recorder.kwargs)
    assert (tmp_path / "nft_command_results.log").exists()


def test_project_dir_option(recorder, tmp_path):
    project = tmp_path / "project"
    _write_dev_account(project)

    assert main(["--project-dir", str(project), "--dry-run"]) == 0
    assert recorder.commands == []
    assert CONTRACT in (project / "nft_command_results.log").read_text()


def test_missing_cli_fails_the_run(monkeypatch, tmp_path):
    _write_dev_account(tmp_path, "NEAR_CLI=/nonexistent/near\n")

    def missing_binary(command, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", command[0])

    monkeypatch.setattr(subprocess, "run", missing_binary)
    assert main([]) == 1
    assert "Execution failed" in (tmp_path / "nft_command_results.log").read_text()


def test_cure_is_signed_by_configured_account(recorder, env_file, log_file):
    assert main(_args(env_file, log_file, "--sequence", "cure")) == 0
    cure = recorder.commands[1]
    assert cure[1:4] == ["call", CONTRACT, "nft_cure"]
    assert cure[cure.index("--accountId") + 1] == SIGNER


def test_vaxxx_sequence(recorder, env_file, log_file):
    assert main(_args(env_file, log_file, "--sequence", "vaxxx")) == 0
    assert [argv[3] for argv in recorder.commands] == ["vaxxx", "vaxxx_pass", "vaxxx_list"]


def test_every_sequence_builds():
    settings = RunnerSettings(contract_id=CONTRACT, account_id=SIGNER)
    for name in SEQUENCES:
        assert build_sequence(name, settings)
