from near_runner.cmd_parser import classify_command, parse_command_file
from near_runner.constants import COMMAND_FILE


def test_continuations_and_comments(tmp_path):
    path = tmp_path / "commands.sh"
    path.write_text(
        "#!/usr/bin/env bash\n"
        "# set up\n"
        "\n"
        "near call c.testnet nft_mint \\\n"
        "  '{\"token_id\": \"0\"}' \\\n"
        "  --accountId c.testnet --deposit 0.1\n"
        "near view c.testnet nft_tokens\n"
    )
    assert parse_command_file(path) == [
        ("comment", "set up"),
        (
            "command",
            "near call c.testnet nft_mint '{\"token_id\": \"0\"}' --accountId c.testnet --deposit 0.1",
        ),
        ("command", "near view c.testnet nft_tokens"),
    ]


def test_trailing_continuation_is_flushed(tmp_path):
    path = tmp_path / "commands.sh"
    path.write_text("near view c.testnet \\\n")
    assert parse_command_file(path) == [("command", "near view c.testnet")]


def test_shipped_command_file():
    entries = parse_command_file(COMMAND_FILE)
    assert ("source", "neardev/dev-account.env") in entries
    commands = [content for kind, content in entries if kind == "command"]
    methods = [command.split()[3] for command in commands]
    assert methods == [
        "new_default_meta",
        "nft_mint",
        "nft_mint",
        "nft_tokens",
        "nft_tokens_for_owner",
    ]


def test_sourcing_is_recognized(tmp_path):
    path = tmp_path / "commands.sh"
    path.write_text(
        "source neardev/dev-account.env\n"
        ". './other.env'\n"
        "near view $CONTRACT_NAME nft_tokens\n"
    )
    assert parse_command_file(path) == [
        ("source", "neardev/dev-account.env"),
        ("source", "./other.env"),
        ("command", "near view $CONTRACT_NAME nft_tokens"),
    ]


def test_classify_command():
    assert classify_command("sourcery --help") == ("command", "sourcery --help")
    assert classify_command(".venv/bin/near view c nft_tokens") == (
        "command",
        ".venv/bin/near view c nft_tokens",
    )
