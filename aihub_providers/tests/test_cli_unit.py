from __future__ import annotations

import json

import httpx

from aihub_providers import ChatClient, ConfigResolver
from aihub_providers.service.cli import main
from aihub_providers.service.cli.cli_actions import handle_chat
from aihub_providers.service.cli.cli_parser import build_parser


def _out(capsys):
    return json.loads(capsys.readouterr().out)


def test_config_masks_key_by_default(monkeypatch, capsys):
    monkeypatch.setenv("AI_OPENAI_API_KEY", "sk-abcdefghijklmnop")
    assert main(["config", "--provider", "openai"]) == 0  # nosec B101
    data = _out(capsys)
    assert data["api_key"] == "sk-a...mnop"  # nosec B101
    assert data["base_url"] == "https://api.openai.com/v1"  # nosec B101
    assert data["empty"] is False  # nosec B101

    assert main(["config", "--provider", "openai", "--show-secrets"]) == 0  # nosec B101
    assert _out(capsys)["api_key"] == "sk-abcdefghijklmnop"  # nosec B101


def test_config_unknown_provider_reports_empty(capsys):
    assert main(["config", "--provider", "nonexistent"]) == 0  # nosec B101
    data = _out(capsys)
    assert data["empty"] is True  # nosec B101
    assert data["base_url"] == ""  # nosec B101


def test_chat_dry_run_plan(monkeypatch, capsys):
    monkeypatch.setenv("AI_ANTHROPIC_API_KEY", "k1")
    code = main(["chat", "--provider", "anthropic", "--prompt", "hi", "--system", "terse", "--max-tokens", "50"])
    assert code == 0  # nosec B101
    data = _out(capsys)
    assert data["dry_run"] is True  # nosec B101
    assert data["url"] == "https://api.anthropic.com/v1/messages"  # nosec B101
    assert data["api_key_present"] is True  # nosec B101
    assert "x-api-key" in data["header_names"]  # nosec B101
    assert "k1" not in json.dumps(data)  # nosec B101
    assert data["payload"]["max_tokens"] == 50  # nosec B101
    assert [m["role"] for m in data["payload"]["messages"]] == ["system", "user"]  # nosec B101


def test_chat_invalid_input_exits_2(capsys):
    assert main(["chat", "--prompt", "   "]) == 2  # nosec B101
    assert main(["chat", "--prompt", "hi", "--temperature", "9"]) == 2  # nosec B101
    assert capsys.readouterr().out == ""  # nosec B101


def test_chat_execute_uses_client(stub_connector, capsys):
    args = build_parser().parse_args(["chat", "--provider", "openai", "--prompt", "hi", "--execute"])
    resolver = ConfigResolver.from_store({"providers": {"openai": {"api_key": "sk"}}}, environ={})
    reply = httpx.Response(200, json={"choices": [{"message": {"content": "hello"}}]})
    client = ChatClient("openai", resolver=resolver, connector=stub_connector(reply))
    assert handle_chat(args, client=client) == 0  # nosec B101
    data = _out(capsys)
    assert data["status"] == 200  # nosec B101
    assert data["body"]["choices"][0]["message"]["content"] == "hello"  # nosec B101

    client = ChatClient("openai", resolver=resolver, connector=stub_connector(httpx.Response(401, json={})))
    assert handle_chat(args, client=client) == 1  # nosec B101
    assert _out(capsys)["error"] is None  # nosec B101


def test_registry_commands(tmp_path, capsys):
    path = str(tmp_path / "reg.json")
    assert main(["registry", "--file", path, "add", "openai", "--path", "vendor/openai"]) == 0  # nosec B101
    assert _out(capsys)["added"] == "openai"  # nosec B101
    assert main(["registry", "--file", path, "list"]) == 0  # nosec B101
    assert _out(capsys)["providers"]["openai"]["path"] == "vendor/openai"  # nosec B101
    assert main(["registry", "--file", path, "remove", "openai"]) == 0  # nosec B101
    capsys.readouterr()
    assert main(["registry", "--file", path, "remove", "openai"]) == 1  # nosec B101
    assert _out(capsys)["removed"] is None  # nosec B101


def test_registry_file_option_after_subcommand(tmp_path, capsys):
    path = tmp_path / "after.json"
    assert main(["registry", "add", "anthropic", "--file", str(path)]) == 0  # nosec B101
    capsys.readouterr()
    assert path.is_file()  # nosec B101
    assert main(["registry", "list", "--file", str(path)]) == 0  # nosec B101
    assert "anthropic" in _out(capsys)["providers"]  # nosec B101
    assert main(["registry", "remove", "anthropic", "--file", str(path)]) == 0  # nosec B101
    assert _out(capsys)["removed"] == "anthropic"  # nosec B101


def test_registry_file_option_before_subcommand_is_kept():
    args = build_parser().parse_args(["registry", "--file", "x.json", "list"])
    assert args.file == "x.json"  # nosec B101
