"""
Tests for CLI subcommands and argument parsing.
"""

from types import SimpleNamespace

import pytest

from ai_engine import CreditBalance, FunctionGroup, Model
from cli import commands
from cli.commands import build_parser, cmd_chat, find_function_group, main
from cli.interface import print_credits, print_function_groups, print_models

GROUPS = [
    FunctionGroup(uuid="priv-1", name="Mine", is_private=True),
    FunctionGroup(uuid="pub-1", name="Fetch Verified", is_private=False),
]


class TestFindFunctionGroup:
    def test_by_uuid(self):
        assert find_function_group(GROUPS, "pub-1").name == "Fetch Verified"

    def test_by_name_case_insensitive(self):
        assert find_function_group(GROUPS, "fetch verified").uuid == "pub-1"

    def test_missing(self):
        assert find_function_group(GROUPS, "Nope") is None


class TestParser:
    def test_chat_defaults(self):
        args = build_parser().parse_args(["chat"])
        assert args.command == "chat"
        assert args.function_group == "Fetch Verified"
        assert args.model == "talkative-01"
        assert args.poll_interval == 1.2
        assert args.max_empty_polls == 12

    def test_global_options(self):
        args = build_parser().parse_args(["--api-key", "k", "-v", "credits"])
        assert args.api_key == "k"
        assert args.verbose is True

    def test_unknown_model_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["chat", "--model", "gpt-99"])


class _StubEngine:
    def __init__(self, session=None):
        self.session = session
        self.created = []

    async def get_function_groups(self):
        return GROUPS

    async def create_session(self, function_group, *, email=None, model=None):
        self.created.append((function_group, email, model))
        return self.session


@pytest.mark.asyncio
async def test_cmd_chat_runs_conversation(monkeypatch, session):
    engine = _StubEngine(session)
    conversations = []

    async def _run(sess, objective, **kwargs):
        conversations.append((sess, objective, kwargs))
        return True

    monkeypatch.setattr(commands, "create_engine", lambda args: engine)
    monkeypatch.setattr(commands, "run_conversation", _run)

    args = build_parser().parse_args([
        "chat", "--objective", "Find a hotel", "--function-group", "Mine", "--max-empty-polls", "3",
    ])
    await cmd_chat(args)

    assert engine.created == [("priv-1", None, "talkative-01")]
    sess, objective, kwargs = conversations[0]
    assert sess is session
    assert objective == "Find a hotel"
    assert kwargs["max_empty_polls"] == 3


@pytest.mark.asyncio
async def test_cmd_chat_unknown_group_exits(monkeypatch, capsys):
    monkeypatch.setattr(commands, "create_engine", lambda args: _StubEngine())

    args = SimpleNamespace(function_group="Nope", objective="x")
    with pytest.raises(SystemExit):
        await cmd_chat(args)

    assert "Could not find function group" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_main_reports_missing_api_key(monkeypatch, capsys):
    monkeypatch.delenv("AV_API_KEY", raising=False)
    monkeypatch.setattr(commands, "load_dotenv", lambda: None)

    with pytest.raises(SystemExit) as exc:
        await main(["credits"])

    assert exc.value.code == 1
    assert "AV_API_KEY" in capsys.readouterr().out


class TestPrinters:
    def test_print_function_groups(self, capsys):
        print_function_groups(GROUPS)
        out = capsys.readouterr().out
        assert "priv-1" in out
        assert "private" in out
        assert "Fetch Verified" in out

    def test_print_function_groups_empty(self, capsys):
        print_function_groups([])
        assert "No function groups found." in capsys.readouterr().out

    def test_print_credits(self, capsys):
        print_credits(CreditBalance(total_credits=10, used_credits=4, available_credits=6))
        out = capsys.readouterr().out
        assert "Available: 6" in out

    def test_print_models(self, capsys):
        print_models([Model(id="next-gen", name="Next Generation", credits=5)])
        assert "Next Generation" in capsys.readouterr().out
