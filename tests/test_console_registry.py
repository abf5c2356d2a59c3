from __future__ import annotations

import logging

import pytest
from panda3d.core import LVector3f

from devconsole.console import ArgKind, ArgSpec, CommandRegistry, CommandSpec, console_cmd


class _Player:
    def __init__(self) -> None:
        self.calls: list[tuple] = []

    @console_cmd("Logs text")
    def TestLog(self, message: str) -> None:
        self.calls.append(("testlog", message))

    @console_cmd
    def TestBool(self, b: bool) -> None:
        self.calls.append(("testbool", b))

    @console_cmd
    def TestString(self, text: str) -> None:
        self.calls.append(("teststring", text))

    @console_cmd("Sums three ints", name="calculate")
    def calculate_sum(self, n1: int, n2: int, n3: int) -> None:
        self.calls.append(("calculate", n1 + n2 + n3))

    @console_cmd
    def TestVector3(self, vec: LVector3f) -> None:
        self.calls.append(("testvector3", (vec.x, vec.y, vec.z)))

    @console_cmd
    def Ping(self) -> None:
        self.calls.append(("ping",))

    @console_cmd
    def Boom(self) -> None:
        raise RuntimeError("kaboom")

    def not_a_command(self) -> None:
        self.calls.append(("hidden",))


class _Enemy:
    def __init__(self) -> None:
        self.calls: list[str] = []

    @console_cmd("Other owner ping")
    def ping(self) -> None:
        self.calls.append("enemy-ping")

    @console_cmd
    def spawn(self, count: int = 1) -> None:
        self.calls.append(f"spawn:{count}")


class _Public:
    @console_cmd
    def visible(self) -> None:
        return

    @console_cmd
    def _private(self) -> None:
        return


def test_register_adds_one_entry_per_tagged_method_with_description() -> None:
    reg = CommandRegistry()
    added = reg.register(_Player())

    cmds = reg.list_commands()
    assert added == list(cmds.keys())
    assert set(cmds) == {"testlog", "testbool", "teststring", "calculate", "testvector3", "ping", "boom"}
    assert cmds["testlog"].description == "Logs text"
    assert cmds["testbool"].description == ""
    assert "not_a_command" not in cmds


def test_underscore_methods_are_not_eligible() -> None:
    reg = CommandRegistry()
    reg.register(_Public())
    assert list(reg.list_commands()) == ["visible"]


def test_duplicate_name_from_second_owner_is_rejected(caplog) -> None:
    reg = CommandRegistry()
    player = _Player()
    enemy = _Enemy()
    reg.register(player)
    with caplog.at_level(logging.WARNING, logger="devconsole"):
        added = reg.register(enemy)

    assert added == ["spawn"]
    assert any("ping already exists" in r.getMessage() for r in caplog.records)

    assert reg.parse_and_execute("ping").ok is True
    assert player.calls == [("ping",)]
    assert enemy.calls == []


def test_reregistering_same_owner_type_is_a_logged_noop(caplog) -> None:
    reg = CommandRegistry()
    reg.register(_Enemy())
    with caplog.at_level(logging.WARNING, logger="devconsole"):
        assert reg.register(_Enemy()) == []
    assert any("already subscribed" in r.getMessage() for r in caplog.records)
    assert set(reg.list_commands()) == {"ping", "spawn"}


def test_unregister_removes_only_the_owners_commands() -> None:
    reg = CommandRegistry()
    player = _Player()
    enemy = _Enemy()
    reg.register(player)
    reg.register(enemy)

    removed = reg.unregister(enemy)

    assert removed == ["spawn"]
    assert "spawn" not in reg.list_commands()
    assert reg.parse_and_execute('testlog "still here"').ok is True
    assert player.calls == [("testlog", "still here")]
    assert reg.is_registered(enemy) is False


def test_unregister_then_register_is_symmetric() -> None:
    reg = CommandRegistry()
    player = _Player()
    first = reg.register(player)
    reg.unregister(player)
    assert reg.list_commands() == {}
    assert reg.register(player) == first


def test_quoted_argument_is_passed_verbatim() -> None:
    reg = CommandRegistry()
    player = _Player()
    reg.register(player)

    res = reg.parse_and_execute('testlog "hello world"')

    assert res.ok is True
    assert player.calls == [("testlog", "hello world")]


def test_lookup_is_case_insensitive_and_rename_is_honored() -> None:
    reg = CommandRegistry()
    player = _Player()
    reg.register(player)

    assert reg.parse_and_execute("CALCULATE 1 1 1").ok is True
    assert reg.parse_and_execute("TestBool yes").ok is True
    assert player.calls == [("calculate", 3), ("testbool", True)]


def test_vector3_argument_success_and_failure() -> None:
    reg = CommandRegistry()
    player = _Player()
    reg.register(player)

    assert reg.parse_and_execute("testvector3 3,3,3").ok is True
    bad = reg.parse_and_execute("testvector3 3,3")

    assert bad.ok is False
    assert bad.error_code == "validation-error"
    assert player.calls == [("testvector3", (3.0, 3.0, 3.0))]
    assert reg.history == ("testvector3 3,3,3",)


def test_failures_are_reported_not_raised(caplog) -> None:
    reg = CommandRegistry()
    player = _Player()
    reg.register(player)

    with caplog.at_level(logging.INFO, logger="devconsole"):
        missing = reg.parse_and_execute("nope 1 2")
        arity = reg.parse_and_execute("calculate 1 1")
        extra = reg.parse_and_execute("ping now")
        no_args = reg.parse_and_execute("teststring")
        boom = reg.parse_and_execute("boom")

    assert (missing.ok, missing.error_code) == (False, "unknown-command")
    assert (arity.ok, arity.error_code) == (False, "arity-mismatch")
    assert (extra.ok, extra.error_code) == (False, "arity-mismatch")
    assert (no_args.ok, no_args.error_code) == (False, "arity-mismatch")
    assert (boom.ok, boom.error_code) == (False, "handler-error")
    assert player.calls == []
    assert reg.history == ()

    messages = [r.getMessage() for r in caplog.records]
    assert "[CONSOLE] Command not found" in messages
    assert any("kaboom" in m for m in messages)
    assert [r.levelno for r in caplog.records if "kaboom" in r.getMessage()] == [logging.ERROR]


def test_trailing_default_argument_may_be_omitted() -> None:
    reg = CommandRegistry()
    enemy = _Enemy()
    reg.register(enemy)

    assert reg.parse_and_execute("spawn").ok is True
    assert reg.parse_and_execute("spawn 4").ok is True
    assert reg.parse_and_execute("spawn 4 5").ok is False
    assert enemy.calls == ["spawn:1", "spawn:4"]


def test_history_keeps_last_capacity_entries_in_order() -> None:
    reg = CommandRegistry(history_capacity=6)
    player = _Player()
    reg.register(player)

    for i in range(9):
        assert reg.parse_and_execute(f"teststring s{i}").ok is True
    reg.parse_and_execute("teststring")

    assert reg.history == tuple(f"teststring s{i}" for i in range(3, 9))
    assert reg.history_at(0) == "teststring s8"
    assert reg.history_at(5) == "teststring s3"


def test_nearest_command_uses_registration_order() -> None:
    reg = CommandRegistry()
    reg.register(_Player())

    assert reg.nearest_command("test") == ("testlog", ["message"])
    assert reg.nearest_command("TestB") == ("testbool", ["b"])
    assert reg.nearest_command("tests") == ("teststring", ["text"])
    assert reg.nearest_command("zzz") is None


def test_explicit_specs_register_without_decorators() -> None:
    reg = CommandRegistry()
    seen: list[float] = []

    class _Owner:
        pass

    spec = CommandSpec(
        name="SetSpeed",
        description="Set speed",
        args=(ArgSpec(name="value", kind=ArgKind.FLOAT),),
        target=seen.append,
    )
    assert reg.register(_Owner(), [spec]) == ["setspeed"]
    assert reg.parse_and_execute("setspeed 2.5").ok is True
    assert seen == [2.5]
    assert reg.list_commands()["setspeed"].arg_names == ["value"]


def test_blank_name_rejects_the_whole_registration() -> None:
    reg = CommandRegistry()

    class _Owner:
        pass

    owner = _Owner()
    specs = [
        CommandSpec(name="alpha", description="", args=(), target=lambda: None),
        CommandSpec(name="  ", description="", args=(), target=lambda: None),
    ]
    with pytest.raises(ValueError):
        reg.register(owner, specs)

    assert reg.list_commands() == {}
    assert reg.is_registered(owner) is False
    assert reg.register(owner, specs[:1]) == ["alpha"]
    assert reg.unregister(owner) == ["alpha"]
