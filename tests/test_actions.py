from qpmu.actions import (
    Close,
    Copy,
    Run,
    RunCommand,
    RunShell,
    SetInput,
    SetList,
    map_actions,
)
from qpmu.input import Input
from qpmu.result_list import ResultList
from qpmu.sdk import messages


def test_close():
    assert map_actions("", [{"close": None}]) == [Close()]


def test_run_command_round_trip():
    raw = messages.action_to_dict(messages.RunCommand("ls", ("-l", "/tmp")))
    assert map_actions("x ", [raw]) == [RunCommand("ls", ("-l", "/tmp"))]


def test_run_shell_and_copy_keep_order():
    raw = [
        messages.action_to_dict(messages.RunShell("echo hi")),
        messages.action_to_dict(messages.Copy("text")),
    ]
    assert map_actions("", raw) == [RunShell("echo hi"), Copy("text")]


def test_set_input_is_prefixed():
    inp = messages.PluginInput("abc", range_lb=1, range_ub=2)
    raw = messages.action_to_dict(messages.SetInput(inp))
    [action] = map_actions("g ", [raw])
    assert action == SetInput(Input.from_plugin_input("g ", "abc", 1, 2))
    assert action.input.contents.startswith("g ")
    assert action.input.contents.endswith("abc")


def test_set_input_selection_shifts_with_prefix():
    raw = {"set_input": {"query": "q", "range_lb": 0, "range_ub": 0}}
    [action] = map_actions("ab", [raw])
    assert action.input.selection == (len("ab"), len("ab"))


def test_empty_actions_are_skipped():
    result = map_actions("", [{}, None, {"copy": "kept"}])
    assert result == [Copy("kept")]


def test_unknown_action_is_skipped():
    assert map_actions("", [{"explode": 1}]) == []


def test_set_list_repr_counts_items():
    event = SetList(ResultList(["a", "b"]), index=1)
    assert repr(event) == "SetList(2 items)"


def test_run_holds_actions():
    actions = map_actions("", [{"close": None}])
    assert Run(actions).actions == [Close()]
    assert Run().actions == []