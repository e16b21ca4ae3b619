"""Evaluate normalized wrappers in Node.js, no browser needed."""

import json
import shutil
import subprocess

import pytest

from minkwright.driver.script_normalizer import ScriptMode, normalize_script, wait_condition_expression

NODE = shutil.which("node")

pytestmark = pytest.mark.skipif(NODE is None, reason="node is not installed")

# Calls the wrapper twice so side effects and the returned value can both be checked.
_RUNNER = """
globalThis.counter = 0;
const fn = eval("(" + process.argv[1] + ")");
const first = fn();
const second = fn();
process.stdout.write(JSON.stringify({first: first, second: second, counter: globalThis.counter}));
"""


def run(wrapper):
    completed = subprocess.run(
        [NODE, "-e", _RUNNER, wrapper],
        capture_output=True,
        text=True,
        timeout=30,
        check=False,
    )
    assert completed.returncode == 0, completed.stderr
    return json.loads(completed.stdout)


@pytest.mark.parametrize(
    "script, expected",
    [
        ("return 1 + 1;", 2),
        ("(function(){ return 1; })()", 1),
        ("function () { return 1; }()", 1),
        ("() => 42", 42),
        ("(() => 42)", 42),
        ("(function(){ return 7; })", 7),
        ("'plain' + ' expression'", "plain expression"),
        ("[1, 2, 3].length // trailing comment", 3),
        ("return 5 // trailing comment", 5),
        ("() => 42 // trailing comment", 42),
    ],
)
def test_evaluate_yields_script_value(script, expected):
    assert run(normalize_script(script, ScriptMode.EVALUATE))["first"] == expected


@pytest.mark.parametrize(
    "script",
    [
        "return ++globalThis.counter;",
        "(function(){ return ++globalThis.counter; })()",
        "() => ++globalThis.counter",
        "++globalThis.counter // trailing comment",
    ],
)
def test_execute_runs_once_per_call_and_returns_nothing(script):
    result = run(normalize_script(script, ScriptMode.EXECUTE))

    assert "first" not in result
    assert "second" not in result
    assert result["counter"] == 2


def test_normalizing_twice_behaves_the_same():
    script = "() => ++globalThis.counter"
    once = run(normalize_script(script))
    twice = run(normalize_script(normalize_script(script)))

    assert once == twice == {"first": 1, "second": 2, "counter": 2}


@pytest.mark.parametrize(
    "condition, expected",
    [("", False), ("   ", False), ("return 1 === 1;", True), ("0 // never", False), ("'yes'", True)],
)
def test_wait_condition_values(condition, expected):
    assert run(wait_condition_expression(condition))["first"] is expected
