import pytest

from minkwright.driver.script_normalizer import (
    ScriptMode,
    ScriptShape,
    classify_script,
    normalize_script,
    wait_condition_expression,
)


@pytest.mark.parametrize(
    "script, shape",
    [
        ("return 1 + 1;", ScriptShape.RETURN),
        ("  return document.title  ", ScriptShape.RETURN),
        ("(function(){ return 1; })()", ScriptShape.IIFE),
        ("(function(){ return 1; }())", ScriptShape.IIFE),
        ("(() => { window.x = ')'; })();", ScriptShape.IIFE),
        ("function () { return 2; }()", ScriptShape.IIFE),
        ("function () { return 2; }", ScriptShape.FUNCTION),
        ("(function () { return 2; })", ScriptShape.FUNCTION),
        ("async function() { return 2; }", ScriptShape.FUNCTION),
        ("() => 42", ScriptShape.ARROW),
        ("(() => 42);", ScriptShape.ARROW),
        ("(a, b) => a + b", ScriptShape.ARROW),
        ("value => value * 2", ScriptShape.ARROW),
        ("document.title", ScriptShape.EXPRESSION),
        ("(document.title)", ScriptShape.EXPRESSION),
        ("returnValue", ScriptShape.EXPRESSION),
        ("(1 + 2) * (3 + 4)", ScriptShape.EXPRESSION),
    ],
)
def test_classify_script(script, shape):
    assert classify_script(script) is shape


def test_return_statement_result_is_dropped_when_executing():
    assert normalize_script("return 1 + 1;") == "() => {\nreturn 1 + 1\n}"
    assert normalize_script("return 1 + 1;", ScriptMode.EXECUTE) == (
        "() => {\n(() => {\nreturn 1 + 1\n})();\n}"
    )


def test_iife_is_wrapped_without_second_invocation():
    script = "(function(){ return 1; })()"
    assert normalize_script(script) == f"() => (\n{script}\n)"
    assert normalize_script(script, ScriptMode.EXECUTE) == f"() => {{\n(\n{script}\n);\n}}"


def test_function_values_are_invoked():
    assert normalize_script("() => 42") == "() => ((\n() => 42\n)())"
    assert normalize_script("() => 42", ScriptMode.EXECUTE) == "() => {\n(\n() => 42\n)();\n}"
    assert normalize_script("function () { return 2; };") == "() => ((\nfunction () { return 2; }\n)())"
    assert normalize_script("(() => 42)") == "() => ((\n(() => 42)\n)())"


def test_plain_expression_is_returned_or_discarded():
    assert normalize_script("document.title") == "() => (\ndocument.title\n)"
    assert normalize_script("document.title = 'x';", ScriptMode.EXECUTE) == "() => {\ndocument.title = 'x'\n}"


def test_mode_accepts_plain_strings():
    assert normalize_script("1", "execute") == "() => {\n1\n}"


@pytest.mark.parametrize(
    "script",
    [
        "document.title // trailing comment",
        "return 1 // c",
        "() => 42 // c",
        "(function(){ return 1; })() // c",
    ],
)
@pytest.mark.parametrize("mode", list(ScriptMode))
def test_trailing_line_comment_never_hides_closing_delimiters(script, mode):
    wrapper = normalize_script(script, mode)
    lines = wrapper.split("\n")

    assert script in lines
    after = lines[lines.index(script) + 1:]
    assert after
    assert all("//" not in line for line in after)
    assert "".join(after).strip() in {")", "}", ")())", ");}", ")();}", "})();}"}


def test_wrappers_have_balanced_delimiters():
    for script in ("return 1", "(function(){ return 1; })()", "() => 42", "document.title", "(() => 42)"):
        for mode in ScriptMode:
            wrapper = normalize_script(script, mode)
            assert wrapper.startswith("() => ")
            assert wrapper.count("(") == wrapper.count(")")
            assert wrapper.count("{") == wrapper.count("}")


def test_normalizing_twice_gives_the_same_wrapper():
    for script in ("return 1", "(function(){ return 1; })()", "() => 42", "document.title"):
        for mode in ScriptMode:
            assert normalize_script(script, mode) == normalize_script(script, mode)


@pytest.mark.parametrize("condition", ["", "   ", ";", "return", "return ;"])
def test_blank_wait_condition_is_always_false(condition):
    assert wait_condition_expression(condition) == "() => false"


def test_wait_condition_drops_leading_return():
    assert wait_condition_expression("return window.ready;") == "() => !!(\nwindow.ready\n)"
    assert wait_condition_expression("window.ready // set by app") == "() => !!(\nwindow.ready // set by app\n)"
