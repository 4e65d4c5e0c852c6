import io

import pytest

from harborcli.selection import (
    SelectionModel,
    ask_choice,
    ask_confirm,
    ask_text,
    confirm_elevation,
    run_selection,
)


def scripted(answers):
    queue = list(answers)
    prompts = []

    def read(prompt):
        prompts.append(prompt)
        if not queue:
            raise EOFError
        return queue.pop(0)

    read.prompts = prompts
    return read


def test_model_title_and_cursor_marker():
    model = SelectionModel(["a", "b"], "Artifact")
    text = model.render()
    assert "Select an Artifact" in text
    assert "> 1. a" in text
    assert "> 2. b" not in text


def test_move_stays_inside_list():
    model = SelectionModel(["a", "b", "c"], "Tag")
    assert model.move(-5) == 0
    assert model.move(10) == 2
    assert model.move(-1) == 1


def test_select_sets_choice_and_hides_list():
    model = SelectionModel(["a", "b"], "Tag")
    model.move(1)
    assert model.select() == "b"
    assert model.render() == ""


def test_select_on_empty_list_gives_empty_choice():
    model = SelectionModel([], "Tag")
    assert model.move(1) == 0
    assert model.select() == ""


def test_run_selection_by_number():
    out = io.StringIO()
    assert run_selection(["x", "y", "z"], "User", scripted(["2"]), out) == "y"
    assert "Select an User" in out.getvalue()


def test_run_selection_by_moving_then_enter():
    out = io.StringIO()
    assert run_selection(["x", "y", "z"], "User", scripted(["j", "j", "k", ""]), out) == "y"


def test_run_selection_quit_and_eof_give_empty():
    assert run_selection(["x"], "User", scripted(["q"]), io.StringIO()) == ""
    assert run_selection(["x"], "User", scripted([]), io.StringIO()) == ""


def test_run_selection_ignores_bad_input():
    out = io.StringIO()
    assert run_selection(["x", "y"], "User", scripted(["9", "nonsense", "1"]), out) == "x"
    assert "unrecognised input" in out.getvalue()


def test_ask_text_retries_until_valid(capsys):
    def validate(value):
        if value == "bad":
            raise ValueError("value rejected")

    assert ask_text("Name", validate, input_func=scripted(["bad", "good"])) == "good"
    assert "value rejected" in capsys.readouterr().out


def test_ask_text_uses_default_on_empty():
    read = scripted([""])
    assert ask_text("Name", default="fallback", input_func=read) == "fallback"
    assert "fallback" in read.prompts[0]


def test_ask_text_propagates_eof():
    with pytest.raises(EOFError):
        ask_text("Name", input_func=scripted([]))


def test_ask_choice_by_number_and_default():
    options = [("First", "one"), ("Second", "two")]
    assert ask_choice("Pick", options, input_func=scripted(["2"])) == "two"
    assert ask_choice("Pick", options, input_func=scripted([""])) == "one"
    assert ask_choice("Pick", options, input_func=scripted(["7", "1"])) == "one"


def test_ask_choice_validation():
    def validate(value):
        if value == "one":
            raise ValueError("not that one")

    options = [("First", "one"), ("Second", "two")]
    assert ask_choice("Pick", options, validate, scripted(["1", "2"])) == "two"


def test_ask_confirm_answers():
    assert ask_confirm("Go?", input_func=scripted(["yes"])) is True
    assert ask_confirm("Go?", input_func=scripted(["n"])) is False
    assert ask_confirm("Go?", input_func=scripted([""])) is False
    assert ask_confirm("Go?", input_func=scripted(["maybe", "Y"])) is True


def test_confirm_elevation_asks_the_question():
    read = scripted(["Yes"])
    assert confirm_elevation(read) is True
    assert "Are you sure to elevate the user to admin role?" in read.prompts[0]