"""Tests para el motor de la calculadora (teclas, vista previa, "=" y "%")."""

import logging

import pytest

from calculator_engine import (
    ERROR_MESSAGES,
    GENERIC_ERROR_MESSAGE,
    CalculatorEngine,
    DisplayState,
)
from expression_evaluator import DivisionByZeroError, ExpressionError


def _press_all(engine, *actions):
    state = None
    for action in actions:
        state = engine.press(action)
    return state


def _keys(text):
    return [f"insert:{ch}" for ch in text]


@pytest.fixture
def engine():
    return CalculatorEngine()


class TestPreview:
    def test_preview_follows_every_accepted_key(self, engine):
        assert engine.press("insert:2").preview == "2"
        assert engine.press("insert:+").preview == ""
        assert engine.press("insert:3").preview == "5"
        assert engine.press("insert:*").preview == ""
        assert engine.press("insert:4").preview == "14"

    def test_preview_after_backspace(self, engine):
        _press_all(engine, *_keys("12+3"))
        state = engine.press("backspace")
        assert state == DisplayState("12+", "", None)
        state = engine.press("backspace")
        assert state == DisplayState("12", "12", None)

    def test_rejected_key_keeps_display(self, engine):
        _press_all(engine, *_keys("5+"))
        state = engine.press("insert:+")
        assert state.expression == "5+"

    def test_division_by_zero_preview_is_empty(self, engine):
        state = _press_all(engine, *_keys("6/0"))
        assert state.preview == ""
        assert state.message is None

    def test_large_preview(self, engine):
        state = _press_all(engine, "insert:3", *["insert:00"] * 10)
        assert state.preview == "3×10^20"


class TestEquals:
    def test_equals_replaces_expression(self, engine):
        _press_all(engine, *_keys("1/3"))
        state = engine.press("equals")
        assert state == DisplayState("0.3333333333", "", None)
        assert engine.accumulator.decimal_added

    def test_result_can_be_extended(self, engine):
        _press_all(engine, *_keys("2*6"), "equals", *_keys("+1"))
        assert engine.expression == "12+1"
        assert engine.preview == "13"

    def test_division_by_zero_resets_with_message(self, engine):
        _press_all(engine, *_keys("6/0"))
        state = engine.press("equals")
        assert state.expression == ""
        assert state.preview == ""
        assert state.message == ERROR_MESSAGES[DivisionByZeroError]

    def test_incomplete_expression_resets_with_message(self, engine):
        _press_all(engine, *_keys("5+"))
        state = engine.press("equals")
        assert state.expression == ""
        assert state.message == ERROR_MESSAGES[ExpressionError]

    def test_equals_on_empty_expression(self, engine):
        state = engine.press("equals")
        assert state.message == GENERIC_ERROR_MESSAGE

    def test_failure_is_logged(self, engine, caplog):
        _press_all(engine, *_keys("6/0"))
        with caplog.at_level(logging.INFO, logger="calculator_engine"):
            engine.press("equals")
        assert "6/0" in caplog.text

    def test_session_usable_after_failure(self, engine):
        _press_all(engine, *_keys("6/0"), "equals", *_keys("2+2"), "equals")
        assert engine.expression == "4"


class TestPercent:
    def test_percent_of_number(self, engine):
        _press_all(engine, *_keys("50"))
        state = engine.press("percent")
        assert state.expression == "0.5"
        assert state.preview == "0.5"

    def test_percent_of_expression(self, engine):
        state = _press_all(engine, *_keys("100+50"), "percent")
        assert state.expression == "1.5"

    def test_percent_failure_resets(self, engine):
        state = _press_all(engine, *_keys("1/0"), "percent")
        assert state.expression == ""
        assert state.message == ERROR_MESSAGES[DivisionByZeroError]


class TestActions:
    def test_clear(self, engine):
        _press_all(engine, *_keys("1+2"))
        state = engine.press("clear")
        assert state == DisplayState("", "", None)

    def test_double_zero_key(self, engine):
        state = _press_all(engine, "insert:00", "insert:5", "insert:00")
        assert state.expression == "500"

    def test_unknown_action(self, engine):
        with pytest.raises(ValueError):
            engine.press("sqrt")

    def test_evaluate_returns_formatted_text(self, engine):
        assert engine.evaluate("8/2/2") == "2"
        assert engine.evaluate("1/3") == "0.3333333333"

    def test_evaluate_raises(self, engine):
        with pytest.raises(DivisionByZeroError):
            engine.evaluate("6/0")
