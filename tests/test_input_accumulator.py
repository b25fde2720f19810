"""Tests para el acumulador de entrada."""

import pytest

from input_accumulator import InputAccumulator, InputState


def _typed(*keys):
    acc = InputAccumulator()
    for key in keys:
        if key in "+-*/":
            acc.append_operator(key)
        else:
            acc.append_digit_or_dot(key)
    return acc


class TestDigits:
    def test_starts_empty(self):
        acc = InputAccumulator()
        assert acc.expression == ""
        assert acc.state is InputState.START
        assert not acc.last_input_was_operator
        assert not acc.decimal_added

    def test_double_zero_rejected_on_empty(self):
        acc = InputAccumulator()
        assert acc.append_digit_or_dot("00") is False
        assert acc.expression == ""

    def test_double_zero_rejected_after_operator(self):
        acc = _typed("5", "+")
        assert acc.append_digit_or_dot("00") is False
        assert acc.expression == "5+"

    def test_double_zero_after_digit(self):
        acc = _typed("5")
        assert acc.append_digit_or_dot("00") is True
        assert acc.expression == "500"

    def test_single_zero_after_operator_is_accepted(self):
        assert _typed("5", "+", "0").expression == "5+0"

    def test_second_dot_in_run_rejected(self):
        acc = _typed("3", ".")
        assert acc.append_digit_or_dot(".") is False
        assert acc.expression == "3."
        assert acc.decimal_added

    def test_digits_after_dot_keep_decimal_state(self):
        acc = _typed("3", ".", "1", "4")
        assert acc.state is InputState.AFTER_DECIMAL_POINT
        assert acc.append_digit_or_dot(".") is False

    def test_dot_allowed_in_next_run(self):
        acc = _typed("1", ".", "5", "+")
        assert acc.append_digit_or_dot(".") is True
        assert acc.expression == "1.5+."

    def test_digit_clears_operator_flag(self):
        acc = _typed("5", "+", "2")
        assert not acc.last_input_was_operator
        assert acc.state is InputState.AFTER_DIGIT

    def test_unknown_key_is_a_programming_error(self):
        with pytest.raises(ValueError):
            InputAccumulator().append_digit_or_dot("x")


class TestOperators:
    def test_operator_after_digit(self):
        acc = _typed("5")
        assert acc.append_operator("+") is True
        assert acc.expression == "5+"
        assert acc.last_input_was_operator
        assert not acc.decimal_added

    def test_second_operator_rejected(self):
        acc = _typed("5", "+")
        assert acc.append_operator("+") is False
        assert acc.append_operator("*") is False
        assert acc.expression == "5+"

    def test_operator_rejected_on_empty(self):
        acc = InputAccumulator()
        assert acc.append_operator("-") is False
        assert acc.expression == ""

    def test_unknown_operator_is_a_programming_error(self):
        with pytest.raises(ValueError):
            _typed("5").append_operator("^")


class TestDeleteLast:
    def test_delete_on_empty_is_noop(self):
        acc = InputAccumulator()
        assert acc.delete_last() is False
        assert acc.state is InputState.START

    def test_delete_digit_then_operator(self):
        acc = _typed("1", "2", "+", "3")
        acc.delete_last()
        assert acc.expression == "12+"
        assert acc.last_input_was_operator
        acc.delete_last()
        assert acc.expression == "12"
        assert not acc.last_input_was_operator
        assert acc.state is InputState.AFTER_DIGIT

    def test_delete_dot_clears_decimal_state(self):
        acc = _typed("3", ".")
        acc.delete_last()
        assert acc.expression == "3"
        assert not acc.decimal_added

    def test_delete_operator_restores_decimal_state(self):
        acc = _typed("1", ".", "5", "+")
        acc.delete_last()
        assert acc.expression == "1.5"
        assert acc.decimal_added
        assert acc.append_digit_or_dot(".") is False

    def test_delete_digit_after_dot_keeps_decimal_state(self):
        acc = _typed("2", ".", "5")
        acc.delete_last()
        assert acc.expression == "2."
        assert acc.decimal_added

    def test_delete_everything(self):
        acc = _typed("7", "+")
        acc.delete_last()
        acc.delete_last()
        assert acc.expression == ""
        assert acc.state is InputState.START


class TestResetAndReplace:
    def test_reset(self):
        acc = _typed("1", ".", "5", "+")
        acc.reset()
        assert acc.expression == ""
        assert acc.state is InputState.START

    def test_replace_with_integer_result(self):
        acc = _typed("1", "+")
        acc.replace_with_result("12")
        assert acc.expression == "12"
        assert not acc.last_input_was_operator
        assert not acc.decimal_added

    def test_replace_with_decimal_result(self):
        acc = _typed("1", "/", "3")
        acc.replace_with_result("0.3333333333")
        assert acc.decimal_added
        assert acc.append_digit_or_dot(".") is False

    def test_replace_with_negative_result(self):
        acc = InputAccumulator()
        acc.replace_with_result("-3")
        assert acc.state is InputState.AFTER_DIGIT
        assert acc.append_operator("*") is True
        assert acc.expression == "-3*"


@pytest.mark.parametrize("expression, state", [
    ("", InputState.START),
    ("12", InputState.AFTER_DIGIT),
    ("1.", InputState.AFTER_DECIMAL_POINT),
    ("1.5+2", InputState.AFTER_DIGIT),
    ("1+2.5", InputState.AFTER_DECIMAL_POINT),
    ("1+", InputState.AFTER_OPERATOR),
])
def test_scan_state(expression, state):
    assert InputAccumulator.scan_state(expression) is state
