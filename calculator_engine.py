"""
Motor de cálculo para la calculadora decimal.

Este módulo provee la clase CalculatorEngine, que conecta el acumulador
de entrada con el evaluador de expresiones. La interfaz gráfica solo le
envía acciones de teclado y muestra el DisplayState que devuelve.

Contrato de interfaz:
    - press(action: str) -> DisplayState
    - evaluate(expression: str) -> str

Acciones:
    insert:<tecla>  dígito, "00", "." u operador + - * /
    clear           borra todo
    backspace       borra el último carácter
    equals          reemplaza la expresión por su resultado
    percent         reemplaza la expresión por su resultado / 100
"""

from __future__ import annotations

import logging
from typing import NamedTuple

from expression_evaluator import (
    OPERATORS,
    CalculationError,
    DivisionByZeroError,
    ExpressionError,
    ExpressionEvaluator,
)
from input_accumulator import InputAccumulator


log = logging.getLogger(__name__)


ERROR_MESSAGES = {
    ExpressionError: "Error de cálculo",
    DivisionByZeroError: "No se puede dividir entre cero",
}
GENERIC_ERROR_MESSAGE = "Error de cálculo"


class DisplayState(NamedTuple):
    expression: str
    preview: str
    message: str | None = None


class CalculatorEngine:
    """Sesión de la calculadora: expresión, vista previa y resultado."""

    def __init__(self, evaluator: ExpressionEvaluator | None = None):
        self._evaluator = evaluator if evaluator is not None else ExpressionEvaluator()
        self._accumulator = InputAccumulator()
        self._preview = ""

    # ── Estado visible ───────────────────────────────────────────

    @property
    def accumulator(self) -> InputAccumulator:
        return self._accumulator

    @property
    def expression(self) -> str:
        return self._accumulator.expression

    @property
    def preview(self) -> str:
        return self._preview

    def display_state(self, message: str | None = None) -> DisplayState:
        return DisplayState(self.expression, self._preview, message)

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> str:
        """Evalúa la expresión y devuelve el resultado como cadena.

        Raises:
            ExpressionError: expresión vacía o mal formada.
            DivisionByZeroError: división entre cero.
        """
        return self._evaluator.format_result(self._evaluator.evaluate(expression))

    # ── Acciones ─────────────────────────────────────────────────

    def press(self, action: str) -> DisplayState:
        if action == "clear":
            self.clear()
            return self.display_state()
        if action == "backspace":
            if self._accumulator.delete_last():
                self._refresh_preview()
            return self.display_state()
        if action == "equals":
            return self._commit(percent=False)
        if action == "percent":
            return self._commit(percent=True)
        if action.startswith("insert:"):
            self._insert(action[7:])
            return self.display_state()
        raise ValueError(f"Acción desconocida: {action!r}")

    def clear(self):
        self._accumulator.reset()
        self._preview = ""

    def _insert(self, key: str):
        if key in OPERATORS:
            accepted = self._accumulator.append_operator(key)
        else:
            accepted = self._accumulator.append_digit_or_dot(key)

        if not accepted:
            log.debug("Tecla ignorada %r en estado %s", key, self._accumulator.state.name)
            return
        self._refresh_preview()

    def _refresh_preview(self):
        self._preview = self._evaluator.preview_text(self.expression)

    # ── Resultado final ("=" y "%") ──────────────────────────────

    def _commit(self, percent: bool) -> DisplayState:
        expression = self.expression
        if percent:
            outcome = self._evaluator.try_percent(expression)
        else:
            outcome = self._evaluator.try_evaluate(expression)

        if not outcome.ok:
            return self._fail(expression, outcome.error)

        text = self._evaluator.format_result(outcome.value)
        if text == self._evaluator.FORMAT_ERROR_TOKEN:
            return self._fail(expression, None)

        self._accumulator.replace_with_result(text)
        if percent:
            self._refresh_preview()
        else:
            self._preview = ""
        return self.display_state()

    def _fail(self, expression: str, error: CalculationError | None) -> DisplayState:
        message = ERROR_MESSAGES.get(type(error), GENERIC_ERROR_MESSAGE)
        log.info("Cálculo fallido para %r: %s", expression, error)
        self.clear()
        return self.display_state(message)
