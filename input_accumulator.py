"""
Acumulador de entrada de la calculadora.

Guarda la expresión que el usuario construye tecla a tecla y aplica
las reglas de entrada antes de que un carácter llegue al evaluador:

    - sin dos operadores seguidos ni operador al inicio,
    - como mucho un punto decimal por número,
    - sin "00" al comienzo de un número.

El estado de entrada se deduce siempre del final de la expresión, de
modo que borrar varios caracteres seguidos no lo desincroniza.
"""

from __future__ import annotations

from enum import Enum

from expression_evaluator import OPERATORS


DIGIT_KEYS = frozenset("0123456789") | {"00", "."}


class InputState(Enum):
    START = "start"
    AFTER_DIGIT = "after_digit"
    AFTER_DECIMAL_POINT = "after_decimal_point"
    AFTER_OPERATOR = "after_operator"


class InputAccumulator:
    """Expresión en construcción y su estado de entrada."""

    def __init__(self):
        self._expression = ""
        self._state = InputState.START

    # ── Estado ───────────────────────────────────────────────────

    @property
    def expression(self) -> str:
        return self._expression

    @property
    def state(self) -> InputState:
        return self._state

    @property
    def last_input_was_operator(self) -> bool:
        return self._state is InputState.AFTER_OPERATOR

    @property
    def decimal_added(self) -> bool:
        return self._state is InputState.AFTER_DECIMAL_POINT

    @staticmethod
    def scan_state(expression: str) -> InputState:
        """Deduce el estado a partir del último número de la expresión."""
        if not expression:
            return InputState.START
        if expression[-1] in OPERATORS:
            return InputState.AFTER_OPERATOR

        start = len(expression)
        while start > 0 and expression[start - 1] not in OPERATORS:
            start -= 1
        if "." in expression[start:]:
            return InputState.AFTER_DECIMAL_POINT
        return InputState.AFTER_DIGIT

    # ── Mutaciones ───────────────────────────────────────────────

    def append_digit_or_dot(self, key: str) -> bool:
        """Añade un dígito, "00" o ".". Devuelve False si se ignora.

        Raises:
            ValueError: la tecla no es un dígito, "00" ni ".".
        """
        if key not in DIGIT_KEYS:
            raise ValueError(f"Tecla numérica no válida: {key!r}")

        if key == "00" and self._state in (InputState.START, InputState.AFTER_OPERATOR):
            return False
        if key == "." and self._state is InputState.AFTER_DECIMAL_POINT:
            return False

        self._expression += key
        if key == "." or self._state is InputState.AFTER_DECIMAL_POINT:
            self._state = InputState.AFTER_DECIMAL_POINT
        else:
            self._state = InputState.AFTER_DIGIT
        return True

    def append_operator(self, op: str) -> bool:
        """Añade un operador binario. Devuelve False si se ignora.

        Raises:
            ValueError: op no es uno de + - * /.
        """
        if op not in OPERATORS:
            raise ValueError(f"Operador no válido: {op!r}")

        if self._state in (InputState.START, InputState.AFTER_OPERATOR):
            return False

        self._expression += op
        self._state = InputState.AFTER_OPERATOR
        return True

    def delete_last(self) -> bool:
        if not self._expression:
            return False

        self._expression = self._expression[:-1]
        self._state = self.scan_state(self._expression)
        return True

    def reset(self):
        self._expression = ""
        self._state = InputState.START

    def replace_with_result(self, text: str):
        """Sustituye la expresión completa por un resultado ya formateado."""
        self._expression = text
        self._state = self.scan_state(text)
