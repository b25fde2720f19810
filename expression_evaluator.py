"""Tokenización, precedencia y aritmética decimal de la calculadora."""

from __future__ import annotations

import re
from decimal import (
    MAX_EMAX,
    MAX_PREC,
    MIN_EMIN,
    Context,
    Decimal,
    Inexact,
    InvalidOperation,
    ROUND_HALF_UP,
)
from enum import Enum
from typing import NamedTuple

from mpmath import mp


# ═════════════════════════════════════════════════════════════════
#  Errores
# ═════════════════════════════════════════════════════════════════

class CalculationError(ArithmeticError):
    """Base de los fallos de evaluación."""


class ExpressionError(CalculationError, ValueError):
    """Expresión vacía, incompleta o con caracteres no reconocidos."""


class DivisionByZeroError(CalculationError, ZeroDivisionError):
    """El divisor es exactamente cero."""


# ═════════════════════════════════════════════════════════════════
#  Tokens
# ═════════════════════════════════════════════════════════════════

class TokenKind(Enum):
    NUMBER = "number"
    OPERATOR = "operator"
    LEFT_PAREN = "left_paren"
    RIGHT_PAREN = "right_paren"


class Token(NamedTuple):
    kind: TokenKind
    text: str


OPERATORS = frozenset("+-*/")

_TOKEN_RE = re.compile(
    r"(?P<number>\d+(?:\.\d*)?|\.\d+)"
    r"|(?P<operator>[+\-*/])"
    r"|(?P<left_paren>\()"
    r"|(?P<right_paren>\))"
    r"|(?P<space>\s+)"
)


def tokenize(expression: str) -> list[Token]:
    """Divide la expresión en tokens de izquierda a derecha.

    Un '-' inicial seguido de un número forma parte de ese número, para
    que un resultado negativo pueda seguir usándose como operando.

    Raises:
        ExpressionError: carácter que no pertenece a ningún token.
    """
    tokens: list[Token] = []
    pos = 0

    while pos < len(expression):
        match = _TOKEN_RE.match(expression, pos)
        if match is None:
            raise ExpressionError(f"Carácter no reconocido: {expression[pos]!r}")
        pos = match.end()

        kind = match.lastgroup
        if kind == "space":
            continue

        text = match.group()
        if kind == "number" and tokens == [Token(TokenKind.OPERATOR, "-")]:
            tokens[0] = Token(TokenKind.NUMBER, "-" + text)
            continue

        tokens.append(Token(TokenKind(kind), text))

    return tokens


# ═════════════════════════════════════════════════════════════════
#  Resultado sin excepciones
# ═════════════════════════════════════════════════════════════════

class EvaluationResult(NamedTuple):
    """Valor calculado o error etiquetado, nunca ambos."""

    value: Decimal | None = None
    error: CalculationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


# ═════════════════════════════════════════════════════════════════
#  Evaluador
# ═════════════════════════════════════════════════════════════════

class ExpressionEvaluator:
    """Evalúa expresiones con dos pilas y aritmética decimal de punto fijo."""

    DIVISION_SCALE = 10
    PREVIEW_SCI_THRESHOLD = Decimal("1E+20")
    PREVIEW_SIGNIFICANT_DIGITS = 15
    FORMAT_ERROR_TOKEN = "Error"

    _PRECEDENCE = {"+": 1, "-": 1, "*": 2, "/": 2}

    # Suma, resta y producto exactos: cualquier redondeo es un error.
    _EXACT = Context(
        prec=MAX_PREC,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        traps=[InvalidOperation, Inexact],
    )
    _ROUNDING = Context(
        prec=MAX_PREC,
        Emax=MAX_EMAX,
        Emin=MIN_EMIN,
        rounding=ROUND_HALF_UP,
        traps=[InvalidOperation],
    )

    def __init__(self):
        self._quantum = Decimal(1).scaleb(-self.DIVISION_SCALE)

    # ── Evaluación principal ─────────────────────────────────────

    def evaluate(self, expression: str) -> Decimal:
        """Evalúa la expresión y devuelve su valor exacto.

        Raises:
            ExpressionError: expresión vacía o mal formada.
            DivisionByZeroError: división entre cero exacto.
        """
        tokens = tokenize(expression)
        if not tokens:
            raise ExpressionError("Expresión vacía")

        values: list[Decimal] = []
        ops: list[str] = []

        for tok in tokens:
            if tok.kind is TokenKind.NUMBER:
                values.append(Decimal(tok.text))
            elif tok.kind is TokenKind.LEFT_PAREN:
                ops.append(tok.text)
            elif tok.kind is TokenKind.RIGHT_PAREN:
                while ops and ops[-1] != "(":
                    self._reduce(values, ops)
                if not ops:
                    raise ExpressionError("Paréntesis de cierre sin apertura")
                ops.pop()
            else:
                while ops and self._has_precedence(tok.text, ops[-1]):
                    self._reduce(values, ops)
                ops.append(tok.text)

        while ops:
            if ops[-1] == "(":
                raise ExpressionError("Paréntesis sin cerrar")
            self._reduce(values, ops)

        if len(values) != 1:
            raise ExpressionError("Faltan operadores")
        return values[0]

    def try_evaluate(self, expression: str) -> EvaluationResult:
        try:
            return EvaluationResult(value=self.evaluate(expression))
        except CalculationError as exc:
            return EvaluationResult(error=exc)

    def percent(self, expression: str) -> Decimal:
        """Valor de la expresión dividido entre 100."""
        return self.divide(self.evaluate(expression), Decimal(100))

    def try_percent(self, expression: str) -> EvaluationResult:
        try:
            return EvaluationResult(value=self.percent(expression))
        except CalculationError as exc:
            return EvaluationResult(error=exc)

    def _has_precedence(self, incoming: str, top: str) -> bool:
        if top in "()":
            return False
        return self._PRECEDENCE[top] >= self._PRECEDENCE[incoming]

    def _reduce(self, values: list[Decimal], ops: list[str]):
        op = ops.pop()
        if len(values) < 2:
            raise ExpressionError(f"Faltan operandos para '{op}'")
        right = values.pop()
        left = values.pop()
        values.append(self.apply(op, left, right))

    # ── Aritmética ───────────────────────────────────────────────

    def apply(self, op: str, left: Decimal, right: Decimal) -> Decimal:
        if op == "+":
            return self._EXACT.add(left, right)
        if op == "-":
            return self._EXACT.subtract(left, right)
        if op == "*":
            return self._EXACT.multiply(left, right)
        if op == "/":
            return self.divide(left, right)
        raise ExpressionError(f"Operador desconocido: {op}")

    def divide(self, left: Decimal, right: Decimal) -> Decimal:
        """Cociente redondeado a DIVISION_SCALE decimales, mitad hacia arriba."""
        if right == 0:
            raise DivisionByZeroError("No se puede dividir entre cero")

        # Cociente en enteros: left/right * 10^escala, sin doble redondeo.
        l_sign, l_digits, l_exp = left.as_tuple()
        r_sign, r_digits, r_exp = right.as_tuple()
        numerator = int("".join(map(str, l_digits)))
        denominator = int("".join(map(str, r_digits)))

        shift = l_exp - r_exp + self.DIVISION_SCALE
        if shift >= 0:
            numerator *= 10 ** shift
        else:
            denominator *= 10 ** -shift

        quotient, remainder = divmod(numerator, denominator)
        if 2 * remainder >= denominator:
            quotient += 1

        sign = "-" if l_sign != r_sign and quotient else ""
        return Decimal(f"{sign}{quotient}E-{self.DIVISION_SCALE}")

    # ── Formato del resultado ────────────────────────────────────

    def format_result(self, value: Decimal) -> str:
        try:
            if not value.is_finite():
                return self.FORMAT_ERROR_TOKEN
            if value == value.to_integral_value():
                return str(int(value))

            rounded = value.quantize(
                self._quantum, rounding=ROUND_HALF_UP, context=self._ROUNDING
            )
            if rounded == 0:
                return "0"
            return format(rounded, "f").rstrip("0").rstrip(".")
        except (ArithmeticError, ValueError):
            return self.FORMAT_ERROR_TOKEN

    def preview_text(self, expression: str) -> str:
        """Texto de la vista previa; vacío si la expresión no se puede evaluar."""
        result = self.try_evaluate(expression)
        if not result.ok:
            return ""

        value = result.value
        if value.copy_abs() > self.PREVIEW_SCI_THRESHOLD:
            return self._format_scientific(value)
        return self.format_result(value)

    def _format_scientific(self, value: Decimal) -> str:
        digits = self.PREVIEW_SIGNIFICANT_DIGITS
        with mp.workdps(digits + 10):
            text = mp.nstr(
                mp.mpf(str(value)), n=digits, min_fixed=0, max_fixed=0
            )

        mantissa, _, exponent = text.partition("e")
        if "." in mantissa:
            mantissa = mantissa.rstrip("0").rstrip(".")
        return f"{mantissa}×10^{int(exponent)}"
