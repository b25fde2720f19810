from calculator_engine import CalculatorEngine, DisplayState
from input_accumulator import InputState
import sys


_SPECIAL_KEYS = {
	"=": "equals",
	"%": "percent",
	"<": "backspace",
	"C": "clear",
}


def _action_for(key: str) -> str:
	return _SPECIAL_KEYS.get(key, f"insert:{key}")


def _walk(keys: str):
	engine = CalculatorEngine()
	states: list[tuple[str, DisplayState]] = []

	for key in keys.split():
		states.append((key, engine.press(_action_for(key))))

	return engine, states


def inspect_input_states(keys: str) -> None:
	"""Imprime expresión, vista previa y aviso después de cada tecla."""
	engine, states = _walk(keys)

	print("Input inspection")
	print(f"keys:        {keys}")
	for key, state in states:
		notice = f"  aviso: {state.message}" if state.message else ""
		print(f"  {key:>3} -> {state.expression!r:<24} preview {state.preview!r}{notice}")
	print(f"final state: {engine.accumulator.state.name}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	_, states = _walk("1 / 3")
	expected_actual.append(("preview 1/3", "0.3333333333", states[-1][1].preview))
	_, states = _walk("1 / 3 =")
	expected_actual.append(("1/3 =", "0.3333333333", states[-1][1].expression))
	checks.append(("preview is cleared after =", states[-1][1].preview == ""))

	_, states = _walk("2 + 3 * 4")
	expected_actual.append(("2+3*4 preview", "14", states[-1][1].preview))
	_, states = _walk("8 - 3 - 2 =")
	expected_actual.append(("8-3-2 =", "3", states[-1][1].expression))
	_, states = _walk("8 / 2 / 2 =")
	expected_actual.append(("8/2/2 =", "2", states[-1][1].expression))

	_, states = _walk("5 0 %")
	expected_actual.append(("50 %", "0.5", states[-1][1].expression))

	_, states = _walk("6 / 0 =")
	checks.append(("6/0 = clears the session", states[-1][1].expression == ""))
	checks.append(("6/0 = reports division by zero", states[-1][1].message == "No se puede dividir entre cero"))
	checks.append(("6/0 preview stays empty", states[-2][1].preview == ""))

	_, states = _walk("00 5 + 00")
	expected_actual.append(("00 ignored at start and after operator", "5+", states[-1][1].expression))
	_, states = _walk("5 00")
	expected_actual.append(("00 after digit", "500", states[-1][1].expression))

	_, states = _walk("5 + +")
	expected_actual.append(("double operator ignored", "5+", states[-1][1].expression))
	checks.append(("trailing operator gives empty preview", states[-1][1].preview == ""))

	_, states = _walk("3 . .")
	expected_actual.append(("double dot ignored", "3.", states[-1][1].expression))

	engine, states = _walk("1 2 + 3 < <")
	expected_actual.append(("two deletions", "12", states[-1][1].expression))
	checks.append(("operator flag cleared after deletions", not engine.accumulator.last_input_was_operator))

	engine, states = _walk("1 . 5 + < .")
	expected_actual.append(("dot rejected after deleting operator", "1.5", states[-1][1].expression))
	checks.append(("state rescanned after deletion", engine.accumulator.state is InputState.AFTER_DECIMAL_POINT))

	big = "3" + " 00" * 10
	_, states = _walk(big)
	expected_actual.append(("large preview uses exponent", "3×10^20", states[-1][1].preview))
	_, states = _walk(big + " =")
	expected_actual.append(("large result stays positional", "3" + "0" * 20, states[-1][1].expression))

	_, states = _walk("2 - 5 = * 3 =")
	expected_actual.append(("negative result can be continued", "-9", states[-1][1].expression))

	failed = [name for name, ok in checks if not ok]
	failed += [label for label, expected, actual in expected_actual if expected != actual]
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_input_checks.py
	#   python regression_input_checks.py --inspect "1 . 5 + < ."
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")

		inspect_input_states(keys)
	else:
		run_regressions()
