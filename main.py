"""Punto de entrada de la calculadora decimal."""

import logging
import os
import tkinter as tk
from logging.handlers import RotatingFileHandler

from calculator_engine import CalculatorEngine
from calculator_ui import CalculatorApp


WINDOW_GEOMETRY = "360x540"
WINDOW_MIN_SIZE = (320, 480)
LOG_LEVEL_ENV = "CALC_LOG_LEVEL"
LOG_FILE = os.path.join(os.path.dirname(os.path.abspath(__file__)), "calculadora.log")


def _setup_logging() -> logging.Logger:
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    # Raíz común de los módulos: calculator_engine, calculator_ui, ...
    logger = logging.getLogger()
    logger.setLevel(level)

    if logger.handlers:
        return logger  # ya configurado

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    fh = RotatingFileHandler(LOG_FILE, maxBytes=512_000, backupCount=2, encoding="utf-8")
    fh.setLevel(level)
    fh.setFormatter(fmt)
    logger.addHandler(fh)

    return logger


def main():
    log = _setup_logging()

    root = tk.Tk()
    root.geometry(WINDOW_GEOMETRY)
    root.minsize(*WINDOW_MIN_SIZE)
    CalculatorApp(root, engine=CalculatorEngine())
    log.info("Calculadora iniciada")
    root.mainloop()


if __name__ == "__main__":
    main()
