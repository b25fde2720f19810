"""
Interfaz gráfica de la calculadora decimal.

Usa tkinter. Cada pulsación se procesa por completo en el bucle de
eventos: el motor actualiza la expresión y la vista previa, y la
ventana solo pinta el DisplayState resultante.
"""

import tkinter as tk
from tkinter import font as tkfont

from calculator_engine import CalculatorEngine, DisplayState


# ═════════════════════════════════════════════════════════════════
#  Widget: campo de expresión con scroll lateral gradual
# ═════════════════════════════════════════════════════════════════

class ExpressionDisplay:
    """Entry de solo lectura que mantiene visible el final del texto."""

    SCROLL_STEPS = 2        # caracteres por evento de rueda
    SCROLL_INTERVAL = 25    # ms entre pasos de animación

    # Símbolos de pantalla para los operadores internos
    SYMBOLS = str.maketrans({"*": "×", "/": "÷", "-": "−"})

    def __init__(self, parent, **kw):
        self._var = tk.StringVar(value="")
        self._entry = tk.Entry(parent, textvariable=self._var,
                               state="readonly", **kw)
        self._anim_id = None
        self._entry.bind("<MouseWheel>", self._on_mousewheel)
        self._entry.bind("<Shift-MouseWheel>", self._on_mousewheel)

    @property
    def widget(self):
        return self._entry

    def set_text(self, text: str):
        self._var.set(text.translate(self.SYMBOLS))
        self._entry.after(10, self._scroll_to_end)

    def get_text(self) -> str:
        return self._var.get()

    def _scroll_to_end(self):
        self._entry.icursor(tk.END)
        self._entry.xview_moveto(1.0)

    # ── Rueda del ratón ──────────────────────────────────────────

    def _on_mousewheel(self, event):
        direction = -1 if event.delta > 0 else 1
        if self._anim_id:
            self._entry.after_cancel(self._anim_id)
            self._anim_id = None
        self._scroll_step(direction, self.SCROLL_STEPS)
        return "break"

    def _scroll_step(self, direction, remaining):
        if remaining <= 0:
            self._anim_id = None
            return
        self._entry.xview_scroll(direction, "units")
        self._anim_id = self._entry.after(
            self.SCROLL_INTERVAL,
            lambda: self._scroll_step(direction, remaining - 1),
        )


# ═════════════════════════════════════════════════════════════════
#  Aplicación principal
# ═════════════════════════════════════════════════════════════════

class CalculatorApp:
    """Ventana principal de la calculadora."""

    NOTICE_MS = 2000

    # ── Paleta de colores ────────────────────────────────────────
    C = {
        "bg":         "#1E1E2E",
        "display_bg": "#181825",
        "num":        "#313244",
        "num_fg":     "#CDD6F4",
        "op":         "#F38BA8",
        "op_fg":      "#1E1E2E",
        "special":    "#585B70",
        "special_fg": "#CDD6F4",
        "equals":     "#89B4FA",
        "equals_fg":  "#1E1E2E",
        "expr_fg":    "#CDD6F4",
        "preview_fg": "#A6E3A1",
        "notice_bg":  "#45475A",
        "notice_fg":  "#F9E2AF",
    }

    # ── Definiciones del teclado ─────────────────────────────────
    #  Cada fila es una lista de (texto, acción, tipo_color)

    KEYPAD = [
        [("C",  "clear",     "special"), ("⌫", "backspace", "special"),
         ("%",  "percent",   "special"), ("÷", "insert:/",  "op")],

        [("7",  "insert:7",  "num"), ("8", "insert:8", "num"),
         ("9",  "insert:9",  "num"), ("×", "insert:*", "op")],

        [("4",  "insert:4",  "num"), ("5", "insert:5", "num"),
         ("6",  "insert:6",  "num"), ("−", "insert:-", "op")],

        [("1",  "insert:1",  "num"), ("2", "insert:2", "num"),
         ("3",  "insert:3",  "num"), ("+", "insert:+", "op")],

        [("00", "insert:00", "num"), ("0", "insert:0", "num"),
         (".",  "insert:.",  "num"), ("=", "equals",   "equals")],
    ]

    # Teclas físicas que no coinciden con su propio carácter
    KEY_ACTIONS = {
        "Return": "equals",
        "KP_Enter": "equals",
        "BackSpace": "backspace",
        "Escape": "clear",
        "Delete": "clear",
    }
    CHAR_ACTIONS = {"=": "equals", "%": "percent"}

    def __init__(self, root: tk.Tk, engine=None):
        self.root = root
        self.root.title("Calculadora")
        self.root.configure(bg=self.C["bg"])

        self.engine = engine if engine is not None else CalculatorEngine()
        self._notice_id = None

        self._init_fonts()
        self._create_display()
        self._create_keypad()
        self._bind_keyboard()

    # ── Fuentes ──────────────────────────────────────────────────

    def _init_fonts(self):
        self._f_expr    = tkfont.Font(family="Consolas", size=22, weight="bold")
        self._f_preview = tkfont.Font(family="Consolas", size=15)
        self._f_btn     = tkfont.Font(family="Segoe UI", size=15)
        self._f_small   = tkfont.Font(family="Segoe UI", size=11)

    # ── Pantalla ─────────────────────────────────────────────────

    def _create_display(self):
        frame = tk.Frame(self.root, bg=self.C["display_bg"], padx=12, pady=8)
        frame.pack(fill="x", padx=6, pady=(6, 2))

        self.expr_display = ExpressionDisplay(
            frame,
            font=self._f_expr, fg=self.C["expr_fg"],
            readonlybackground=self.C["display_bg"],
            relief="flat", justify="right", bd=0,
        )
        self.expr_display.widget.pack(fill="x", pady=(4, 0))

        # Vista previa del resultado
        self.preview_var = tk.StringVar()
        tk.Label(
            frame, textvariable=self.preview_var,
            font=self._f_preview, bg=self.C["display_bg"],
            fg=self.C["preview_fg"], anchor="e",
        ).pack(fill="x", pady=(2, 4))

        # Aviso temporal de error
        self.notice_var = tk.StringVar()
        self.notice_label = tk.Label(
            self.root, textvariable=self.notice_var,
            font=self._f_small, bg=self.C["notice_bg"],
            fg=self.C["notice_fg"], padx=10, pady=4,
        )

    # ── Teclado ──────────────────────────────────────────────────

    def _create_keypad(self):
        frame = tk.Frame(self.root, bg=self.C["bg"])
        frame.pack(fill="both", expand=True, padx=6, pady=(2, 6))

        max_cols = max(len(row) for row in self.KEYPAD)
        for c in range(max_cols):
            frame.columnconfigure(c, weight=1, uniform="key")

        for r, row_def in enumerate(self.KEYPAD):
            for c, (text, action, kind) in enumerate(row_def):
                btn = tk.Button(
                    frame, text=text, font=self._f_btn,
                    bg=self.C[kind], fg=self.C[f"{kind}_fg"],
                    activebackground=self.C["special"],
                    relief="flat",
                    command=lambda a=action: self._on_key(a),
                )
                btn.grid(row=r, column=c, sticky="nsew", padx=2, pady=2,
                         ipady=8)

        for r in range(len(self.KEYPAD)):
            frame.rowconfigure(r, weight=1)

    # ── Atajos de teclado ────────────────────────────────────────

    def _bind_keyboard(self):
        self.root.bind("<Key>", self._on_keyboard)

    def _on_keyboard(self, event):
        action = self.KEY_ACTIONS.get(event.keysym)
        if action is None:
            action = self.CHAR_ACTIONS.get(event.char)
        if action is None and event.char and event.char in "0123456789.+-*/":
            action = f"insert:{event.char}"
        if action is not None:
            self._on_key(action)
            return "break"
        return None

    # ── Acciones ─────────────────────────────────────────────────

    def _on_key(self, action: str):
        state = self.engine.press(action)
        self._render(state)

    def _render(self, state: DisplayState):
        self.expr_display.set_text(state.expression)
        self.preview_var.set(state.preview)
        if state.message:
            self._show_notice(state.message)

    def _show_notice(self, message: str):
        if self._notice_id is not None:
            self.root.after_cancel(self._notice_id)
        self.notice_var.set(message)
        self.notice_label.place(relx=0.5, rely=0.92, anchor="s")
        self._notice_id = self.root.after(self.NOTICE_MS, self._hide_notice)

    def _hide_notice(self):
        self._notice_id = None
        self.notice_label.place_forget()
