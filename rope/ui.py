"""
Tkinter settings window for the rope simulation.
The window lives beside the pygame display and is pumped from the frame loop.
"""

from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

from .config import SLIDER_RANGES, save_config
from .context import ConfigChanged

CONTROLS = [
    ("Mouse move", "Both handles (or the selected one)\nchase the pointer."),
    ("LeftClick on P1 / P2", "Select that handle; only it follows."),
    ("LeftClick elsewhere", "Toggle LOCKED: freeze pointer input,\nclick again to release all."),
    ("Resize window", "Endpoints move, handles keep swinging."),
    ("ESC / close", "Quit."),
]

SLIDER_LABELS = {
    "stiffness": ("Stiffness (k)", "Spring constant. Higher pulls harder\ntoward the target."),
    "damping": ("Damping", "Velocity drag. 0 oscillates forever."),
    "tangent_length": ("Tangent length", "Half-length of the red tangent markers."),
}

tk_root = None
tk_settings_win = None


def ensure_tk_root():
    """Initialize Tkinter root window with styling."""
    global tk_root
    if tk_root is None or not (hasattr(tk_root, "winfo_exists") and tk_root.winfo_exists()):
        tk_root = tk.Tk()
        style = ttk.Style(tk_root)
        if "clam" in style.theme_names():
            style.theme_use("clam")
        style.configure("TFrame", padding=6)
        style.configure("TLabel", padding=2)
        style.configure("TButton", padding=4)
        style.configure("TNotebook.Tab", padding=(12, 6))
        style.configure("Header.TLabel", font=("Segoe UI", 12, "bold"))
        style.configure("Help.TLabel", foreground="#777777")
        tk_root.withdraw()
    return tk_root


def pump_tk():
    """Update Tkinter event loop."""
    global tk_root, tk_settings_win
    if tk_root is None:
        return
    try:
        tk_root.update()
        if tk_settings_win is not None and not tk_settings_win.winfo_exists():
            tk_settings_win = None
    except tk.TclError:
        tk_root = None
        tk_settings_win = None


def close_tk():
    global tk_root, tk_settings_win
    if tk_root is not None:
        try:
            tk_root.destroy()
        except tk.TclError:
            pass
    tk_root = None
    tk_settings_win = None


class _Tooltip:
    """Hover tooltip for widgets."""

    def __init__(self, widget, text):
        self.widget = widget
        self.text = text
        self.tip = None
        widget.bind("<Enter>", self._show)
        widget.bind("<Leave>", self._hide)

    def _show(self, _=None):
        if self.tip or not self.text:
            return
        x = self.widget.winfo_rootx() + 20
        y = self.widget.winfo_rooty() + self.widget.winfo_height() + 8
        self.tip = tk.Toplevel(self.widget)
        self.tip.wm_overrideredirect(True)
        self.tip.geometry(f"+{x}+{y}")
        frame = ttk.Frame(self.tip, padding=6)
        frame.pack()
        ttk.Label(frame, text=self.text, justify="left", wraplength=320).pack()

    def _hide(self, _=None):
        if self.tip:
            self.tip.destroy()
            self.tip = None


def add_tooltip(widget, text):
    """Add tooltip to widget."""
    if text:
        _Tooltip(widget, text)


def _fmt(v):
    return f"{float(v):.1f}"


def open_settings_window(context, cfg):
    """
    Open the settings window. Slider moves post ConfigChanged events to
    `context`; "Save" writes the current values into `cfg` and config.json.
    """
    global tk_settings_win
    ensure_tk_root()
    if tk_settings_win is not None and tk_settings_win.winfo_exists():
        tk_settings_win.lift()
        return tk_settings_win

    top = tk.Toplevel(tk_root)
    tk_settings_win = top
    top.title("Rope Settings")
    top.geometry("380x320")
    top.resizable(False, False)

    outer = ttk.Frame(top, padding=12)
    outer.pack(fill="both", expand=True)
    ttk.Label(outer, text="Elastic Bezier", style="Header.TLabel").pack(anchor="w", pady=(0, 4))
    ttk.Label(outer, text="Hover any label for help.", style="Help.TLabel").pack(anchor="w", pady=(0, 8))
    notebook = ttk.Notebook(outer)
    notebook.pack(fill="both", expand=True)

    physics_tab = ttk.Frame(notebook)
    controls_tab = ttk.Frame(notebook)
    notebook.add(physics_tab, text="Physics")
    notebook.add(controls_tab, text="Controls")
    physics_tab.columnconfigure(1, weight=1)

    for r, (key, desc) in enumerate(CONTROLS):
        ttk.Label(controls_tab, text=key).grid(row=r, column=0, sticky="nw", padx=6, pady=3)
        ttk.Label(controls_tab, text=desc, style="Help.TLabel").grid(row=r, column=1, sticky="w", padx=6, pady=3)

    values = {}
    for r, name in enumerate(context.config.FIELDS):
        label, tip = SLIDER_LABELS[name]
        lo, hi = SLIDER_RANGES[name]
        var = tk.DoubleVar(value=getattr(context.config, name))
        shown = ttk.Label(physics_tab, text=_fmt(var.get()), width=6)

        def _on_slide(raw, name=name, shown=shown):
            try:
                value = float(raw)
            except ValueError as e:
                messagebox.showerror("Error", f"Bad value for {name}:\n{e}")
                return
            shown.config(text=_fmt(value))
            context.post(ConfigChanged(name, value))

        lbl = ttk.Label(physics_tab, text=label)
        scale = ttk.Scale(physics_tab, from_=lo, to=hi, orient="horizontal",
                          variable=var, command=_on_slide)
        lbl.grid(row=r, column=0, sticky="w", padx=6, pady=6)
        scale.grid(row=r, column=1, sticky="ew", padx=6, pady=6)
        shown.grid(row=r, column=2, sticky="e", padx=6, pady=6)
        add_tooltip(lbl, tip)
        values[name] = var

    def _save():
        flat = cfg.setdefault("physics", {})
        for name, var in values.items():
            flat[name] = float(var.get())
        if not save_config(cfg):
            messagebox.showerror("Error", "Failed to save config.json")

    btns = ttk.Frame(outer)
    btns.pack(fill="x", pady=(8, 0))
    ttk.Button(btns, text="Save as Defaults", command=_save).pack(side="left")

    top.protocol("WM_DELETE_WINDOW", top.destroy)
    top.lift()
    return top
