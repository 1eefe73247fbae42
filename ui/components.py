import time
import tkinter as tk

from ui.styles import *


class HoverButton(tk.Button):
    """Flat button that lightens while the pointer is over it."""
    def __init__(self, master, hover_bg=SIDEBAR_COLOR, **kwargs):
        kwargs.setdefault("bg", CARD_BG)
        kwargs.setdefault("fg", TEXT_COLOR)
        kwargs.setdefault("relief", tk.FLAT)
        kwargs.setdefault("font", FONT_BODY)
        kwargs.setdefault("activebackground", hover_bg)
        super().__init__(master, **kwargs)
        self._normal_bg = kwargs["bg"]
        self._hover_bg = hover_bg
        self.bind("<Enter>", lambda e: self.config(bg=self._hover_bg))
        self.bind("<Leave>", lambda e: self.config(bg=self._normal_bg))


class ConfirmButton(HoverButton):
    """
    Two-click button: the first click arms it and changes the label, a
    second click inside `window` seconds runs the command. A late second
    click disarms it instead.
    """
    def __init__(self, master, text, confirm_text, command, window=0.5, **kwargs):
        super().__init__(master, text=text, command=self._on_click, **kwargs)
        self._text = text
        self._confirm_text = confirm_text
        self._confirmed_command = command
        self.window = window
        self._armed_at = None

    def _on_click(self):
        now = time.monotonic()
        if self._armed_at is None:
            self._armed_at = now
            self.config(text=self._confirm_text)
            return
        if now - self._armed_at <= self.window:
            self.disarm()
            self._confirmed_command()
        else:
            self.disarm()

    def disarm(self):
        self._armed_at = None
        self.config(text=self._text)


class CardFrame(tk.Frame):
    def __init__(self, master, **kwargs):
        kwargs.setdefault("bg", CARD_BG)
        super().__init__(master, **kwargs)
