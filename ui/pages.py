"""
UI Pages
========
Game page: level label, board canvas, and the Next Level / Restart /
Reset Progress / Exit controls.
"""

import tkinter as tk

from ui.board_canvas import BoardCanvas
from ui.components import CardFrame, ConfirmButton, HoverButton
from ui.styles import *


class GamePage(tk.Frame):
    def __init__(self, master, session, on_exit):
        super().__init__(master, bg=BG_COLOR)
        self.session = session
        self.on_exit = on_exit

        self.lbl_level = tk.Label(self, text="", font=FONT_HEADER, bg=BG_COLOR, fg=TEXT_COLOR)
        self.lbl_level.pack(pady=(20, 5))

        self.lbl_status = tk.Label(self, text="", font=FONT_SMALL, bg=BG_COLOR, fg=TEXT_DIM)
        self.lbl_status.pack(pady=(0, 10))

        self.canvas = BoardCanvas(self, session.engine, on_result=self._on_result)
        self.canvas.pack(padx=20, pady=10)

        controls = CardFrame(self, padx=10, pady=10)
        controls.pack(pady=10)

        self.btn_next = HoverButton(controls, text="Next Level", command=self._next_level,
                                    width=12, fg=SUCCESS_COLOR)
        self.btn_next.pack(side=tk.LEFT, padx=5)
        self.btn_next.config(state=tk.DISABLED)

        HoverButton(controls, text="Restart", command=self._restart,
                    width=10).pack(side=tk.LEFT, padx=5)

        ConfirmButton(controls, text="Reset Progress", confirm_text="Click again to Reset",
                      command=self._reset_progress, width=18, fg=WARNING_COLOR).pack(side=tk.LEFT, padx=5)

        ConfirmButton(controls, text="Exit Game", confirm_text="Click again to Exit",
                      command=self.on_exit, width=16, fg=ERROR_COLOR).pack(side=tk.LEFT, padx=5)

        session.on_level_solved(self._on_level_solved)
        session.on_level_unsolved(self._on_level_unsolved)

    def refresh(self):
        self.lbl_level.config(text=self.session.level_label)
        descriptor = self.session.descriptor
        if descriptor is not None:
            self.lbl_status.config(
                text=f"{descriptor.grid_size}x{descriptor.grid_size} · {descriptor.pair_count} colors",
                fg=TEXT_DIM,
            )
        self.btn_next.config(state=tk.NORMAL if self.session.level_solved else tk.DISABLED)
        self.canvas.draw()

    def _on_result(self, result):
        if not result.accepted:
            self.lbl_status.config(text=result.reason, fg=WARNING_COLOR)

    def _on_level_solved(self, level_index):
        self.lbl_status.config(text="Level Complete!", fg=SUCCESS_COLOR)
        self.btn_next.config(state=tk.NORMAL)

    def _on_level_unsolved(self, level_index):
        self.lbl_status.config(text="", fg=TEXT_DIM)
        self.btn_next.config(state=tk.DISABLED)

    def _next_level(self):
        if self.session.next_level() is not None:
            self.refresh()

    def _restart(self):
        self.session.restart_level()
        self.refresh()

    def _reset_progress(self):
        self.session.reset_progress()
        self.refresh()
        self.lbl_status.config(text="Progress Reset!", fg=WARNING_COLOR)
