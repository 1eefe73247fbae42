"""
Flowlink
========
Connect each pair of colored dots without crossing lines.
Run:  python main.py
"""

import logging
import tkinter as tk

from logic.game_session import GameSession
from logic.settings import resolve_log_level
from ui.pages import GamePage
from ui.styles import BG_COLOR


def main():
    logging.basicConfig(level=resolve_log_level(),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    session = GameSession()
    session.start()

    root = tk.Tk()
    root.title("Flowlink")
    root.configure(bg=BG_COLOR)
    root.resizable(False, False)

    def on_exit():
        session.shutdown()
        root.destroy()

    page = GamePage(root, session, on_exit)
    page.pack(fill=tk.BOTH, expand=True)
    page.refresh()

    root.protocol("WM_DELETE_WINDOW", on_exit)
    root.mainloop()


if __name__ == "__main__":
    main()
