"""
Board Canvas
============
Draws the grid, endpoints and paths, and turns pointer press / drag /
release into ConnectionEngine calls.
"""

import tkinter as tk

from logic.errors import REASON_CROSSING
from ui.styles import *


class BoardCanvas(tk.Canvas):
    def __init__(self, master, engine, on_result=None, size=BOARD_PIXELS):
        super().__init__(master, width=size, height=size, bg=BOARD_BG, highlightthickness=0)
        self.engine = engine
        self.on_result = on_result
        self.size = size

        self.bind("<ButtonPress-1>", self._on_press)
        self.bind("<B1-Motion>", self._on_drag)
        self.bind("<ButtonRelease-1>", self._on_release)
        self.bind("<Leave>", self._on_cancel)
        self.bind("<Escape>", self._on_cancel)

    # ── Coordinate mapping ─────────────────────────────────────

    def _scale(self):
        grid = self.engine.grid
        return self.size / (grid.grid_size * grid.cell_size)

    def to_canvas(self, point):
        grid = self.engine.grid
        half = grid.grid_size * grid.cell_size / 2
        s = self._scale()
        return (point[0] + half) * s, (point[1] + half) * s

    def to_world(self, px, py):
        grid = self.engine.grid
        half = grid.grid_size * grid.cell_size / 2
        s = self._scale()
        return px / s - half, py / s - half

    # ── Input ──────────────────────────────────────────────────

    def _on_press(self, event):
        if self.engine.grid is None:
            return
        self.focus_set()
        world = self.to_world(event.x, event.y)
        endpoint = self.engine.grid.endpoint_at_world(world, self.engine.hit_radius)
        if endpoint is not None:
            self.engine.begin_path(endpoint.position)
        else:
            self.engine.remove_path_at(world)
        self.draw()

    def _on_drag(self, event):
        if self.engine.grid is None:
            return
        if self.engine.extend_path(self.to_world(event.x, event.y)):
            self.draw()

    def _on_release(self, event):
        if self.engine.grid is None or self.engine.drawing_color is None:
            return
        world = self.to_world(event.x, event.y)
        endpoint = self.engine.grid.endpoint_at_world(world, self.engine.hit_radius)
        result = self.engine.end_path(endpoint.position if endpoint is not None else None)
        if not result.accepted and result.reason == REASON_CROSSING:
            self._flash_error()
        self.draw()
        if self.on_result is not None:
            self.on_result(result)

    def _on_cancel(self, event):
        if self.engine.drawing_color is None:
            return
        self.engine.cancel_path()
        self.draw()

    # ── Rendering ──────────────────────────────────────────────

    def draw(self):
        self.delete("all")
        grid = self.engine.grid
        if grid is None:
            return

        step = self.size / grid.grid_size
        for i in range(1, grid.grid_size):
            self.create_line(i * step, 0, i * step, self.size, fill=GRID_LINE_COLOR)
            self.create_line(0, i * step, self.size, i * step, fill=GRID_LINE_COLOR)

        for color, record in self.engine.paths.items():
            self._draw_polyline(record.points, color.hex)

        drawing = self.engine.drawing_color
        if drawing is not None:
            self._draw_polyline(self.engine.provisional_points, drawing.hex)

        radius = step * POINT_RADIUS_FRACTION
        for endpoint in grid.endpoints():
            cx, cy = self.to_canvas(grid.cell_to_world(endpoint.position))
            self.create_oval(cx - radius, cy - radius, cx + radius, cy + radius,
                             fill=endpoint.color.hex, outline="")

    def _draw_polyline(self, points, fill):
        if len(points) < 2:
            return
        coords = []
        for p in points:
            coords.extend(self.to_canvas(p))
        self.create_line(*coords, fill=fill, width=LINE_WIDTH,
                         capstyle=tk.ROUND, joinstyle=tk.ROUND)

    def _flash_error(self):
        self.config(bg=ERROR_COLOR)
        self.after(150, lambda: self.config(bg=BOARD_BG))
