"""Shared colors and fonts for the tkinter shell."""

BG_COLOR = "#1C1C1E"
CARD_BG = "#2C2C2E"
SIDEBAR_COLOR = "#3A3A3C"
BOARD_BG = "#000000"
GRID_LINE_COLOR = "#3A3A3C"
TEXT_COLOR = "#F2F2F7"
TEXT_DIM = "#8E8E93"
SUCCESS_COLOR = "#30D158"
WARNING_COLOR = "#FF9F0A"
ERROR_COLOR = "#FF453A"

FONT_HEADER = ("Segoe UI", 18, "bold")
FONT_BODY = ("Segoe UI", 12)
FONT_SMALL = ("Segoe UI", 10)

BOARD_PIXELS = 480
LINE_WIDTH = 8
POINT_RADIUS_FRACTION = 0.3
