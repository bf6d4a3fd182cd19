"""
ANSI Text Composition
=====================

Turns a CharacterGrid into terminal-printable text.

Plain mode: rows of glyphs, each followed by a line break.
Color mode: every glyph is prefixed by a 24-bit foreground escape
(ESC[38;2;R;G;Bm) and every row ends with a reset (ESC[0m) before the
line break.
"""

from termascii.models.grid import CharacterGrid


ESC = "\x1b"
RESET = f"{ESC}[0m"
CURSOR_HOME = f"{ESC}[H"
CLEAR_SCREEN = f"{ESC}[2J"


def rgb_to_ansi(r: int, g: int, b: int) -> str:
    """24-bit foreground color escape."""
    return f"{ESC}[38;2;{r};{g};{b}m"


def render_grid(grid: CharacterGrid) -> str:
    """
    Compose a character grid into text.

    Args:
        grid: Glyphs (and optional colors) for one frame

    Returns:
        Text with one line per grid row, each ending in a newline
    """
    if not grid.is_color:
        return "".join(f"{row}\n" for row in grid.glyphs)

    lines = []
    for y, row in enumerate(grid.glyphs):
        cells = [
            f"{rgb_to_ansi(*(int(v) for v in grid.colors[y, x]))}{ch}"
            for x, ch in enumerate(row)
        ]
        lines.append("".join(cells) + RESET + "\n")
    return "".join(lines)
