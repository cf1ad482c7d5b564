"""
Narrative text box drawn over the scatter.

Line breaking is greedy: words are appended to the current line until the
measured width would go over the budget, then a new line starts. Measurement
is a plain ``text -> width`` callable so it can be swapped out.
"""

from __future__ import annotations

from typing import Callable

from matplotlib.font_manager import FontProperties
from matplotlib.textpath import TextPath

FONT_SIZE = 13                 # px
BOX_WIDTH, BOX_HEIGHT = 250, 130
BOX_PADDING = 10
LINE_BUDGET = BOX_WIDTH - 2 * BOX_PADDING

Measure = Callable[[str], float]

_FONT = FontProperties(family="DejaVu Sans")


def measure_text_width(text: str, font_size: float = FONT_SIZE) -> float:
    if not text:
        return 0.0
    return float(TextPath((0, 0), text, size=font_size, prop=_FONT).get_extents().width)


def wrap_words(text: str, max_width: float = LINE_BUDGET,
               measure: Measure = measure_text_width) -> list[str]:
    lines, line = [], []
    for word in text.split():
        if line and measure(" ".join(line + [word])) > max_width:
            lines.append(" ".join(line))
            line = [word]
        else:
            # a word wider than the budget still gets its own line
            line.append(word)
    if line:
        lines.append(" ".join(line))
    return lines


def narrative_box(text: str, plot_width: int, plot_height: int,
                  measure: Measure = measure_text_width) -> tuple[list[dict], list[dict]]:
    """Shapes and annotations for the box, in paper coordinates.

    Returns two empty lists when there is nothing to say.
    """
    if not text or not text.strip():
        return [], []

    #top right of the plot area: 200px in from the right edge, 50px down
    x0_px = plot_width - BOX_WIDTH - 200
    top_px = 50

    x0 = x0_px / plot_width
    x1 = (x0_px + BOX_WIDTH) / plot_width
    y1 = 1 - top_px / plot_height
    y0 = 1 - (top_px + BOX_HEIGHT) / plot_height

    shape = dict(
        type="rect", xref="paper", yref="paper",
        x0=x0, x1=x1, y0=y0, y1=y1,
        fillcolor="#f9f9f9", line=dict(color="#ccc", width=1),
        layer="above",
        name="narrative-box",
    )
    lines = wrap_words(text, LINE_BUDGET, measure)
    annotation = dict(
        xref="paper", yref="paper",
        x=(x0_px + BOX_PADDING) / plot_width,
        y=1 - (top_px + BOX_PADDING) / plot_height,
        xanchor="left", yanchor="top",
        align="left",
        showarrow=False,
        text="<br>".join(lines),
        font=dict(size=FONT_SIZE, color="#333"),
        name="narrative-text",
    )
    return [shape], [annotation]
