from __future__ import annotations

from dataclasses import dataclass

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectButton
from panda3d.core import TextNode

from devconsole.ui.theme import Color, Theme


def _mul(c: Color, m: float) -> Color:
    r, g, b, a = c
    return (max(0.0, min(1.0, r * m)), max(0.0, min(1.0, g * m)), max(0.0, min(1.0, b * m)), a)


@dataclass
class Button:
    node: DirectButton

    @staticmethod
    def build(
        *,
        parent,
        theme: Theme,
        x: float,
        y: float,
        w: float,
        h: float,
        label: str,
        on_click,
    ) -> "Button":
        fc = theme.panel2
        # Per-state colors: (normal, pressed, hover, disabled).
        frame_colors = (fc, _mul(fc, 0.82), _mul(fc, 1.08), _mul(fc, 0.60))
        b = DirectButton(
            parent=parent,
            text=(label, label, label, label),
            text_scale=theme.small_scale,
            text_align=TextNode.ACenter,
            text_pos=(0.0, -theme.small_scale * 0.35),
            text_fg=theme.text,
            frameColor=frame_colors,
            relief=DGG.FLAT,
            frameSize=(-w / 2, w / 2, -h / 2, h / 2),
            pos=(x, 0, y),
            command=on_click,
            pressEffect=0,
        )
        return Button(node=b)
