from __future__ import annotations

from dataclasses import dataclass

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectButton, DirectEntry
from panda3d.core import TextNode

from devconsole.ui.theme import Theme


@dataclass
class TextInput:
    # Frame button gives predictable box sizing; the entry is anchored inside it.
    frame: DirectButton
    entry: DirectEntry

    def get_text(self) -> str:
        try:
            return str(self.entry.get())
        except Exception:
            return ""

    def set_text(self, text: str) -> None:
        """Replace the entry contents and park the cursor at the end."""
        s = str(text or "")
        try:
            self.entry.enterText(s)
            self.entry.setCursorPosition(len(s))
        except Exception:
            self.entry["initialText"] = s

    def focus(self) -> None:
        try:
            self.entry["focus"] = 1
        except Exception:
            pass

    @staticmethod
    def build(
        *,
        parent,
        theme: Theme,
        x: float,
        y: float,
        w: float,
        h: float,
        on_submit,
    ) -> "TextInput":
        frame = DirectButton(
            parent=parent,
            text="",
            frameColor=theme.panel2,
            relief=DGG.FLAT,
            frameSize=(-w / 2, w / 2, -h / 2, h / 2),
            pos=(x, 0, y),
            command=lambda: None,
        )
        # DirectEntry width is in text units; derive it from the frame width.
        chars = max(10, int((w - theme.pad) / max(0.001, theme.small_scale)))
        entry = DirectEntry(
            parent=frame,
            initialText="",
            numLines=1,
            focus=0,
            width=chars,
            text_scale=theme.small_scale,
            text_align=TextNode.ALeft,
            text_fg=theme.text,
            frameColor=(0, 0, 0, 0),
            relief=DGG.FLAT,
            pos=(-w / 2 + (theme.pad * 0.55), 0, -theme.small_scale * 0.40),
            command=on_submit,
            suppressMouse=False,
        )
        out = TextInput(frame=frame, entry=entry)
        frame["command"] = out.focus
        try:
            entry.guiItem.setCursorColor(1, 1, 1, 0.85)
        except Exception:
            pass
        return out
