from __future__ import annotations

from direct.gui import DirectGuiGlobals as DGG
from direct.gui.DirectGui import DirectFrame, DirectLabel
from direct.showbase import ShowBaseGlobal
from panda3d.core import TextNode, TextProperties, TextPropertiesManager

from devconsole.frontend import ConsoleFrontend
from devconsole.ui.button import Button
from devconsole.ui.text_input import TextInput
from devconsole.ui.theme import Theme

_TASK_NAME = "devconsole-input-watch"
_SEVERITY_PROPS = {"warning": "devcon_warning", "error": "devcon_error"}


def _register_severity_colors(theme: Theme) -> None:
    tpm = TextPropertiesManager.getGlobalPtr()
    for severity, prop_name in _SEVERITY_PROPS.items():
        tp = TextProperties()
        tp.setTextColor(*theme.severity_color(severity))
        tpm.setProperties(prop_name, tp)


def _markup(line: str, severity: str) -> str:
    # \1 and \2 delimit embedded text properties; never let log text inject them.
    s = str(line).replace("\1", "").replace("\2", "")
    prop = _SEVERITY_PROPS.get(severity)
    if prop is None:
        return s
    return f"\1{prop}\1{s}\2"


class ConsoleUI:
    """
    In-game developer console overlay.

    Bottom band with a scrollable log, a single-line input with autocomplete
    ghost text, and Help/Enter buttons. All behavior lives in `ConsoleFrontend`;
    this class only renders it and routes key events.
    """

    def __init__(self, *, aspect2d, theme: Theme, frontend: ConsoleFrontend, toggle_key: str = "f4") -> None:
        base = getattr(ShowBaseGlobal, "base", None)
        aspect_ratio = 16.0 / 9.0
        if base is not None:
            try:
                aspect_ratio = float(base.getAspectRatio())
            except Exception:
                pass

        self._base = base
        self._theme = theme
        self._frontend = frontend
        self._toggle_key = str(toggle_key)
        self._scroll = 0
        self._last_text = ""
        _register_severity_colors(theme)

        left = -aspect_ratio + 0.05
        right = aspect_ratio - 0.05
        width = right - left
        top = 0.15
        bottom = -0.85
        height = top - bottom

        self._root = DirectFrame(
            parent=aspect2d,
            pos=(left, 0.0, bottom),
            frameColor=theme.panel,
            relief=DGG.FLAT,
            frameSize=(0.0, width, 0.0, height),
        )

        header = DirectLabel(
            parent=self._root,
            text=f"Developer Console ({self._toggle_key.upper()} to toggle, PgUp/PgDn to scroll)",
            text_scale=theme.small_scale,
            text_align=TextNode.ALeft,
            text_fg=theme.text_muted,
            frameColor=(0, 0, 0, 0),
            pos=(theme.pad, 0, height - theme.pad - theme.small_scale * 0.9),
        )
        header.setTransparency(True)

        input_h = 0.10
        btn_w = 0.26
        input_w = width - theme.pad * 4 - btn_w * 2
        input_y = theme.pad + input_h / 2.0

        # Visible log window; the buffer itself may hold more lines than fit.
        usable_h = max(0.1, height - theme.pad * 4 - theme.small_scale * 2.2 - input_h)
        est_line_h = max(0.012, float(theme.small_scale) * 1.15)
        self._visible_lines = max(4, int(usable_h / est_line_h))
        self._log = DirectLabel(
            parent=self._root,
            text="",
            text_scale=theme.small_scale,
            text_align=TextNode.ALeft,
            text_fg=theme.text,
            frameColor=(0, 0, 0, 0),
            pos=(theme.pad, 0, height - theme.pad - theme.small_scale * 2.3),
            text_wordwrap=max(20, int(width / max(0.001, theme.small_scale))),
        )
        self._log.setTransparency(True)

        self._input = TextInput.build(
            parent=self._root,
            theme=theme,
            x=theme.pad + input_w / 2.0,
            y=input_y,
            w=input_w,
            h=input_h,
            on_submit=self._submit,
        )
        self._ghost = DirectLabel(
            parent=self._input.frame,
            text="",
            text_scale=theme.small_scale,
            text_align=TextNode.ALeft,
            text_fg=theme.ghost,
            frameColor=(0, 0, 0, 0),
            pos=(-input_w / 2 + theme.pad * 0.55, 0, -theme.small_scale * 0.40),
        )
        self._ghost.setTransparency(True)
        # Re-parent so the typed text draws on top of the ghost text.
        self._input.entry.reparentTo(self._input.frame)

        Button.build(
            parent=self._root,
            theme=theme,
            x=theme.pad * 2 + input_w + btn_w / 2.0,
            y=input_y,
            w=btn_w,
            h=input_h,
            label="Enter",
            on_click=lambda: self._submit(self._input.get_text()),
        )
        Button.build(
            parent=self._root,
            theme=theme,
            x=theme.pad * 3 + input_w + btn_w * 1.5,
            y=input_y,
            w=btn_w,
            h=input_h,
            label="Help",
            on_click=self._frontend.help,
        )

        self._frontend.log.add_listener(self.refresh_log)
        self._root.hide()
        self._bind_keys()

    def _bind_keys(self) -> None:
        base = self._base
        if base is None:
            return
        base.accept(self._toggle_key, self.toggle)
        base.accept("arrow_up", self._when_visible(self._history_up))
        base.accept("arrow_down", self._when_visible(self._history_down))
        base.accept("tab", self._when_visible(self._autocomplete))
        base.accept("page_up", self._when_visible(lambda: self.scroll(+self._visible_lines // 2)))
        base.accept("page_down", self._when_visible(lambda: self.scroll(-self._visible_lines // 2)))
        base.taskMgr.add(self._watch_input, _TASK_NAME)

    def _when_visible(self, fn):
        def _run() -> None:
            if self.visible:
                fn()

        return _run

    @property
    def visible(self) -> bool:
        try:
            return bool(self._root.isHidden() is False)
        except Exception:
            return False

    def show(self) -> None:
        self._root.show()
        self._input.set_text("")
        self._input.focus()
        self._scroll = 0
        self.refresh_log()

    def hide(self) -> None:
        self._root.hide()
        try:
            self._input.entry["focus"] = 0
        except Exception:
            pass

    def toggle(self) -> None:
        if self.visible:
            self.hide()
        else:
            self.show()

    def destroy(self) -> None:
        self._frontend.log.remove_listener(self.refresh_log)
        base = self._base
        if base is not None:
            for key in (self._toggle_key, "arrow_up", "arrow_down", "tab", "page_up", "page_down"):
                base.ignore(key)
            base.taskMgr.remove(_TASK_NAME)
        self._root.destroy()

    def scroll(self, lines: int) -> None:
        max_scroll = max(0, len(self._frontend.log) - self._visible_lines)
        self._scroll = max(0, min(max_scroll, self._scroll + int(lines)))
        self.refresh_log()

    def refresh_log(self) -> None:
        entries = self._frontend.log.entries()
        end = len(entries) - self._scroll
        start = max(0, end - self._visible_lines)
        self._log["text"] = "\n".join(_markup(e.format(), e.severity) for e in entries[start:end])

    def _watch_input(self, task):
        if self.visible:
            text = self._input.get_text()
            if text != self._last_text:
                self._last_text = text
                self._ghost["text"] = self._frontend.on_input_changed(text)
        return task.cont

    def _set_input(self, text: str | None) -> None:
        if text is None:
            return
        self._input.set_text(text)

    def _history_up(self) -> None:
        self._set_input(self._frontend.history_up())

    def _history_down(self) -> None:
        self._set_input(self._frontend.history_down())

    def _autocomplete(self) -> None:
        self._set_input(self._frontend.autocomplete())

    def _submit(self, text: str) -> None:
        self._input.set_text("")
        self._last_text = ""
        self._ghost["text"] = ""
        self._scroll = 0
        self._frontend.submit(text)
        self.refresh_log()
        # DirectEntry drops focus on Enter; keep typing without clicking back in.
        self._input.focus()
