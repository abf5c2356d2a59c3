from __future__ import annotations

from pathlib import Path

from direct.showbase.ShowBase import ShowBase
from panda3d.core import loadPrcFileData

from devconsole.app_config import ConsoleConfig
from devconsole.console import CommandRegistry
from devconsole.example import ExampleCommands
from devconsole.frontend import ConsoleFrontend
from devconsole.ui.console_ui import ConsoleUI
from devconsole.ui.theme import Theme


class DemoApp(ShowBase):
    def __init__(self, *, config: ConsoleConfig, theme: Theme | None = None, smoke_screenshot: str | None = None) -> None:
        loadPrcFileData("", "win-size 1280 720")
        loadPrcFileData("", "window-title Developer Console Demo")
        loadPrcFileData("", "sync-video 1")
        loadPrcFileData("", "show-frame-rate-meter 0")
        super().__init__()
        self.disableMouse()
        self.setBackgroundColor(0.035, 0.033, 0.030, 1.0)

        self.registry = CommandRegistry(history_capacity=config.history_capacity)
        self.frontend = ConsoleFrontend(registry=self.registry, config=config)
        self.frontend.enable()
        self.examples = ExampleCommands()
        self.registry.register(self.examples)

        self.console_ui = ConsoleUI(
            aspect2d=self.aspect2d,
            theme=theme or Theme(),
            frontend=self.frontend,
            toggle_key=config.toggle_key,
        )
        self.console_ui.show()
        self.frontend.help()

        self.accept("escape", self.userExit)

        if smoke_screenshot:
            out = Path(smoke_screenshot).expanduser()
            self.taskMgr.doMethodLater(0.2, self._smoke, "smoke", extraArgs=[out], appendTask=True)

    def userExit(self) -> None:
        self.registry.unregister(self.examples)
        self.frontend.disable()
        super().userExit()

    def _smoke(self, out: Path, task):
        try:
            out.parent.mkdir(parents=True, exist_ok=True)
        except Exception:
            pass
        try:
            self.graphicsEngine.renderFrame()
            self.graphicsEngine.renderFrame()
            self.win.saveScreenshot(str(out))
        finally:
            self.userExit()
        return task.done
