from __future__ import annotations

import logging
from enum import Enum

from panda3d.core import LVector2f, LVector3f

from devconsole.console import console_cmd

logger = logging.getLogger(__name__)


class ExampleEnum(Enum):
    ALPHA = 1
    BETA = 2
    GAMMA = 3


class ExampleCommands:
    """Sample command owner covering every supported argument kind."""

    @console_cmd
    def teststring(self, text: str) -> None:
        logger.info("%s", text)

    @console_cmd
    def testtwostring(self, str1: str, str2: str) -> None:
        logger.info("%s|%s", str1, str2)

    @console_cmd("Logs a message (quote it to keep spaces)")
    def testlog(self, message: str) -> None:
        logger.info("%s", message)

    @console_cmd
    def testbool(self, b: bool) -> None:
        logger.info("%s", b)

    @console_cmd
    def testfunction(self, text: str, number: int) -> None:
        logger.info("%s%d", text, number)

    @console_cmd("Adds three numbers")
    def calculate(self, n1: int, n2: int, n3: int) -> None:
        logger.info("%d", n1 + n2 + n3)

    @console_cmd("Calculates 4 number")
    def testcalculate(self, n1: int, n2: int, n3: int, n4: int) -> None:
        logger.info("%d", n1 + n2 + n3 + n4)

    @console_cmd
    def testdivide(self, n1: float, n2: float) -> None:
        logger.info("%s", n1 / n2)

    @console_cmd("Debug log enums")
    def testenum(self, enm: ExampleEnum) -> None:
        logger.info("%s", enm.name)

    @console_cmd("Test Vec2")
    def testvector2(self, vec: LVector2f) -> None:
        logger.info("(%.2f, %.2f)", vec.x, vec.y)

    @console_cmd("Test Vec3")
    def testvector3(self, vec: LVector3f) -> None:
        logger.info("(%.2f, %.2f, %.2f)", vec.x, vec.y, vec.z)

    @console_cmd("Logs a warning")
    def testwarning(self, message: str = "careful") -> None:
        logger.warning("%s", message)
