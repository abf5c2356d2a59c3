from __future__ import annotations

from dataclasses import dataclass, fields, replace
import json
from pathlib import Path


Color = tuple[float, float, float, float]

_COLOR_FIELDS = ("panel", "panel2", "outline", "text", "text_muted", "ghost", "warning", "danger")


@dataclass(frozen=True)
class Theme:
    """
    Console overlay theme tokens.

    Values are normalized floats (0..1), compatible with Panda3D color tuples.
    """

    pad: float = 0.045
    outline_w: float = 0.008

    # Typography (DirectGUI `text_scale` in aspect2d units)
    label_scale: float = 0.044
    small_scale: float = 0.038

    panel: Color = (0.0, 0.0, 0.0, 0.78)
    panel2: Color = (0.145, 0.138, 0.128, 0.98)
    outline: Color = (0.50, 0.48, 0.46, 1.0)
    text: Color = (0.92, 0.91, 0.88, 1.0)
    text_muted: Color = (0.62, 0.60, 0.56, 1.0)
    # Autocomplete ghost text sits behind the input, so keep it faint.
    ghost: Color = (0.62, 0.60, 0.56, 0.45)
    warning: Color = (1.0, 0.80, 0.25, 1.0)
    danger: Color = (255 / 255, 86 / 255, 120 / 255, 1.0)

    def severity_color(self, severity: str) -> Color:
        if severity == "error":
            return self.danger
        if severity == "warning":
            return self.warning
        return self.text

    @staticmethod
    def from_json(path: str | Path) -> "Theme":
        """
        Load a theme override JSON.

        Keys must match Theme field names. Colors can be 4-item float arrays (0..1)
        or 4-item int arrays (0..255).
        """

        data = json.loads(Path(path).read_text(encoding="utf-8"))
        known = {f.name for f in fields(Theme)}
        kwargs = {}
        for k, v in dict(data).items():
            if k not in known:
                raise ValueError(f"Unknown theme field '{k}'.")
            if k in _COLOR_FIELDS:
                if not (isinstance(v, (list, tuple)) and len(v) == 4):
                    raise ValueError(f"Theme color '{k}' must be a 4-item array.")
                if all(isinstance(x, int) for x in v):
                    kwargs[k] = tuple(float(int(x)) / 255.0 for x in v)
                else:
                    kwargs[k] = tuple(float(x) for x in v)
            else:
                kwargs[k] = float(v)
        return replace(Theme(), **kwargs)
