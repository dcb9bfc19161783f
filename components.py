# components.py

from dataclasses import dataclass
from typing import Optional, Tuple

Position = Tuple[float, float, float]

GRID_PITCH = 0.3
GRID_ROWS = 12
GRID_COLS = 25
GRID_ORIGIN = (-3.6, 0.15, -1.8)

BATTERY_VOLTAGE = 9.0
POSITIVE_TERMINAL = "battery-positive"
NEGATIVE_TERMINAL = "battery-negative"
TERMINAL_POSITIONS = {
    POSITIVE_TERMINAL: (6.15, 1.07, 0.0),
    NEGATIVE_TERMINAL: (5.85, 1.07, 0.0),
}
TERMINAL_TOLERANCE = 0.1

WIRE_RESISTANCE = 0.01
DEFAULT_RESISTANCE = 220.0
LED_RESISTANCE = 20.0
DEFAULT_FORWARD_VOLTAGE = 2.0
FORWARD_VOLTAGES = {
    "#ff0000": 2.0,  # red
    "#00ff00": 2.1,  # green
    "#0000ff": 3.2,  # blue
    "#ffff00": 2.0,  # yellow
}

PLACEHOLDER_CURRENT = 0.01
LED_ON_CURRENT = 0.001
LED_MAX_CURRENT = 0.030
REVERSE_BIAS_VOLTAGE = 3.0

COMPONENT_TYPES = ("wire", "resistor", "led", "switch")


def forward_voltage(color: Optional[str]) -> float:
    if not isinstance(color, str):
        return DEFAULT_FORWARD_VOLTAGE
    return FORWARD_VOLTAGES.get(color.lower(), DEFAULT_FORWARD_VOLTAGE)


@dataclass(frozen=True)
class PlacedComponent:
    id: str
    type: str
    position: Optional[Position] = None
    end_position: Optional[Position] = None
    start_position: Optional[Position] = None
    color: Optional[str] = None
    value: Optional[str] = None
    polarity: Optional[str] = None
    is_on: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "PlacedComponent":
        def pos(key):
            p = data.get(key)
            try:
                return tuple(float(v) for v in p) if p is not None and len(p) == 3 else None
            except (TypeError, ValueError):
                return None

        color = data.get("color")
        return cls(
            id=str(data.get("id", "")),
            type=str(data.get("type", "")).lower(),
            position=pos("position"),
            end_position=pos("endPosition"),
            start_position=pos("startPosition"),
            color=color if isinstance(color, str) else None,
            value=None if data.get("value") is None else str(data["value"]),
            polarity=data.get("polarity"),
            is_on=data.get("isOn") is True,
        )

    def to_dict(self) -> dict:
        out = {"id": self.id, "type": self.type}
        for key, val in (("position", self.position),
                         ("endPosition", self.end_position),
                         ("startPosition", self.start_position)):
            if val is not None:
                out[key] = list(val)
        for key, val in (("color", self.color), ("value", self.value), ("polarity", self.polarity)):
            if val is not None:
                out[key] = val
        if self.type == "switch":
            out["isOn"] = self.is_on
        return out

    def endpoints(self) -> Optional[Tuple[Position, Position]]:
        """Start and end coordinates, or None when the record cannot be placed."""
        start = self.start_position if self.type == "wire" else self.position
        if start is None or self.end_position is None:
            return None
        return start, self.end_position
