from pathlib import Path
import sys

import matplotlib

matplotlib.use("Agg")

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import pytest  # noqa: E402

from components import TERMINAL_POSITIONS, POSITIVE_TERMINAL, NEGATIVE_TERMINAL  # noqa: E402
from grid import hole_position  # noqa: E402

POS = TERMINAL_POSITIONS[POSITIVE_TERMINAL]
NEG = TERMINAL_POSITIONS[NEGATIVE_TERMINAL]
A = hole_position(2, 3)
B = hole_position(2, 5)
C = hole_position(2, 6)
D = hole_position(4, 6)


def wire(cid, start, end):
    return {"id": cid, "type": "wire", "position": [0, 0, 0],
            "startPosition": list(start), "endPosition": list(end), "color": "#000000"}


def resistor(cid, start, end, value="220"):
    return {"id": cid, "type": "resistor", "position": list(start),
            "endPosition": list(end), "value": value, "color": "#ff6b6b"}


def led(cid, start, end, color="#ff0000", polarity="normal"):
    return {"id": cid, "type": "led", "position": list(start),
            "endPosition": list(end), "color": color, "polarity": polarity}


def switch(cid, start, end, is_on=False):
    return {"id": cid, "type": "switch", "position": list(start),
            "endPosition": list(end), "isOn": is_on}


@pytest.fixture
def led_loop():
    """battery+ -> A -(220)- B -(red LED)- C -> battery-"""
    return [
        wire("w1", POS, A),
        resistor("r1", A, B),
        led("led1", B, C),
        wire("w2", C, NEG),
    ]


@pytest.fixture
def bare_led_loop():
    return [
        wire("w1", POS, A),
        led("led1", A, C),
        wire("w2", C, NEG),
    ]
