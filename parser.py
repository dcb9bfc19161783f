import json
import logging
import math
from typing import Iterable, List, Union

from circuit import Circuit
from components import (PlacedComponent, COMPONENT_TYPES, DEFAULT_RESISTANCE,
                        WIRE_RESISTANCE, LED_RESISTANCE, forward_voltage)

logger = logging.getLogger(__name__)

ComponentLike = Union[PlacedComponent, dict]


def parse_resistance(val) -> float:
    if val is None:
        return DEFAULT_RESISTANCE
    try:
        fval = float(val)
    except (TypeError, ValueError):
        return DEFAULT_RESISTANCE
    if not math.isfinite(fval) or fval <= 0:
        return DEFAULT_RESISTANCE
    return fval


def _as_placed(item: ComponentLike) -> PlacedComponent:
    return item if isinstance(item, PlacedComponent) else PlacedComponent.from_dict(item)


def build_circuit(components: Iterable[ComponentLike]) -> Circuit:
    """Fresh graph for one analysis; terminals are seeded before any component."""
    circ = Circuit()
    for item in components:
        comp = _as_placed(item)
        if comp.type not in COMPONENT_TYPES:
            circ.skip(comp.id, f'unknown type {comp.type!r}')
            continue
        ends = comp.endpoints()
        if ends is None:
            circ.skip(comp.id, 'missing endpoint position')
            continue
        p1, p2 = ends
        if comp.type == 'wire':
            circ.add_branch('wire', comp.id, p1, p2, WIRE_RESISTANCE, color=comp.color,
                            start_position=p1, end_position=p2)
        elif comp.type == 'resistor':
            circ.add_branch('resistor', comp.id, p1, p2, parse_resistance(comp.value), color=comp.color)
        elif comp.type == 'led':
            circ.add_branch('led', comp.id, p1, p2, LED_RESISTANCE, color=comp.color,
                            forward_voltage=forward_voltage(comp.color), polarity=comp.polarity)
        elif comp.is_on:
            circ.add_branch('switch', comp.id, p1, p2, WIRE_RESISTANCE)
        else:
            logger.debug("Switch %s is open", comp.id)
            circ.open_switches.append(comp.id)
    circ.link_terminals()
    return circ


def parse_components(path: str) -> List[PlacedComponent]:
    with open(path, 'r') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get('components')
    if not isinstance(data, list):
        raise ValueError(f'{path}: expected a list of components')
    return [PlacedComponent.from_dict(item) for item in data if isinstance(item, dict)]
