# solvers.py  - simplified single-path DC model for protoboard circuits
# No linear-system solve: wires are ideal, an LED sees the full battery
# voltage and at most one series resistor limits its current.

from typing import List, Tuple, Dict, Any, Iterable
import logging

from components import (BATTERY_VOLTAGE, POSITIVE_TERMINAL, NEGATIVE_TERMINAL,
                        LED_RESISTANCE, DEFAULT_FORWARD_VOLTAGE, PLACEHOLDER_CURRENT,
                        LED_ON_CURRENT, LED_MAX_CURRENT, REVERSE_BIAS_VOLTAGE)
from parser import build_circuit
from results import ComponentState, SimulationResult

# configure logging for module users
logger = logging.getLogger(__name__)
if not logger.handlers:
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s:%(name)s: %(message)s"))
    logger.addHandler(handler)
logger.setLevel(logging.INFO)

__all__ = [
    "find_series_resistor",
    "led_current",
    "analyze_branch",
    "simulate",
    "SHORT_CIRCUIT_ERROR",
    "INCOMPLETE_ERROR",
]

SHORT_CIRCUIT_ERROR = "Short circuit detected! Battery terminals are directly connected."
INCOMPLETE_ERROR = "Circuit is not complete. Make sure to connect positive and negative terminals."
REVERSE_BIAS_WARNING = "LED {name} may be connected backwards! Check polarity."
BURNOUT_WARNING = "LED {name} burned out! Current too high: {ma:.1f}mA (max: {max_ma:g}mA)"


# ----------------- small helpers -------------------------------------------
def _touches(br, reach) -> bool:
    return br.n1 in reach or br.n2 in reach


def _paths(br, reach_pos, reach_neg) -> Tuple[bool, bool]:
    return _touches(br, reach_pos), _touches(br, reach_neg)


# ---------------------------------------------------------------------------
# Per-branch analysis
# ---------------------------------------------------------------------------
def find_series_resistor(circ, reach_pos=None, reach_neg=None):
    """First resistor that reaches both battery terminals, if any."""
    if reach_pos is None:
        reach_pos = circ.reachable_from(POSITIVE_TERMINAL)
    if reach_neg is None:
        reach_neg = circ.reachable_from(NEGATIVE_TERMINAL)
    for br in circ.branches:
        if br.btype == "resistor" and all(_paths(br, reach_pos, reach_neg)):
            return br
    return None


def led_current(circ, br, reach_pos, reach_neg, source_voltage: float = BATTERY_VOLTAGE) -> float:
    vf = br.forward_voltage if br.forward_voltage is not None else DEFAULT_FORWARD_VOLTAGE
    if source_voltage < vf:
        return 0.0
    if not all(_paths(br, reach_pos, reach_neg)):
        return 0.0
    total = br.resistance or LED_RESISTANCE
    resistor = find_series_resistor(circ, reach_pos, reach_neg)
    if resistor is not None:
        total += resistor.resistance
        logger.debug("LED %s has resistor %s (%g ohm) in path", br.name, resistor.name, resistor.resistance)
    else:
        logger.debug("LED %s has no series resistor", br.name)
    return (source_voltage - vf) / total


def analyze_branch(circ, br, reach_pos, reach_neg,
                   source_voltage: float = BATTERY_VOLTAGE) -> Tuple[ComponentState, List[str]]:
    """
    Returns (state, warnings) for one branch.
    Only LEDs get a real model; everything else reports the placeholder
    current across its flood-fill voltage difference.
    """
    if br.btype != "led":
        voltage = abs(circ.nodes[br.n1].voltage - circ.nodes[br.n2].voltage)
        return ComponentState(current=PLACEHOLDER_CURRENT, voltage=voltage,
                              power=voltage * PLACEHOLDER_CURRENT), []

    warnings: List[str] = []
    vf = br.forward_voltage if br.forward_voltage is not None else DEFAULT_FORWARD_VOLTAGE
    has_pos, has_neg = _paths(br, reach_pos, reach_neg)
    current = led_current(circ, br, reach_pos, reach_neg, source_voltage)
    voltage = source_voltage
    is_on = has_pos and has_neg and current > LED_ON_CURRENT and voltage >= vf
    is_burned = has_pos and has_neg and current > LED_MAX_CURRENT

    logger.debug("LED %s: %.2fV %.1fmA vf=%.2fV on=%s burned=%s",
                 br.name, voltage, current * 1000, vf, is_on, is_burned)
    if is_burned:
        warnings.append(BURNOUT_WARNING.format(name=br.name, ma=current * 1000, max_ma=LED_MAX_CURRENT * 1000))
    if voltage > REVERSE_BIAS_VOLTAGE and current < LED_ON_CURRENT:
        warnings.append(REVERSE_BIAS_WARNING.format(name=br.name))
    return ComponentState(current=current, voltage=voltage, power=voltage * current,
                          is_on=is_on, is_burned=is_burned), warnings


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------
def simulate(components: Iterable[Any]) -> SimulationResult:
    """
    Analyse a list of placed components (PlacedComponent records or mappings
    in the external camelCase shape). The graph is rebuilt on every call.
    """
    circ = build_circuit(components)
    circ.propagate_voltages(BATTERY_VOLTAGE)

    reach_pos = circ.reachable_from(POSITIVE_TERMINAL)
    reach_neg = circ.reachable_from(NEGATIVE_TERMINAL)
    connected = circ.is_complete()
    short = circ.has_short_circuit()
    complete = connected and not short
    logger.debug("positive=%d negative=%d connected=%s short=%s branches=%d nodes=%d",
                 len(reach_pos), len(reach_neg), connected, short, len(circ.branches), len(circ.nodes))

    errors: List[str] = []
    warnings: List[str] = []
    if short:
        errors.append(SHORT_CIRCUIT_ERROR)

    states: Dict[str, ComponentState] = {}
    for br in circ.branches:
        state, notes = analyze_branch(circ, br, reach_pos, reach_neg, BATTERY_VOLTAGE)
        states[br.name] = state
        warnings.extend(notes)
    for name in circ.open_switches:
        states.setdefault(name, ComponentState())

    if not complete and circ.branches:
        errors.append(INCOMPLETE_ERROR)

    return SimulationResult(
        is_complete=complete,
        has_short_circuit=short,
        components=states,
        nodes={nid: n.voltage for nid, n in circ.nodes.items()},
        errors=errors,
        warnings=warnings,
    )
