"""
Run/stop toggle around the stateless simulator.

A SimulationSession owns the cached result and one LedState per LED. The
engine itself keeps nothing between calls; every refresh is a full
simulate() on the latest component list.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from components import PlacedComponent
from results import SimulationResult
from solvers import simulate

logger = logging.getLogger(__name__)

IDLE = "idle"
RUNNING = "running"


@dataclass
class LedState:
    """Display state of one LED, owned by the caller and passed to rendering."""
    is_on: bool = False
    is_burned: bool = False
    current: float = 0.0

    def turn_on(self) -> bool:
        if self.is_burned:
            logger.info("Cannot turn on a burned LED; repair it first")
            return False
        self.is_on = True
        return True

    def turn_off(self):
        self.is_on = False

    def toggle(self) -> bool:
        if self.is_on:
            self.turn_off()
            return True
        return self.turn_on()

    def burn(self):
        self.is_burned = True
        self.is_on = False

    def repair(self):
        self.is_burned = False

    def reset(self):
        self.is_on = False
        self.is_burned = False
        self.current = 0.0


def _led_ids(components) -> List[str]:
    ids = []
    for item in components:
        comp = item if isinstance(item, PlacedComponent) else PlacedComponent.from_dict(item)
        if comp.type == "led":
            ids.append(comp.id)
    return ids


class SimulationSession:
    def __init__(self):
        self.state = IDLE
        self.result: Optional[SimulationResult] = None
        self.led_states: Dict[str, LedState] = {}
        self._pending: Optional[List[Any]] = None

    @property
    def running(self) -> bool:
        return self.state == RUNNING

    def led_state(self, led_id: str) -> LedState:
        return self.led_states.setdefault(led_id, LedState())

    def start(self, components: Sequence[Any]) -> SimulationResult:
        if self.running:
            raise RuntimeError("Simulation is already running")
        self.state = RUNNING
        return self._run(components)

    def refresh(self, components: Sequence[Any]) -> Optional[SimulationResult]:
        """Re-simulate after an edit; ignored while idle."""
        if not self.running:
            return None
        return self._run(components)

    def request_refresh(self, components: Sequence[Any]):
        # last request wins
        self._pending = list(components)

    def flush(self) -> Optional[SimulationResult]:
        pending, self._pending = self._pending, None
        if pending is None:
            return None
        return self.refresh(pending)

    def stop(self):
        if not self.running:
            raise RuntimeError("Simulation is not running")
        self.state = IDLE
        self.result = None
        self._pending = None
        for st in self.led_states.values():
            st.reset()

    def _run(self, components) -> SimulationResult:
        components = list(components)
        result = simulate(components)
        self.result = result
        leds = _led_ids(components)
        for led_id in list(self.led_states):
            if led_id not in leds:
                del self.led_states[led_id]
        for led_id in leds:
            st = self.led_state(led_id)
            cs = result.components.get(led_id)
            if cs is None:
                st.reset()
                continue
            st.is_on, st.is_burned, st.current = cs.is_on, cs.is_burned, cs.current
        return result
