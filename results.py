from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple


@dataclass(frozen=True)
class ComponentState:
    current: float = 0.0
    voltage: float = 0.0
    power: float = 0.0
    is_on: bool = False
    is_burned: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "current": self.current,
            "voltage": self.voltage,
            "power": self.power,
            "isOn": self.is_on,
            "isBurned": self.is_burned,
        }


@dataclass(frozen=True)
class SimulationResult:
    """Snapshot of one analysis. Maps are copied in, and to_dict() copies out."""
    is_complete: bool
    has_short_circuit: bool
    components: Mapping[str, ComponentState] = field(default_factory=dict)
    nodes: Mapping[str, float] = field(default_factory=dict)
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "components", dict(self.components))
        object.__setattr__(self, "nodes", dict(self.nodes))
        object.__setattr__(self, "errors", tuple(self.errors))
        object.__setattr__(self, "warnings", tuple(self.warnings))

    def __hash__(self):
        return hash((self.is_complete, self.has_short_circuit,
                     tuple(self.components.items()), tuple(self.nodes.items()),
                     self.errors, self.warnings))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isComplete": self.is_complete,
            "hasShortCircuit": self.has_short_circuit,
            "components": {cid: st.to_dict() for cid, st in self.components.items()},
            "nodes": {nid: {"voltage": v} for nid, v in self.nodes.items()},
            "errors": list(self.errors),
            "warnings": list(self.warnings),
        }
