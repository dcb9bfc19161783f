from dataclasses import dataclass, field
from typing import Optional, Set

from components import Position


@dataclass
class Node:
    id: str
    position: Position
    neighbors: Set[str] = field(default_factory=set)
    voltage: float = 0.0
    reached: bool = False


@dataclass
class Branch:
    name: str
    btype: str  # 'wire','resistor','led','switch'
    n1: str
    n2: str
    resistance: float
    index: int
    forward_voltage: Optional[float] = None
    color: Optional[str] = None
    polarity: Optional[str] = None
    start_position: Optional[Position] = None
    end_position: Optional[Position] = None

    @property
    def conducts_freely(self) -> bool:
        """Zero-drop conductor: carries a terminal's voltage across unchanged."""
        return self.btype in ('wire', 'switch')

    @property
    def is_reversed(self) -> bool:
        return self.polarity == 'reversed'
