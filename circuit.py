import logging
import networkx as nx
import numpy as np
from typing import List, Dict, Optional, Set
from branch import Branch, Node
from components import (Position, TERMINAL_POSITIONS, TERMINAL_TOLERANCE,
                        POSITIVE_TERMINAL, NEGATIVE_TERMINAL, BATTERY_VOLTAGE)
from connectivity import (reachable_from, is_reachable_to_terminal, is_complete,
                          find_path_branches, has_short_circuit, propagate_voltages)
from utils import draw_graph

logger = logging.getLogger(__name__)

TERMINAL_VOLTAGES = {POSITIVE_TERMINAL: BATTERY_VOLTAGE, NEGATIVE_TERMINAL: 0.0}


def _fmt(v: float) -> str:
    s = repr(float(v) + 0.0)
    return s[:-2] if s.endswith('.0') else s


def node_id(position: Position) -> str:
    """Canonical node name for an exact coordinate; terminals keep their fixed names."""
    key = tuple(float(v) + 0.0 for v in position)
    for tid, tpos in TERMINAL_POSITIONS.items():
        if key == tpos:
            return tid
    return 'node-' + '-'.join(_fmt(v) for v in key)


def is_near(p1: Position, p2: Position, tol: float = TERMINAL_TOLERANCE) -> bool:
    return bool(np.linalg.norm(np.subtract(p1, p2)) < tol)


class Circuit:
    def __init__(self):
        self.branches: List[Branch] = []
        self.nodes: Dict[str, Node] = {}
        self.skipped: List[str] = []
        self.open_switches: List[str] = []
        self.G = nx.MultiGraph()
        self._seed_terminals()

    def _seed_terminals(self):
        for tid, pos in TERMINAL_POSITIONS.items():
            self.nodes[tid] = Node(id=tid, position=pos, voltage=TERMINAL_VOLTAGES[tid], reached=True)
            self.G.add_node(tid)

    def node(self, position: Position) -> Node:
        nid = node_id(position)
        if nid not in self.nodes:
            self.nodes[nid] = Node(id=nid, position=tuple(float(v) for v in position))
            self.G.add_node(nid)
        return self.nodes[nid]

    def add_branch(self, btype, name, p1: Position, p2: Position, resistance, **params) -> Branch:
        n1, n2 = self.node(p1).id, self.node(p2).id
        idx = len(self.branches)
        br = Branch(name=name, btype=btype, n1=n1, n2=n2, resistance=float(resistance), index=idx, **params)
        self.branches.append(br)
        self._connect(n1, n2, idx, br)
        return br

    def _connect(self, n1, n2, key, br, link=False):
        self.nodes[n1].neighbors.add(n2)
        self.nodes[n2].neighbors.add(n1)
        self.G.add_edge(n1, n2, key=key, object=br, link=link)

    def skip(self, name, reason):
        logger.warning("Skipping component %r: %s", name, reason)
        self.skipped.append(name)

    def link_terminals(self):
        """Join wires whose end lies on a battery lead to that terminal."""
        for br in self.branches:
            if br.btype != 'wire' or br.start_position is None or br.end_position is None:
                continue
            for tid, tpos in TERMINAL_POSITIONS.items():
                if is_near(br.start_position, tpos):
                    self._connect(br.n2, tid, f'{br.index}:{tid}:start', br, link=True)
                    logger.debug("Linked %s to node %s via wire %s", tid, br.n2, br.name)
                if is_near(br.end_position, tpos):
                    self._connect(br.n1, tid, f'{br.index}:{tid}:end', br, link=True)
                    logger.debug("Linked %s to node %s via wire %s", tid, br.n1, br.name)

    def branch(self, name) -> Optional[Branch]:
        for br in self.branches:
            if br.name == name:
                return br
        return None

    # Graph analysis
    def reachable_from(self, nid: str) -> Set[str]:
        return reachable_from(self, nid)

    def is_reachable_to_terminal(self, nid: str, terminal: str) -> bool:
        return is_reachable_to_terminal(self, nid, terminal)

    def is_complete(self) -> bool:
        return is_complete(self)

    def find_path_branches(self, start: str, end: str) -> List[Branch]:
        return find_path_branches(self, start, end)

    def has_short_circuit(self) -> bool:
        return has_short_circuit(self)

    def propagate_voltages(self, source_voltage: float = BATTERY_VOLTAGE):
        propagate_voltages(self, source_voltage)

    # Utilities
    def print_indices(self):
        print('\nNode indices:')
        for i, n in enumerate(self.nodes.values()):
            print(f"  idx {i}: '{n.id}'  {n.position} ({n.voltage:g} V)")
        print('\nBranch indices:')
        for br in self.branches:
            flip = ', reversed' if br.is_reversed else ''
            print(f"  idx {br.index}: '{br.name}'  {br.n1}->{br.n2} ({br.btype}, R={br.resistance:g}{flip})")
        if self.skipped:
            print(f"\nSkipped: {', '.join(self.skipped)}")

    def draw_graph(self):
        draw_graph(self)
