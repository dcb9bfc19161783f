"""
Graph walks over a built Circuit.

All traversals are breadth-first over the undirected multigraph, which holds
both component edges and terminal links. Visited sets live inside the
networkx helpers, so every walk is bounded by the node count.
"""
import logging
from typing import List, Set

import networkx as nx

from components import POSITIVE_TERMINAL, NEGATIVE_TERMINAL, BATTERY_VOLTAGE

logger = logging.getLogger(__name__)

TERMINALS = (POSITIVE_TERMINAL, NEGATIVE_TERMINAL)


def _terminal(name: str) -> str:
    if name in TERMINALS:
        return name
    if name in ('positive', 'negative'):
        return f'battery-{name}'
    raise ValueError(f'Unknown battery terminal {name!r}')


def reachable_from(circ, node_id: str) -> Set[str]:
    if node_id not in circ.G:
        return set()
    return set(nx.node_connected_component(circ.G, node_id))


def is_reachable_to_terminal(circ, node_id: str, terminal: str) -> bool:
    return _terminal(terminal) in reachable_from(circ, node_id)


def is_complete(circ) -> bool:
    """Both terminals reach at least one node besides themselves."""
    return all(len(reachable_from(circ, t)) > 1 for t in TERMINALS)


def find_path_branches(circ, start: str, end: str) -> List:
    """
    Branches along the first breadth-first path from start to end.
    Between two adjacent nodes the earliest-added edge is taken; a terminal
    link counts as the wire that produced it.
    """
    if start not in circ.G or end not in circ.G:
        return []
    if start == end:
        return []
    parents = {}
    for parent, child in nx.bfs_edges(circ.G, start):
        parents[child] = parent
        if child == end:
            break
    if end not in parents:
        return []
    path = []
    node = end
    while node != start:
        parent = parents[node]
        edges = circ.G.get_edge_data(parent, node)
        path.append(next(iter(edges.values()))['object'])
        node = parent
    path.reverse()
    return path


def has_short_circuit(circ) -> bool:
    path = find_path_branches(circ, POSITIVE_TERMINAL, NEGATIVE_TERMINAL)
    if not path:
        return False
    short = all(br.conducts_freely for br in path)
    logger.debug("Terminal path %s (short=%s)", [br.name for br in path], short)
    return short


def _free_edge(circ):
    def keep(u, v, k):
        return circ.G.edges[u, v, k]['object'].conducts_freely
    return keep


def propagate_voltages(circ, source_voltage: float = BATTERY_VOLTAGE):
    """
    Equipotential flood-fill: each terminal's voltage spreads across nodes
    joined to it by wires only. The negative flood runs last.
    """
    for node in circ.nodes.values():
        node.voltage = 0.0
        node.reached = False
    wires = nx.subgraph_view(circ.G, filter_edge=_free_edge(circ))
    for terminal, voltage in ((POSITIVE_TERMINAL, source_voltage), (NEGATIVE_TERMINAL, 0.0)):
        for nid in nx.node_connected_component(wires, terminal):
            node = circ.nodes[nid]
            node.voltage = voltage
            node.reached = True
