"""Room connectivity graph: Prim spanning tree plus loop augmentation."""
from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Generic, List, NamedTuple, Optional, TypeVar

from .coords import Coords

D = TypeVar("D")


@dataclass
class Node(Generic[D]):
    coords: Coords
    data: Optional[D] = None
    edges: List[int] = field(default_factory=list)


class _Candidate(NamedTuple):
    src: int
    dst: int
    dist_sq: int


class Edge(NamedTuple):
    c0: Coords
    c1: Coords
    data0: Any
    data1: Any


class Graph(Generic[D]):
    def __init__(self):
        self.nodes: List[Node[D]] = []

    def __len__(self) -> int:
        return len(self.nodes)

    def add_node(self, coords: Coords, data: Optional[D] = None) -> int:
        self.nodes.append(Node(Coords(*coords), data))
        return len(self.nodes) - 1

    def _candidate(self, src: int, dst: int) -> _Candidate:
        return _Candidate(src, dst, self.nodes[src].coords.euclidean_dist_sq(self.nodes[dst].coords))

    def connect(self, a: int, b: int) -> None:
        self.nodes[a].edges.append(b)
        self.nodes[b].edges.append(a)

    def connect_tree(self) -> None:
        """Minimum spanning tree over node coordinates (Prim).

        ``pending`` holds, per unconnected node, the cheapest known edge into
        the connected set. Ties resolve to the first candidate in scan order.
        """
        pending = [self._candidate(0, i) for i in range(1, len(self.nodes))]
        while pending:
            idx = min(range(len(pending)), key=lambda i: pending[i].dist_sq)
            best = pending.pop(idx)
            self.connect(best.src, best.dst)
            joined = best.dst
            for i, cand in enumerate(pending):
                alt = self._candidate(joined, cand.dst)
                if alt.dist_sq < cand.dist_sq:
                    pending[i] = alt

    def add_more_edges(self, rng: random.Random, p_connect: float) -> int:
        """Give some leaves a second edge to their nearest non-neighbour.

        Nodes are visited in shuffled order; a node with at most one edge that
        passes the ``p_connect`` roll is linked. Returns the number of added
        edges. Existing edges are never removed.
        """
        ids = list(range(len(self.nodes)))
        rng.shuffle(ids)
        added = 0
        for id0 in ids:
            n0 = self.nodes[id0]
            if len(n0.edges) > 1:
                continue
            if rng.random() > p_connect:
                continue
            options = [i for i in range(len(self.nodes)) if i != id0 and i not in n0.edges]
            if not options:
                continue
            id1 = min(options, key=lambda i: n0.coords.euclidean_dist_sq(self.nodes[i].coords))
            self.connect(id0, id1)
            added += 1
        return added

    def edge_count(self) -> int:
        return sum(len(n.edges) for n in self.nodes) // 2

    def edge_set(self) -> set[tuple[int, int]]:
        return {(min(a, b), max(a, b)) for a, n in enumerate(self.nodes) for b in n.edges}

    def neighbors(self, node_id: int) -> List[int]:
        return list(self.nodes[node_id].edges)

    def to_edges(self) -> List[Edge]:
        """Each undirected edge once, higher node id first."""
        out: List[Edge] = []
        for id0, n0 in enumerate(self.nodes):
            for id1 in n0.edges:
                if id0 < id1:
                    continue
                n1 = self.nodes[id1]
                out.append(Edge(n0.coords, n1.coords, n0.data, n1.data))
        return out


__all__ = ["Graph", "Node", "Edge"]
