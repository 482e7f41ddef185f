"""LayeredGraph wrapper around networkx for hierarchical layout."""

from typing import Iterable

import networkx as nx

# Number of alternating down/up barycenter sweeps
ORDERING_SWEEPS = 4


class LayeredGraph:
    """A directed graph partitioned into ranks.

    Wraps a networkx DiGraph with the ranking and ordering phases of a
    Sugiyama-style layout: cycle breaking, longest-path rank assignment and
    barycentric crossing reduction. Node insertion order is the tie-breaker
    everywhere, so results are deterministic for a given input.
    """

    def __init__(self, node_ids: Iterable[str] = ()):
        """Initialize the graph with the given nodes in order."""
        self._graph = nx.DiGraph()
        for node_id in node_ids:
            self.add_node(node_id)

    @property
    def graph(self) -> nx.DiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    def add_node(self, node_id: str) -> None:
        if not self._graph.has_node(node_id):
            self._graph.add_node(node_id, index=self._graph.number_of_nodes())

    def add_edge(self, source: str, target: str) -> bool:
        """Add an edge between two known nodes.

        Edges with an unknown endpoint are ignored, as are self-loops, which
        carry no ranking information.

        Args:
            source: The source node id.
            target: The target node id.

        Returns:
            True if the edge is part of the graph afterwards.
        """
        if source == target:
            return False
        if not (self._graph.has_node(source) and self._graph.has_node(target)):
            return False
        self._graph.add_edge(source, target)
        return True

    # -------------------------------------------------------------------------
    # Ranking
    # -------------------------------------------------------------------------

    def acyclic(self) -> nx.DiGraph:
        """Return a copy of the graph with cycles broken.

        Each cycle found is broken by dropping its closing edge, until the
        graph is a DAG.
        """
        dag = self._graph.copy()
        while True:
            try:
                cycle = nx.find_cycle(dag)
            except nx.NetworkXNoCycle:
                return dag
            source, target = cycle[-1][:2]
            dag.remove_edge(source, target)

    def assign_ranks(self, dag: nx.DiGraph | None = None) -> dict[str, int]:
        """Assign each node the length of the longest path reaching it.

        Args:
            dag: An acyclic version of the graph (computed if omitted).

        Returns:
            Mapping of node id to rank, starting at 0.
        """
        if dag is None:
            dag = self.acyclic()

        ranks: dict[str, int] = {}
        for node in nx.lexicographical_topological_sort(dag, key=self._index):
            ranks[node] = max((ranks[pred] + 1 for pred in dag.predecessors(node)), default=0)
        return ranks

    # -------------------------------------------------------------------------
    # Ordering
    # -------------------------------------------------------------------------

    def layers(self) -> list[list[str]]:
        """Rank the graph and order each rank to reduce edge crossings.

        Returns:
            One list of node ids per rank, from rank 0 upward.
        """
        if self._graph.number_of_nodes() == 0:
            return []

        dag = self.acyclic()
        ranks = self.assign_ranks(dag)

        layers: list[list[str]] = [[] for _ in range(max(ranks.values()) + 1)]
        for node in sorted(ranks, key=self._index):
            layers[ranks[node]].append(node)

        # Only edges between adjacent ranks take part in crossing reduction
        adjacent = [(u, v) for u, v in dag.edges() if ranks[v] == ranks[u] + 1]

        best = [list(layer) for layer in layers]
        best_crossings = count_crossings(best, adjacent)

        for sweep in range(ORDERING_SWEEPS):
            if best_crossings == 0:
                break
            if sweep % 2 == 0:
                for rank in range(1, len(layers)):
                    layers[rank] = _barycenter_order(layers[rank], layers[rank - 1], dag.predecessors)
            else:
                for rank in range(len(layers) - 2, -1, -1):
                    layers[rank] = _barycenter_order(layers[rank], layers[rank + 1], dag.successors)

            crossings = count_crossings(layers, adjacent)
            if crossings < best_crossings:
                best = [list(layer) for layer in layers]
                best_crossings = crossings

        return best

    def _index(self, node_id: str) -> int:
        return self._graph.nodes[node_id]["index"]


def _barycenter_order(layer: list[str], fixed: list[str], neighbors) -> list[str]:
    positions = {node: index for index, node in enumerate(fixed)}

    def barycenter(item: tuple[int, str]) -> float:
        index, node = item
        linked = [positions[other] for other in neighbors(node) if other in positions]
        if not linked:
            return float(index)
        return sum(linked) / len(linked)

    return [node for _, node in sorted(enumerate(layer), key=barycenter)]


def count_crossings(layers: list[list[str]], edges: list[tuple[str, str]]) -> int:
    """Count pairwise crossings of edges drawn between adjacent ranks."""
    position = {node: index for layer in layers for index, node in enumerate(layer)}
    rank_of = {node: rank for rank, layer in enumerate(layers) for node in layer}

    crossings = 0
    for i, (u1, v1) in enumerate(edges):
        for u2, v2 in edges[i + 1 :]:
            if rank_of[u1] != rank_of[u2]:
                continue
            upper = position[u1] - position[u2]
            lower = position[v1] - position[v2]
            if upper * lower < 0:
                crossings += 1
    return crossings
