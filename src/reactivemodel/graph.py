"""A directed graph with depth-first search.

The adjacency list is keyed by source node; each value lists the nodes it
points to, in insertion order. Edges are only ever added.
"""

from __future__ import annotations

from typing import Callable, Hashable, Iterable

Node = Hashable


def _always(node: Node) -> bool:
    return True


class Graph:
    """Adjacency-list digraph over opaque, hashable node ids."""

    __slots__ = ("_edges",)

    def __init__(self) -> None:
        self._edges: dict[Node, list[Node]] = {}

    def add_edge(self, u: Node, v: Node) -> None:
        """Record that v is adjacent to u. Duplicate edges are kept."""
        self._edges.setdefault(u, []).append(v)

    def adjacent(self, u: Node) -> list[Node]:
        """Nodes u points to, in insertion order."""
        return list(self._edges.get(u, ()))

    def dfs(
        self,
        source_nodes: Iterable[Node],
        should_visit: Callable[[Node], bool] | None = None,
    ) -> list[Node]:
        """Depth-first search from each source, returning nodes in finish order.

        After Cormen et al., "Introduction to Algorithms" 3rd Ed. p. 604.
        A node is entered only if it hasn't been visited during this call
        and should_visit(node) is true. Its children are explored before the
        node itself is appended, so reversing the result gives a topological
        order for any acyclic subgraph. Cycles are not detected: a visited
        node is never re-entered, so the search always terminates.

        Uses an explicit stack; the order matches the recursive version.
        """
        if should_visit is None:
            should_visit = _always

        visited: set[Node] = set()
        nodes: list[Node] = []

        for source in source_nodes:
            if source in visited or not should_visit(source):
                continue
            visited.add(source)
            stack = [(source, iter(self._edges.get(source, ())))]
            while stack:
                node, children = stack[-1]
                for child in children:
                    if child not in visited and should_visit(child):
                        visited.add(child)
                        stack.append((child, iter(self._edges.get(child, ()))))
                        break
                else:
                    stack.pop()
                    nodes.append(node)

        return nodes

    def __len__(self) -> int:
        return sum(len(targets) for targets in self._edges.values())

    def __repr__(self) -> str:
        return f"Graph({len(self._edges)} sources, {len(self)} edges)"
