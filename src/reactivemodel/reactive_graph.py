"""The reactive graph — dependency tracking and the digest.

Two kinds of nodes share one Graph:
- property nodes, backed by an accessor (accessor() reads, accessor(v) writes)
- function nodes, backed by a ReactiveFunction

Edges run property -> function -> property. Accessors report writes with
property_node_did_change(); nothing is evaluated until digest() is called.
digest() walks forward from the changed property nodes, sorts what it
reaches topologically, and evaluates each function node whose inputs are
all defined.

Thread safety: two locks. The state lock guards nodes, edges and the change
set; every public operation holds it, but only for as long as it touches
that state. The digest lock serializes digests and is held while callbacks
run, without the state lock, so other threads can keep writing properties
while a callback waits on them (see reactivemodel.textual). Calling
digest() from inside a callback is not supported.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

from reactivemodel import _anchor
from reactivemodel.errors import IncompleteSpecError
from reactivemodel.graph import Graph
from reactivemodel.reactive_function import ReactiveFunction

logger = logging.getLogger("reactivemodel.graph")

Accessor = Callable[..., Any]


class _Undefined:
    """Sentinel for a property that has no value yet."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self):
        return "UNDEFINED"


UNDEFINED = _Undefined()


def is_defined(value: Any) -> bool:
    """Only UNDEFINED is undefined. None, 0, "" and False are values."""
    return value is not UNDEFINED


class ReactiveGraph:
    """Dependency graph over property and function nodes, with a manual digest."""

    def __init__(self) -> None:
        self._graph = Graph()
        self._accessors: dict[int, Accessor] = {}
        self._functions: dict[int, ReactiveFunction] = {}
        self._changed: set[int] = set()
        self._lock = threading.RLock()
        self._digest_lock = threading.RLock()
        self._batch_depth = 0

    # --- Nodes ---

    def make_property_node(self, accessor: Accessor) -> int:
        with self._lock:
            node = _anchor.new_id()
            self._accessors[node] = accessor
            return node

    def make_function_node(self, function: ReactiveFunction) -> int:
        """Allocate a node for function. The caller assigns function.node."""
        with self._lock:
            node = _anchor.new_id()
            self._functions[node] = function
            return node

    def add_reactive_function(self, function: ReactiveFunction) -> None:
        """Wire in_nodes -> node -> out_node.

        Raises IncompleteSpecError, without adding any edge, if the
        function's nodes haven't been assigned yet. A function with no
        inputs can't be reached from a changed property, so its own node is
        queued instead: the next digest evaluates it once.
        """
        if not function.is_assigned:
            raise IncompleteSpecError(function)

        with self._lock:
            for in_node in function.in_nodes:
                self._graph.add_edge(in_node, function.node)
            self._graph.add_edge(function.node, function.out_node)
            if not function.in_nodes:
                self._changed.add(function.node)

        logger.debug(
            "Added %r as node %d: %s -> %d",
            function, function.node, function.in_nodes, function.out_node,
        )

    def is_property_node(self, node: int) -> bool:
        return node in self._accessors

    def is_function_node(self, node: int) -> bool:
        return node in self._functions

    def adjacent(self, node: int) -> list[int]:
        return self._graph.adjacent(node)

    # --- Change tracking ---

    def property_node_did_change(self, node: int) -> None:
        with self._lock:
            self._changed.add(node)

    @property
    def changed_nodes(self) -> frozenset[int]:
        """Nodes waiting for a digest: written properties, plus unevaluated nullary functions."""
        with self._lock:
            return frozenset(self._changed)

    def pending_count(self) -> int:
        """Number of nodes in changed_nodes. Useful for testing."""
        with self._lock:
            return len(self._changed)

    # --- Digest ---

    def digest(self) -> None:
        """Propagate every pending change, once, in dependency order.

        Only the nodes that were pending when the digest started are cleared
        afterwards. Writes made by callbacks during the digest stay pending,
        even for nodes this digest already reached, so the next digest
        starts from them again.

        An exception from a callback is logged and re-raised. Callbacks
        already evaluated keep their effects; the rest are skipped and no
        pending change is cleared.
        """
        with self._digest_lock:
            with self._lock:
                source_nodes = sorted(self._changed)
                visited_nodes = self._graph.dfs(source_nodes)

            evaluated = 0
            for node in reversed(visited_nodes):
                function = self._functions.get(node)
                if function is not None and self._evaluate(function):
                    evaluated += 1

            with self._lock:
                self._changed.difference_update(source_nodes)
                still_pending = len(self._changed)

        logger.debug(
            "Digest: %d changed, %d visited, %d evaluated, %d still pending",
            len(source_nodes), len(visited_nodes), evaluated, still_pending,
        )

    def _evaluate(self, function: ReactiveFunction) -> bool:
        in_values = [self._accessors[node]() for node in function.in_nodes]
        if not all(is_defined(value) for value in in_values):
            return False
        try:
            out_value = function.callback(*in_values)
        except Exception:
            logger.exception("Reactive function %r failed during digest", function)
            raise
        self._accessors[function.out_node](out_value)
        return True

    # --- Batching ---

    def begin_batch(self) -> None:
        """Enter a batching scope. Nested batches are supported."""
        with self._lock:
            self._batch_depth += 1

    def end_batch(self, *, digest: bool = True) -> None:
        """Exit a batching scope. Digests when the outermost scope exits."""
        with self._lock:
            self._batch_depth -= 1
            outermost = self._batch_depth == 0
        if outermost and digest:
            self.digest()

    @property
    def in_batch(self) -> bool:
        return self._batch_depth > 0

    def __repr__(self) -> str:
        return (
            f"ReactiveGraph({len(self._accessors)} properties, "
            f"{len(self._functions)} functions, {len(self._changed)} pending)"
        )


_default_graph = ReactiveGraph()


def get_default_graph() -> ReactiveGraph:
    """The graph used by models constructed without an explicit one."""
    return _default_graph


def digest() -> None:
    """Digest the default graph."""
    _default_graph.digest()
