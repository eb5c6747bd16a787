"""Actions and transactions — batched mutations that digest once.

Wrapping writes in an @action or `with transaction()` runs a single digest
when the outermost scope exits, so derivations see all the writes at once
instead of one digest per producer.

If the body raises, no digest runs: the writes it made stay pending until
the graph is digested again.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager
from typing import Callable, Iterator, ParamSpec, TypeVar, overload

from reactivemodel.reactive_graph import ReactiveGraph, get_default_graph

P = ParamSpec("P")
R = TypeVar("R")


@contextmanager
def transaction(graph: ReactiveGraph | None = None) -> Iterator[ReactiveGraph]:
    """Context manager for batching writes to graph (default: the default graph).

    Usage:
        with transaction(graph):
            model.a(1)
            model.b(2)
            # digest runs here, after both are set
    """
    graph = graph if graph is not None else get_default_graph()
    graph.begin_batch()
    try:
        yield graph
    except BaseException:
        graph.end_batch(digest=False)
        raise
    else:
        graph.end_batch()


@overload
def action(fn: Callable[P, R]) -> Callable[P, R]: ...


@overload
def action(graph: ReactiveGraph) -> Callable[[Callable[P, R]], Callable[P, R]]: ...


def action(target):
    """Decorator: batch all writes inside fn and digest after it returns.

    Usage:
        @action
        def swap():
            a, b = model.a(), model.b()
            model.a(b)
            model.b(a)

        @action(graph)
        def reset():
            model.set_state({})
    """
    if isinstance(target, ReactiveGraph):
        return functools.partial(_wrap, graph=target)
    return _wrap(target, graph=None)


def _wrap(fn: Callable[P, R], graph: ReactiveGraph | None) -> Callable[P, R]:
    @functools.wraps(fn)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with transaction(graph):
            return fn(*args, **kwargs)

    return wrapper
