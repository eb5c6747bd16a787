"""Tests for action batching and the transaction context manager."""

import pytest

import reactivemodel
from reactivemodel import ReactiveGraph, ReactiveModel, action, transaction


@pytest.fixture
def graph():
    return ReactiveGraph()


@pytest.fixture
def model(graph):
    log = []
    m = ReactiveModel(graph)
    m.add_public_property("a", 0).add_public_property("b", 0).finalize()

    def pair(a, b):
        log.append((a, b))
        return (a, b)

    m.react({"pair": ["a", "b", pair]})
    graph.digest()
    m.log = log
    return m


class TestAction:
    def test_batches_updates(self, graph, model):
        assert model.log == [(0, 0)]

        @action(graph)
        def update_both():
            model.a(1)
            model.b(2)

        update_both()
        # One digest, after both writes
        assert model.log == [(0, 0), (1, 2)]
        assert model.pair() == (1, 2)

    def test_nested_actions(self, graph, model):
        @action(graph)
        def outer():
            model.a(1)

            @action(graph)
            def inner():
                model.a(2)

            inner()
            assert model.log == [(0, 0)]
            model.a(3)

        outer()
        # Only digests after the outermost action completes
        assert model.log == [(0, 0), (3, 0)]

    def test_preserves_return_value(self, graph):
        @action(graph)
        def compute():
            return 42

        assert compute() == 42

    def test_bare_decorator_uses_default_graph(self):
        m = ReactiveModel()
        m.react({"double": ["x", lambda x: x * 2]})

        @action
        def set_x():
            m.x(21)

        set_x()
        assert m.double() == 42
        assert not reactivemodel.get_default_graph().in_batch

    def test_error_skips_digest(self, graph, model):
        @action(graph)
        def fail():
            model.a(5)
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError):
            fail()

        assert model.log == [(0, 0)]
        assert not graph.in_batch
        assert model.a.node in graph.changed_nodes

        graph.digest()
        assert model.log == [(0, 0), (5, 0)]


class TestTransaction:
    def test_batches_updates(self, graph, model):
        with transaction(graph):
            model.a(10)
            model.b(20)
            assert graph.in_batch

        assert model.log == [(0, 0), (10, 20)]

    def test_nested_transactions(self, graph, model):
        with transaction(graph):
            model.a(1)
            with transaction(graph):
                model.a(2)
            model.a(3)

        assert model.log == [(0, 0), (3, 0)]

    def test_yields_graph(self, graph):
        with transaction(graph) as g:
            assert g is graph

    def test_handled_inner_error_still_digests(self, graph, model):
        with transaction(graph):
            model.a(7)
            with pytest.raises(ValueError):
                with transaction(graph):
                    raise ValueError("inner")

        assert model.log == [(0, 0), (7, 0)]
