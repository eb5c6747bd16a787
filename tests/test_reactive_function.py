"""Tests for ReactiveFunction and its parse() helper."""

import pytest

from reactivemodel import InvalidReactionError, ReactiveFunction


def add(a, b):
    return a + b


class TestReactiveFunction:
    def test_nodes_start_unassigned(self):
        fn = ReactiveFunction(["a", "b"], "c", add)
        assert fn.in_properties == ("a", "b")
        assert fn.out_property == "c"
        assert fn.callback is add
        assert fn.in_nodes is None
        assert fn.node is None
        assert fn.out_node is None
        assert not fn.is_assigned

    def test_repr(self):
        assert repr(ReactiveFunction(["a", "b"], "c", add)) == "ReactiveFunction(add: (a, b) -> c)"


class TestParse:
    def test_single(self):
        [fn] = ReactiveFunction.parse({"c": ["a", "b", add]})
        assert fn.in_properties == ("a", "b")
        assert fn.out_property == "c"
        assert fn.callback is add

    def test_key_order(self):
        functions = ReactiveFunction.parse({
            "z": ["a", add],
            "y": ["b", add],
            "x": ["c", add],
        })
        assert [fn.out_property for fn in functions] == ["z", "y", "x"]

    def test_nullary(self):
        [fn] = ReactiveFunction.parse({"answer": [lambda: 42]})
        assert fn.in_properties == ()
        assert fn.callback() == 42

    def test_does_not_mutate_options(self):
        entry = ["a", "b", add]
        ReactiveFunction.parse({"c": entry})
        assert entry == ["a", "b", add]

    def test_accepts_tuples(self):
        [fn] = ReactiveFunction.parse({"c": ("a", add)})
        assert fn.in_properties == ("a",)

    def test_empty_entry(self):
        with pytest.raises(InvalidReactionError, match="'c'"):
            ReactiveFunction.parse({"c": []})

    def test_last_element_not_callable(self):
        with pytest.raises(InvalidReactionError, match="callable"):
            ReactiveFunction.parse({"c": ["a", "b"]})

    def test_non_string_input(self):
        with pytest.raises(InvalidReactionError, match="strings"):
            ReactiveFunction.parse({"c": ["a", 3, add]})

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            ReactiveFunction.parse({"c": []})
