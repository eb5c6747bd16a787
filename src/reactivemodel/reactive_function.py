"""Reactive functions — the data structure behind model.react().

A ReactiveFunction names its input properties, its output property, and
the callback that combines them. It knows nothing about graphs: the node
ids are assigned afterwards by whoever registers it (ReactiveModel).
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence

from reactivemodel.errors import InvalidReactionError


class ReactiveFunction:
    """One derivation: callback(*in_property_values) -> out_property value.

    The callback is invoked during a digest when all input values are first
    defined, and again whenever any of them changes.
    """

    __slots__ = ("in_properties", "out_property", "callback", "in_nodes", "node", "out_node")

    def __init__(
        self,
        in_properties: Sequence[str],
        out_property: str,
        callback: Callable[..., Any],
    ) -> None:
        self.in_properties: tuple[str, ...] = tuple(in_properties)
        self.out_property = out_property
        self.callback = callback

        # Assigned by the registering model, in this order:
        # in_nodes (one per in_property), node, out_node.
        self.in_nodes: list[int] | None = None
        self.node: int | None = None
        self.out_node: int | None = None

    @property
    def is_assigned(self) -> bool:
        return self.in_nodes is not None and self.node is not None and self.out_node is not None

    @classmethod
    def parse(cls, options: Mapping[str, Sequence[Any]]) -> list[ReactiveFunction]:
        """Turn the mapping passed to model.react() into ReactiveFunctions.

        Each key is an output property; each value is a sequence of input
        property names followed by the callback:

            {"c": ["a", "b", lambda a, b: a + b]}

        The sequences are not modified. Functions come out in key order.
        """
        functions = []
        for out_property, entry in options.items():
            entry = list(entry)
            if not entry:
                raise InvalidReactionError(out_property, "expected a callback as the last element")
            *in_properties, callback = entry
            if not callable(callback):
                raise InvalidReactionError(
                    out_property, f"last element must be callable, got {callback!r}"
                )
            for name in in_properties:
                if not isinstance(name, str):
                    raise InvalidReactionError(
                        out_property, f"input property names must be strings, got {name!r}"
                    )
            functions.append(cls(in_properties, out_property, callback))
        return functions

    def __repr__(self) -> str:
        name = getattr(self.callback, "__name__", type(self.callback).__name__)
        ins = ", ".join(self.in_properties)
        return f"ReactiveFunction({name}: ({ins}) -> {self.out_property})"
