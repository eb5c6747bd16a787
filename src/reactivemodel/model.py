"""ReactiveModel — named properties on top of a ReactiveGraph.

A model maps property names onto property nodes, lazily. Each tracked
property is bound on the model as a Property accessor:

    model.x()      # read
    model.x(10)    # write; returns the model so writes chain

Public properties carry a default value and make up the model's state
(get_state / set_state). Derivations are declared with react():

    model.react({"c": ["a", "b", lambda a, b: a + b]})

Nothing propagates until the graph is digested.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Sequence

from reactivemodel.errors import (
    AlreadyFinalizedError,
    ModelFinalizedError,
    PropertyNameError,
    UnknownPropertyError,
)
from reactivemodel.reactive_function import ReactiveFunction
from reactivemodel.reactive_graph import UNDEFINED, ReactiveGraph, get_default_graph

logger = logging.getLogger("reactivemodel.model")


class Property:
    """Getter/setter for one tracked property of a model."""

    __slots__ = ("_model", "name", "node")

    def __init__(self, model: ReactiveModel, name: str) -> None:
        self._model = model
        self.name = name
        self.node: int | None = None

    def __call__(self, *args: Any) -> Any:
        if not args:
            return self._model._values.get(self.name, UNDEFINED)
        if len(args) > 1:
            raise TypeError(f"{self.name}() takes at most 1 argument ({len(args)} given)")
        self._model._values[self.name] = args[0]
        self._model._graph.property_node_did_change(self.node)
        return self._model

    def __repr__(self) -> str:
        return f"Property({self.name}={self()!r})"


class ReactiveModel:
    """A set of named properties and the reactive functions between them.

    Every model is bound to one ReactiveGraph; many models can share a
    graph and be digested together. Without an explicit graph the model
    joins the default graph (see reactivemodel.digest()).
    """

    def __init__(self, graph: ReactiveGraph | None = None) -> None:
        self._graph = graph if graph is not None else get_default_graph()

        # { property -> default value }, in declaration order
        self._public_properties: dict[str, Any] = {}

        # { property -> value }
        self._values: dict[str, Any] = {}

        # { property -> node }
        self._tracked_properties: dict[str, int] = {}

        self._is_finalized = False

    @property
    def graph(self) -> ReactiveGraph:
        return self._graph

    @property
    def is_finalized(self) -> bool:
        return self._is_finalized

    @property
    def public_properties(self) -> list[str]:
        return list(self._public_properties)

    def add_public_property(self, name: str, default_value: Any = UNDEFINED) -> ReactiveModel:
        if self._is_finalized:
            raise ModelFinalizedError(name)
        self._check_name(name)
        self._public_properties[name] = default_value
        return self

    def finalize(self) -> ReactiveModel:
        """Track every public property and write its default value.

        Properties that already hold a value (written through set_state()
        or an accessor before finalizing) keep it.
        """
        if self._is_finalized:
            raise AlreadyFinalizedError()
        self._is_finalized = True

        for name, default_value in self._public_properties.items():
            self.track(name)
            if name not in self._values:
                getattr(self, name)(default_value)

        logger.debug("Finalized model with public properties %s", self.public_properties)
        return self

    def get_state(self) -> dict[str, Any]:
        return {name: self._values.get(name, UNDEFINED) for name in self._public_properties}

    def set_state(self, state: Mapping[str, Any]) -> ReactiveModel:
        """Reset public properties to their defaults, then apply state."""
        unknown = [name for name in state if name not in self._public_properties]
        if unknown:
            raise UnknownPropertyError(unknown)

        for name, default_value in self._public_properties.items():
            self._accessor(name)(default_value)

        for name, value in state.items():
            self._accessor(name)(value)

        return self

    def react(self, options: Mapping[str, Sequence[Any]]) -> ReactiveModel:
        """Declare derivations: {out_property: [in_property, ..., callback]}."""
        for function in ReactiveFunction.parse(options):
            self._assign_nodes(function)
            self._graph.add_reactive_function(function)
        return self

    def track(self, name: str) -> int:
        """Get or create the property node for name, binding its accessor."""
        node = self._tracked_properties.get(name)
        if node is not None:
            return node

        self._check_name(name)
        accessor = Property(self, name)
        node = self._graph.make_property_node(accessor)
        accessor.node = node
        setattr(self, name, accessor)
        self._tracked_properties[name] = node
        return node

    def _assign_nodes(self, function: ReactiveFunction) -> None:
        function.in_nodes = [self.track(name) for name in function.in_properties]
        function.node = self._graph.make_function_node(function)
        function.out_node = self.track(function.out_property)

    def _accessor(self, name: str) -> Property:
        # set_state() may run before finalize(); public properties are tracked on demand.
        self.track(name)
        return getattr(self, name)

    def _check_name(self, name: Any) -> None:
        if not isinstance(name, str):
            raise PropertyNameError(name, "property names must be strings")
        if name in self._tracked_properties or name in self._public_properties:
            return
        if name.startswith("_") or hasattr(type(self), name) or name in vars(self):
            raise PropertyNameError(name, "it would shadow an attribute of the model")

    def __repr__(self) -> str:
        state = "finalized" if self._is_finalized else "open"
        return f"ReactiveModel({', '.join(self._tracked_properties)}; {state})"
