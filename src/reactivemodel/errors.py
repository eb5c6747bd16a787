"""Exceptions raised by reactivemodel.

Derivation callbacks are never wrapped: whatever they raise comes out of
ReactiveGraph.digest() unchanged. Cycles are not an error either.
"""


class ReactiveModelError(Exception):
    """Base class for all reactivemodel errors."""


class IncompleteSpecError(ReactiveModelError):
    """A reactive function was added to the graph before its nodes were assigned."""

    def __init__(self, function: object) -> None:
        self.function = function
        super().__init__(
            f"Attempting to add {function!r} to the graph before its "
            "in_nodes, node and out_node are assigned."
        )


class InvalidReactionError(ReactiveModelError, ValueError):
    """A declarative reaction entry is malformed."""

    def __init__(self, out_property: object, message: str) -> None:
        self.out_property = out_property
        super().__init__(f"Invalid reaction for {out_property!r}: {message}")


class ModelError(ReactiveModelError):
    """Base class for lifecycle misuse of a ReactiveModel."""


class AlreadyFinalizedError(ModelError):
    """finalize() was called more than once."""

    def __init__(self) -> None:
        super().__init__(
            "model.finalize() is being invoked more than once, "
            "but it should only be invoked once."
        )


class ModelFinalizedError(ModelError):
    """A public property was added after finalize()."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Cannot add public property {name!r}: the model is already finalized. "
            "Public properties may only be added before finalize()."
        )


class UnknownPropertyError(ModelError, KeyError):
    """set_state() was given a property that isn't public."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Not public properties of this model: {', '.join(names)}")

    def __str__(self) -> str:
        return self.args[0]


class PropertyNameError(ModelError):
    """A property name can't be bound on the model."""

    def __init__(self, name: object, reason: str) -> None:
        self.name = name
        super().__init__(f"Invalid property name {name!r}: {reason}")
