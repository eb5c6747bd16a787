"""reactivemodel: a reactive dataflow runtime with a manual digest."""

from importlib.metadata import version as _version

__version__ = _version("reactivemodel")

from reactivemodel.graph import Graph
from reactivemodel.reactive_graph import (
    UNDEFINED,
    ReactiveGraph,
    digest,
    get_default_graph,
    is_defined,
)
from reactivemodel.reactive_function import ReactiveFunction
from reactivemodel.model import Property, ReactiveModel
from reactivemodel.action import action, transaction
from reactivemodel.errors import (
    AlreadyFinalizedError,
    IncompleteSpecError,
    InvalidReactionError,
    ModelError,
    ModelFinalizedError,
    PropertyNameError,
    ReactiveModelError,
    UnknownPropertyError,
)
# reactivemodel.textual is opt-in: import it explicitly

__all__ = [
    "Graph",
    "ReactiveGraph",
    "ReactiveFunction",
    "ReactiveModel",
    "Property",
    "UNDEFINED",
    "is_defined",
    "digest",
    "get_default_graph",
    "action",
    "transaction",
    "ReactiveModelError",
    "IncompleteSpecError",
    "InvalidReactionError",
    "ModelError",
    "AlreadyFinalizedError",
    "ModelFinalizedError",
    "UnknownPropertyError",
    "PropertyNameError",
]
