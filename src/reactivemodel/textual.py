"""Textual integration for reactivemodel. Opt-in — requires textual.

Derivations that read from or write to widgets go through react() here
instead of model.react(). The guard, the NoMatches handling and the
thread marshalling all live in this module, not at callsites.
"""

from __future__ import annotations

import functools
import logging
import threading
from contextlib import contextmanager
from typing import Any, Callable, Mapping, Sequence

from textual.css.query import NoMatches

from reactivemodel.model import ReactiveModel
from reactivemodel.reactive_graph import UNDEFINED

logger = logging.getLogger("reactivemodel.textual")

# Module-owned pause state, keyed by id(app) so multiple apps work in tests.
_paused_apps: set[int] = set()


@contextmanager
def pause(app):
    """Suspend guarded derivations during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """Is the widget tree in a queryable state?"""
    return app.is_running and id(app) not in _paused_apps


def react(app, model: ReactiveModel, options: Mapping[str, Sequence[Any]]) -> ReactiveModel:
    """model.react() whose callbacks safely touch Textual widgets.

    While the app isn't safe, or when a widget query raises NoMatches, a
    callback yields UNDEFINED, which holds back everything downstream of
    its output until a later digest succeeds. Digests running off the
    thread that called react() reach the app through call_from_thread.
    """
    main = threading.get_ident()

    def guard(callback: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(callback)
        def guarded(*values):
            if not is_safe(app):
                return UNDEFINED
            try:
                if threading.get_ident() != main:
                    return app.call_from_thread(callback, *values)
                return callback(*values)
            except NoMatches as exc:
                logger.debug("Skipped %s: %s", getattr(callback, "__name__", callback), exc)
                return UNDEFINED

        return guarded

    guarded_options = {}
    for out_property, entry in options.items():
        entry = list(entry)
        if entry and callable(entry[-1]):
            entry[-1] = guard(entry[-1])
        guarded_options[out_property] = entry

    return model.react(guarded_options)
