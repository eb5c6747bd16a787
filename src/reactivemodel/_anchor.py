"""Node identifier anchor — one id space for every graph in the process.

Property nodes and function nodes draw from the same counter, regardless
of which ReactiveGraph they belong to. Ids are therefore unique across the
whole process and sort in creation order.
"""

import itertools

# next() on itertools.count is atomic under the GIL
_id_counter = itertools.count()


def new_id() -> int:
    return next(_id_counter)
