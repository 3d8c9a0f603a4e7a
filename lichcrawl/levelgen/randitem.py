from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def rand_front_loaded(items: Sequence[T], rng: random.Random) -> T:
    """Pick an item biased toward the front of ``items``.

    Takes the smaller of two independent uniform indices, so index ``i`` of
    ``n`` is chosen with probability ``(2 * (n - i) - 1) / n**2``. The last
    entry stays reachable.
    """
    n = len(items)
    if n == 0:
        raise ValueError("cannot pick from an empty palette")
    return items[min(rng.randrange(n), rng.randrange(n))]


__all__ = ["rand_front_loaded"]
