import random
from collections import Counter

import pytest

from lichcrawl.levelgen.randitem import rand_front_loaded


def test_empty_palette_raises():
    with pytest.raises(ValueError):
        rand_front_loaded([], random.Random(0))


def test_single_entry_always_chosen():
    rng = random.Random(0)
    assert {rand_front_loaded(("only",), rng) for _ in range(20)} == {"only"}


def test_front_entries_dominate_but_tail_is_reachable():
    rng = random.Random(2024)
    counts = Counter(rand_front_loaded("abcd", rng) for _ in range(8000))
    assert set(counts) == set("abcd")
    assert counts["a"] > counts["b"] > counts["c"] > counts["d"]
    # P(a) = 7/16, P(d) = 1/16
    assert 0.38 < counts["a"] / 8000 < 0.50
    assert 0.03 < counts["d"] / 8000 < 0.10
