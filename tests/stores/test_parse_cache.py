from __future__ import annotations

import pytest

from compdoc.stores import ParseCache


def test_parses_each_key_once() -> None:
    cache = ParseCache()
    calls = []

    def parse() -> str:
        calls.append(1)
        return "parsed"

    assert cache.get_or_parse("ts-module", "/lib/a.ts", parse) == "parsed"
    assert cache.get_or_parse("ts-module", "/lib/a.ts", parse) == "parsed"

    assert len(calls) == 1
    assert (cache.hits, cache.misses) == (1, 1)
    assert len(cache) == 1


def test_kinds_are_cached_separately() -> None:
    cache = ParseCache()
    cache.get_or_parse("ts-module", "/lib/a.vue", lambda: 1)
    cache.get_or_parse("sfc-template", "/lib/a.vue", lambda: 2)
    assert len(cache) == 2
    assert cache.get_or_parse("sfc-template", "/lib/a.vue", lambda: 3) == 2


def test_failed_parse_is_not_cached() -> None:
    cache = ParseCache()

    def explode() -> None:
        raise ValueError("bad")

    with pytest.raises(ValueError):
        cache.get_or_parse("ts-module", "x", explode)
    assert len(cache) == 0
    assert cache.get_or_parse("ts-module", "x", lambda: "ok") == "ok"
