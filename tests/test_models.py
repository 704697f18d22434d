"""Tests for the triple and semantic value models."""
import dataclasses

import pytest

from ntriples_collection.models import SemanticValue, Triple


class TestTriple:
    def test_positional(self):
        t = Triple("http://s", "http://p", '"o"')
        assert t.subject == "http://s"
        assert t.predicate == "http://p"
        assert t.object == '"o"'

    def test_graph_dropped(self):
        t = Triple("http://s", "http://p", '"o"', graph="/only-for-quad")
        assert t == Triple("http://s", "http://p", '"o"')
        assert "graph" not in t.to_dict()
        assert [f.name for f in dataclasses.fields(t)] == ["subject", "predicate", "object"]

    def test_immutable(self):
        t = Triple("http://s", "http://p", '"o"')
        with pytest.raises(dataclasses.FrozenInstanceError):
            t.object = '"x"'

    def test_hashable(self):
        assert len({Triple("a", "b", "c"), Triple("a", "b", "c", graph="g")}) == 1

    def test_coerce_dict(self):
        t = Triple.coerce({"subject": "http://s", "predicate": "http://p", "object": '"o"', "graph": "g"})
        assert t == Triple("http://s", "http://p", '"o"')

    def test_coerce_triple(self):
        t = Triple("http://s", "http://p", '"o"')
        assert Triple.coerce(t) is t

    def test_coerce_missing_key(self):
        with pytest.raises(KeyError):
            Triple.coerce({"subject": "http://s", "predicate": "http://p"})


class TestSemanticValue:
    def test_defaults(self):
        sv = SemanticValue(value="http://o")
        assert sv.literal_value is None
        assert sv.literal_type is None
        assert sv.literal_language is None
