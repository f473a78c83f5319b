from __future__ import annotations

import pytest

from es_exporter.metrics.labels import (
    LabelScope,
    Topology,
    compose_label_names,
    compose_label_values,
    compose_labels,
    scope_label_names,
    scope_label_values,
)
from es_exporter.utils.exceptions import LabelArityError

TOPO = Topology("prod", "node-1", "n1abc")


def test_scope_label_names_per_scope():
    assert scope_label_names(LabelScope.NONE) == ()
    assert scope_label_names(LabelScope.CLUSTER) == ("cluster",)
    assert scope_label_names(LabelScope.NODE) == ("cluster", "node", "nodeid")


def test_scope_label_values_follow_topology():
    assert scope_label_values(LabelScope.NONE, TOPO) == ()
    assert scope_label_values(LabelScope.CLUSTER, TOPO) == ("prod",)
    assert scope_label_values(LabelScope.NODE, TOPO) == ("prod", "node-1", "n1abc")


def test_compose_prepends_topology_and_stringifies():
    assert compose_label_names(LabelScope.CLUSTER, ["type", "index"]) == ("cluster", "type", "index")
    assert compose_label_values(LabelScope.NODE, TOPO, [3]) == ("prod", "node-1", "n1abc", "3")


def test_compose_labels_rejects_mismatched_lengths():
    names, values = compose_labels(LabelScope.CLUSTER, ["index"], ["logs"], TOPO)
    assert names == ("cluster", "index")
    assert values == ("prod", "logs")
    with pytest.raises(LabelArityError):
        compose_labels(LabelScope.NODE, ["name", "type"], ["search"], TOPO)
