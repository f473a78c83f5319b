from __future__ import annotations

import pytest

from es_exporter.metrics.units import (
    as_flag,
    kilobytes_to_bytes,
    micros_to_seconds,
    millis_to_seconds,
    nanos_to_seconds,
    parse_number,
    percent_to_ratio,
    supported,
    total,
)
from es_exporter.stats.watermarks import (
    allocation_settings_from_cluster_settings,
    flatten_settings,
    merge_cluster_settings,
    parse_watermark,
)
from es_exporter.utils.exceptions import SnapshotError


def test_conversions_pass_none_through():
    for fn in (millis_to_seconds, micros_to_seconds, nanos_to_seconds, kilobytes_to_bytes, percent_to_ratio, as_flag):
        assert fn(None) is None


def test_conversions():
    assert millis_to_seconds(1500) == 1.5
    assert micros_to_seconds(100000) == 0.1
    assert nanos_to_seconds(2_000_000_000) == 2.0
    assert kilobytes_to_bytes(3) == 3072
    assert percent_to_ratio(72.5) == 0.725
    assert as_flag(True) == 1 and as_flag(False) == 0


def test_supported_drops_not_supported_marker():
    assert supported(-1) is None
    assert supported(-0.001) is None
    assert supported(None) is None
    assert supported(0) == 0
    assert supported(12.5) == 12.5


def test_parse_number_and_total():
    assert parse_number("9223372036854771712") == 9223372036854771712.0
    assert parse_number("max") is None
    assert total(1, 2) == 3
    assert total(1, None) is None


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("85%", (None, 85.0)),
        ("0.9", (None, 90.0)),
        ("500mb", (500 * 1024 ** 2, None)),
        ("1gb", (1024 ** 3, None)),
        (None, (None, None)),
    ],
)
def test_parse_watermark(raw, expected):
    assert parse_watermark(raw) == expected


def test_parse_watermark_rejects_garbage():
    with pytest.raises(SnapshotError):
        parse_watermark("lots")
    with pytest.raises(SnapshotError):
        parse_watermark("abc%")


def test_layers_override_defaults():
    doc = {
        "defaults": {"cluster.routing.allocation.disk.watermark.low": "85%"},
        "persistent": {"cluster": {"routing": {"allocation": {"disk": {"watermark": {"low": "80%"}}}}}},
        "transient": {"cluster.routing.allocation.disk.watermark.low": "75%"},
    }
    assert merge_cluster_settings(doc)["cluster.routing.allocation.disk.watermark.low"] == "75%"
    assert flatten_settings({"a": {"b": 1}}) == {"a.b": 1}


def test_allocation_settings_from_plain_settings():
    result = allocation_settings_from_cluster_settings({
        "cluster.routing.allocation.disk.threshold_enabled": "false",
        "cluster.routing.allocation.disk.watermark.low": "10gb",
        "cluster.routing.allocation.disk.watermark.high": "5gb",
    })
    assert result.threshold_enabled is False
    assert result.disk_low_in_bytes == 10 * 1024 ** 3
    assert result.disk_high_in_bytes == 5 * 1024 ** 3
    assert result.flood_stage_in_bytes is None
    assert result.disk_low_in_pct is None


def test_allocation_settings_rejects_bad_boolean():
    with pytest.raises(SnapshotError):
        allocation_settings_from_cluster_settings({"cluster.routing.allocation.disk.threshold_enabled": "maybe"})
