from __future__ import annotations

import logging

import pytest

from es_exporter.config.env_adapter import get_bool, get_str
from es_exporter.config.settings import ExporterSettings, build_settings, get_settings
from es_exporter.metrics.groups import MetricGroup, load_group_filters, parse_group_filters
from es_exporter.utils.exceptions import ConfigError


def test_defaults():
    s = build_settings()
    assert s == ExporterSettings()
    assert s.indices_enabled and s.cluster_settings_enabled
    assert s.metric_prefix == "es_"
    assert s.runtime_collectors is False
    assert s.log_level == "INFO"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("ES_EXPORTER_INDICES", "false")
    monkeypatch.setenv("ES_EXPORTER_CLUSTER_SETTINGS", "0")
    monkeypatch.setenv("ES_EXPORTER_METRIC_PREFIX", "elastic_")
    monkeypatch.setenv("ES_EXPORTER_RUNTIME_COLLECTORS", "yes")
    monkeypatch.setenv("ES_EXPORTER_LOG_LEVEL", "debug")
    s = build_settings()
    assert s.indices_enabled is False
    assert s.cluster_settings_enabled is False
    assert s.metric_prefix == "elastic_"
    assert s.runtime_collectors is True
    assert s.log_level == "DEBUG"


def test_empty_prefix_allowed(monkeypatch):
    monkeypatch.setenv("ES_EXPORTER_METRIC_PREFIX", "")
    assert build_settings().metric_prefix == ""


@pytest.mark.parametrize("var,val", [("ES_EXPORTER_METRIC_PREFIX", "9bad-"), ("ES_EXPORTER_LOG_LEVEL", "loud")])
def test_invalid_values_rejected(monkeypatch, var, val):
    monkeypatch.setenv(var, val)
    with pytest.raises(ConfigError):
        build_settings()


def test_get_settings_caches_until_refresh(monkeypatch):
    first = get_settings()
    monkeypatch.setenv("ES_EXPORTER_INDICES", "false")
    assert get_settings() is first
    assert get_settings(refresh=True).indices_enabled is False


def test_with_overrides_validates():
    s = ExporterSettings().with_overrides(indices_enabled=False)
    assert s.indices_enabled is False
    with pytest.raises(ConfigError):
        ExporterSettings().with_overrides(metric_prefix="has space")


def test_get_bool_semantics(monkeypatch, caplog):
    monkeypatch.setenv("ES_EXPORTER_FLAG", "On")
    assert get_bool("ES_EXPORTER_FLAG") is True
    monkeypatch.setenv("ES_EXPORTER_FLAG", "  ")
    assert get_bool("ES_EXPORTER_FLAG", True) is True
    monkeypatch.setenv("ES_EXPORTER_FLAG", "perhaps")
    with caplog.at_level(logging.WARNING):
        assert get_bool("ES_EXPORTER_FLAG", False) is False
    assert "not a boolean" in caplog.text
    assert get_str("ES_EXPORTER_UNSET", "fallback") == "fallback"


def test_group_filters(monkeypatch):
    f = parse_group_filters(enabled_raw="jvm, fs", disabled_raw="fs")
    assert f.allowed(MetricGroup.JVM)
    assert not f.allowed(MetricGroup.FS)
    assert not f.allowed(MetricGroup.OS)
    assert f.allowed(MetricGroup.CLUSTER)

    monkeypatch.setenv("ES_EXPORTER_DISABLE_METRIC_GROUPS", "node,threadpool")
    loaded = load_group_filters()
    assert loaded.allowed("node")
    assert not loaded.allowed("threadpool")
    assert loaded.enabled is None


def test_unknown_groups_warn(monkeypatch, caplog):
    monkeypatch.setenv("ES_EXPORTER_ENABLE_METRIC_GROUPS", "jvm,bogus")
    with caplog.at_level(logging.WARNING):
        s = build_settings()
    assert "bogus" in caplog.text
    assert s.group_filters.unknown() == {"bogus"}
