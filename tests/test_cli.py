"""CLI render command and logging setup.

Scenarios:
  * payload goes to stdout, or to --output with nothing on stdout
  * --summary prints a rich table to stderr
  * --no-indices gates the per-index sub-pass
  * unreadable snapshots and invalid settings exit 1 with an error log
  * JSON log lines when ES_EXPORTER_JSON_LOGS is set
"""
from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from es_exporter.cli import main
from es_exporter.utils.logging_utils import JsonFormatter, setup_logging


@pytest.fixture
def snapshot_file(tmp_path, document):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_render_to_stdout(snapshot_file, capsys):
    assert main(["render", str(snapshot_file)]) == 0
    out = capsys.readouterr().out
    assert 'es_cluster_status{cluster="prod"} 1.0' in out
    assert 'es_index_doc_number{cluster="prod",index="logs",context="total"} 100.0' in out


def test_render_to_file(snapshot_file, tmp_path, capsys):
    target = tmp_path / "out" / "metrics.prom"
    target.parent.mkdir()
    assert main(["render", str(snapshot_file), "--output", str(target)]) == 0
    assert capsys.readouterr().out == ""
    assert "es_jvm_uptime_seconds" in target.read_text(encoding="utf-8")


def test_render_openmetrics(snapshot_file, capsys):
    assert main(["render", str(snapshot_file), "--accept", "application/openmetrics-text"]) == 0
    assert capsys.readouterr().out.endswith("# EOF\n")


def test_summary_table_on_stderr(snapshot_file, capsys):
    assert main(["render", str(snapshot_file), "--summary"]) == 0
    captured = capsys.readouterr()
    assert "Family" in captured.err
    assert "Samples" in captured.err
    assert "es_cluster_status" in captured.out


def test_no_indices_flag(snapshot_file, capsys):
    assert main(["render", str(snapshot_file), "--no-indices"]) == 0
    out = capsys.readouterr().out
    assert "es_index_doc_number{" not in out
    assert "es_indices_doc_number{" in out


def test_missing_snapshot_exits_nonzero(tmp_path, capsys):
    assert main(["render", str(tmp_path / "absent.json")]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "render failed" in captured.err


def test_invalid_env_setting_exits_nonzero(snapshot_file, monkeypatch, capsys):
    monkeypatch.setenv("ES_EXPORTER_METRIC_PREFIX", "1-bad")
    assert main(["render", str(snapshot_file)]) == 1
    assert capsys.readouterr().out == ""


def test_json_logs(monkeypatch):
    monkeypatch.setenv("ES_EXPORTER_JSON_LOGS", "1")
    stream = StringIO()
    root = setup_logging("DEBUG", stream=stream)
    assert isinstance(root.handlers[0].formatter, JsonFormatter)
    logging.getLogger("es_exporter.test").info("hello %s", "world")
    line = json.loads(stream.getvalue().splitlines()[-1])
    assert line["msg"] == "hello world"
    assert line["level"] == "INFO"
    assert line["logger"] == "es_exporter.test"


def test_log_file_handler(tmp_path):
    log_file = tmp_path / "logs" / "exporter.log"
    root = setup_logging("INFO", log_file=str(log_file), stream=StringIO())
    logging.getLogger("es_exporter.test").warning("written")
    for h in root.handlers:
        h.flush()
    assert "written" in log_file.read_text(encoding="utf-8")
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
