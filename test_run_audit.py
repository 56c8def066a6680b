"""Tests for the run_audit command-line script."""

import io
import json

import pytest

import run_audit


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    for name in ("OPTIMIZER_STEP_DELAY", "OPTIMIZER_PARSER", "OPTIMIZER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_page(tmp_path):
    def _write(name, html):
        path = tmp_path / name
        path.write_text(html, encoding="utf-8")
        return str(path)
    return _write


def test_text_report_for_clean_page(write_page, clean_page, capsys):
    path = write_page("index.html", clean_page)
    assert run_audit.main([path]) == run_audit.EXIT_OK
    out = capsys.readouterr().out
    assert "== index.html ==" in out
    assert "No significant issues found" in out


def test_json_report(write_page, capsys):
    path = write_page("bare.html", "<html><head></head><body></body></html>")
    assert run_audit.main([path, "--format", "json"]) == run_audit.EXIT_OK
    results = json.loads(capsys.readouterr().out)
    assert results[0]["status"] == "success"
    assert [i["category"] for i in results[0]["report"]["issues"]] == [
        "SEO", "SEO", "SEO", "Accessibility", "Structure"
    ]


@pytest.mark.parametrize("fail_on, expected", [
    ("error", run_audit.EXIT_ISSUES),
    ("warning", run_audit.EXIT_ISSUES),
    ("info", run_audit.EXIT_ISSUES),
])
def test_fail_on_severity(write_page, fail_on, expected):
    path = write_page("bare.html", "<html><head></head><body></body></html>")
    assert run_audit.main([path, "--fail-on", fail_on]) == expected


def test_fail_on_ignores_less_severe_issues(write_page, make_page):
    # Only an info-level landmark issue
    path = write_page("plain.html", make_page(body="<h1>Title</h1><p>Text</p>"))
    assert run_audit.main([path, "--fail-on", "warning"]) == run_audit.EXIT_OK
    assert run_audit.main([path, "--fail-on", "info"]) == run_audit.EXIT_ISSUES


def test_unparseable_input_is_reported_per_file(write_page, clean_page, capsys):
    good = write_page("good.html", clean_page)
    empty = write_page("empty.html", "   ")
    code = run_audit.main([empty, good, "--format", "json"])
    assert code == run_audit.EXIT_ERROR
    results = json.loads(capsys.readouterr().out)
    assert results[0]["status"] == "error"
    assert results[0]["error"] == "ParseError"
    assert results[0]["message"] == "No HTML provided"
    assert results[1]["status"] == "success"


def test_missing_file(tmp_path, capsys):
    code = run_audit.main([str(tmp_path / "nope.html")])
    assert code == run_audit.EXIT_ERROR
    assert "Error:" in capsys.readouterr().out


def test_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.TextIOWrapper(io.BytesIO(b"<p>from stdin</p>")))
    assert run_audit.main(["-"]) == run_audit.EXIT_OK
    assert "== <stdin> ==" in capsys.readouterr().out


def test_progress_goes_to_stderr(write_page, clean_page, capsys):
    path = write_page("index.html", clean_page)
    run_audit.main([path, "--progress"])
    captured = capsys.readouterr()
    assert "✓ Compiling Report..." in captured.err
    assert "Compiling Report" not in captured.out


def test_output_file(write_page, clean_page, tmp_path):
    path = write_page("index.html", clean_page)
    target = tmp_path / "report.txt"
    run_audit.main([path, "-o", str(target)])
    assert "No significant issues found" in target.read_text()


def test_invalid_delay_env(write_page, clean_page, monkeypatch):
    monkeypatch.setenv("OPTIMIZER_STEP_DELAY", "later")
    path = write_page("index.html", clean_page)
    assert run_audit.main([path]) == run_audit.EXIT_ERROR


def test_invalid_parser_env_is_a_configuration_error(write_page, clean_page, monkeypatch, capsys):
    monkeypatch.setenv("OPTIMIZER_PARSER", "bogus")
    path = write_page("index.html", clean_page)
    assert run_audit.main([path]) == run_audit.EXIT_ERROR
    captured = capsys.readouterr()
    assert "Configuration error: OPTIMIZER_PARSER" in captured.err
    assert "Auditing:" not in captured.err
