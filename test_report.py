"""Tests for text and JSON rendering."""

import json

from static_optimizer.main import audit_html
from static_optimizer.report import CLEAN_MESSAGE, render_json, render_text
from static_optimizer.schemas import AuditReport


def test_clean_report_text(clean_page):
    assert render_text(audit_html(clean_page)) == CLEAN_MESSAGE


def test_clean_report_with_source():
    text = render_text(AuditReport(source="index.html"))
    assert text.splitlines() == ["== index.html ==", CLEAN_MESSAGE]


def test_text_sections_follow_category_order():
    report = audit_html("<html><head></head><body></body></html>")
    lines = render_text(report).splitlines()
    headers = [line for line in lines if line.endswith(")") and not line.startswith(" ")]
    assert headers == ["SEO (3)", "Accessibility (1)", "Structure (1)"]


def test_text_issue_card():
    report = audit_html("<html><head></head><body></body></html>")
    text = render_text(report)
    assert (
        "[ERROR] Missing H1 Heading\n"
        "    No <h1> tag found on the page.\n"
        "    Fix: Add exactly one <h1> tag to describe the main topic of the page."
    ) in text
    assert "[INFO] No Semantic Landmarks Found" in text


def test_json_round_trips_to_the_same_report():
    report = audit_html("<p>bare</p>")
    data = json.loads(render_json(report))
    assert data["issues"][0] == {
        "category": "SEO",
        "severity": "error",
        "title": "Missing <title> tag",
        "description": "The document does not have a <title> element.",
        "suggestion": "Add a <title> element to the <head> section.",
    }
    assert AuditReport.model_validate(data) == report
