"""
Static Optimizer

A rule-based checker for static HTML pages.
- Document: parse markup into a read-only, queryable tree
- Engine: run the SEO, Accessibility, Structure and Performance checks
- Orchestrator: paced audit timeline with progress reporting

Public API surface:
  Engine         : evaluate, evaluate_html, CHECK_GROUPS
  Checker groups : check_seo, check_accessibility, check_structure, check_performance
  Orchestration  : StaticOptimizer, audit_html, audit_html_file
  Data models    : Issue, Category, Severity, AuditReport, StepStatus
  Rendering      : render_text, render_json
  Error types    : OptimizerError, ParseError, ConfigError
"""

# --- Document adapter and rule engine ---
from .document import Document
from .engine import evaluate, evaluate_html, CHECK_GROUPS
from .checks import check_seo, check_accessibility, check_structure, check_performance

# --- Orchestration ---
from .main import StaticOptimizer, audit_html, audit_html_file

# --- Data models ---
from .schemas import Issue, Category, Severity, AuditReport, StepStatus, CATEGORY_ORDER

# --- Rendering ---
from .report import render_text, render_json

# --- Exceptions (callers should catch ParseError) ---
from .exceptions import OptimizerError, ParseError, ConfigError

__version__ = "0.1.0"
__all__ = [
    "Document",
    "evaluate",
    "evaluate_html",
    "CHECK_GROUPS",
    "check_seo",
    "check_accessibility",
    "check_structure",
    "check_performance",
    "StaticOptimizer",
    "audit_html",
    "audit_html_file",
    "Issue",
    "Category",
    "Severity",
    "AuditReport",
    "StepStatus",
    "CATEGORY_ORDER",
    "render_text",
    "render_json",
    "OptimizerError",
    "ParseError",
    "ConfigError",
]
