"""
Main orchestrator for the static optimizer.

Runs one audit as a timeline of steps:
  Parse → SEO → Accessibility → Structure → Performance → Compile report

Pacing (step_delay) and progress reporting live only here. The rule engine
is called one group at a time but never sees any of it, so the same issues
come out whether the run is paced for a UI or not.
"""

import logging
import os
import time
from pathlib import Path
from typing import Callable, Optional, Union

from .document import Document, PARSER_CHAIN
from .engine import CHECK_GROUPS
from .schemas import AuditReport, Category, StepStatus
from .exceptions import ConfigError
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")

ProgressCallback = Callable[[str, StepStatus], None]

PARSE_STEP = "Parsing HTML Structure..."
COMPILE_STEP = "Compiling Report..."
GROUP_STEPS = {
    Category.SEO: "Running SEO Analysis...",
    Category.ACCESSIBILITY: "Checking Accessibility...",
    Category.STRUCTURE: "Reviewing HTML Structure...",
    Category.PERFORMANCE: "Scanning for Performance...",
}


def _step_delay_from_env() -> float:
    raw = os.getenv("OPTIMIZER_STEP_DELAY", "0")
    try:
        delay = float(raw)
    except ValueError:
        raise ConfigError(
            f"OPTIMIZER_STEP_DELAY must be a number of seconds, got '{raw}'",
            setting="OPTIMIZER_STEP_DELAY"
        )
    return delay


class StaticOptimizer:
    """
    Audit orchestrator.

    Coordinates the timeline:
    1. Parse markup into a Document (the only step that can fail)
    2. Run each checker group, reporting progress around it
    3. Compile the ordered issues into an AuditReport
    """

    def __init__(
        self,
        parser: Optional[str] = None,
        step_delay: Optional[float] = None,
        progress: Optional[ProgressCallback] = None,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        if parser:
            setting = "parser"
        else:
            parser = os.getenv("OPTIMIZER_PARSER") or None
            setting = "OPTIMIZER_PARSER"
        if parser is not None and parser not in PARSER_CHAIN:
            raise ConfigError(
                f"{setting} must be one of {', '.join(PARSER_CHAIN)}, got '{parser}'",
                setting=setting
            )
        self.parser = parser

        self.step_delay = _step_delay_from_env() if step_delay is None else step_delay
        if self.step_delay < 0:
            raise ConfigError(
                f"step_delay must not be negative, got {self.step_delay}",
                setting="step_delay"
            )
        self.progress = progress

    def _begin(self, label: str):
        logger.info(label)
        if self.progress:
            self.progress(label, StepStatus.ACTIVE)
        if self.step_delay:
            time.sleep(self.step_delay)

    def _finish(self, label: str):
        if self.progress:
            self.progress(label, StepStatus.COMPLETED)

    def audit(self, markup: Union[str, bytes], source_name: Optional[str] = None) -> AuditReport:
        """
        Audit markup and return the report.

        Args:
            markup: HTML text, or raw bytes decoded with their declared charset
            source_name: Label for the report (e.g. file name)

        Returns:
            AuditReport with issues in group order

        Raises:
            ParseError: markup could not be parsed; no group was run
        """
        # A failed parse leaves the step active, like an aborted UI timeline
        self._begin(PARSE_STEP)
        document = Document.parse(markup, parser=self.parser)
        self._finish(PARSE_STEP)

        issues = []
        for category, checker in CHECK_GROUPS:
            label = GROUP_STEPS[category]
            self._begin(label)
            issues.extend(checker(document))
            self._finish(label)

        self._begin(COMPILE_STEP)
        report = AuditReport(source=source_name, issues=issues, warnings=list(document.warnings))
        self._finish(COMPILE_STEP)

        logger.info(f"Complete: {len(report.issues)} issue(s) in {source_name or 'input'}")
        return report

    def audit_file(self, file_path: Union[str, Path]) -> AuditReport:
        """Audit an HTML file, decoding it with the charset its markup declares."""
        file_path = Path(file_path)
        return self.audit(file_path.read_bytes(), source_name=file_path.name)


def audit_html(markup: Union[str, bytes], parser: Optional[str] = None) -> AuditReport:
    """Convenience function to audit HTML without pacing."""
    return StaticOptimizer(parser=parser, step_delay=0).audit(markup)


def audit_html_file(file_path: Union[str, Path], parser: Optional[str] = None) -> AuditReport:
    """Convenience function to audit an HTML file without pacing."""
    return StaticOptimizer(parser=parser, step_delay=0).audit_file(file_path)


def log_level_from_env(default: int = logging.WARNING) -> int:
    """Resolve OPTIMIZER_LOG_LEVEL (a level name such as DEBUG) to a logging level."""
    name = os.getenv("OPTIMIZER_LOG_LEVEL")
    if not name:
        return default
    level = logging.getLevelName(name.upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown log level '{name}'", setting="OPTIMIZER_LOG_LEVEL")
    return level
