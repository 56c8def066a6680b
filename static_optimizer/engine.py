"""
Rule evaluation engine.

evaluate() runs the four checker groups in fixed order and concatenates
their issues: SEO, Accessibility, Structure, Performance. Within a group the
rule order is kept. The engine holds no state between calls; the caller owns
the Document and gets a fresh list back every time.
"""

from typing import Callable, Optional, Union

from .checks import check_accessibility, check_performance, check_seo, check_structure
from .document import Document
from .schemas import Category, Issue
from .logger import get_module_logger

logger = get_module_logger("engine")

Checker = Callable[[Document], list[Issue]]

CHECK_GROUPS: tuple[tuple[Category, Checker], ...] = (
    (Category.SEO, check_seo),
    (Category.ACCESSIBILITY, check_accessibility),
    (Category.STRUCTURE, check_structure),
    (Category.PERFORMANCE, check_performance),
)


def evaluate(document: Document) -> list[Issue]:
    """Run every checker group on a parsed document and return the ordered issues."""
    issues = []
    for category, checker in CHECK_GROUPS:
        found = checker(document)
        logger.debug(f"{category.value}: {len(found)} issue(s)")
        issues.extend(found)
    return issues


def evaluate_html(markup: Union[str, bytes], parser: Optional[str] = None) -> list[Issue]:
    """Convenience function: parse markup, then evaluate it. Raises ParseError."""
    return evaluate(Document.parse(markup, parser=parser))
