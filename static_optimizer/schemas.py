"""
Pydantic schemas shared by the rule engine, the orchestrator and the renderers.

Issue:        the single output record of every checker
AuditReport:  ordered issue list plus parse warnings, consumed by the renderers

Data flow:
  Document → checks (one group at a time) → list[Issue] → AuditReport → render_text / render_json
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Category(str, Enum):
    """Checker group that produced an issue."""
    SEO = "SEO"
    ACCESSIBILITY = "Accessibility"
    STRUCTURE = "Structure"
    PERFORMANCE = "Performance"


# Evaluation and presentation order of the groups
CATEGORY_ORDER = (
    Category.SEO,
    Category.ACCESSIBILITY,
    Category.STRUCTURE,
    Category.PERFORMANCE,
)


class Severity(str, Enum):
    """How serious an issue is. Never used for sorting."""
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


SEVERITY_RANK = {Severity.ERROR: 0, Severity.WARNING: 1, Severity.INFO: 2}


class StepStatus(str, Enum):
    """Progress timeline states reported by the orchestrator."""
    ACTIVE = "active"
    COMPLETED = "completed"


class Issue(BaseModel):
    """
    One diagnostic finding.

    Issues are document-level aggregates: they describe how many elements
    matched a rule, never which node did. Frozen so a finished result list
    can be shared and compared by value.
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    category: Category
    severity: Severity
    title: str = Field(min_length=1, description="Fixed label per rule")
    description: str = Field(min_length=1, description="Detail, may carry a measured count")
    suggestion: str = Field(min_length=1, description="Fixed remediation text per rule")


class AuditReport(BaseModel):
    """Result of one audit run, in evaluation order."""
    source: Optional[str] = None
    issues: list[Issue] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)  # Non-fatal notes from parsing

    @property
    def has_issues(self) -> bool:
        return bool(self.issues)

    def by_category(self) -> dict[Category, list[Issue]]:
        """Group issues by category, fixed category order, empty groups omitted."""
        grouped = {}
        for category in CATEGORY_ORDER:
            matching = [issue for issue in self.issues if issue.category == category]
            if matching:
                grouped[category] = matching
        return grouped

    def count(self, severity: Severity) -> int:
        return sum(1 for issue in self.issues if issue.severity == severity)

    def highest_severity(self) -> Optional[Severity]:
        """Most serious severity present, or None for a clean report."""
        if not self.issues:
            return None
        return min((issue.severity for issue in self.issues), key=SEVERITY_RANK.__getitem__)
