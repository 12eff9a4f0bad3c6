"""Template evaluation result types."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from lnr.models import CreatedIssue


class EntityStatus(str, Enum):
    """Creation status of a single issue."""

    PENDING = "pending"
    CREATED = "created"
    FAILED = "failed"
    SKIPPED = "skipped"


class BuildOutcome(str, Enum):
    """Overall result of building one template's hierarchy."""

    SUCCESS = "success"
    PARTIAL = "partial"
    FAILURE = "failure"


@dataclass
class EntityResult:
    """Result from creating one issue of a hierarchy."""

    title: str
    description: str | None = None
    status: EntityStatus = EntityStatus.PENDING
    issue: CreatedIssue | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.status == EntityStatus.CREATED

    @property
    def failed(self) -> bool:
        return self.status == EntityStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured output."""
        return {
            "title": self.title,
            "status": self.status.value,
            "identifier": self.issue.key if self.issue else None,
            "url": self.issue.url if self.issue else None,
            "error": self.error,
        }


@dataclass
class CreationReport:
    """Parent and per-child results for one template, in document order."""

    source: str | None
    parent: EntityResult
    children: list[EntityResult] = field(default_factory=list)

    @property
    def outcome(self) -> BuildOutcome:
        if self.parent.status == EntityStatus.FAILED:
            return BuildOutcome.FAILURE
        if any(child.failed for child in self.children):
            return BuildOutcome.PARTIAL
        return BuildOutcome.SUCCESS

    @property
    def entities(self) -> list[EntityResult]:
        return [self.parent, *self.children]

    @property
    def created_count(self) -> int:
        """Count of issues actually created."""
        return sum(1 for e in self.entities if e.succeeded)

    @property
    def failed_count(self) -> int:
        """Count of issues whose creation failed."""
        return sum(1 for e in self.entities if e.failed)

    @property
    def failures(self) -> list[EntityResult]:
        return [e for e in self.entities if e.failed]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for structured output."""
        return {
            "source": self.source,
            "outcome": self.outcome.value,
            "parent": self.parent.to_dict(),
            "children": [c.to_dict() for c in self.children],
        }


@dataclass
class FileError:
    """A template file that could not be processed at all."""

    path: str
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"path": self.path, "error": self.error}


@dataclass
class EvaluationSummary:
    """Aggregated result of evaluating a file or directory."""

    reports: list[CreationReport] = field(default_factory=list)
    file_errors: list[FileError] = field(default_factory=list)

    @property
    def created_count(self) -> int:
        return sum(r.created_count for r in self.reports)

    @property
    def failed_count(self) -> int:
        """Failed issues plus files that could not be processed."""
        return sum(r.failed_count for r in self.reports) + len(self.file_errors)

    @property
    def success(self) -> bool:
        return self.failed_count == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "created": self.created_count,
            "failed": self.failed_count,
            "reports": [r.to_dict() for r in self.reports],
            "file_errors": [e.to_dict() for e in self.file_errors],
        }
