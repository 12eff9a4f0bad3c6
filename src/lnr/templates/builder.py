"""Creates a parent issue and its children from a template document."""

from dataclasses import dataclass
from pathlib import Path

from lnr.core.exceptions import RemoteError, RenderError
from lnr.core.logging import get_logger
from lnr.models import CreatedIssue
from lnr.templates.metadata import IssueGateway, IssueMetadata, MetadataResolver
from lnr.templates.renderer import VariableRenderer
from lnr.templates.results import CreationReport, EntityResult, EntityStatus
from lnr.templates.schema import IssueSpec, TemplateDocument

logger = get_logger(__name__)


@dataclass(frozen=True)
class RenderedIssue:
    """An issue spec after variable substitution."""

    title: str
    description: str | None


class HierarchyBuilder:
    """Builds issue hierarchies through an :class:`IssueGateway`.

    The parent is created first. Children follow one at a time, in document
    order, each linked to the parent. A failed parent stops the document; a
    failed child is recorded and the remaining children are still attempted.
    Nothing is retried or rolled back.
    """

    def __init__(
        self,
        gateway: IssueGateway,
        renderer: VariableRenderer | None = None,
        dry_run: bool = False,
    ):
        self._gateway = gateway
        self._renderer = renderer or VariableRenderer()
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def build(
        self,
        document: TemplateDocument,
        metadata: IssueMetadata | MetadataResolver,
        source: str | Path | None = None,
    ) -> CreationReport:
        """Create the hierarchy described by ``document``.

        Args:
            document: Parsed template
            metadata: Resolved metadata, or a resolver consulted on first use
            source: Template path, for reporting

        Returns:
            Report with the parent result and each child result in order

        Raises:
            RenderError: If any title or description cannot be rendered;
                raised before any remote call is made
        """
        source_name = str(source) if source is not None else None
        log = logger.bind(source=source_name or "<document>")

        parent_spec = self._render(document.parent, document.variables, "parent")
        child_specs = [
            self._render(child, document.variables, f"child {i}")
            for i, child in enumerate(document.children, start=1)
        ]

        if isinstance(metadata, MetadataResolver):
            metadata = metadata.resolve()

        report = CreationReport(
            source=source_name,
            parent=EntityResult(title=parent_spec.title, description=parent_spec.description),
            children=[EntityResult(title=c.title, description=c.description) for c in child_specs],
        )

        log.debug("Creating parent", title=parent_spec.title)
        parent = self._create(report.parent, metadata, parent_id=None)
        if parent is None:
            log.warning("Parent creation failed, skipping children", error=report.parent.error)
            return report

        for result in report.children:
            log.debug("Creating child", title=result.title, parent=parent.key)
            self._create(result, metadata, parent_id=parent.id)

        log.info(
            "Hierarchy built",
            outcome=report.outcome.value,
            created=report.created_count,
            failed=report.failed_count,
        )
        return report

    def _render(self, spec: IssueSpec, variables: dict[str, str], role: str) -> RenderedIssue:
        try:
            title = self._renderer.render(spec.title, variables).strip()
            description = self._renderer.render_optional(spec.description, variables)
        except RenderError as e:
            raise RenderError(f"{role} '{spec.title}': {e.message}", key=e.key)

        if not title:
            raise RenderError(f"{role} title is empty after rendering")
        return RenderedIssue(title=title, description=description)

    def _create(
        self,
        result: EntityResult,
        metadata: IssueMetadata,
        parent_id: str | None,
    ) -> CreatedIssue | None:
        """Create one issue and record the outcome on ``result``."""
        if self._dry_run:
            result.status = EntityStatus.SKIPPED
            return CreatedIssue(id=f"dry-run:{result.title}", url="")

        try:
            issue = self._gateway.create_issue(
                team_id=metadata.team.id,
                title=result.title,
                description=result.description,
                project_id=metadata.project.id if metadata.project else None,
                state_id=metadata.state.id if metadata.state else None,
                priority=metadata.priority,
                assignee_id=metadata.assignee_id,
                parent_id=parent_id,
            )
        except RemoteError as e:
            result.status = EntityStatus.FAILED
            result.error = str(e)
            return None

        result.status = EntityStatus.CREATED
        result.issue = issue
        return issue
