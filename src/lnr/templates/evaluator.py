"""Evaluates a template file or a directory of templates."""

from pathlib import Path
from typing import Any, Callable

from lnr.core.exceptions import ParseError, RenderError
from lnr.core.logging import get_logger
from lnr.templates.builder import HierarchyBuilder
from lnr.templates.discovery import TemplateDiscovery, discover
from lnr.templates.metadata import IssueMetadata, MetadataResolver
from lnr.templates.parser import load_template
from lnr.templates.results import CreationReport, EvaluationSummary, FileError

logger = get_logger(__name__)

OutputHandler = Callable[[str, Any], None]


class TemplateEvaluator:
    """Run discovery, parsing and hierarchy building for a path.

    Files are processed one at a time in discovery order. A file that cannot
    be parsed or rendered is recorded and skipped; everything else that goes
    wrong outside a single issue creation stops the run.
    """

    def __init__(
        self,
        builder: HierarchyBuilder,
        metadata: IssueMetadata | MetadataResolver,
        output_handler: OutputHandler | None = None,
    ):
        """Initialize the evaluator.

        Args:
            builder: Builder that creates each hierarchy
            metadata: Metadata for every issue, or a resolver asked on first use
            output_handler: Function receiving ``(event, payload)`` as files are
                processed; events are ``processing``, ``report`` and ``error``
        """
        self._builder = builder
        self._metadata = metadata
        self._output_handler = output_handler

    def run(self, path: str | Path | TemplateDiscovery) -> EvaluationSummary:
        """Evaluate every template found at ``path``.

        ``path`` may also be a discovery the caller already checked.

        Raises:
            NotFoundError: If ``path`` does not exist
            PromptCancelledError: If the user aborts metadata selection
        """
        templates = path if isinstance(path, TemplateDiscovery) else discover(path)
        summary = EvaluationSummary()

        for template_path in templates:
            self._emit("processing", template_path)
            try:
                report = self.evaluate_file(template_path)
            except (ParseError, RenderError) as e:
                logger.warning("Skipping template", path=template_path, error=e)
                error = FileError(path=str(template_path), error=e.message)
                summary.file_errors.append(error)
                self._emit("error", error)
                continue

            summary.reports.append(report)
            self._emit("report", report)

        logger.info(
            "Evaluation finished",
            files=len(summary.reports) + len(summary.file_errors),
            created=summary.created_count,
            failed=summary.failed_count,
        )
        return summary

    def evaluate_file(self, path: str | Path) -> CreationReport:
        """Parse one template and build its hierarchy."""
        document = load_template(path)
        return self._builder.build(document, self._metadata, source=path)

    def _emit(self, event: str, payload: Any) -> None:
        if self._output_handler:
            self._output_handler(event, payload)
