"""Template commands."""

from typing import Any

import click
from rich.markup import escape

from lnr.core.context import LnrContext, pass_context
from lnr.core.exceptions import LnrError
from lnr.core.output import OutputFormat
from lnr.models import Priority
from lnr.templates.builder import HierarchyBuilder
from lnr.templates.discovery import discover
from lnr.templates.evaluator import TemplateEvaluator
from lnr.templates.metadata import MetadataResolver
from lnr.templates.renderer import VariableRenderer
from lnr.templates.results import CreationReport, EntityResult, EntityStatus, FileError


@click.group()
@pass_context
def template(ctx: LnrContext) -> None:
    """Create issue hierarchies from TOML templates.

    \b
    A template holds one parent issue, its children and the variables
    substituted into their titles and descriptions:

    \b
        [variables]
        name = "Alfred"

    \b
        [parent]
        title = "Batcave"

    \b
        [[children]]
        title = "Find {{name}} a cave"
    """
    pass


@template.command("evaluate")
@click.option("-p", "--path", help="Path to a template file or a directory of templates")
@click.option("-e", "--team", help="Team name")
@click.option("-n", "--noproject", is_flag=True, help="Do not prompt for a project")
@click.option(
    "-r",
    "--priority",
    type=click.IntRange(1, 4),
    help="1 (Low), 2 (Normal), 3 (High), or 4 (Urgent)",
)
@click.option("-s", "--state", help="Workflow state, i.e. Backlog or Todo")
@click.option("--strict", is_flag=True, help="Fail a template that uses an undefined variable")
@pass_context
def evaluate(
    ctx: LnrContext,
    path: str | None,
    team: str | None,
    noproject: bool,
    priority: int | None,
    state: str | None,
    strict: bool,
) -> None:
    """Create issues from a TOML file, or every TOML file in a directory.

    Directories are searched recursively in alphabetical order. Cargo.toml
    and pyproject.toml are never treated as templates. Team, state, priority
    and project are asked for once and reused for every template.

    \b
    Examples:
        lnr template evaluate -p onboarding.toml
        lnr template evaluate -p templates/ -e Engineering -s Todo -r 2 -n
        lnr --dry-run template evaluate -p templates/ --strict
    """
    streaming = ctx.output_format == OutputFormat.TABLE

    try:
        if path is None:
            path = ctx.prompt.text("Enter path to TOML file or directory")
        templates = discover(path)

        resolver = MetadataResolver(
            ctx.linear,
            ctx.prompt,
            team=team,
            state=state,
            priority=Priority.from_flag(priority) if priority is not None else None,
            no_project=noproject,
        )
        builder = HierarchyBuilder(
            ctx.linear,
            renderer=VariableRenderer(strict=strict),
            dry_run=ctx.dry_run,
        )

        def output_handler(event: str, payload: Any) -> None:
            if not streaming:
                return
            if event == "processing":
                ctx.output.print(f"Processing {escape(str(payload))}")
            elif event == "report":
                _print_report(ctx, payload)
            elif event == "error":
                _print_file_error(ctx, payload)

        evaluator = TemplateEvaluator(builder, resolver, output_handler=output_handler)
        summary = evaluator.run(templates)

    except LnrError as e:
        ctx.output.print_error(str(e))
        raise click.Abort()

    if not streaming:
        ctx.output.print_data(summary.to_dict())
    elif ctx.dry_run:
        ctx.output.print_info(
            f"Dry run: {sum(len(r.entities) for r in summary.reports)} issues rendered, "
            f"{len(summary.file_errors)} templates failed"
        )
    elif summary.success:
        ctx.output.print_success(f"Done - {summary.created_count} issues created")
    else:
        ctx.output.print_warning(
            f"{summary.created_count} issues created, {summary.failed_count} failed"
        )

    if not summary.success:
        click.get_current_context().exit(1)


def _entity_line(result: EntityResult) -> str:
    if result.status == EntityStatus.CREATED and result.issue:
        return f"\\[{escape(result.issue.key)}] {escape(result.issue.url)}"
    if result.status == EntityStatus.SKIPPED:
        return f"[dim]would create[/dim] {escape(result.title)}"
    if result.status == EntityStatus.FAILED:
        return f"[red]failed:[/red] {escape(result.title)}: {escape(result.error or 'unknown error')}"
    return f"[dim]not attempted:[/dim] {escape(result.title)}"


def _print_report(ctx: LnrContext, report: CreationReport) -> None:
    ctx.output.print(f"- {_entity_line(report.parent)}")
    for child in report.children:
        ctx.output.print(f"  - {_entity_line(child)}")


def _print_file_error(ctx: LnrContext, error: FileError) -> None:
    ctx.output.print(f"  [red]skipped:[/red] {escape(error.error)}")
