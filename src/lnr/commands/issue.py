"""Issue commands."""

import click

from lnr.core.context import LnrContext, pass_context
from lnr.core.exceptions import LnrError
from lnr.templates.metadata import select_project, select_team


@click.group()
@pass_context
def issue(ctx: LnrContext) -> None:
    """Issues assigned to you.

    \b
    Examples:
        lnr issue list
        lnr issue list -e Engineering -n
        lnr -f json issue list -t
    """
    pass


@issue.command("list")
@click.option("-e", "--team", help="Team name")
@click.option("-n", "--noproject", is_flag=True, help="Do not prompt for a project")
@click.option("-t", "--noteam", is_flag=True, help="List issues from every team")
@pass_context
def list_issues(ctx: LnrContext, team: str | None, noproject: bool, noteam: bool) -> None:
    """List your issues that are in Todo or In Progress (at most 50)."""
    try:
        viewer = ctx.linear.get_viewer()
        selected_team = None if noteam else select_team(ctx.linear, ctx.prompt, team)
        project = None
        if selected_team is not None and not noproject:
            project = select_project(ctx.linear, ctx.prompt, selected_team)

        issues = ctx.linear.list_issues(
            viewer.id,
            team_id=selected_team.id if selected_team else None,
            project_id=project.id if project else None,
        )
    except LnrError as e:
        ctx.output.print_error(str(e))
        raise click.Abort()

    if not issues:
        ctx.output.print_info("No issues found")
        return

    ctx.output.print_data(
        [i.to_row() for i in issues],
        headers=["identifier", "title", "state", "priority", "project", "url"],
        title="Issues",
    )
