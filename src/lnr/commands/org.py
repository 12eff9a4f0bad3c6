"""Organization commands."""

import click

from lnr.core.context import LnrContext, pass_context
from lnr.core.output import mask_secret


@click.group()
@pass_context
def org(ctx: LnrContext) -> None:
    """Organizations configured in ~/.lnr/config.yaml.

    \b
    Examples:
        lnr org list
        lnr --org acme template evaluate -p sprint.toml
    """
    pass


@org.command("list")
@pass_context
def list_orgs(ctx: LnrContext) -> None:
    """List configured organizations."""
    names = ctx.config.organization_names()
    if not names:
        ctx.output.print_info("No organizations in config")
        return

    rows = []
    for name in names:
        token = ctx.config.organizations[name].get_token()
        rows.append({
            "name": name,
            "token": mask_secret(token) or "not set",
            "selected": "yes" if name == ctx.organization else "",
        })

    ctx.output.print_data(rows, headers=["name", "token", "selected"], title="Organizations")
