import asyncio

import click

from tabkeeper.managers.workspaces import (
    DuplicateWorkspaceError,
    InvalidWorkspaceNameError,
    WorkspaceNotFoundError,
    WorkspaceRepository,
    clear_current_workspace,
    delete_workspace,
    get_current_workspace_name,
    get_workspace,
    get_workspace_statistics,
    list_workspaces,
    rename_workspace,
    validate_workspace_name,
)


def _repository(ctx: click.Context) -> WorkspaceRepository:
    return ctx.obj["repository"]


@click.group()
@click.option("--data-root", default=None, help="State directory (default: from TABKEEPER_DATA_ROOT or ./data).")
@click.pass_context
def main(ctx: click.Context, data_root: str | None) -> None:
    """tabkeeper - manage saved editor tab workspaces."""
    from tabkeeper.app import build_repository
    from tabkeeper.log import setup_logging
    from tabkeeper.settings import TabkeeperSettings

    settings = TabkeeperSettings(data_root=data_root) if data_root else TabkeeperSettings()
    setup_logging(settings.log_level)

    ctx.ensure_object(dict)
    ctx.obj["repository"] = build_repository(settings)


@main.command("list")
@click.pass_context
def list_(ctx: click.Context) -> None:
    """List saved workspaces, most recent first."""
    repo = _repository(ctx)

    async def _run() -> None:
        workspaces = await list_workspaces(repo)
        current = await get_current_workspace_name(repo)
        if not workspaces:
            click.echo("No saved workspaces.")
            return
        for workspace in workspaces:
            marker = "*" if workspace.name == current else " "
            modified = workspace.last_modified.astimezone().strftime("%Y-%m-%d %H:%M")
            click.echo(f"{marker} {workspace.name}  ({len(workspace.tabs)} tabs, modified {modified})")

    asyncio.run(_run())


@main.command()
@click.argument("name")
@click.pass_context
def show(ctx: click.Context, name: str) -> None:
    """Print the tabs stored in a workspace."""
    try:
        workspace = asyncio.run(get_workspace(_repository(ctx), name))
    except WorkspaceNotFoundError:
        raise click.ClickException(f'Workspace "{name}" not found') from None
    for uri in workspace.tabs:
        click.echo(uri)


@main.command()
@click.argument("old_name")
@click.argument("new_name")
@click.pass_context
def rename(ctx: click.Context, old_name: str, new_name: str) -> None:
    """Rename a workspace."""
    try:
        new_name = validate_workspace_name(new_name)
        workspace = asyncio.run(rename_workspace(_repository(ctx), old_name, new_name))
    except WorkspaceNotFoundError:
        raise click.ClickException(f'Workspace "{old_name}" not found') from None
    except DuplicateWorkspaceError:
        raise click.ClickException(f'Workspace "{new_name}" already exists') from None
    except InvalidWorkspaceNameError as exc:
        raise click.ClickException(str(exc)) from None
    click.echo(f'Renamed workspace from "{old_name}" to "{workspace.name}"')


@main.command()
@click.argument("name")
@click.option("--yes", is_flag=True, default=False, help="Do not ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, name: str, yes: bool) -> None:
    """Delete a workspace permanently."""
    if not yes:
        click.confirm(f'Delete workspace "{name}"?', abort=True)
    try:
        asyncio.run(delete_workspace(_repository(ctx), name))
    except WorkspaceNotFoundError:
        raise click.ClickException(f'Workspace "{name}" not found') from None
    click.echo(f'Deleted workspace "{name}"')


@main.command("clear-current")
@click.pass_context
def clear_current(ctx: click.Context) -> None:
    """Unset the current workspace without deleting it."""
    asyncio.run(clear_current_workspace(_repository(ctx)))
    click.echo("Cleared current workspace.")


@main.command()
@click.pass_context
def stats(ctx: click.Context) -> None:
    """Show workspace counts and slots."""
    statistics = asyncio.run(get_workspace_statistics(_repository(ctx)))
    click.echo(f"Workspaces: {statistics.total_workspaces}")
    click.echo(f"Current:    {statistics.current_workspace or '-'}")
    click.echo(f"Previous:   {'available' if statistics.has_previous_workspace else '-'}")


if __name__ == "__main__":
    main()
