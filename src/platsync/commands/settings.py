"""
Project settings commands.

Tracked state is kept per project in the config directory; apply, read
and import update it, delete forgets it.
"""

import json
from pathlib import Path

import typer

from platsync.exceptions import ValidationError
from platsync.logging import get_logger, setup_logging
from platsync.settings import ReconcileResult, SettingsModel, SettingsResource, settings_schema
from platsync.utils.config_store import ConfigStore
from platsync.utils.console import (
    console,
    create_table,
    display_diagnostics,
    error,
    info,
    success,
    warning,
)
from .shared import build_management_client, load_settings_file, project_option

app = typer.Typer(help="Manage project settings")
config_store = ConfigStore()


def _resource() -> SettingsResource:
    return SettingsResource(build_management_client(config_store))


def _load_plan(file: Path, project_ref: str) -> SettingsModel:
    try:
        return SettingsModel.from_dict(load_settings_file(file), project_ref=project_ref)
    except ValidationError as e:
        error(f"Invalid settings file: {e}")
        raise typer.Exit(1)


def _load_state(project_ref: str) -> SettingsModel:
    data = config_store.get_state(project_ref)
    if data is None:
        error(
            f"No tracked settings for project '{project_ref}'. "
            "Run 'platsync settings apply' or 'platsync settings import' first"
        )
        raise typer.Exit(1)
    try:
        return SettingsModel.from_dict(data)
    except ValidationError as e:
        error(f"Tracked settings for '{project_ref}' are corrupt: {e}")
        raise typer.Exit(1)


def _finish(result: ReconcileResult, project_ref: str, action: str) -> None:
    """Report diagnostics; persist state only when every sub-domain succeeded"""
    display_diagnostics(result.diagnostics)
    if result.has_error:
        error(f"Failed to {action} settings for project '{project_ref}'")
        raise typer.Exit(1)
    config_store.save_state(project_ref, result.state.to_dict())


def _show_state(state: SettingsModel) -> None:
    console.print_json(json.dumps(state.to_dict(redact=True)))


@app.command("apply")
def apply(
    file: Path = typer.Argument(..., help="JSON file with the desired settings"),
    project: str = project_option(),
):
    """Push declared settings to a project"""
    setup_logging()
    logger = get_logger("platsync.commands.settings")

    plan = _load_plan(file, project)
    resource = _resource()
    if config_store.get_state(project) is None:
        logger.info(f"Creating tracked settings for {project}")
        result = resource.create(plan)
    else:
        logger.info(f"Updating tracked settings for {project}")
        result = resource.update(plan)

    _finish(result, project, "apply")
    success(f"Applied {', '.join(plan.managed_subdomains()) or 'no'} settings to '{project}'")


@app.command("read")
def read(project: str = project_option()):
    """Refresh tracked settings from the remote project"""
    setup_logging()

    state = _load_state(project)
    result = _resource().read(state)
    _finish(result, project, "read")
    _show_state(result.state)


@app.command("import")
def import_settings(
    project: str = project_option(),
    force: bool = typer.Option(False, "--force", help="Overwrite existing tracked settings"),
):
    """Start tracking the current settings of an existing project"""
    setup_logging()

    if config_store.get_state(project) is not None and not force:
        error(f"Settings for '{project}' are already tracked. Use --force to re-import")
        raise typer.Exit(1)

    result = _resource().import_state(project)
    _finish(result, project, "import")
    managed = result.state.managed_subdomains()
    success(f"Imported {', '.join(managed) or 'no'} settings for '{project}'")
    _show_state(result.state)


@app.command("delete")
def delete(project: str = project_option()):
    """Stop tracking settings; remote values are left unchanged"""
    setup_logging()

    state = _load_state(project)
    result = _resource().delete(state)
    display_diagnostics(result.diagnostics)
    config_store.delete_state(project)
    warning("No reset API exists; remote settings keep their current values")
    success(f"Settings for '{project}' are no longer tracked")


@app.command("diff")
def diff(
    file: Path = typer.Argument(..., help="JSON file with the desired settings"),
    project: str = project_option(),
):
    """Compare declared settings with the remote project"""
    setup_logging()

    plan = _load_plan(file, project)
    report = _resource().diff(plan)
    display_diagnostics(report.diagnostics)
    if report.diagnostics.has_error():
        error(f"Unable to compare settings for '{project}'")
        raise typer.Exit(1)

    if not report.has_drift:
        success(f"No drift: {len(report.unchanged)} declared settings match '{project}'")
    else:
        table = create_table(f"Drift for '{project}'", ["Setting", "Declared", "Remote", "Change"])
        for item in report.modified:
            table.add_row(item.path, json.dumps(item.declared), json.dumps(item.remote), item.summary)
        console.print(table)
        warning(f"{len(report.modified)} setting(s) differ from the remote project")

    if report.skipped_write_only:
        info(f"Skipped {len(report.skipped_write_only)} write-only setting(s)")


@app.command("schema")
def schema():
    """Show the attribute schema of a settings file"""
    console.print_json(json.dumps(settings_schema()))
