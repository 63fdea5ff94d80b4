"""
Derived credential commands.
"""

import typer

from platsync.api.data_plane import DataPlaneClient
from platsync.auth import CredentialCache, CredentialExchanger
from platsync.exceptions import AuthError, PlatsyncError
from platsync.logging import get_logger, mask_secret, setup_logging
from platsync.utils.config_store import ConfigStore
from platsync.utils.console import console, create_table, error, success
from .shared import build_management_client, project_option

app = typer.Typer(help="Inspect derived project credentials")
config_store = ConfigStore()


@app.command("check")
def check(project: str = project_option()):
    """Exchange the access token for project secrets and probe the data-plane API"""
    setup_logging()
    logger = get_logger("platsync.commands.credentials")

    client = build_management_client(config_store)
    cache = CredentialCache(CredentialExchanger(client))
    data_plane = DataPlaneClient(cache, url_template=config_store.get_data_plane_url())

    try:
        credentials = cache.get_credentials(project)
    except PlatsyncError as e:
        logger.error(f"Credential exchange failed for {project}: {e}")
        error(f"Unable to derive credentials for '{project}': {e}")
        raise typer.Exit(1)

    table = create_table(f"Credentials for '{project}'", ["Key", "Value"])
    table.add_row("service_role", mask_secret(credentials.service_role_key))
    table.add_row("anon", mask_secret(credentials.anon_key) if credentials.anon_key else "-")
    console.print(table)

    try:
        data_plane.check_access(project)
    except AuthError as e:
        error(f"Data-plane API rejected the derived credential: {e}")
        raise typer.Exit(1)
    except PlatsyncError as e:
        error(f"Data-plane API check failed: {e}")
        raise typer.Exit(1)

    success(f"Data-plane API accepted the derived credential for '{project}'")
