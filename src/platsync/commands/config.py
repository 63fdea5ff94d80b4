"""
Configuration management commands.
"""

import os
from typing import Optional

import typer
from keyring.errors import KeyringError

from platsync.constants import ACCESS_TOKEN_ENV_VAR
from platsync.logging import LogLevel, get_logger, mask_secret, setup_logging
from platsync.utils.config_store import ConfigStore
from platsync.utils.console import display_panel, error, info, success

app = typer.Typer(help="Manage platsync configuration")
config_store = ConfigStore()


@app.command("set-token")
def set_token(
    token: Optional[str] = typer.Option(
        None, "--token", help="Management API access token (prompted when omitted)"
    ),
):
    """Store the management API access token in the OS keyring"""
    setup_logging()
    logger = get_logger("platsync.config.token")

    if not token:
        token = typer.prompt("Access token", hide_input=True)
    token = token.strip()
    if not token:
        error("Access token cannot be empty")
        raise typer.Exit(1)

    try:
        config_store.save_access_token(token)
    except KeyringError as e:
        logger.error(f"Failed to store access token: {e}")
        error(f"Failed to store access token in keyring: {e}")
        info(f"You can set {ACCESS_TOKEN_ENV_VAR} instead")
        raise typer.Exit(1)

    logger.info("Management access token stored in keyring")
    success("Access token saved")


@app.command("set-url")
def set_url(
    api_url: Optional[str] = typer.Option(None, "--api-url", help="Management API base URL"),
    data_plane_url: Optional[str] = typer.Option(
        None, "--data-plane-url", help="Data-plane URL template containing {project_ref}"
    ),
):
    """Override the management or data-plane API URLs"""
    if not api_url and not data_plane_url:
        error("Provide --api-url and/or --data-plane-url")
        raise typer.Exit(1)
    if data_plane_url and "{project_ref}" not in data_plane_url:
        error("--data-plane-url must contain {project_ref}")
        raise typer.Exit(1)

    config_store.update_settings(
        api_url=api_url.rstrip("/") if api_url else None,
        data_plane_url=data_plane_url,
    )
    success("API URLs updated")


@app.command("show")
def show():
    """Show the current configuration"""
    settings = config_store.get_settings()

    if os.environ.get(ACCESS_TOKEN_ENV_VAR):
        token_source = f"environment ({ACCESS_TOKEN_ENV_VAR})"
    else:
        token_source = "keyring"
    token = config_store.get_access_token()

    lines = [
        f"config_dir: {config_store.base_dir}",
        f"api_url: {config_store.get_api_url()}",
        f"data_plane_url: {config_store.get_data_plane_url()}",
        f"log_level: {settings.get('log_level', LogLevel.INFO.value)}",
        f"access_token: {mask_secret(token) + ' (' + token_source + ')' if token else 'not set'}",
    ]
    display_panel("\n".join(lines), "platsync configuration", "blue")


@app.command("set-log-level")
def set_log_level(
    level: str = typer.Argument(..., help="Log level (DEBUG, INFO, WARNING, ERROR)")
) -> None:
    """Set the logging level for platsync"""
    setup_logging()
    logger = get_logger("platsync.config.log_level")

    level_upper = level.upper()
    valid_levels = [lev.value for lev in LogLevel]
    if level_upper not in valid_levels:
        error(f"Invalid log level '{level}'. Valid levels: {', '.join(valid_levels)}")
        raise typer.Exit(1)

    config_store.update_settings(log_level=level_upper)
    success(f"Log level set to {level_upper}")
    info("The new log level will take effect on the next platsync command execution.")
    logger.info(f"Log level changed to {level_upper}")


@app.command("get-log-level")
def get_log_level() -> None:
    """Get the current logging level for platsync"""
    current_level = config_store.get_settings().get("log_level", LogLevel.INFO.value)
    info(f"Current log level: {current_level}")
