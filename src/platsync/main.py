import typer

from platsync.commands import config, credentials, logs, settings
from platsync.logging import get_logger, setup_logging

app = typer.Typer(
    help="[bold blue]platsync[/bold blue] - Declarative project settings for a "
    "hosted Postgres platform",
    rich_markup_mode="rich",
)

app.add_typer(config.app, name="config")
app.add_typer(settings.app, name="settings")
app.add_typer(credentials.app, name="credentials")
app.add_typer(logs.app, name="logs")


@app.callback(invoke_without_command=True)
def callback(ctx: typer.Context):
    """
    [bold blue]platsync[/bold blue] - Declarative project settings

    Apply, read, import and diff database, network, API, auth, storage
    and pooler settings of a project.
    """
    if not ctx.invoked_subcommand:
        print("Welcome to platsync! To proceed type platsync --help")


def main():
    setup_logging()
    logger = get_logger("platsync.main")
    logger.info("platsync CLI started")

    try:
        app()
    except Exception as e:
        logger.error(f"Unhandled exception in main: {str(e)}")
        raise
    finally:
        logger.info("platsync CLI finished")


if __name__ == "__main__":
    main()
