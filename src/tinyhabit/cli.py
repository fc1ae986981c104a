"""Command line entry points for Tiny Habit Logger."""

from __future__ import annotations

import json

import click

from .config import BaseConfig
from .infra.file_store import StorageError
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)


def init_app(app) -> None:
    """Register maintenance commands on the Flask app."""

    @app.cli.command("habit-show")
    def habit_show() -> None:
        """Print the stored habit summary as JSON."""

        from .extensions import get_service

        click.echo(json.dumps(get_service().get_habit(), indent=2))

    @app.cli.command("habit-reset")
    @click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt")
    def habit_reset(yes: bool) -> None:
        """Clear every stored completion record."""

        from .extensions import get_service

        if not yes:
            click.confirm("Reset all habit data?", abort=True)
        try:
            result = get_service().reset_habit()
        except StorageError as exc:
            raise click.ClickException(str(exc)) from exc
        click.echo(result["message"])


def _build_gateway(config: BaseConfig, offline: bool):
    from .client import ApiClient, LocalStore, PersistenceGateway

    api = None if offline else ApiClient.from_config(config)
    return PersistenceGateway(LocalStore.from_config(config), api, default_name=config.HABIT_NAME)


def _render(view, status) -> None:
    click.echo(f"{view.name}")
    click.echo(f"  Streak: {view.streak} day{'s' if view.streak != 1 else ''}")
    click.echo(f"  Done today: {'yes' if view.completed_today else 'no'}")
    week = "  ".join(f"{entry.day_name} {'x' if entry.completed else '.'}" for entry in view.history)
    click.echo(f"  Last 7 days: {week}")
    click.echo(f"  Sync: {status.value}")


@click.group()
@click.option("--offline", is_flag=True, default=False, help="Skip the backend and use the local store only")
@click.pass_context
def main(ctx: click.Context, offline: bool) -> None:
    """Track a single daily habit."""

    config = BaseConfig()
    setup_logging(config)
    ctx.obj = {"config": config, "offline": offline}


@main.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", type=int, default=None, help="Defaults to $PORT or 5000")
@click.option("--dev/--no-dev", default=True, show_default=True, help="Use the development config")
def serve(host: str, port: int | None, dev: bool) -> None:
    """Run the habit API server."""

    from . import create_app

    app = create_app("development" if dev else None)
    config: BaseConfig = app.config["TINYHABIT_CONFIG"]
    port = port or config.PORT
    logger.info("Tiny Habit Logger API server running on port %s", port)
    logger.info("API endpoints available at http://%s:%s/api", host, port)
    app.run(host=host, port=port, debug=False)


@main.command()
@click.pass_obj
def status(obj) -> None:
    """Show the streak, today's state and the last 7 days."""

    gateway = _build_gateway(obj["config"], obj["offline"])
    gateway.start()
    try:
        view = gateway.load()
    except StorageError as exc:
        raise click.ClickException("Failed to load habit data") from exc
    _render(view, gateway.status)


@main.command()
@click.pass_obj
def done(obj) -> None:
    """Mark the habit as done for today."""

    gateway = _build_gateway(obj["config"], obj["offline"])
    gateway.start()
    try:
        view = gateway.load()
        if view.completed_today:
            click.echo("Already completed today.")
        else:
            view = gateway.complete()
    except StorageError as exc:
        raise click.ClickException("Failed to mark habit as done") from exc
    _render(view, gateway.status)


@main.command()
@click.option("--yes", is_flag=True, default=False, help="Skip the confirmation prompt")
@click.pass_obj
def reset(obj, yes: bool) -> None:
    """Clear every completion record."""

    if not yes:
        click.confirm("Are you sure you want to reset all habit data?", abort=True)

    gateway = _build_gateway(obj["config"], obj["offline"])
    gateway.start()
    try:
        gateway.load()
        view = gateway.reset()
    except StorageError as exc:
        raise click.ClickException("Failed to reset habit data") from exc
    _render(view, gateway.status)


@main.command()
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the raw history entries")
@click.pass_obj
def history(obj, as_json: bool) -> None:
    """Print the last 7 days, oldest first."""

    gateway = _build_gateway(obj["config"], obj["offline"])
    gateway.start()
    try:
        view = gateway.load()
    except StorageError as exc:
        raise click.ClickException("Failed to load habit data") from exc

    if as_json:
        click.echo(json.dumps([entry.to_payload() for entry in view.history], indent=2))
        return
    for entry in view.history:
        click.echo(f"{entry.date} {entry.day_name}  {'done' if entry.completed else '-'}")


if __name__ == "__main__":  # pragma: no cover
    main()
