"""
Command line entry point: `consent-admin serve` and `consent-admin show`.
"""

import json
import logging
import sys
from typing import NoReturn, Optional

import click

from consent_admin.logic.adapters.api.app import build_consent_admin_service, create_app
from consent_admin.logic.auth.static_session import StaticSessionProvider
from consent_admin.logic.config.loader import load_config
from consent_admin.logic.exceptions import ConfigurationError, ConsentAdminError
from consent_admin.logic.utils.logging_config import setup_basic_logging
from consent_admin.schemas.config import ConsentAdminConfig

logger = logging.getLogger(__name__)


@click.group()
@click.option("--config", "config_file_path", type=click.Path(), help="Path to consent admin YAML config")
@click.option("--debug/--no-debug", default=False, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, config_file_path: Optional[str], debug: bool) -> None:
    """Consent administration tools."""
    ctx.ensure_object(dict)
    ctx.obj["config_file_path"] = config_file_path
    ctx.obj["debug"] = debug


def _config_error(e: ConsentAdminError) -> NoReturn:
    click.echo(f"Configuration error: {e}", err=True)
    sys.exit(2)


def _load(ctx: click.Context) -> ConsentAdminConfig:
    try:
        return load_config(ctx.obj["config_file_path"])
    except ConsentAdminError as e:
        _config_error(e)


@main.command()
@click.option("--host", default="127.0.0.1", help="Bind address (default: localhost only)")
@click.option("--port", default=8000, type=int, help="API port (default: 8000)")
@click.option("--log-to-file/--no-log-to-file", default=False, help="Also write logs under CONSENT_ADMIN_LOG_DIR")
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, log_to_file: bool) -> None:
    """Run the consent administration API."""
    import uvicorn

    setup_basic_logging(level=logging.DEBUG if ctx.obj["debug"] else logging.INFO, log_to_file=log_to_file)
    config = _load(ctx)
    try:
        app = create_app(config)
    except ConfigurationError as e:
        _config_error(e)
    uvicorn.run(app, host=host, port=port)


@main.command()
@click.option("--json", "as_json", is_flag=True, help="Print the listing as JSON")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Print the reconciliation listing for the configured static user."""
    setup_basic_logging(level=logging.DEBUG if ctx.obj["debug"] else logging.WARNING)
    config = _load(ctx)
    try:
        service = build_consent_admin_service(config)
        session = StaticSessionProvider(config)()
    except ConfigurationError as e:
        _config_error(e)

    try:
        view = service.list_consents(session)
    except ConsentAdminError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(view.model_dump(mode="json"), indent=2))
        return

    click.echo(view.header)
    click.echo("=" * 70)
    for entry in view.entries:
        click.echo(f"{entry.status.value:<8} {entry.name} ({entry.relying_party_id})")
        if config.show_description and entry.description:
            click.echo(f"         {entry.description}")
        for name, values in sorted(entry.released_attributes.items()):
            click.echo(f"         {name}: {', '.join(values)}")


if __name__ == "__main__":
    main()
