import logging
import click

from . import config
from .container import Container, build_container
from .models.page_models import dashboard_page, index_page
from .routers.auth import build_login_message, logout as logout_flow
from .routers.bootstrap import bootstrap

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def _container(ctx: click.Context, approve=None, with_wallet: bool = False) -> Container:
    """Only `login` loads the wallet key; the other commands never touch it."""
    try:
        return build_container(
            api_url=ctx.obj["api_url"],
            session_file=ctx.obj["session_file"],
            private_key=config.WALLET_PRIVATE_KEY if with_wallet else None,
            approve=approve,
        )
    except ValueError as e:
        raise click.ClickException(f"Invalid wallet key: {e}")


def _show_dashboard(container: Container) -> bool:
    """Bootstraps the dashboard page and prints it. False if redirected away."""
    page = dashboard_page()
    bootstrap(container, page)

    if container.navigator.location == config.INDEX_PAGE:
        click.echo("Not signed in (redirected to index page).", err=True)
        return False

    if page.status:
        click.echo(page.status)
    click.echo("Session:")
    click.echo(page.session_info or "(unavailable)")
    click.echo(f"Documents ({len(page.doc_list or [])}):")
    for block in page.doc_list or []:
        click.echo(block)
        click.echo("-" * 40)
    return True


@click.group()
@click.option("--api-url", default=config.API_URL, show_default=True, help="TIDBIT backend base URL")
@click.option(
    "--session-file",
    type=click.Path(dir_okay=False),
    default=config.SESSION_FILE,
    show_default=True,
    help="Where the session id is persisted",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=config.LOG_LEVEL if config.LOG_LEVEL in {"DEBUG", "INFO", "WARNING", "ERROR"} else "INFO",
    show_default=True,
)
@click.pass_context
def cli(ctx: click.Context, api_url: str, session_file: str, log_level: str) -> None:
    """TIDBIT wallet-authenticated client."""
    logging.basicConfig(level=log_level.upper(), format=LOG_FORMAT)
    ctx.ensure_object(dict)
    ctx.obj["api_url"] = api_url
    ctx.obj["session_file"] = session_file


@cli.command()
@click.option("--yes", "-y", is_flag=True, default=False, help="Approve wallet prompts without asking")
@click.pass_context
def login(ctx: click.Context, yes: bool) -> None:
    """Sign in with the configured wallet and show the dashboard."""
    approve = None if yes else (lambda prompt: click.confirm(prompt, default=True))
    container = _container(ctx, approve=approve, with_wallet=True)

    page = index_page()
    actions = bootstrap(container, page)
    actions["login"]()
    click.echo(page.status)

    if container.navigator.location != config.DASHBOARD_PAGE:
        ctx.exit(1)
    if not _show_dashboard(container):
        ctx.exit(1)


@cli.command()
@click.pass_context
def dashboard(ctx: click.Context) -> None:
    """Show session info and documents for the stored session."""
    container = _container(ctx)
    if not _show_dashboard(container):
        ctx.exit(1)


@cli.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """End the stored session."""
    container = _container(ctx)
    if not container.sessions.read():
        click.echo("No active session.")
        return
    logout_flow(container)
    click.echo("Logged out.")


@cli.command()
@click.pass_context
def health(ctx: click.Context) -> None:
    """Check that the backend is reachable."""
    container = _container(ctx)
    if container.api.health():
        click.echo(f"{container.api.base_url}: OK")
    else:
        click.echo(f"{container.api.base_url}: unreachable", err=True)
        ctx.exit(1)


@cli.command()
@click.argument("nonce")
def message(nonce: str) -> None:
    """Print the exact challenge text signed for NONCE."""
    click.echo(build_login_message(nonce))


if __name__ == "__main__":
    cli()
