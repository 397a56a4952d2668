import click

from .cli_auth import auth as auth
from .cli_quote import quote as quote


@click.group()
@click.version_option(package_name="ccw-python")
def cli() -> None:
    """Cisco Commerce Workspace command line."""


cli.add_command(auth)
cli.add_command(quote)
