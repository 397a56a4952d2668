import click

from ._utils._common import CLI_ERRORS, create_client, fail


@click.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def auth(debug: bool) -> None:
    """Check the configured credentials by requesting an access token."""
    with create_client(debug=debug) as client:
        try:
            token = client.authenticate()
        except CLI_ERRORS as e:
            fail(e)
            return

    click.echo(f"✓ Authenticated. Token valid until {token.expires_at:%Y-%m-%d %H:%M:%S} UTC")
