from typing import Optional

import click

from ._utils._common import CLI_ERRORS, create_client, fail


@click.command()
@click.argument("deal_id")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the quote JSON to this file instead of stdout",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    help="Timeout in seconds for each request",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
def quote(
    deal_id: str, output: Optional[str], timeout: Optional[float], debug: bool
) -> None:
    """Fetch the quote for DEAL_ID and print it as JSON."""
    with create_client(debug=debug, timeout=timeout) as client:
        try:
            result = client.quotes.acquire_by_deal_id(deal_id)
        except CLI_ERRORS as e:
            fail(e)
            return

    data = result.model_dump_json(by_alias=True, indent=2)
    if output:
        with open(output, "w") as f:
            f.write(data + "\n")
        click.echo(f"✓ Quote for deal {deal_id} written to {output}", err=True)
    else:
        click.echo(data)
