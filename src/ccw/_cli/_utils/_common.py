import os
import xml.etree.ElementTree as ET
from typing import Optional

import click
import httpx

from ..._ccw import CCW
from ..._utils._errors import status_code_for
from ..._utils.constants import (
    ENV_CLIENT_ID,
    ENV_CLIENT_SECRET,
    ENV_PASSWORD,
    ENV_USERNAME,
)
from ...models.errors import CCWError, ConfigurationError

REQUIRED_ENV_VARS = [ENV_USERNAME, ENV_PASSWORD, ENV_CLIENT_ID, ENV_CLIENT_SECRET]

# Failures a command reports instead of printing a traceback.
CLI_ERRORS = (CCWError, httpx.HTTPError, ET.ParseError, TimeoutError, ValueError)


def create_client(debug: bool = False, timeout: Optional[float] = None) -> CCW:
    """Build a client from the environment, exiting when credentials are missing."""
    try:
        if timeout is None:
            return CCW(debug=debug)
        return CCW(debug=debug, timeout=timeout)
    except ConfigurationError:
        missing = [name for name in REQUIRED_ENV_VARS if not os.environ.get(name)]
        click.echo(
            "❌ Missing required environment variables. Please check your .env file contains:",
            err=True,
        )
        click.echo(", ".join(missing or REQUIRED_ENV_VARS), err=True)
        click.get_current_context().exit(1)
        raise


def fail(error: Exception) -> None:
    """Report a failure with its HTTP-equivalent status and exit 1."""
    if isinstance(error, CCWError):
        message = error.message
    else:
        message = f"{type(error).__name__}: {error}"
    click.echo(f"❌ [{status_code_for(error)}] {message}", err=True)
    click.get_current_context().exit(1)
