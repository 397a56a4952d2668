import os
import ssl
from typing import Any, Optional

import certifi

from .constants import DEFAULT_TIMEOUT


def expand_path(path: Optional[str]) -> Optional[str]:
    """Expand $VARS and ~ in a certificate path taken from the environment."""
    if not path:
        return path
    return os.path.expanduser(os.path.expandvars(path))


def create_ssl_context() -> ssl.SSLContext:
    ssl_cert_file = expand_path(os.environ.get("SSL_CERT_FILE"))
    requests_ca_bundle = expand_path(os.environ.get("REQUESTS_CA_BUNDLE"))
    ssl_cert_dir = expand_path(os.environ.get("SSL_CERT_DIR"))

    return ssl.create_default_context(
        cafile=ssl_cert_file or requests_ca_bundle or certifi.where(),
        capath=ssl_cert_dir,
    )


def get_httpx_client_kwargs(timeout: float = DEFAULT_TIMEOUT) -> dict[str, Any]:
    """Default keyword arguments for the client's ``httpx`` clients."""
    return {
        "verify": create_ssl_context(),
        "timeout": timeout,
        "follow_redirects": False,
    }
