"""OAuth redirect handling: pull the authorization code and state out of a callback URL."""

import logging
from urllib.parse import parse_qs, urlparse

from typing_extensions import Tuple

from .errors import CallbackError

logger = logging.getLogger(__name__)


def extract_code_and_state(url: str) -> Tuple[str, str]:
    """
    Extract ``code`` and ``state`` from an OAuth redirect URL.

    Args:
        url: Full callback URL, e.g. ``http://localhost:8002/oauth2callback?code=...&state=...``

    Returns:
        Tuple of (code, state)

    Raises:
        CallbackError: If the URL cannot be parsed, Google returned an
            ``error`` parameter, or either value is missing
    """
    try:
        parsed = urlparse(url.strip())
        params = parse_qs(parsed.query)
    except (AttributeError, ValueError) as e:
        raise CallbackError(f"Invalid callback URL: {e}") from e

    error = _first(params, "error")
    if error:
        description = _first(params, "error_description")
        logger.warning(f"OAuth callback returned error: {error}")
        raise CallbackError(f"Authorization failed: {error}" + (f" ({description})" if description else ""))

    code = _first(params, "code")
    if not code:
        raise CallbackError("Callback URL is missing the 'code' parameter")

    state = _first(params, "state")
    if not state:
        raise CallbackError("Callback URL is missing the 'state' parameter")

    logger.debug(f"Extracted authorization code for state: {state}")
    return code, state


def _first(params: dict, key: str) -> str:
    values = params.get(key) or [""]
    return values[0].strip()
