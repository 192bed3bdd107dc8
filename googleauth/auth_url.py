"""
Authorization URL construction for the Google OAuth consent screen.

Scopes come from the scope registry; this module only encodes them.
"""

import logging
from urllib.parse import urlencode

from typing_extensions import Iterable, Union

from .scope_registry import ScopeRegistry
from .service_types import Service

logger = logging.getLogger(__name__)

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"


def scope_param(scopes: Iterable[str]) -> str:
    """Join scopes into the space-separated ``scope`` query value."""
    return " ".join(scopes)


def build_authorization_url(
    client_id: str,
    redirect_uri: str,
    services: Iterable[Union[Service, str]],
    state: str,
    *,
    manage: bool = False,
    auth_uri: str = GOOGLE_AUTH_URI,
    access_type: str = "offline",
    prompt: str = "consent",
) -> str:
    """
    Build the URL that sends the user to Google's consent screen.

    Args:
        client_id: OAuth client ID
        redirect_uri: Callback URL registered for the client
        services: Services to request access to
        state: Opaque value echoed back on the callback
        manage: Also request the identity scopes (openid, email, userinfo.email)
        auth_uri: Authorization endpoint
        access_type: ``offline`` to receive a refresh token
        prompt: Consent prompt behaviour

    Returns:
        Full authorization URL

    Raises:
        ValueError: If client_id, redirect_uri or state is blank
        UnknownServiceError: If any service is not registered
    """
    if not client_id or not client_id.strip():
        raise ValueError("client_id is required to build an authorization URL")
    if not redirect_uri or not redirect_uri.strip():
        raise ValueError("redirect_uri is required to build an authorization URL")
    if not state or not state.strip():
        raise ValueError("state is required to build an authorization URL")

    if manage:
        scopes = ScopeRegistry.scopes_for_manage(services)
    else:
        scopes = ScopeRegistry.scopes_for_services(services)

    query = urlencode({
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": scope_param(scopes),
        "state": state,
        "access_type": access_type,
        "include_granted_scopes": "true",
        "prompt": prompt,
    })

    logger.info(f"Built authorization URL requesting {len(scopes)} scopes")
    return f"{auth_uri}?{query}"
