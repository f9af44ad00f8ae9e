"""OAuth authorization URL construction"""

from typing import Any, Mapping, Optional, Union
from urllib.parse import urlencode

from spotify_web_api.settings import ACCOUNT_URL, AUTHORIZE_PATH
from .models import AuthorizeOptions, Credentials


def build_authorize_url(
    credentials: Credentials,
    options: Optional[Union[AuthorizeOptions, Mapping[str, Any]]] = None,
) -> str:
    """Construct the URL the user is sent to for authorization

    Args:
        credentials: Application credentials (client_id and redirect_uri are used)
        options: Scope, state, PKCE challenge and show_dialog

    Returns:
        Full authorization URL
    """
    options = AuthorizeOptions.from_value(options)

    # Keep caller order, drop repeats
    scope = list(dict.fromkeys(options.scope or []))

    params = {
        "client_id": credentials.client_id,
        "redirect_uri": credentials.redirect_uri,
        "response_type": "code",
    }
    if scope:
        params["scope"] = " ".join(scope)
    if options.show_dialog:
        params["show_dialog"] = "true"
    if options.state:
        params["state"] = options.state
    if options.code_challenge:
        params["code_challenge"] = options.code_challenge
        params["code_challenge_method"] = options.code_challenge_method or "S256"

    return f"{ACCOUNT_URL}{AUTHORIZE_PATH}?{urlencode(params)}"
