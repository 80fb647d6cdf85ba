"""Authentication module for loading Confluence credentials.

Credentials come from environment variables (optionally seeded from a .env
file through python-dotenv) with the config file as a fallback. A missing
user name is allowed: it selects personal-access-token (bearer) auth, which
is what Confluence Data Center expects, instead of basic auth.
"""

import os
from typing import NamedTuple, Optional

from dotenv import load_dotenv

from .errors import InvalidCredentialsError


class Credentials(NamedTuple):
    """Confluence API credentials."""
    url: str
    user: Optional[str]
    api_token: str

    @property
    def uses_bearer_token(self) -> bool:
        return not self.user


class Authenticator:
    """Loads and validates Confluence credentials.

    Environment variables win over the values passed in from the config file.
    Credentials are never cached on disk or logged.

    Environment variables:
        CONFLUENCE_URL: Confluence base URL (e.g., https://wiki.example.com)
        CONFLUENCE_USER: User name or email (optional, enables basic auth)
        CONFLUENCE_API_TOKEN: API token or personal access token

    Example:
        >>> auth = Authenticator(url="https://wiki.example.com")
        >>> creds = auth.get_credentials()
    """

    def __init__(
        self,
        url: Optional[str] = None,
        user: Optional[str] = None,
        api_token: Optional[str] = None,
    ):
        """Initialize the authenticator and load a .env file if present.

        Args:
            url: Fallback base URL from the config file
            user: Fallback user from the config file
            api_token: Fallback token from the config file
        """
        load_dotenv()
        self._url = url
        self._user = user
        self._api_token = api_token

    def get_credentials(self) -> Credentials:
        """Resolve credentials from the environment and config fallbacks.

        Returns:
            Credentials: A named tuple containing url, user, and api_token

        Raises:
            InvalidCredentialsError: If the URL or the token is missing
        """
        url = os.getenv('CONFLUENCE_URL') or self._url
        user = os.getenv('CONFLUENCE_USER') or self._user
        api_token = os.getenv('CONFLUENCE_API_TOKEN') or self._api_token

        if not url or not api_token:
            raise InvalidCredentialsError(
                user=user if user else "unknown",
                endpoint=url if url else "unknown",
            )

        return Credentials(url=url.rstrip('/'), user=user or None, api_token=api_token)
