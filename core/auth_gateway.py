"""
Auth Gateway — Bearer credential acquisition for the Salesforce REST API.

Two pieces live here:

  AuthGateway            What the REST client talks to. It asks a credential
                         source for a token in "use cached, retry on failure"
                         mode and turns any failure into AuthUnavailable.

  SalesforceOAuthClient  A stand-alone credential source for running outside a
                         host platform. Uses the OAuth 2.0 client_credentials
                         grant against the account's My Domain, or a pre-issued
                         access token, and caches the result until expiry.

A credential source is any callable with the signature
    source(service_id: str, cached_retry: bool = True) -> {"token": str}
and, optionally, an invalidate() method used after a 401.
"""

import logging
import time
from typing import Callable, Dict, Optional

import requests

from config import SERVICE_ID

from .errors import AuthUnavailable

logger = logging.getLogger(__name__)

CredentialSource = Callable[..., Dict[str, str]]


class AuthGateway:
    """Obtains bearer credentials from a host-provided credential source."""

    def __init__(self, credential_source: CredentialSource, service_id: str = SERVICE_ID):
        self._source = credential_source
        self.service_id = service_id

    def obtain_credential(self) -> Dict[str, str]:
        """Return {"token": ...}, requesting the cached credential first.

        Raises:
            AuthUnavailable: If the source fails or yields no token.
        """
        try:
            credential = self._source(self.service_id, cached_retry=True)
        except AuthUnavailable:
            raise
        except Exception as e:
            raise AuthUnavailable(f"Could not obtain a {self.service_id} credential: {e}") from e

        if not credential or not credential.get("token"):
            raise AuthUnavailable(f"No {self.service_id} credential is available")
        return credential

    def invalidate(self):
        """Drop the cached credential so the next call re-authenticates."""
        invalidate = getattr(self._source, "invalidate", None)
        if callable(invalidate):
            logger.debug("Invalidating cached %s credential", self.service_id)
            invalidate()


class SalesforceOAuthClient:
    """Acquires Salesforce access tokens with the client_credentials grant."""

    TOKEN_PATH = "/services/oauth2/token"
    DEFAULT_TTL = 3600

    def __init__(
        self,
        domain: str,
        client_id: str = "",
        client_secret: str = "",
        access_token: str = "",
        session: Optional[requests.Session] = None,
        timeout: float = 60,
    ):
        self.domain = domain
        self.client_id = client_id
        self.client_secret = client_secret
        self.timeout = timeout
        self._session = session or requests.Session()
        self._static_token = access_token
        self._token = None
        self._expires_at = 0

    def __call__(self, service_id: str = SERVICE_ID, cached_retry: bool = True) -> Dict[str, str]:
        return {"token": self.get_token(use_cache=cached_retry)}

    def get_token(self, use_cache: bool = True) -> str:
        """Return a cached token or acquire a new one."""
        if self._static_token:
            return self._static_token

        if use_cache and self._token and time.time() < self._expires_at - 60:
            return self._token

        if not self.client_id or not self.client_secret:
            raise AuthUnavailable(
                "Salesforce account is not linked. Set SALESFORCE_ACCESS_TOKEN or "
                "SALESFORCE_CLIENT_ID and SALESFORCE_CLIENT_SECRET."
            )
        if not self.domain:
            raise AuthUnavailable("Cannot request a Salesforce token without SALESFORCE_DOMAIN")

        url = f"https://{self.domain}.my.salesforce.com{self.TOKEN_PATH}"
        payload = {
            "grant_type": "client_credentials",
            "client_id": self.client_id,
            "client_secret": self.client_secret,
        }

        logger.debug("Acquiring Salesforce token from %s", url)

        response = self._session.post(url, data=payload, timeout=self.timeout)
        if not response.ok:
            raise AuthUnavailable(
                f"Salesforce token request failed ({response.status_code})"
            )

        data = response.json()
        if not data.get("access_token"):
            raise AuthUnavailable("Salesforce token response did not include an access_token")
        self._token = data["access_token"]
        self._expires_at = time.time() + int(data.get("expires_in", self.DEFAULT_TTL))

        logger.debug("Salesforce token acquired")

        return self._token

    def invalidate(self):
        self._token = None
        self._expires_at = 0

    @property
    def token(self) -> Optional[str]:
        return self._static_token or self._token
