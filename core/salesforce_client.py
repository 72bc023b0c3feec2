"""
Salesforce REST Client — Authenticated GET requests against the versioned REST root.

Every remote call in the pipeline goes through SalesforceRESTClient.request().
The request shapes used by the importer:

  GET /services/data/v54.0/query/?q=<encoded SOQL>
      Arbitrary SOQL execution (list views, cases).

  GET /services/data/v54.0/sobjects/Case/listviews/{listViewId}/describe
      Saved-view metadata; the "query" field holds the view's SOQL.

  GET /services/data/v54.0/sobjects/Case/{Id}
      Direct fetch of one record by its reference URL (attributes.url),
      requested with an empty base path since the reference is already rooted.

Outcome classification:
  subdomain unset          -> ConfigurationMissing (before auth or HTTP)
  no HTTP answer           -> ConnectivityError with remediation steps
  2xx                      -> parsed JSON body
  401                      -> AuthenticationError tagged with the service id
  anything else            -> RemoteApiError carrying the status code

No retries are performed here.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from .auth_gateway import AuthGateway
from .errors import (
    AuthenticationError,
    ConfigurationMissing,
    ConnectivityError,
    RemoteApiError,
)
from .soql_queries import normalize_query

logger = logging.getLogger(__name__)

DEFAULT_API_VERSION = "v54.0"


def encode_query(soql: str) -> str:
    """Collapse whitespace runs to one space and percent-encode for a URL."""
    return quote(normalize_query(soql), safe="")


@dataclass
class RemoteQueryResult:
    """The paginated envelope returned by the query endpoint.

    Only the first page is ever consumed; next_records_url is kept so callers
    can report truncation.
    """

    done: bool = True
    total_size: int = 0
    records: List[Dict[str, Any]] = field(default_factory=list)
    next_records_url: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Dict[str, Any]) -> "RemoteQueryResult":
        return cls(
            done=bool(payload.get("done", True)),
            total_size=int(payload.get("totalSize") or 0),
            records=list(payload.get("records") or []),
            next_records_url=payload.get("nextRecordsUrl"),
        )


class SalesforceRESTClient:
    """Client for the Salesforce REST API using an injected AuthGateway.

    Attributes:
        domain: Account subdomain ("acme" for acme.my.salesforce.com).
        api_version: REST API version used in the default base path.
        timeout: Seconds passed to every request.
        origin: Origin of the calling application, quoted in CORS hints.
    """

    def __init__(
        self,
        domain: str,
        auth_gateway: AuthGateway,
        api_version: str = DEFAULT_API_VERSION,
        session: Optional[requests.Session] = None,
        timeout: float = 60,
        origin: str = "",
    ):
        self.domain = (domain or "").strip()
        self.api_version = api_version
        self.timeout = timeout
        self.origin = origin
        self._auth = auth_gateway
        self._session = session or requests.Session()

    @property
    def base_path(self) -> str:
        return f"/services/data/{self.api_version}"

    @property
    def instance_url(self) -> str:
        return f"https://{self.domain}.my.salesforce.com"

    def request(self, path: str, base_path: Optional[str] = None) -> Dict[str, Any]:
        """GET a resource and return its JSON body.

        Args:
            path: Resource path, appended to the base path.
            base_path: Defaults to the versioned REST root. Pass "" when path
                is already a rooted reference URL.

        Raises:
            ConfigurationMissing, AuthUnavailable, ConnectivityError,
            AuthenticationError, RemoteApiError
        """
        if not self.domain:
            raise ConfigurationMissing(
                "This importer requires the subdomain for your Salesforce account. "
                "Set SALESFORCE_DOMAIN to provide it.",
                setting="SALESFORCE_DOMAIN",
            )

        credential = self._auth.obtain_credential()

        if base_path is None:
            base_path = self.base_path
        url = f"{self.instance_url}{base_path}{path}"
        headers = {
            "Authorization": f"Bearer {credential['token']}",
            "Accept": "application/json",
        }

        logger.debug("GET %s", url)

        try:
            response = self._session.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise ConnectivityError(
                "Error fetching data from Salesforce.",
                remediation=self._connectivity_remediation(),
            ) from e

        logger.debug("Status: %s", response.status_code)

        if 200 <= response.status_code < 300:
            try:
                return response.json()
            except ValueError as e:
                raise RemoteApiError(
                    f"Salesforce API returned a non-JSON body: {response.status_code}",
                    response.status_code,
                ) from e

        if response.status_code == 401:
            self._auth.invalidate()
            raise AuthenticationError(
                f"Salesforce authentication error: {response.status_code}",
                self._auth.service_id,
            )

        detail = _error_detail(response)
        message = f"Salesforce API error: {response.status_code}"
        if detail:
            message = f"{message} ({detail})"
        raise RemoteApiError(message, response.status_code)

    def query(self, soql: str) -> RemoteQueryResult:
        """Execute SOQL and return the first page of results."""
        payload = self.request(f"/query/?q={encode_query(soql)}")
        return RemoteQueryResult.from_api(payload)

    def describe_list_view(self, list_view_id: str, sobject: str = "Case") -> Dict[str, Any]:
        """Fetch the describe metadata of a saved list view."""
        return self.request(
            f"/sobjects/{quote(sobject, safe='')}/listviews/{quote(list_view_id, safe='')}/describe"
        )

    def fetch_detail(self, detail_url: str) -> Dict[str, Any]:
        """Fetch one record by its rooted reference URL (attributes.url)."""
        return self.request(detail_url, base_path="")

    def _connectivity_remediation(self) -> List[str]:
        origin = self.origin or "your application's origin"
        return [
            f"Check your Salesforce subdomain is correct (currently \"{self.domain}\").",
            "Salesforce requires that you grant permission to fetch data over the API. "
            f"Visit Setup > Security > CORS in Salesforce to add {origin} to your CORS allow list.",
            "Your auth token may have expired, try authenticating again.",
        ]


def _error_detail(response) -> str:
    """Pull the first Salesforce error message out of an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return ""
    if isinstance(body, list) and body and isinstance(body[0], dict):
        return str(body[0].get("message", ""))
    if isinstance(body, dict):
        return str(body.get("message", ""))
    return ""
