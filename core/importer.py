"""
Case Importer — Wires the import pipeline and exposes it to the host.

The pipeline, leaf to root:

  AuthGateway           Bearer credential from the credential source.
  SalesforceRESTClient  Authenticated GETs against the versioned REST root.
  QueryBuilder          Filters -> SOQL (saved view or static category).
  FilterCatalog         Declared filters and their selectable values.
  CandidateLister       Runs the query, transforms each record.
  RecordTransformer     Salesforce Case JSON -> CandidateRecord.
  RecordRenderer        CandidateRecord -> HTML card.
  ImportHandler         CandidateRecord -> host record description + save().

CaseImporter exposes exactly five operations. hooks() binds them to the host's
action names and adapts the host payload dicts:

  listFilters     ()                          -> {name: {title, required, type}}
  filterValues    {filterName}                -> [{text, value}]
  listCandidates  {filters}                   -> {"records": [candidate dicts]}
  renderRecord    {record}                    -> HTML string
  importRecord    {importRecord, ahaRecord}   -> None

Configuration:
    CaseImporter.from_env() loads a .env file via python-dotenv and falls back
    to config/settings.py DEFAULT_SETTINGS. Required: SALESFORCE_DOMAIN.

Typical usage:
    importer = CaseImporter.from_env(env_file="./.env")
    if importer.validate_config():
        candidates = importer.list_candidates({"listViewId": "00B..."})
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

import requests
from dotenv import load_dotenv

from config import DEFAULT_SETTINGS, IMPORTER_ID, SERVICE_ID

from .auth_gateway import AuthGateway, SalesforceOAuthClient
from .candidate_lister import CandidateLister
from .filter_catalog import FilterCatalog, FilterValue
from .import_handler import ImportHandler
from .record_renderer import RecordRenderer, sanitize_url
from .record_transformer import CandidateRecord, RecordTransformer
from .salesforce_client import SalesforceRESTClient
from .soql_queries import QueryBuilder, QueryStrategy

logger = logging.getLogger(__name__)

CandidateLike = Union[CandidateRecord, Mapping[str, Any]]


class CaseImporter:
    """The Salesforce case import pipeline.

    Attributes:
        identifier: Host extension contribution id.
        client: SalesforceRESTClient shared by every component.
        strategy: Active QueryStrategy.
    """

    identifier = IMPORTER_ID

    def __init__(
        self,
        client: SalesforceRESTClient,
        strategy: QueryStrategy = QueryStrategy.SAVED_VIEW,
        sobject: str = "Case",
        url_sanitizer: Callable[[Any], str] = sanitize_url,
    ):
        self.client = client
        self.strategy = QueryStrategy.parse(strategy)
        self.sobject = sobject

        self.catalog = FilterCatalog(client, self.strategy, sobject)
        self.query_builder = QueryBuilder(client, self.strategy, sobject)
        self.transformer = RecordTransformer(client.domain, sobject)
        self.lister = CandidateLister(self.query_builder, client, self.transformer)
        self.renderer = RecordRenderer(url_sanitizer)
        self.import_handler = ImportHandler(client)

    @classmethod
    def from_env(
        cls,
        env_file: str = "./.env",
        credential_source: Optional[Callable[..., Dict[str, str]]] = None,
        session: Optional[requests.Session] = None,
        strategy: Optional[str] = None,
        url_sanitizer: Callable[[Any], str] = sanitize_url,
    ) -> "CaseImporter":
        """Build the pipeline from environment variables.

        Args:
            env_file: Path to a .env file. Loaded if it exists.
            credential_source: Host credential callable. Defaults to a
                SalesforceOAuthClient built from the SALESFORCE_* settings.
            session: requests.Session used for every HTTP call.
            strategy: Overrides QUERY_STRATEGY.
            url_sanitizer: Host URL sanitation utility.
        """
        env_path = Path(env_file)
        if env_path.exists():
            load_dotenv(env_path)
            logger.info("Loaded configuration from: %s", env_file)
        else:
            logger.info("%s not found, using defaults/environment", env_file)

        domain = os.getenv("SALESFORCE_DOMAIN", DEFAULT_SETTINGS["SALESFORCE_DOMAIN"]).strip()
        api_version = os.getenv("SALESFORCE_API_VERSION", DEFAULT_SETTINGS["SALESFORCE_API_VERSION"])
        sobject = os.getenv("SOBJECT_TYPE", DEFAULT_SETTINGS["SOBJECT_TYPE"])
        timeout = float(os.getenv("REQUEST_TIMEOUT", str(DEFAULT_SETTINGS["REQUEST_TIMEOUT"])))
        origin = os.getenv("HOST_ORIGIN", DEFAULT_SETTINGS["HOST_ORIGIN"])
        strategy = strategy or os.getenv("QUERY_STRATEGY", DEFAULT_SETTINGS["QUERY_STRATEGY"])

        session = session or requests.Session()
        if credential_source is None:
            credential_source = SalesforceOAuthClient(
                domain,
                client_id=os.getenv("SALESFORCE_CLIENT_ID", ""),
                client_secret=os.getenv("SALESFORCE_CLIENT_SECRET", ""),
                access_token=os.getenv("SALESFORCE_ACCESS_TOKEN", ""),
                session=session,
                timeout=timeout,
            )

        client = SalesforceRESTClient(
            domain,
            AuthGateway(credential_source, SERVICE_ID),
            api_version=api_version,
            session=session,
            timeout=timeout,
            origin=origin,
        )
        return cls(client, QueryStrategy.parse(strategy), sobject, url_sanitizer)

    def validate_config(self) -> bool:
        """Check required settings are present, printing each missing one."""
        errors = []
        if not self.client.domain:
            errors.append("SALESFORCE_DOMAIN is required")

        if errors:
            print("\nConfiguration Errors:")
            for err in errors:
                print(f"  - {err}")
            return False
        return True

    # -- The five host operations --

    def list_filters(self) -> Dict[str, Dict[str, Any]]:
        return {name: f.to_dict() for name, f in self.catalog.declare_filters().items()}

    def filter_values(self, filter_name: str) -> List[FilterValue]:
        return self.catalog.resolve_filter_values(filter_name)

    def list_candidates(self, filters: Optional[Mapping[str, Any]]) -> List[CandidateRecord]:
        return self.lister.list_candidates(dict(filters or {}))

    def render_record(self, record: CandidateLike) -> str:
        return self.renderer.render(record)

    def import_record(self, record: CandidateLike, target: Any):
        self.import_handler.import_record(_as_candidate(record), target)

    # -- Host registration --

    def hooks(self) -> Dict[str, Callable[..., Any]]:
        """Map host action names to payload-shaped callables."""
        return {
            "listFilters": lambda payload=None: self.list_filters(),
            "filterValues": lambda payload: [
                v.to_dict() for v in self.filter_values(payload.get("filterName", ""))
            ],
            "listCandidates": lambda payload: {
                "records": [c.to_dict() for c in self.list_candidates(payload.get("filters"))]
            },
            "renderRecord": lambda payload: self.render_record(payload["record"]),
            "importRecord": lambda payload: self.import_record(
                payload["importRecord"], payload["ahaRecord"]
            ),
        }


def _as_candidate(record: CandidateLike) -> CandidateRecord:
    if isinstance(record, CandidateRecord):
        return record
    return CandidateRecord.from_dict(record)
