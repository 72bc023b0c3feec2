"""
Core package — The case import pipeline modules.

Each module handles one concern:

  importer.py           Pipeline wiring and the five host operations
  auth_gateway.py       Bearer credential acquisition
  salesforce_client.py  HTTP communication with Salesforce
  soql_queries.py       SOQL text and the QueryBuilder
  filter_catalog.py     Declared filters and their values
  candidate_lister.py   Query execution and record transformation
  record_transformer.py Salesforce Case JSON -> CandidateRecord
  record_renderer.py    CandidateRecord -> HTML card
  import_handler.py     CandidateRecord -> host record description
  errors.py             Error taxonomy
"""

from .importer import CaseImporter
from .auth_gateway import AuthGateway, SalesforceOAuthClient
from .salesforce_client import SalesforceRESTClient, RemoteQueryResult, encode_query
from .soql_queries import QueryBuilder, QueryStrategy
from .filter_catalog import Filter, FilterCatalog, FilterKind, FilterValue
from .candidate_lister import CandidateLister
from .record_transformer import CandidateRecord, RawCaseRecord, RecordTransformer
from .record_renderer import RecordRenderer, sanitize_url
from .import_handler import ImportHandler
from .errors import (
    AuthenticationError,
    AuthUnavailable,
    CaseImportError,
    ConfigurationMissing,
    ConnectivityError,
    RemoteApiError,
    SecondaryFetchFailure,
)
