"""
Settings — Default configuration values for the Salesforce case importer.

This module provides the DEFAULT_SETTINGS dict that CaseImporter.from_env()
uses as fallback values when environment variables are not set. The actual
configuration is loaded from .env at runtime.

Configuration precedence (highest to lowest):
  1. CLI flags (--debug, --strategy)
  2. Environment variables (from .env file)
  3. DEFAULT_SETTINGS (this file)

Settings reference:
  SALESFORCE_DOMAIN         Account subdomain, e.g. "acme" for acme.my.salesforce.com (required)
  SALESFORCE_API_VERSION    REST API version used for the versioned root
  SALESFORCE_CLIENT_ID      Connected app consumer key (client_credentials flow)
  SALESFORCE_CLIENT_SECRET  Connected app consumer secret
  SALESFORCE_ACCESS_TOKEN   Pre-issued bearer token, used instead of client credentials
  QUERY_STRATEGY            "saved_view" (list view filter) or "static_category" (open/closed)
  SOBJECT_TYPE              Salesforce object the importer reads
  REQUEST_TIMEOUT           Seconds before an HTTP request is abandoned
  HOST_ORIGIN               Origin shown in the CORS remediation hint
  DEBUG                     Whether to log verbose output
"""

SERVICE_ID = "salesforce"
IMPORTER_ID = "aha-develop.salesforce-case-import.cases"

DEFAULT_SETTINGS = {
    "SALESFORCE_DOMAIN": "",
    "SALESFORCE_API_VERSION": "v54.0",
    "QUERY_STRATEGY": "saved_view",
    "SOBJECT_TYPE": "Case",
    "REQUEST_TIMEOUT": 60,
    "HOST_ORIGIN": "",
    "DEBUG": False,
}
