"""
Errors — The failure taxonomy of the case import pipeline.

Every error raised by the pipeline derives from CaseImportError so the CLI and
the host can catch the family in one place:

  ConfigurationMissing   A required account setting (the subdomain) is absent.
                         Raised before any network call; the user must fix settings.
  AuthUnavailable        The credential source could not produce a token
                         (cancelled, account not linked, token endpoint down).
  AuthenticationError    Salesforce answered 401. Carries the service id so the
                         host can trigger its re-authentication flow.
  ConnectivityError      The request never got an HTTP answer (DNS, TLS, CORS,
                         connection refused). Carries remediation steps.
  RemoteApiError         Any other non-2xx answer. Carries the status code.
  SecondaryFetchFailure  The fallback description fetch during import failed.
                         Only ever raised and caught inside ImportHandler.
"""

from typing import List, Optional


class CaseImportError(Exception):
    """Base class for all importer errors."""


class ConfigurationMissing(CaseImportError):
    """A required configuration value is not set."""

    def __init__(self, message: str, setting: str = ""):
        super().__init__(message)
        self.setting = setting


class AuthUnavailable(CaseImportError):
    """No credential could be obtained for the remote service."""


class AuthenticationError(CaseImportError):
    """The remote service rejected the credential (HTTP 401)."""

    def __init__(self, message: str, service: str):
        super().__init__(message)
        self.service = service


class ConnectivityError(CaseImportError):
    """Network-level failure talking to the remote service."""

    def __init__(self, message: str, remediation: Optional[List[str]] = None):
        super().__init__(message)
        self.remediation = remediation or []

    def display_error(self) -> str:
        """Message plus numbered remediation steps, for user-facing output."""
        lines = [str(self)]
        for i, step in enumerate(self.remediation, start=1):
            lines.append(f"  {i}. {step}")
        return "\n".join(lines)


class RemoteApiError(CaseImportError):
    """The remote service answered with a non-2xx status other than 401."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class SecondaryFetchFailure(CaseImportError):
    """The fallback fetch of a case description failed."""
