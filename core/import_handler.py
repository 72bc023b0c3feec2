"""
Import Handler — Writes a chosen case into the host record's description.

Import is split into two concerns:

  resolve_description()  Decide the description text: the candidate's inline
                         description, or one fallback fetch of the case detail
                         when the listing did not carry one. A failed fallback
                         is logged and yields None; it never aborts the import.

  import_record()        Compose the rich-text content (description, then a
                         "View in Salesforce" link) and assign it to the
                         target's description, then call target.save().
                         Assignment overwrites, so re-importing is idempotent.
                         Only a save() failure is fatal.
"""

import html
import logging
from typing import Any, Optional

from .errors import CaseImportError, SecondaryFetchFailure
from .record_transformer import CandidateRecord

logger = logging.getLogger(__name__)

SOURCE_LINK_TEXT = "View in Salesforce"


def format_description(text: str) -> str:
    """Escape description text and turn CRLF sequences into <br>."""
    return html.escape(text, quote=False).replace("\r\n", "<br>")


def compose_content(candidate: CandidateRecord, description: Optional[str]) -> str:
    link = f'<p><a href="{html.escape(candidate.url, quote=True)}">{SOURCE_LINK_TEXT}</a></p>'
    if description:
        return f"<p>{description}</p>{link}"
    return link


class ImportHandler:
    def __init__(self, client):
        self.client = client

    def resolve_description(self, candidate: CandidateRecord) -> Optional[str]:
        """Return formatted description HTML, or None when none is available."""
        if candidate.description:
            return format_description(candidate.description)

        if not candidate.detail_url:
            logger.debug("Case %s has no detail URL; importing link only", candidate.unique_id)
            return None

        try:
            return format_description(self._fetch_description(candidate))
        except SecondaryFetchFailure as e:
            logger.warning("Unable to fetch description for case %s: %s", candidate.unique_id, e)
            return None

    def compose(self, candidate: CandidateRecord) -> str:
        return compose_content(candidate, self.resolve_description(candidate))

    def import_record(self, candidate: CandidateRecord, target: Any):
        """Write the composed content to target.description and save it."""
        target.description = self.compose(candidate)
        target.save()

    def _fetch_description(self, candidate: CandidateRecord) -> str:
        try:
            detail = self.client.fetch_detail(candidate.detail_url)
        except CaseImportError as e:
            raise SecondaryFetchFailure(str(e)) from e

        description = detail.get("Description") if isinstance(detail, dict) else None
        if not description:
            raise SecondaryFetchFailure("case detail has no Description")
        return str(description)
