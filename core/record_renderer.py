"""
Record Renderer — Read-only HTML card for a candidate case in the host list.

The card shows, row by row:
  - the case number and an external-link icon
  - the case subject as a link to the case in Salesforce
  - a status pill

Candidate data comes from Salesforce and is untrusted: every URL passes
through the URL sanitizer before it becomes an href, and every text value and
attribute is HTML-escaped.
"""

import html
import re
from typing import Any, Callable, Mapping, Union

from .record_transformer import CandidateRecord

BLANK_URL = "about:blank"
SAFE_SCHEMES = {"http", "https", "mailto"}

_CONTROL_CHARS = re.compile(r"[\u0000-\u001F\u007F-\u009F\u2000-\u200D\uFEFF]")
_URL_SCHEME = re.compile(r"^([^:/?#]+):")


def sanitize_url(url: Any) -> str:
    """Return url unchanged if it is safe to link to, otherwise about:blank."""
    if not url:
        return BLANK_URL

    cleaned = _CONTROL_CHARS.sub("", str(url)).strip()
    if not cleaned:
        return BLANK_URL

    # Schemes are checked on the entity-decoded form ("&#106;avascript:").
    decoded = _CONTROL_CHARS.sub("", html.unescape(cleaned)).strip()
    if decoded.startswith((".", "/")):
        return cleaned

    match = _URL_SCHEME.match(decoded)
    if match and match.group(1).lower() not in SAFE_SCHEMES:
        return BLANK_URL
    return cleaned


CARD_TEMPLATE = """\
<div style="display: flex; flex-direction: row; gap: 4px">
  <div style="flex-grow: 1">
    <div class="card__row">
      <div class="card__section">
        <div class="card__field"><span class="text-muted">{case_number}</span></div>
      </div>
      <div class="card__section">
        <div class="card__field">
          <a href="{href}" target="_blank" rel="noopener noreferrer"><i class="text-muted fa-solid fa-external-link"></i></a>
        </div>
      </div>
    </div>
    <div class="card__row">
      <div class="card__section">
        <div class="card__field">
          <a href="{href}" target="_blank" rel="noopener noreferrer">{name}</a>
        </div>
      </div>
    </div>
    <div class="card__row">
      <div class="card__section">
        <div class="card__field"><aha-pill color="var(--theme-button-pill)">{status}</aha-pill></div>
      </div>
    </div>
  </div>
</div>"""


class RecordRenderer:
    def __init__(self, url_sanitizer: Callable[[Any], str] = sanitize_url):
        self.url_sanitizer = url_sanitizer

    def render(self, record: Union[CandidateRecord, Mapping[str, Any]]) -> str:
        if not isinstance(record, CandidateRecord):
            record = CandidateRecord.from_dict(record)

        return CARD_TEMPLATE.format(
            case_number=html.escape(record.case_number),
            href=html.escape(self.url_sanitizer(record.url), quote=True),
            name=html.escape(record.name),
            status=html.escape(record.status or ""),
        )
