"""
Record Transformer — Maps raw Salesforce Case JSON to candidate records.

Raw payloads are validated once, at this boundary, by RawCaseRecord.from_api():
"Id" is required, every other field is optional and becomes None when missing
or null. Downstream code only ever sees CandidateRecord.

Salesforce -> candidate field mapping:
  Id              -> unique_id (and the deep link)
  Subject         -> name
  CaseNumber      -> case_number
  Description     -> description
  Status          -> status
  Priority        -> priority
  attributes.url  -> detail_url (used for the fallback description fetch)
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class RawCaseRecord:
    id: str
    subject: Optional[str] = None
    case_number: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    detail_url: Optional[str] = None

    @classmethod
    def from_api(cls, payload: Mapping[str, Any]) -> "RawCaseRecord":
        if not isinstance(payload, Mapping):
            raise ValueError(f"Case record must be an object, got {type(payload).__name__}")
        record_id = payload.get("Id")
        if not record_id:
            raise ValueError("Case record is missing Id")

        attributes = payload.get("attributes")
        detail_url = attributes.get("url") if isinstance(attributes, Mapping) else None

        return cls(
            id=str(record_id),
            subject=_optional_str(payload.get("Subject")),
            case_number=_optional_str(payload.get("CaseNumber")),
            description=_optional_str(payload.get("Description")),
            status=_optional_str(payload.get("Status")),
            priority=_optional_str(payload.get("Priority")),
            detail_url=_optional_str(detail_url),
        )


@dataclass(frozen=True)
class CandidateRecord:
    """A case offered to the user for import."""

    unique_id: str
    name: str
    url: str
    case_number: str
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    detail_url: Optional[str] = None

    def to_dict(self) -> Dict[str, str]:
        """Host shape: camelCase keys, absent optional fields omitted."""
        data = {
            "uniqueId": self.unique_id,
            "name": self.name,
            "url": self.url,
            "caseNumber": self.case_number,
            "description": self.description,
            "status": self.status,
            "priority": self.priority,
            "detailUrl": self.detail_url,
        }
        return {key: value for key, value in data.items() if value is not None}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CandidateRecord":
        """Rebuild a record the host passed back (accepts legacy "jsonUrl")."""
        return cls(
            unique_id=str(data["uniqueId"]),
            name=str(data.get("name") or ""),
            url=str(data.get("url") or ""),
            case_number=str(data.get("caseNumber") or ""),
            description=_optional_str(data.get("description") or None),
            status=_optional_str(data.get("status") or None),
            priority=_optional_str(data.get("priority") or None),
            detail_url=_optional_str(data.get("detailUrl") or data.get("jsonUrl") or None),
        )


class RecordTransformer:
    """Builds CandidateRecords for one Salesforce account."""

    def __init__(self, domain: str, sobject: str = "Case"):
        self.domain = domain
        self.sobject = sobject

    def deep_link(self, record_id: str) -> str:
        return f"https://{self.domain}.lightning.force.com/lightning/r/{self.sobject}/{record_id}/view"

    def to_candidate_record(self, raw: Any) -> CandidateRecord:
        if not isinstance(raw, RawCaseRecord):
            raw = RawCaseRecord.from_api(raw)
        return CandidateRecord(
            unique_id=raw.id,
            name=raw.subject or "",
            url=self.deep_link(raw.id),
            case_number=raw.case_number or "",
            description=raw.description,
            status=raw.status,
            priority=raw.priority,
            detail_url=raw.detail_url,
        )
