"""
Filter Catalog — The filters the importer declares and their selectable values.

SAVED_VIEW declares "listViewId", whose values come from a remote query over
the account's list views. STATIC_CATEGORY declares "caseStatus", whose values
are the fixed CASE_CATEGORIES. Asking for the values of any other filter name
returns an empty list.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Dict, List

from .soql_queries import (
    CASE_CATEGORIES,
    CASE_STATUS_FILTER,
    LIST_VIEW_FILTER,
    QueryStrategy,
    list_view_query,
)

logger = logging.getLogger(__name__)


class FilterKind(enum.Enum):
    SELECT = "select"


@dataclass(frozen=True)
class Filter:
    name: str
    title: str
    required: bool = False
    kind: FilterKind = FilterKind.SELECT

    def to_dict(self) -> Dict:
        return {"title": self.title, "required": self.required, "type": self.kind.value}


@dataclass(frozen=True)
class FilterValue:
    text: str
    value: str

    def to_dict(self) -> Dict[str, str]:
        return {"text": self.text, "value": self.value}


class FilterCatalog:
    """Declares filters for the active strategy and resolves their values."""

    def __init__(self, client, strategy: QueryStrategy, sobject: str = "Case"):
        self.client = client
        self.strategy = QueryStrategy.parse(strategy)
        self.sobject = sobject

    def declare_filters(self) -> Dict[str, Filter]:
        if self.strategy is QueryStrategy.SAVED_VIEW:
            declared = Filter(LIST_VIEW_FILTER, "List view", required=True)
        else:
            declared = Filter(CASE_STATUS_FILTER, "Case status", required=True)
        return {declared.name: declared}

    def resolve_filter_values(self, filter_name: str) -> List[FilterValue]:
        if filter_name not in self.declare_filters():
            logger.debug("No values for undeclared filter '%s'", filter_name)
            return []

        if filter_name == LIST_VIEW_FILTER:
            result = self.client.query(list_view_query(self.sobject))
            return [
                FilterValue(text=str(view.get("Name") or ""), value=str(view["Id"]))
                for view in result.records
                if view.get("Id")
            ]

        return [FilterValue(text=text, value=value) for value, (text, _) in CASE_CATEGORIES.items()]
