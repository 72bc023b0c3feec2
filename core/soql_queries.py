"""
SOQL Queries — Query text and the QueryBuilder that turns filters into SOQL.

The importer supports two ways of choosing which cases to list:

  SAVED_VIEW       The user picks one of their Salesforce list views
                   (filter "listViewId"). The view's describe metadata holds
                   its SOQL, which is used verbatim.

  STATIC_CATEGORY  The user picks a fixed category (filter "caseStatus",
                   open or closed). The category's predicate is interpolated
                   into CASE_CATEGORY_QUERY. Only predicates from
                   CASE_CATEGORIES are ever spliced into the query text.

QueryBuilder.build() returns None when the required filter value is absent;
callers treat that as "no candidates", not as an error.
"""

import enum
import logging
import re
from typing import Any, Dict, Optional, Union

logger = logging.getLogger(__name__)

LIST_VIEW_FILTER = "listViewId"
CASE_STATUS_FILTER = "caseStatus"

LIST_VIEW_QUERY = """
  SELECT Id, Name FROM ListView WHERE SobjectType = '{sobject}'
"""

CASE_CATEGORY_QUERY = """
  SELECT Id, Subject, CaseNumber, Description, Status, Priority
  FROM {sobject}
  WHERE {predicate}
  ORDER BY CreatedDate DESC
"""

# value -> (display text, SOQL predicate)
CASE_CATEGORIES = {
    "open": ("Open cases", "IsClosed = false"),
    "closed": ("Closed cases", "IsClosed = true"),
}


class QueryStrategy(enum.Enum):
    SAVED_VIEW = "saved_view"
    STATIC_CATEGORY = "static_category"

    @classmethod
    def parse(cls, value: Union[str, "QueryStrategy"]) -> "QueryStrategy":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown query strategy '{value}' (expected one of: {choices})")


def normalize_query(soql: str) -> str:
    """Collapse consecutive whitespace to a single space."""
    return re.sub(r"\s+", " ", soql).strip()


def list_view_query(sobject: str = "Case") -> str:
    return normalize_query(LIST_VIEW_QUERY.format(sobject=sobject))


class QueryBuilder:
    """Builds the candidate query for the active strategy."""

    def __init__(self, client, strategy: QueryStrategy, sobject: str = "Case"):
        self.client = client
        self.strategy = QueryStrategy.parse(strategy)
        self.sobject = sobject

    @property
    def required_filter(self) -> str:
        if self.strategy is QueryStrategy.SAVED_VIEW:
            return LIST_VIEW_FILTER
        return CASE_STATUS_FILTER

    def build(self, filters: Optional[Dict[str, Any]]) -> Optional[str]:
        """Return normalized SOQL for the filters, or None when none can be built."""
        value = (filters or {}).get(self.required_filter)
        if not value:
            return None

        if self.strategy is QueryStrategy.SAVED_VIEW:
            return self._saved_view_query(str(value))
        return self._category_query(str(value))

    def _saved_view_query(self, list_view_id: str) -> Optional[str]:
        describe = self.client.describe_list_view(list_view_id, self.sobject)
        query = describe.get("query")
        if not query:
            logger.warning("List view %s describe returned no query", list_view_id)
            return None
        return normalize_query(query)

    def _category_query(self, category: str) -> Optional[str]:
        entry = CASE_CATEGORIES.get(category.lower())
        if entry is None:
            logger.warning("Unknown case category '%s'", category)
            return None
        _, predicate = entry
        return normalize_query(
            CASE_CATEGORY_QUERY.format(sobject=self.sobject, predicate=predicate)
        )
