"""
Candidate Lister — Runs the candidate query and transforms the results.

Only the first page of results is consumed. When Salesforce reports more
pages (done is false) the truncation is logged and the listing returns what
it has.
"""

import logging
from typing import Any, Dict, List, Optional

from .record_transformer import CandidateRecord, RecordTransformer
from .soql_queries import QueryBuilder

logger = logging.getLogger(__name__)


class CandidateLister:
    def __init__(self, query_builder: QueryBuilder, client, transformer: RecordTransformer):
        self.query_builder = query_builder
        self.client = client
        self.transformer = transformer

    def list_candidates(self, filters: Optional[Dict[str, Any]]) -> List[CandidateRecord]:
        soql = self.query_builder.build(filters)
        if soql is None:
            return []

        result = self.client.query(soql)
        if not result.done:
            # result.next_records_url is never followed.
            logger.warning(
                "Query returned %d of %d cases; only the first page is listed",
                len(result.records),
                result.total_size,
            )

        candidates = []
        for raw in result.records:
            try:
                candidates.append(self.transformer.to_candidate_record(raw))
            except ValueError as e:
                logger.warning("Skipping case record: %s", e)

        logger.debug("Listed %d candidate cases", len(candidates))
        return candidates
