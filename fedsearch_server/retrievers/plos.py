from typing import Any, Dict, List, Optional

from .base import BaseConnector
from ..core.config import PLOS_ARTICLE_URL
from ..models.schema import ResultRecord


class PLOSConnector(BaseConnector):
    """Scientific articles from the PLOS Solr search API."""

    name = "PLOS"

    @property
    def url(self) -> str:
        return self.config.plos_url

    def build_params(self, query_string: str) -> Dict[str, Any]:
        return {
            "q": query_string,
            "wt": "json",
            "fl": self.config.plos_fields,
            "rows": self.config.plos_rows,
        }

    def extract_items(self, payload: Any) -> Optional[List[Dict[str, Any]]]:
        if not isinstance(payload, dict):
            return None
        response = payload.get("response")
        if not isinstance(response, dict):
            return None
        docs = response.get("docs")
        if not isinstance(docs, list):
            return None
        return docs

    def to_record(self, item: Dict[str, Any]) -> ResultRecord:
        doc_id = self._first_text(item.get("id"))
        link = PLOS_ARTICLE_URL.format(id=doc_id) if doc_id else None
        return self._record(
            title=self._first_text(item.get("title_display")),
            link=link,
            score=item.get("score"),
        )
