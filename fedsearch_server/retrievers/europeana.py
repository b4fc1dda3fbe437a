from typing import Any, Dict, List, Optional

from .base import BaseConnector
from ..models.schema import ResultRecord


class EuropeanaConnector(BaseConnector):
    """Cultural-heritage records from the Europeana Search API."""

    name = "Europeana"

    @property
    def url(self) -> str:
        return self.config.europeana_url

    def build_params(self, query_string: str) -> Dict[str, Any]:
        return {
            "query": query_string,
            "wskey": self.config.europeana_api_key,
            "rows": self.config.europeana_rows,
        }

    def extract_items(self, payload: Any) -> Optional[List[Dict[str, Any]]]:
        if not isinstance(payload, dict):
            return None
        items = payload.get("items")
        if not isinstance(items, list):
            # Europeana omits "items" entirely for zero hits
            if payload.get("success") is True and payload.get("totalResults") == 0:
                return []
            return None
        return items

    def to_record(self, item: Dict[str, Any]) -> ResultRecord:
        link = self._first_text(item.get("edmIsShownBy")) or self._first_text(item.get("edmIsShownAt"))
        return self._record(
            title=self._first_text(item.get("title")),
            link=link,
            score=item.get("score"),
        )
