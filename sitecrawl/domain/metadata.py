from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Any, Dict, List, Optional

from sitecrawl.domain.crawl_error import CrawlError


@dataclass
class CrawlMetadata:
    """Stored record of a completed crawl, shared by the service and repository layers."""

    initial_url: str
    id: Optional[str] = None
    host: Optional[str] = None
    crawl_result_set: List[str] = field(default_factory=list)
    err_list: List[CrawlError] = field(default_factory=list)
    created_at: Optional[datetime] = None

    def copy(self) -> "CrawlMetadata":
        return replace(
            self,
            crawl_result_set=list(self.crawl_result_set),
            err_list=list(self.err_list),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "initial_url": self.initial_url,
            "host": self.host,
            "crawl_result_set": list(self.crawl_result_set),
            "err_list": [str(e) for e in self.err_list],
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<CrawlMetadata id={self.id} host={self.host} links={len(self.crawl_result_set)}>"
