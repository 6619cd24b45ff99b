import json
import logging
from pathlib import Path
from typing import Iterable, Union

from sitecrawl.domain.metadata import CrawlMetadata

logger = logging.getLogger(__name__)


def write_report(records: Iterable[CrawlMetadata], path: Union[str, Path] = "report.json") -> Path:
    """Write crawl records to `path` as an indented JSON array and return the path."""
    out = Path(path)
    payload = [r.to_dict() for r in records]
    out.write_text(json.dumps(payload, indent=1), encoding="utf-8")
    logger.info("Wrote %s crawl record(s) to %s", len(payload), out)
    return out
