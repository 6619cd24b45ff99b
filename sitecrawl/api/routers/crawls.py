import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from sitecrawl.exceptions import InvalidHostError, RecordExistsError, RecordNotFoundError
from sitecrawl.services.crawler_service import CrawlerService

logger = logging.getLogger(__name__)


class CrawlRequest(BaseModel):
    url: str


class CrawlRecordResponse(BaseModel):
    id: Optional[str] = None
    initial_url: str
    host: Optional[str] = None
    crawl_result_set: List[str] = []
    err_list: List[str] = []
    created_at: Optional[str] = None


def create_crawls_router(crawler_service: CrawlerService):
    router = APIRouter(prefix="/crawls", tags=["Crawls"])

    @router.post("", response_model=List[CrawlRecordResponse])
    def crawl(req: CrawlRequest):
        # Sync endpoint: FastAPI runs it in its threadpool while the crawl blocks.
        try:
            records = crawler_service.crawl_site(req.url)
        except InvalidHostError:
            raise HTTPException(status_code=400, detail="invalid url: a http or https hostname is required")
        except RecordExistsError:
            raise HTTPException(status_code=409, detail="crawl record already exists")
        except Exception:
            logger.exception("Error running crawl for %s", req.url)
            raise HTTPException(status_code=500, detail="error running crawl")
        return [r.to_dict() for r in records]

    @router.get("", response_model=List[CrawlRecordResponse])
    def history():
        try:
            records = crawler_service.get_crawl_history()
        except Exception:
            logger.exception("Error listing crawl history")
            raise HTTPException(status_code=500, detail="error listing crawls")
        return [r.to_dict() for r in records]

    @router.get("/{crawl_id}", response_model=List[CrawlRecordResponse])
    def get_crawl(crawl_id: str):
        try:
            records = crawler_service.get_crawl(crawl_id)
        except RecordNotFoundError:
            raise HTTPException(status_code=404, detail="crawl not found")
        except Exception:
            logger.exception("Error loading crawl %s", crawl_id)
            raise HTTPException(status_code=500, detail="error loading crawl")
        return [r.to_dict() for r in records]

    return router
