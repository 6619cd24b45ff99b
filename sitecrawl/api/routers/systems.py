from typing import Optional

from fastapi import APIRouter

from sitecrawl.repository.crawls import CrawlsRepository


def create_systems_router(container_env: dict, crawls_repo: Optional[CrawlsRepository] = None):
    """Liveness and effective settings of the running service."""
    router = APIRouter(prefix="/systems", tags=["System"])

    @router.get("/health")
    def health():
        body = {"status": "ok"}
        if crawls_repo is not None:
            body["cached_crawls"] = len(crawls_repo)
        return body

    @router.get("/config")
    def get_config():
        # Only the keys the service reads; values rendered as strings.
        return {
            "environment": {
                key: None if value is None else str(value)
                for key, value in sorted(container_env.items())
            }
        }

    return router
