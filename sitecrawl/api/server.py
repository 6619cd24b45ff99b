from fastapi import FastAPI

from sitecrawl.api.routers import create_crawls_router, create_systems_router


def create_app(container) -> FastAPI:
    """Return the FastAPI application with crawl and system endpoints.

    Services are taken from `container`, so tests can pass a container with
    overridden providers.
    """
    app = FastAPI(title="SiteCrawl", version="0.1.0")
    app.include_router(create_crawls_router(container.crawler_service()))
    app.include_router(create_systems_router(container.config(), container.crawls_repository()))
    return app
