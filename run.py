import argparse
import logging
import sys
import uuid

import uvicorn

from sitecrawl.api.server import create_app
from sitecrawl.container import Container
from sitecrawl.exceptions import ConfigError, InvalidHostError, RecordExistsError, RecordNotFoundError
from sitecrawl.services import url_policy
from sitecrawl.services.report_writer import write_report

logger = logging.getLogger("sitecrawl")

NEW_CRAWL_OPTION = "New Crawl"
LOAD_CRAWL_OPTION = "Load Crawl"
ALL_CRAWLS_OPTION = "All Crawls"
EXIT_OPTION = "Exit"
MENU = [NEW_CRAWL_OPTION, LOAD_CRAWL_OPTION, ALL_CRAWLS_OPTION, EXIT_OPTION]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Crawl every same-domain page of a website")
    parser.add_argument("--report", default=None, help="report path (default: SITECRAWL_REPORT_PATH)")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="start the HTTP API (default)")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=8000)

    crawl = sub.add_parser("crawl", help="crawl a website and write the JSON report")
    crawl.add_argument("url")

    sub.add_parser("interactive", help="menu-driven session; crawl results are cached for the session")
    return parser


def _prompt(label: str, validate, input_fn) -> str:
    while True:
        value = input_fn(f"{label}: ").strip()
        try:
            validate(value)
        except (InvalidHostError, ValueError) as e:
            print(f"invalid input: {e}")
            continue
        return value


def _select(input_fn) -> str:
    while True:
        for i, option in enumerate(MENU, start=1):
            print(f"{i}) {option}")
        choice = input_fn("Select Option: ").strip()
        if choice.isdigit() and 1 <= int(choice) <= len(MENU):
            return MENU[int(choice) - 1]
        if choice in MENU:
            return choice
        print(f"unknown option: {choice!r}")


def interactive(service, report_path: str, input_fn=input) -> int:
    """Prompt loop: new crawls, cached lookups and history, each written to the report."""
    while True:
        option = _select(input_fn)
        try:
            if option == NEW_CRAWL_OPTION:
                url = _prompt("Enter a website to crawl", url_policy.hostname, input_fn)
                report = service.crawl_site(url)
            elif option == LOAD_CRAWL_OPTION:
                crawl_id = _prompt("Enter a previous crawl result ID", uuid.UUID, input_fn)
                report = service.get_crawl(crawl_id)
            elif option == ALL_CRAWLS_OPTION:
                report = service.get_crawl_history()
            else:
                return 0
        except (ConfigError, InvalidHostError, RecordNotFoundError, RecordExistsError) as e:
            logger.error("Error running crawler: %s", e)
            continue

        try:
            write_report(report, report_path)
        except OSError as e:
            logger.warning("Error generating crawl report: %s", e)


def main(argv=None, container: Container = None, input_fn=input) -> int:
    container = container or Container()
    env = container.config()
    logging.basicConfig(
        level=getattr(logging, str(env.get("LOG_LEVEL", "INFO")).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    args = _build_parser().parse_args(argv)
    command = args.command or "serve"
    report_path = args.report or env.get("SITECRAWL_REPORT_PATH", "report.json")

    if command == "serve":
        host = getattr(args, "host", "0.0.0.0")
        port = getattr(args, "port", 8000)
        logger.info("Starting SiteCrawl API on %s:%s", host, port)
        uvicorn.run(create_app(container), host=host, port=port)
        return 0

    service = container.crawler_service()
    if command == "interactive":
        return interactive(service, report_path, input_fn=input_fn)

    try:
        report = service.crawl_site(args.url)
    except (ConfigError, InvalidHostError, RecordExistsError) as e:
        logger.error("Error running crawler: %s", e)
        return 1

    try:
        write_report(report, report_path)
    except OSError as e:
        logger.warning("Error generating crawl report: %s", e)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
