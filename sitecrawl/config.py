import os
import logging
from pathlib import Path

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")

DEFAULT_USER_AGENT = "SiteCrawl/0.1"
DEFAULT_HTTP_TIMEOUT = 60
DEFAULT_TOTAL_WORKERS = 650
DEFAULT_CACHE_TTL_HOURS = 24
DEFAULT_REPORT_PATH = "report.json"


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_int_env(name: str, default: int) -> int:
	"""Integer setting; unparsable values are logged and fall back to `default`."""
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	try:
		return int(raw)
	except ValueError:
		logging.error("Invalid %s: %r, using %s", name, raw, default)
		return default


def log_level() -> str:
	return get_str_env("LOG_LEVEL", "INFO").strip().upper()
