import os
import logging
from pathlib import Path
from typing import Optional

try:
	from dotenv import load_dotenv
except ImportError:
	logging.warning("python-dotenv not available; using environment variables only")
else:
	loaded = load_dotenv()
	if not loaded and Path(".env").exists():
		raise RuntimeError(".env file present but failed to load")

_TRUTHY = ("1", "true", "yes", "on")


def get_str_env(name: str, default: str) -> str:
	raw = os.getenv(name)
	if raw is None or raw == "":
		return default
	return raw


def get_optional_str_env(name: str) -> Optional[str]:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return None
	return raw


def get_bool_env(name: str, default: bool) -> bool:
	raw = os.getenv(name)
	if raw is None or raw.strip() == "":
		return default
	return raw.strip().lower() in _TRUTHY


def database_url() -> Optional[str]:
	return get_optional_str_env("DATABASE_URL")


def create_schema() -> bool:
	return get_bool_env("USEROPS_CREATE_SCHEMA", False)


def sql_echo() -> bool:
	return get_bool_env("USEROPS_SQL_ECHO", False)


def log_level() -> str:
	level = get_str_env("USEROPS_LOG_LEVEL", "WARNING").strip().upper()
	if not isinstance(logging.getLevelName(level), int):
		logging.warning("Invalid USEROPS_LOG_LEVEL: %r; using WARNING", level)
		return "WARNING"
	return level
