"""YAML config loading and validation."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from job_board.jobs.api_client import DEFAULT_BASE_URL
from job_board.jobs.listing import DEFAULT_PAGE_SIZE_THRESHOLD


@dataclass
class ApiConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = 30


@dataclass
class ListingConfig:
    page_size_threshold: int = DEFAULT_PAGE_SIZE_THRESHOLD


@dataclass
class StorageConfig:
    data_dir: str = "data"
    bookmarks_file: str = "bookmarks.db"


@dataclass
class AppConfig:
    api: ApiConfig = field(default_factory=ApiConfig)
    listing: ListingConfig = field(default_factory=ListingConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    log_dir: str = "logs"

    @property
    def bookmarks_db_path(self) -> str:
        return str(Path(self.storage.data_dir) / self.storage.bookmarks_file)


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load configuration from YAML file."""
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(
            f"Config file not found: {config_path}\n"
            "Copy config.example.yaml to config.yaml and adjust it."
        )

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    config = AppConfig()

    # API (env var takes precedence for the base URL)
    api_raw = raw.get("api") or {}
    config.api = ApiConfig(
        base_url=os.environ.get("JOB_BOARD_API_BASE_URL", api_raw.get("base_url", DEFAULT_BASE_URL)),
        timeout=api_raw.get("timeout", 30),
    )

    listing_raw = raw.get("listing") or {}
    config.listing = ListingConfig(
        page_size_threshold=listing_raw.get("page_size_threshold", DEFAULT_PAGE_SIZE_THRESHOLD),
    )

    storage_raw = raw.get("storage") or {}
    config.storage = StorageConfig(
        data_dir=storage_raw.get("data_dir", "data"),
        bookmarks_file=storage_raw.get("bookmarks_file", "bookmarks.db"),
    )

    config.log_dir = raw.get("log_dir", "logs")

    return config


def validate_config(config: AppConfig) -> list[str]:
    """Return list of validation warnings (empty = OK)."""
    warnings = []

    if not config.api.base_url.startswith(("http://", "https://")):
        warnings.append(f"API base_url is not an http(s) URL: {config.api.base_url!r}")

    if not config.api.timeout or config.api.timeout <= 0:
        warnings.append("API timeout must be positive - requests may hang")

    if config.listing.page_size_threshold <= 0:
        warnings.append("listing.page_size_threshold must be positive - end of list will never be detected")

    return warnings
