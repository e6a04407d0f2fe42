"""
Configuration loader for PDF Scout.

Loads settings from config.json and provides typed access via dataclasses.
Supports singleton pattern for global access and runtime reload capability.
Components read their defaults from here but accept explicit overrides,
so tests and scripts can point them at any location.
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError


CONFIG_ENV_VAR = "PDF_SCOUT_CONFIG"


@dataclass
class PathsConfig:
    """Configuration for file system paths."""
    cache_directory: Path
    logs_directory: Path
    index_filename: str = "files.json"
    content_filename: str = "content.json"

    @property
    def index_path(self) -> Path:
        """Location of the persisted file index."""
        return self.cache_directory / self.index_filename

    @property
    def content_path(self) -> Path:
        """Location of the persisted content cache."""
        return self.cache_directory / self.content_filename


@dataclass
class CrawlConfig:
    """Configuration for directory crawling."""
    roots: List[Path]
    extensions: List[str]
    follow_symlinks: bool
    max_depth: int


@dataclass
class ExtractionConfig:
    """Configuration for first-page text extraction."""
    primary_backend: str
    fallback_backend: Optional[str]
    pdftotext_binary: str
    max_output_bytes: int
    timeout_seconds: float


@dataclass
class SearchConfig:
    """Configuration for search and preview behaviour."""
    min_query_length: int
    max_workers: int
    snippet_radius: int
    preview_chars: int


@dataclass
class GUIConfig:
    """Configuration for Streamlit web interface."""
    page_title: str
    search_placeholder: str


@dataclass
class LoggingConfig:
    """Configuration for logging behavior."""
    level: str
    format: str
    max_file_size_mb: int
    backup_count: int


@dataclass
class Config:
    """
    Main configuration container holding all config sections.

    Provides singleton access via get_config() function.
    """
    paths: PathsConfig
    crawl: CrawlConfig
    extraction: ExtractionConfig
    search: SearchConfig
    gui: GUIConfig
    logging: LoggingConfig
    project_root: Path = field(default_factory=Path)

    @classmethod
    def from_file(cls, config_path: Path) -> "Config":
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the config.json file.

        Returns:
            Populated Config instance.

        Raises:
            ConfigurationError: If file is missing or invalid.
        """
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_path}",
                {"path": str(config_path)}
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid JSON in config file: {e}",
                {"path": str(config_path)}
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                "Config file must contain a JSON object",
                {"path": str(config_path)}
            )

        project_root = config_path.resolve().parent.parent

        return cls._parse_config(data, project_root)

    @classmethod
    def _parse_config(cls, data: dict, project_root: Path) -> "Config":
        """Parse raw config dict into typed Config object."""
        paths_data = data.get("paths", {})
        paths = PathsConfig(
            cache_directory=cls._resolve_path(paths_data.get("cache_directory", "~/.cache/pdf-scout"), project_root),
            logs_directory=cls._resolve_path(paths_data.get("logs_directory", "output/logs"), project_root),
            index_filename=paths_data.get("index_filename", "files.json"),
            content_filename=paths_data.get("content_filename", "content.json")
        )

        crawl_data = data.get("crawl", {})
        roots = crawl_data.get("roots", [])
        if not isinstance(roots, list):
            raise ConfigurationError(
                "crawl.roots must be a list of directories",
                {"roots": roots}
            )
        crawl = CrawlConfig(
            roots=[cls._resolve_path(root, project_root) for root in roots],
            extensions=crawl_data.get("extensions", [".pdf"]),
            follow_symlinks=crawl_data.get("follow_symlinks", False),
            max_depth=crawl_data.get("max_depth", 64)
        )

        ext_data = data.get("extraction", {})
        extraction = ExtractionConfig(
            primary_backend=ext_data.get("primary_backend", "pdftotext"),
            fallback_backend=ext_data.get("fallback_backend", "pypdf"),
            pdftotext_binary=ext_data.get("pdftotext_binary", "pdftotext"),
            max_output_bytes=ext_data.get("max_output_bytes", 1024 * 1024),
            timeout_seconds=ext_data.get("timeout_seconds", 30)
        )

        search_data = data.get("search", {})
        search = SearchConfig(
            min_query_length=search_data.get("min_query_length", 2),
            max_workers=search_data.get("max_workers", 4),
            snippet_radius=search_data.get("snippet_radius", 80),
            preview_chars=search_data.get("preview_chars", 3000)
        )

        if search.max_workers < 1:
            raise ConfigurationError(
                "search.max_workers must be at least 1",
                {"max_workers": search.max_workers}
            )

        gui_data = data.get("gui", {})
        gui = GUIConfig(
            page_title=gui_data.get("page_title", "PDF Scout"),
            search_placeholder=gui_data.get("search_placeholder", "Search inside PDFs (content-based)...")
        )

        log_data = data.get("logging", {})
        logging_cfg = LoggingConfig(
            level=log_data.get("level", "INFO"),
            format=log_data.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"),
            max_file_size_mb=log_data.get("max_file_size_mb", 10),
            backup_count=log_data.get("backup_count", 5)
        )

        return cls(
            paths=paths,
            crawl=crawl,
            extraction=extraction,
            search=search,
            gui=gui,
            logging=logging_cfg,
            project_root=project_root
        )

    @staticmethod
    def _resolve_path(path_str: str, project_root: Path) -> Path:
        """Resolve a path string, expanding ~ and making relative paths absolute."""
        path = Path(path_str).expanduser()
        if path.is_absolute():
            return path
        return project_root / path


_config_instance: Optional[Config] = None


def get_config(config_path: Path = None) -> Config:
    """
    Get the singleton Config instance.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches upward from current directory.

    Returns:
        The global Config instance.

    Raises:
        ConfigurationError: If config cannot be loaded.
    """
    global _config_instance

    if _config_instance is None or config_path is not None:
        if config_path is None:
            config_path = _find_config_file()
        _config_instance = Config.from_file(config_path)

    return _config_instance


def _find_config_file() -> Path:
    """
    Locate config.json.

    The PDF_SCOUT_CONFIG environment variable wins; otherwise search
    upward from the current directory for config/config.json.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()

    current = Path.cwd()

    for _ in range(10):
        config_path = current / "config" / "config.json"
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    raise ConfigurationError(
        "Could not find config/config.json in current directory or parents"
    )


def reload_config(config_path: Path = None) -> Config:
    """
    Force reload of configuration.

    Args:
        config_path: Optional path to config file.

    Returns:
        Fresh Config instance.
    """
    global _config_instance
    _config_instance = None
    return get_config(config_path)


if __name__ == "__main__":
    try:
        config = get_config()
        print(f"Project root: {config.project_root}")
        print(f"Cache directory: {config.paths.cache_directory}")
        print(f"Roots: {[str(root) for root in config.crawl.roots]}")
        print(f"Primary backend: {config.extraction.primary_backend}")
        print(f"Workers: {config.search.max_workers}")
    except ConfigurationError as e:
        print(f"Config error: {e.message}")
