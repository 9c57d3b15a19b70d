"""Project metadata for flatcms.

A project is marked by a `.cms` file at its root. The file is YAML:

    content_dir: content
    on_document_error: abort

For compatibility with older projects, a file holding nothing but a path is
read as the content directory. Posts live in `<content_dir>/src` and are
published into `<content_dir>/publish`.

Key functions:
- init_project: Create the `.cms` file and the source directory.
- load_config: Read the `.cms` file into a ProjectConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError
from .publish import ErrorPolicy

logger = logging.getLogger(__name__)

METADATA_FILE = ".cms"
SRC_DIR = "src"
PUBLISH_DIR = "publish"

DEFAULT_CONFIG: dict[str, Any] = {
    "content_dir": "content",
    "on_document_error": ErrorPolicy.ABORT.value,
}


@dataclass(frozen=True)
class ProjectConfig:
    """Resolved project configuration.

    Attributes:
        root: Project root directory (where `.cms` lives).
        content_dir: Content directory as written in `.cms`.
        on_document_error: Policy applied when one document fails to publish.
    """

    root: Path
    content_dir: str
    on_document_error: ErrorPolicy = ErrorPolicy.ABORT

    @property
    def content_root(self) -> Path:
        """Content directory resolved against the project root."""
        return self.root / self.content_dir

    @property
    def source_dir(self) -> Path:
        return self.content_root / SRC_DIR

    @property
    def publish_dir(self) -> Path:
        return self.content_root / PUBLISH_DIR


def init_project(root: Path, content_dir: str = "content") -> ProjectConfig:
    """Initialize a project in root.

    Args:
        root: Project root directory.
        content_dir: Content directory, relative to root or absolute.

    Returns:
        The new ProjectConfig.

    Raises:
        ConfigError: If the project is already initialized.
    """
    metadata_path = root / METADATA_FILE
    if metadata_path.exists():
        raise ConfigError("cms is already initialized")

    payload = {
        "content_dir": content_dir,
        "on_document_error": DEFAULT_CONFIG["on_document_error"],
    }
    with open(metadata_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(payload, f, sort_keys=False)

    config = ProjectConfig(root=root, content_dir=content_dir)
    config.source_dir.mkdir(parents=True, exist_ok=True)
    logger.info("initialized project at %s", config.content_root)
    return config


def load_config(root: Path) -> ProjectConfig:
    """Load the project configuration from `<root>/.cms`.

    Args:
        root: Project root directory.

    Returns:
        ProjectConfig with defaults applied.

    Raises:
        ConfigError: If the project is not initialized or `.cms` is invalid.
    """
    metadata_path = root / METADATA_FILE
    if not metadata_path.exists():
        raise ConfigError(
            "cms is not initialized, please call `cms init` to initialize cms in the repository"
        )

    with open(metadata_path, encoding="utf-8") as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid {METADATA_FILE} file: {exc}") from exc

    config = DEFAULT_CONFIG.copy()
    if isinstance(loaded, str):
        config["content_dir"] = loaded.strip()
    elif isinstance(loaded, dict):
        config.update(loaded)
    elif loaded is not None:
        raise ConfigError(f"invalid {METADATA_FILE} file: expected a mapping")

    content_dir = config.get("content_dir")
    if not isinstance(content_dir, str) or not content_dir:
        raise ConfigError(f"invalid content_dir in {METADATA_FILE}: {content_dir!r}")

    try:
        policy = ErrorPolicy(config.get("on_document_error"))
    except ValueError as exc:
        choices = ", ".join(p.value for p in ErrorPolicy)
        raise ConfigError(
            f"invalid on_document_error in {METADATA_FILE}: "
            f"{config.get('on_document_error')!r} (expected one of: {choices})"
        ) from exc

    return ProjectConfig(root=root, content_dir=content_dir, on_document_error=policy)
