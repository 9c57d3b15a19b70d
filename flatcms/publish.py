"""Publish pipeline for flatcms.

Turns a directory of post documents into a directory of HTML artifacts. Every
run is a full rebuild: the target directory is wiped and recreated, then each
source document is parsed, rendered and written as `<name>.html`.

Key functions:
- publish: Rebuild a target directory from a source directory.
- publish_project: Run publish for the directories of a ProjectConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import DirectoryError, DocumentError, ParseError, error_chain
from .parser import parse_file
from .protocols import BodyRenderer
from .renderers import default_renderer
from .utils import artifact_name, ensure_clean_dir, iter_source_files

if TYPE_CHECKING:
    from .config import ProjectConfig

logger = logging.getLogger(__name__)


class ErrorPolicy(str, Enum):
    """What a publish run does when a single document fails."""

    ABORT = "abort"
    SKIP_AND_WARN = "skip_and_warn"


@dataclass
class PublishSummary:
    """Result of a publish run.

    Attributes:
        published: Number of artifacts written.
        warnings: Non-fatal, human-readable messages collected during the run.
        artifacts: Paths of the artifacts written, in processing order.
        skipped: Source documents skipped under the skip_and_warn policy.
    """

    published: int = 0
    warnings: list[str] = field(default_factory=list)
    artifacts: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)


def publish(
    source_dir: Path,
    target_dir: Path,
    renderer: BodyRenderer | None = None,
    on_document_error: ErrorPolicy | str = ErrorPolicy.ABORT,
) -> PublishSummary:
    """Rebuild target_dir from the post documents in source_dir.

    Args:
        source_dir: Directory holding the source documents.
        target_dir: Output directory. Its previous contents are deleted.
        renderer: Body renderer; defaults to the Markdown renderer.
        on_document_error: ErrorPolicy (or its value) applied when a single
            document fails to parse, read or write.

    Returns:
        PublishSummary with the count, warnings and artifact paths.

    Raises:
        DirectoryError: If the target cannot be rebuilt or the source cannot
            be listed.
        DocumentError: If a document fails and the policy is ABORT.
    """
    source_dir = Path(source_dir)
    target_dir = Path(target_dir)
    renderer = renderer or default_renderer
    policy = ErrorPolicy(on_document_error)

    try:
        ensure_clean_dir(target_dir)
    except OSError as exc:
        raise DirectoryError(
            target_dir, "failed rebuilding the publish directory", exc
        ) from exc

    try:
        sources = iter_source_files(source_dir)
    except OSError as exc:
        raise DirectoryError(
            source_dir, "failed reading the source directory", exc
        ) from exc

    summary = PublishSummary()
    written: dict[str, Path] = {}
    for source in sources:
        target = target_dir / artifact_name(source)
        try:
            if target.name in written:
                raise DocumentError(
                    source,
                    f"artifact '{target.name}' already written by "
                    f"'{written[target.name].name}'",
                )
            _publish_document(source, target, renderer, summary)
            written[target.name] = source
        except DocumentError as exc:
            if policy is ErrorPolicy.ABORT:
                raise
            warning = f"skipped '{source.name}': {': '.join(error_chain(exc))}"
            logger.info(warning)
            summary.warnings.append(warning)
            summary.skipped.append(source)

    logger.info("published %d files into %s", summary.published, target_dir)
    return summary


def publish_project(
    config: ProjectConfig, renderer: BodyRenderer | None = None
) -> PublishSummary:
    """Publish the posts of a project.

    Args:
        config: ProjectConfig naming the source and publish directories.
        renderer: Optional body renderer.

    Returns:
        PublishSummary of the run.
    """
    return publish(
        config.source_dir,
        config.publish_dir,
        renderer=renderer,
        on_document_error=config.on_document_error,
    )


def _publish_document(
    source: Path, target: Path, renderer: BodyRenderer, summary: PublishSummary
) -> None:
    """Parse, render and write a single document.

    Args:
        source: Source document path.
        target: Artifact path to write.
        renderer: Body renderer.
        summary: Summary to update.

    Raises:
        DocumentError: Wrapping the parse, decode or I/O failure.
    """
    logger.debug("publishing %s", source)
    try:
        post = parse_file(source)
    except ParseError as exc:
        raise DocumentError(source, "failed parsing the post", exc) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentError(source, "failed reading the post", exc) from exc

    if post.is_empty:
        warning = f"post '{source.name}' is empty"
        logger.info(warning)
        summary.warnings.append(warning)

    try:
        html = renderer.render(post.content)
    except Exception as exc:
        raise DocumentError(source, "failed rendering the post", exc) from exc

    try:
        with open(target, "w", encoding="utf-8", newline="") as f:
            f.write(html)
    except OSError as exc:
        target.unlink(missing_ok=True)
        raise DocumentError(source, "failed writing the html artifact", exc) from exc

    summary.published += 1
    summary.artifacts.append(target)
