"""Protocol definitions for flatcms.

The publish pipeline consumes Markdown rendering through the BodyRenderer
protocol, so the rendering library can be swapped (or faked in tests)
without touching the pipeline.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class BodyRenderer(Protocol):
    """Protocol for turning a post body into HTML.

    Implementations must be pure: the same body always renders to the same
    HTML, which is what makes publish runs reproducible.
    """

    @abstractmethod
    def render(self, content: str) -> str:
        """Render a post body to HTML.

        Args:
            content: Raw Markdown body.

        Returns:
            Rendered HTML string.
        """
        ...

    @abstractmethod
    def blocks(self, content: str) -> list[dict[str, Any]]:
        """Tokenize a post body into block-level tokens for inspection.

        Args:
            content: Raw Markdown body.

        Returns:
            List of block tokens.
        """
        ...
