"""flatcms, a minimal file-based blog CMS.

Authors write plain-text posts that start with a small frontmatter header
(title and publish date between two lines of dashes). The publish step parses
every post, renders its Markdown body to HTML and writes one artifact per post
into a freshly rebuilt output directory.

Modules:
- post: The Post value type and the document format helpers.
- parser: Line-oriented frontmatter parser.
- renderers: Markdown rendering built on mistune.
- publish: The full-rebuild publish pipeline.
- config: The `.cms` project metadata file.
- cli: The `cms` command-line interface.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
