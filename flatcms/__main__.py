"""Entry point for the flatcms CLI.

Allows running the package directly with `python -m flatcms`.
"""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    main()
