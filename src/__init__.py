"""Convention Lint - static analysis for reactive UI conventions.

Checks TypeScript and TSX sources written against a fine-grained reactive
component library, an async data-fetching hook library and a file-based
router for conventions that general purpose linters do not know about.
"""

__version__ = "0.1.0"
