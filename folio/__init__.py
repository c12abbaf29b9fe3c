"""Top-level package for Folio.

This package segments pasted manuscripts into titled chapters and imports
them into versioned books held in a record store. The main entry point is
`BookImporter`.
"""

from .importer import BookImporter

__all__ = ["BookImporter", "__version__"]

__version__ = "0.1.0"
