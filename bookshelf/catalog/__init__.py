"""
Catalog package.

Holds the write-through ``BookCatalog``, ready-made comparators for
sorting it, and the FastAPI routes that expose it under
``/api/catalog``.
"""

from .store import BookCatalog  # noqa: F401
from .router import router as catalog_router  # noqa: F401
