"""
CRUD operations package.

Exports:
  - DocumentCRUD: Document create/read/delete and owner-scoped listing
"""

from second_brain.boundary.db.CRUD.document_crud import DocumentCRUD

__all__ = ["DocumentCRUD"]
