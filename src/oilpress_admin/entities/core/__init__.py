from ._base import DocumentRepository, DocumentTable, Entity

__all__ = ["DocumentRepository", "DocumentTable", "Entity"]
