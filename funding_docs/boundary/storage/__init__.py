"""Raw document content store backends."""

from funding_docs.boundary.storage.base import ContentStore
from funding_docs.boundary.storage.factory import get_content_store
from funding_docs.boundary.storage.local_content_store import LocalContentStore
from funding_docs.boundary.storage.s3_content_store import S3ContentStore

__all__ = ["ContentStore", "LocalContentStore", "S3ContentStore", "get_content_store"]
