"""
Content store factory for selecting between local (dev) and S3 (prod) storage.

Depends on CONTENT_STORE_BACKEND environment variable.

Dependencies: funding_docs.boundary.storage, funding_docs.configs
System role: Content store instantiation and selection
"""

import logging

from funding_docs.boundary.storage.base import ContentStore
from funding_docs.boundary.storage.local_content_store import LocalContentStore
from funding_docs.boundary.storage.s3_content_store import S3ContentStore
from funding_docs.configs import get_settings

logger = logging.getLogger(__name__)


def get_content_store() -> ContentStore:
    """
    Factory function to get content store based on environment configuration.

    Returns:
        LocalContentStore or S3ContentStore: Configured content store

    Raises:
        ValueError: If CONTENT_STORE_BACKEND is invalid
    """
    storage = get_settings().storage
    backend = storage.backend.lower()

    if backend == "local":
        logger.info(
            f"{__name__}:get_content_store - Creating local content store (dev mode)"
        )
        return LocalContentStore(root=storage.local_root, prefix=storage.prefix)

    elif backend == "s3":
        logger.info(f"{__name__}:get_content_store - Creating S3 content store (production mode)")
        return S3ContentStore(
            bucket=storage.bucket,
            region=storage.region,
            prefix=storage.prefix,
        )

    else:
        raise ValueError(
            f"Invalid CONTENT_STORE_BACKEND: {backend}. "
            f"Must be 'local' (dev) or 's3' (production)."
        )
