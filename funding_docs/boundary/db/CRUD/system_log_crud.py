"""
System log CRUD operations.

Dependencies: sqlalchemy, funding_docs.boundary.db.models
System role: Persistence for diagnostic log entries
"""

from funding_docs.boundary.db.models.system_log_model import SystemLogModel
from funding_docs.boundary.db.CRUD.base_crud import BaseCRUD


class SystemLogCRUD(BaseCRUD[SystemLogModel]):
    """CRUD operations for SystemLogModel."""

    def __init__(self) -> None:
        """Initialize SystemLogCRUD with SystemLogModel."""
        super().__init__(SystemLogModel)


system_log_crud = SystemLogCRUD()
