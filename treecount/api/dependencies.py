"""
Dependency injection for FastAPI.
"""
from typing import Annotated, Optional
from fastapi import Depends
from slowapi import Limiter
from slowapi.util import get_remote_address

from treecount.services.application.tree_count_service import TreeCountService


# Rate limiter for snapshot reads
limiter = Limiter(key_func=get_remote_address)

# Singleton instance, the tracked state lives for the whole process
_tree_count_service: Optional[TreeCountService] = None


def get_tree_count_service() -> TreeCountService:
    """
    Get or create the singleton tree count service.

    Returns:
        TreeCountService instance
    """
    global _tree_count_service
    if _tree_count_service is None:
        _tree_count_service = TreeCountService()
    return _tree_count_service


# Type aliases for cleaner route signatures
TreeCountServiceDep = Annotated[TreeCountService, Depends(get_tree_count_service)]
