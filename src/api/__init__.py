"""
API Package
Contains FastAPI routes and models
"""

from api.routes import router
from api.models import (
    ParsedAuditResponse,
    MergeRowsResponse,
    StorageRecordResponse,
    HealthResponse,
)

__all__ = [
    'router',
    'ParsedAuditResponse',
    'MergeRowsResponse',
    'StorageRecordResponse',
    'HealthResponse',
]
