# Custom exceptions package
from app.exceptions.scan import (
    PlantScanError,
    RemoteServiceError,
    PermissionDenied,
    UserCancelled,
    MalformedPersistedRecord,
    RecordNotFound,
    DuplicateRecord
)

__all__ = [
    'PlantScanError',
    'RemoteServiceError',
    'PermissionDenied',
    'UserCancelled',
    'MalformedPersistedRecord',
    'RecordNotFound',
    'DuplicateRecord'
]
