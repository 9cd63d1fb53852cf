"""
Custom exceptions for scanning, translation and history persistence.
Separates remote model failures from local storage problems and user actions.
"""

class PlantScanError(Exception):
    """Base exception for plant scanner errors"""
    pass


class RemoteServiceError(PlantScanError):
    """Hosted model failed: transport, authentication, timeout or non-success response"""
    pass


class PermissionDenied(PlantScanError):
    """Client platform refused camera access; the scan is aborted before any network call"""

    def __init__(self, message: str = "Camera permission is required.", code: str = "camera_permission_denied"):
        super().__init__(message)
        self.code = code


class UserCancelled(PlantScanError):
    """Image picker returned no selection; callers treat this as a no-op"""
    pass


class MalformedPersistedRecord(PlantScanError):
    """A stored history entry could not be decoded"""
    pass


class RecordNotFound(PlantScanError):
    """No history record matches the requested index or identity"""
    pass


class DuplicateRecord(PlantScanError):
    """A record with the same (timestamp, image_path) is already in the history"""
    pass
