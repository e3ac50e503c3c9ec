# =============================================================================
# core/exceptions.py - Provisioning error types
# =============================================================================

from typing import Any, Dict, Optional


class ProvisioningError(Exception):
    """Base class for lab provisioning errors"""


class NotFoundError(ProvisioningError):
    """Raised when the name source file does not exist"""

    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Input file not found: {path}")


class DirectoryOperationError(ProvisioningError):
    """Raised when a directory add/search returns a non-success result"""

    def __init__(self, operation: str, dn: str, result: Optional[Dict[str, Any]] = None):
        self.operation = operation
        self.dn = dn
        self.result = result or {}
        description = self.result.get('description', 'unknown error')
        message = self.result.get('message', '')
        detail = f"{description}: {message}" if message else description
        super().__init__(f"{operation} failed for {dn} ({detail})")
