# vmware_inventory/exceptions.py
"""
Exception hierarchy for the inventory tool.

    InventoryError
    ├── VCenterConnectionError   (fatal: session could not be established)
    ├── PropertyRetrievalError   (recoverable per entity: one lookup failed)
    └── ExportError              (fatal: output sink could not be written)
"""

from typing import Any, Dict, Optional


class InventoryError(Exception):
    """Base class for all inventory errors"""

    def __init__(self, message: str, cause: Optional[Exception] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for result metadata"""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'cause': str(self.cause) if self.cause else None,
            'details': self.details
        }


class VCenterConnectionError(InventoryError):
    """Raised when the vCenter session cannot be established or the host list cannot be read"""


class PropertyRetrievalError(InventoryError):
    """Raised when a single property fetch or query against vCenter fails"""

    def __init__(self, message: str, ref=None, cause: Optional[Exception] = None):
        details = {'ref': str(ref)} if ref is not None else None
        super().__init__(message, cause=cause, details=details)
        self.ref = ref


class ExportError(InventoryError):
    """Raised when the output sink cannot be created or written"""
