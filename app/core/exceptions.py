from typing import Optional, Any


class LeadMessengerError(Exception):
    """
    Base exception for the lead messenger application.
    """
    def __init__(self, message: str, code: str = "INTERNAL_ERROR", status_code: int = 500, details: Optional[Any] = None):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class ConfigError(LeadMessengerError):
    """
    Raised when required deployment configuration is missing.
    """
    def __init__(self, message: str = "Configuration error", details: Optional[Any] = None):
        super().__init__(message, code="CONFIG_ERROR", status_code=500, details=details)


class ValidationError(LeadMessengerError):
    """
    Raised when caller input is missing or malformed.
    """
    def __init__(self, message: str = "Validation error", details: Optional[Any] = None):
        super().__init__(message, code="VALIDATION_ERROR", status_code=400, details=details)


class ProviderError(LeadMessengerError):
    """
    Raised when the messaging provider rejects or fails to complete a send.
    """
    def __init__(self, message: str = "Messaging provider error", details: Optional[Any] = None):
        super().__init__(message, code="PROVIDER_ERROR", status_code=500, details=details)
