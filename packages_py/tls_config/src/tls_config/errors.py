from typing import Any

class TlsConfigError(Exception):
    """Base exception for TLS configuration errors."""
    pass

class ProviderInvocationError(TlsConfigError):
    def __init__(self, cause: BaseException):
        msg = f"TLS option provider failed: {str(cause)}"
        super().__init__(msg)
        self.cause = cause

class InvalidProviderResultError(TlsConfigError, TypeError):
    def __init__(self, result: Any, reason: str = "expected ProviderOk or ProviderError"):
        msg = f"Invalid TLS option provider result {result!r}: {reason}"
        super().__init__(msg)
        self.result = result

class ProviderTargetNotFoundError(TlsConfigError, LookupError):
    def __init__(self, module: str, function: str):
        msg = f"TLS option provider '{module}.{function}' could not be found"
        super().__init__(msg)
        self.module = module
        self.function = function
