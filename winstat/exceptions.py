"""Exception classes for sliding window statistics."""

from typing import Any, List, Optional


class WindowError(Exception):
    """Base exception for window errors."""

    def __init__(self, message: str, component: Optional[str] = None):
        self.component = component
        if component:
            message = f"[{component}] {message}"
        super().__init__(message)


class InvalidParameterError(WindowError):
    """Invalid construction parameters."""

    def __init__(self, parameter_name: str, value: Any, expected: str, component: Optional[str] = None):
        message = f"Invalid parameter '{parameter_name}': got {value!r}, expected {expected}"
        super().__init__(message, component)
        self.parameter_name = parameter_name
        self.value = value
        self.expected = expected


class InvalidWindowSizeError(InvalidParameterError):
    """Window size below the minimum of two samples."""

    def __init__(self, value: Any, component: Optional[str] = None):
        super().__init__("window_size", value, "integer >= 2", component)


class InvalidDataError(WindowError):
    """Sample rejected by push."""

    def __init__(self, value: Any, reason: str, component: Optional[str] = None):
        message = f"Invalid sample {value!r} ({reason})"
        super().__init__(message, component)
        self.value = value
        self.reason = reason


class MethodNotFoundError(WindowError):
    """Unknown variance method requested."""

    def __init__(self, method: str, available_methods: Optional[List[str]] = None):
        if available_methods:
            available_str = ", ".join(sorted(available_methods))
            message = f"Unknown variance method '{method}'. Available methods: {available_str}"
        else:
            message = f"Unknown variance method '{method}'"
        super().__init__(message)
        self.method = method
        self.available_methods = available_methods or []
