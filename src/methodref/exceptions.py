# Custom exceptions for methodref

class MethodRefError(Exception):
    """Base exception for all application-specific errors."""
    pass

class InvalidTargetError(MethodRefError):
    """Raised when a method reference is built from an unusable target or name."""
    def __init__(self, target, message: str):
        self.target = target
        self.message = message
        super().__init__(f"Invalid target {target!r}: {message}")

class ConfigError(MethodRefError):
    """Raised for configuration-related problems."""
    def __init__(self, key: str, value: str, message: str = ""):
        self.key = key
        self.value = value
        text = f"Invalid value {value!r} for {key}"
        if message:
            text += f": {message}"
        super().__init__(text)
