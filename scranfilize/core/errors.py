class ScranfilizeError(Exception):
    """Base exception for all scranfilize related errors."""
    pass

class ConfigError(ScranfilizeError):
    """Raised when scrambling options conflict or are out of range."""
    pass

class StorageError(ScranfilizeError):
    """Raised when reading the original or writing the scrambled CNF fails."""
    pass

class AllocationError(ScranfilizeError):
    """Raised when internal buffers can not be sized."""
    pass

class CNFError(ScranfilizeError):
    """Raised when there is an issue with CNF processing or parsing."""
    pass

class ParseError(CNFError):
    """Raised when DIMACS input is malformed. Carries the offending line."""

    def __init__(self, path: str, lineno: int, cause: str):
        self.path = path
        self.lineno = lineno
        self.cause = cause
        super().__init__(f"{path}:{lineno}: {cause}")
