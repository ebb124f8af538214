"""
Custom exceptions for the check-in reconciler
"""


class CheckInError(Exception):
    """Base exception for all check-in processing errors"""
    pass


class ConnectionError(CheckInError):
    """Opening an input or output file failed"""
    pass


class ReadError(CheckInError):
    """Error reading from source"""
    pass


class WriteError(CheckInError):
    """Error writing to destination"""
    pass


class TransformError(CheckInError):
    """Error during transformation"""
    pass


class ConfigurationError(CheckInError):
    """Invalid configuration"""
    pass


class SchemaError(CheckInError):
    """Schema-related errors"""
    pass


class PipelineError(CheckInError):
    """Pipeline execution error"""
    pass


class RetriesExhaustedError(CheckInError):
    """
    Synthetic visit generation ran out of its retry budget.

    Fatal for the whole run: no output is committed for the file being
    processed and no further files are processed.
    """

    def __init__(self, attempts: int, visitor: str = ""):
        self.attempts = attempts
        self.visitor = visitor
        message = f"Retry budget of {attempts} attempts exhausted while generating visits"
        if visitor:
            message += f" for {visitor}"
        super().__init__(message)
