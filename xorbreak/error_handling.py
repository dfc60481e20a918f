"""
Error handling and reporting for xorbreak.

Every contract violation raised by the engine is an ``XorBreakError``
subclass that names the violated precondition, carries context about the
offending input and, where one exists, a suggestion for the caller.
"""

import sys
import traceback
import logging
from enum import Enum
from typing import Optional, Dict, Any
from dataclasses import dataclass


class ErrorSeverity(Enum):
    """Error severity levels."""
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


class ErrorCategory(Enum):
    """Categories of errors that can occur."""
    INPUT_ERROR = "Input Error"
    CONFIGURATION_ERROR = "Configuration Error"
    INTERNAL_ERROR = "Internal Error"


@dataclass
class ErrorContext:
    """Context information for an error."""
    function: Optional[str] = None
    data_length: Optional[int] = None
    keysize: Optional[int] = None
    additional_info: Optional[Dict[str, Any]] = None


class XorBreakError(Exception):
    """Base exception class for xorbreak errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.INTERNAL_ERROR,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[ErrorContext] = None,
        suggestion: Optional[str] = None,
        original_exception: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.suggestion = suggestion
        self.original_exception = original_exception

    def __str__(self):
        return self.message

    def format_report(self) -> str:
        """Format error message with all context."""
        lines = [
            f"\n{'='*70}",
            f"{self.severity.value}: {self.category.value}",
            f"{'='*70}",
            f"\nMessage: {self.message}",
        ]

        if self.context.function:
            lines.append(f"Function: {self.context.function}")
        if self.context.data_length is not None:
            lines.append(f"Data length: {self.context.data_length} bytes")
        if self.context.keysize is not None:
            lines.append(f"Keysize: {self.context.keysize}")
        if self.context.additional_info:
            lines.append("\nAdditional Information:")
            for key, value in self.context.additional_info.items():
                lines.append(f"  {key}: {value}")

        if self.suggestion:
            lines.append(f"\nSuggestion: {self.suggestion}")

        if self.original_exception:
            lines.append(f"\nOriginal Exception: {type(self.original_exception).__name__}")
            lines.append(f"  {str(self.original_exception)}")

        lines.append(f"{'='*70}\n")

        return "\n".join(lines)


class InputError(XorBreakError):
    """Error related to invalid input."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.INPUT_ERROR,
            **kwargs
        )


class LengthMismatchError(InputError):
    """Two operands that must be the same length are not."""

    def __init__(self, left_length: int, right_length: int, **kwargs):
        error_info = ERROR_MESSAGES["length_mismatch"]
        kwargs.setdefault("suggestion", error_info["suggestion"])
        super().__init__(
            error_info["message"].format(left=left_length, right=right_length),
            **kwargs
        )
        self.left_length = left_length
        self.right_length = right_length


class InsufficientDataError(InputError):
    """Ciphertext is too short to evaluate any candidate keysize."""

    def __init__(self, data_length: int, required_length: int, **kwargs):
        error_info = ERROR_MESSAGES["insufficient_data"]
        kwargs.setdefault("suggestion", error_info["suggestion"])
        kwargs.setdefault("context", ErrorContext(data_length=data_length))
        super().__init__(
            error_info["message"].format(length=data_length, required=required_length),
            **kwargs
        )
        self.data_length = data_length
        self.required_length = required_length


class ConfigurationError(XorBreakError):
    """Error related to configuration."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION_ERROR,
            **kwargs
        )


class ErrorHandler:
    """Central error handler for xorbreak."""

    def __init__(self, debug_mode: bool = False):
        self.debug_mode = debug_mode
        self.logger = self._setup_logger()

    def _setup_logger(self) -> logging.Logger:
        """Set up logging configuration."""
        logger = logging.getLogger("xorbreak")
        logger.setLevel(logging.DEBUG if self.debug_mode else logging.INFO)

        # Console handler
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.DEBUG if self.debug_mode else logging.INFO)

        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        console_handler.setFormatter(formatter)

        logger.addHandler(console_handler)

        return logger

    def handle_error(
        self,
        error: Exception,
        context: Optional[ErrorContext] = None,
        reraise: bool = False
    ):
        """
        Handle an error with appropriate logging and reporting.

        Args:
            error: The exception to handle
            context: Additional context information
            reraise: Whether to re-raise the exception after handling
        """
        if isinstance(error, XorBreakError):
            self._log_error(error)
        else:
            wrapped = XorBreakError(
                message=str(error),
                context=context,
                original_exception=error
            )
            self._log_error(wrapped)

        if self.debug_mode:
            traceback.print_exc()

        if reraise:
            raise error

    def _log_error(self, error: XorBreakError):
        """Log an xorbreak error with appropriate level."""
        error_message = error.format_report()

        if error.severity == ErrorSeverity.CRITICAL:
            self.logger.critical(error_message)
        elif error.severity == ErrorSeverity.ERROR:
            self.logger.error(error_message)
        elif error.severity == ErrorSeverity.WARNING:
            self.logger.warning(error_message)
        else:
            self.logger.info(error_message)


# Global error handler instance
_error_handler: Optional[ErrorHandler] = None


def get_error_handler(debug_mode: bool = False) -> ErrorHandler:
    """Get or create the global error handler."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler(debug_mode=debug_mode)
    return _error_handler


# Common error messages with suggestions
ERROR_MESSAGES = {
    "length_mismatch": {
        "message": "Operand lengths differ: {left} != {right} bytes",
        "suggestion": "Both buffers must have the same length; they are never truncated."
    },
    "insufficient_data": {
        "message": "Ciphertext of {length} bytes is too short for keysize estimation "
                   "(at least {required} bytes needed)",
        "suggestion": "Supply more ciphertext or lower the minimum keysize / sample block count."
    },
    "invalid_hex": {
        "message": "Invalid hex input: {reason}",
        "suggestion": "Hex input needs an even number of 0-9, a-f or A-F digits."
    },
    "invalid_base64": {
        "message": "Invalid base64 input: {reason}",
        "suggestion": "Check the input uses the standard base64 alphabet with correct padding."
    },
    "unknown_encoding": {
        "message": "Unknown input encoding: {encoding}",
        "suggestion": "Use one of: hex, base64, raw."
    },
    "invalid_request": {
        "message": "Invalid request: {reason}",
        "suggestion": None
    },
    "invalid_keysize": {
        "message": "Keysize must be at least 1, got {keysize}",
        "suggestion": None
    },
    "empty_key": {
        "message": "XOR key must not be empty",
        "suggestion": None
    },
    "no_candidates": {
        "message": "No candidates to choose from",
        "suggestion": None
    },
}


def create_error(
    error_key: str,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    context: Optional[ErrorContext] = None,
    **format_args
) -> XorBreakError:
    """
    Create an input error from a predefined error message.

    Args:
        error_key: Key in ERROR_MESSAGES dictionary
        severity: Error severity level
        context: Error context
        **format_args: Arguments to format the error message

    Returns:
        Configured InputError instance
    """
    if error_key not in ERROR_MESSAGES:
        return XorBreakError(
            message=f"Unknown error: {error_key}",
            severity=severity,
            context=context
        )

    error_info = ERROR_MESSAGES[error_key]
    message = error_info["message"].format(**format_args)
    suggestion = error_info.get("suggestion")

    return InputError(
        message,
        severity=severity,
        context=context,
        suggestion=suggestion
    )
