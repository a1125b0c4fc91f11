#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the fswikifmt library.

Markup content never produces an error: every line of a document is
accepted by the parser in some shape. The exceptions below cover the
boundaries around the formatter instead, namely reading the input,
validating options and configuration, and writing results back.

Exception Hierarchy
-------------------
- FswikiFmtError (base exception)

  - ValidationError (parameter/option validation)
    - InvalidOptionsError (wrong options class for parser or renderer)

  - ConfigError (unreadable or malformed configuration file)

  - FileError (input file access and I/O)
    - FileNotFoundError (file doesn't exist)
    - FileAccessError (permissions, directories, other OS errors)

  - OutputWriteError (failure writing formatted output)

"""

from typing import Any


class FswikiFmtError(Exception):
    """Base exception class for all fswikifmt-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(FswikiFmtError):
    """Exception raised for invalid option values.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class InvalidOptionsError(ValidationError):
    """Exception raised when a parser or renderer receives the wrong options class.

    Parameters
    ----------
    component_name : str
        Name of the parser or renderer that rejected the options
    expected_type : type
        The options class the component accepts
    received_type : type
        The options class that was passed
    message : str, optional
        Custom error message

    """

    def __init__(
        self,
        component_name: str,
        expected_type: type,
        received_type: type,
        message: str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the invalid options error."""
        if message is None:
            message = (
                f"{component_name} expected options of type '{expected_type.__name__}' "
                f"but received '{received_type.__name__}'."
            )
        super().__init__(
            message, parameter_name="options", parameter_value=received_type, original_error=original_error
        )
        self.component_name = component_name
        self.expected_type = expected_type
        self.received_type = received_type


class ConfigError(FswikiFmtError):
    """Exception raised when a configuration file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the problem
    config_path : str, optional
        Path of the offending configuration file

    """

    def __init__(self, message: str, config_path: str | None = None, original_error: Exception | None = None):
        """Initialize the configuration error."""
        super().__init__(message, original_error=original_error)
        self.config_path = config_path


class FileError(FswikiFmtError):
    """Base exception for input file access errors.

    Parameters
    ----------
    message : str
        Description of the file error
    file_path : str, optional
        Path to the problematic file
    original_error : Exception, optional
        The original exception that caused this error

    Attributes
    ----------
    file_path : str or None
        Path to the file that caused the error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the file error with path and message."""
        super().__init__(message, original_error=original_error)
        self.file_path = file_path


class FileNotFoundError(FileError):
    """Exception raised when an input file cannot be found."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file not found error."""
        if message is None:
            message = f"File not found: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class FileAccessError(FileError):
    """Exception raised when an input file exists but cannot be read."""

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the file access error."""
        if message is None:
            message = f"Cannot access file: {file_path}"
        super().__init__(message, file_path=file_path, original_error=original_error)


class OutputWriteError(FswikiFmtError):
    """Exception raised when writing formatted output fails.

    Parameters
    ----------
    file_path : str
        Path to the output file that failed to write
    message : str, optional
        Custom error message. If not provided, uses default message

    """

    def __init__(self, file_path: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the output write error."""
        if message is None:
            message = f"Failed to write output file: {file_path}"
        super().__init__(message, original_error=original_error)
        self.file_path = file_path
