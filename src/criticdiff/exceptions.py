#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/criticdiff/exceptions.py
"""Custom exceptions for the criticdiff library.

This module defines the exception classes raised by the structural diff
engine and its command-line wrapper. The diff core itself is deliberately
quiet: it raises only for malformed trees and invalid options, while the
CriticMarkup preprocessor never raises for string input.

Exception Hierarchy
-------------------
- CriticDiffError (base exception)

  - ValidationError (parameter/option validation)

  - MalformedTreeError (document tree violates the expected node shape)

  - ParsingError (markdown parsing collaborator failures)

  - DependencyError (missing optional packages)

"""

from typing import Any


class CriticDiffError(Exception):
    """Base exception class for all criticdiff-specific errors.

    Catching this will catch every error raised deliberately by the
    library.

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


class ValidationError(CriticDiffError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation failure
    parameter_name : str, optional
        Name of the parameter that failed validation
    parameter_value : Any, optional
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
        super().__init__(message, original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class MalformedTreeError(CriticDiffError):
    """Exception raised when a document tree does not have the expected shape.

    This signals a programmer error in the layer that built the tree (for
    example an inline node placed where a block is required, or a list
    containing something other than list items). It is never raised for
    degenerate but well-formed content such as empty documents.

    Parameters
    ----------
    message : str
        Description of the shape violation
    node : Any, optional
        The offending node or value
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(self, message: str, node: Any = None, original_error: Exception | None = None):
        """Initialize the error with the offending node."""
        super().__init__(message, original_error)
        self.node = node


class ParsingError(CriticDiffError):
    """Exception raised when markdown text cannot be turned into a document tree.

    Parameters
    ----------
    message : str
        Description of the parsing failure
    original_error : Exception, optional
        The underlying parser exception

    """


class DependencyError(CriticDiffError):
    """Exception raised when an optional dependency is not installed.

    Parameters
    ----------
    message : str
        Description of the missing dependency
    missing_packages : list of str, optional
        Names of the packages that could not be imported
    original_error : Exception, optional
        The ImportError that triggered this exception

    """

    def __init__(
        self,
        message: str,
        missing_packages: list[str] | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the dependency error with the missing package names."""
        super().__init__(message, original_error)
        self.missing_packages = missing_packages or []
