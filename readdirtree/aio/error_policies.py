"""
Error handling policies for readdirtree.

Failures never stop a listing on their own: a directory that cannot be
read becomes a ``DirectoryError`` and an item that cannot be stat'ed or
read keeps the error in ``item.error``. A policy is told about every such
failure and decides what else happens: record it, log it, or re-raise it
to stop the whole listing.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

logger = logging.getLogger(__name__)


class ErrorPolicy(ABC):
    """
    Base class for error handling policies.

    Subclasses implement different strategies for failures that occur
    during a listing.
    """

    @abstractmethod
    async def handle(self, error: BaseException, operation: str, path: str) -> None:
        """
        Handle a failure.

        Args:
            error: The exception that was raised
            operation: What failed ('read_directory', 'stat' or 'read_file')
            path: The path being processed when the error occurred

        Raises:
            Any exception to stop the listing; returning normally lets the
            listing record the failure and continue.
        """
        pass


class FailFastPolicy(ErrorPolicy):
    """
    Policy that immediately re-raises any error, stopping the listing.

    Useful when partial results are not acceptable. With this policy
    ``list_directory`` raises instead of returning a ``DirectoryError``.
    """

    async def handle(self, error: BaseException, operation: str, path: str) -> None:
        """Re-raise the error immediately."""
        raise error


class ContinueOnErrorsPolicy(ErrorPolicy):
    """
    Policy that records errors and lets the listing continue.

    This is the default behaviour (with ``verbose=False``).
    """

    def __init__(self, verbose: bool = True):
        """
        Initialize the policy.

        Args:
            verbose: If True, log a warning for every error; otherwise
                errors are only logged at debug level
        """
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []
        self.verbose = verbose

    async def handle(self, error: BaseException, operation: str, path: str) -> None:
        """Record the error and log it."""
        self.errors.append(_error_record(error, operation, path))

        # Directories we could not enter
        if operation == 'read_directory':
            self.skipped_paths.append(path)

        level = logging.WARNING if self.verbose else logging.DEBUG
        if isinstance(error, PermissionError):
            logger.log(level, "Skipping inaccessible path '%s': %s", path, error)
        else:
            logger.log(level, "Error in %s for '%s': %s", operation, path, error)

    def get_statistics(self) -> Dict[str, Any]:
        """
        Get statistics about errors encountered.

        Returns:
            Dictionary with error counts and details
        """
        return _statistics(self.errors, self.skipped_paths)


class CollectErrorsPolicy(ErrorPolicy):
    """
    Policy that collects all errors without logging, for batch processing.

    Similar to ContinueOnErrorsPolicy but silent.
    """

    def __init__(self):
        """Initialize the policy."""
        self.errors: List[Dict[str, Any]] = []
        self.skipped_paths: List[str] = []

    async def handle(self, error: BaseException, operation: str, path: str) -> None:
        """Silently collect the error."""
        self.errors.append(_error_record(error, operation, path))
        if operation == 'read_directory':
            self.skipped_paths.append(path)

    def get_statistics(self) -> Dict[str, Any]:
        """Get statistics about errors encountered."""
        return _statistics(self.errors, self.skipped_paths)


class ThresholdPolicy(ErrorPolicy):
    """
    Policy that tolerates errors up to a threshold, then fails fast.

    Useful when some errors are expected but too many indicate
    a systemic problem that should halt the listing.
    """

    def __init__(self, max_errors: int = 10, verbose: bool = True):
        """
        Initialize threshold policy.

        Args:
            max_errors: Maximum errors to tolerate before failing
            verbose: If True, log a warning for every tolerated error
        """
        self.max_errors = max_errors
        self.error_count = 0
        self.verbose = verbose
        self.errors: List[BaseException] = []

    async def handle(self, error: BaseException, operation: str, path: str) -> None:
        """Record the error, raise once the threshold is exceeded."""
        self.error_count += 1
        self.errors.append(error)

        if self.error_count > self.max_errors:
            raise RuntimeError(f"Error threshold exceeded ({self.max_errors} errors)") from error

        if self.verbose:
            logger.warning(
                "[%d/%d] Error in %s for '%s': %s",
                self.error_count, self.max_errors, operation, path, error
            )


def _error_record(error: BaseException, operation: str, path: str) -> Dict[str, Any]:
    return {
        'path': path,
        'operation': operation,
        'error': error,
        'error_type': type(error).__name__,
        'error_message': str(error),
    }


def _statistics(errors: List[Dict[str, Any]], skipped_paths: List[str]) -> Dict[str, Any]:
    return {
        'total_errors': len(errors),
        'permission_errors': sum(1 for e in errors if e['error_type'] == 'PermissionError'),
        'not_found_errors': sum(1 for e in errors if e['error_type'] == 'FileNotFoundError'),
        'skipped_paths': len(skipped_paths),
        'errors': errors,
    }
