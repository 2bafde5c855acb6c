"""Relay metrics exception hierarchy.

Every failure this package can raise is a programming or configuration
defect rather than a recoverable runtime condition: all inputs are
in-process counters that are always readable.

Exception Hierarchy:
    RelayMetricsException (base)
    ├── DescriptorTableError
    ├── UnknownDimensionError
    ├── MetricsNotInitializedError
    ├── ScrapeError
    └── RelayMetricsConfigError
"""

from typing import Any, Optional


class RelayMetricsException(Exception):
    """Base exception for all relay metrics errors.

    All package-specific exceptions inherit from this class so callers can
    catch every relay metrics error with a single except clause.
    """

    def __init__(self, message: str, context: Optional[dict] = None):
        """Initialize relay metrics exception.

        Args:
            message: Error message
            context: Optional context dictionary for debugging
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return string representation with context."""
        if self.context:
            context_str = "; ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


class DescriptorTableError(RelayMetricsException):
    """Raised when a descriptor table is built incorrectly.

    A descriptor whose key differs from its position, or two descriptors
    sharing a metric name, means the static table was edited wrong. This is
    never recoverable at request time.

    Attributes:
        key: Key carried by the offending descriptor
        index: Position of the offending descriptor in the table
    """

    def __init__(
        self,
        message: str,
        key: Optional[int] = None,
        index: Optional[int] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if key is not None:
            context["key"] = key
        if index is not None:
            context["index"] = index
        super().__init__(message, context)
        self.key = key
        self.index = index


class UnknownDimensionError(RelayMetricsException):
    """Raised when a value outside a closed dimension enumeration reaches a fill callback.

    Attributes:
        dimension: Name of the dimension (e.g. 'handshake_type')
        value: The unexpected value
    """

    def __init__(
        self,
        message: str,
        dimension: Optional[str] = None,
        value: Any = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if dimension:
            context["dimension"] = dimension
        if value is not None:
            context["value"] = repr(value)
        super().__init__(message, context)
        self.dimension = dimension
        self.value = value


class MetricsNotInitializedError(RelayMetricsException):
    """Raised when the process-wide relay metrics are used before init()."""

    pass


class ScrapeError(RelayMetricsException):
    """Raised when a fill callback fails during a scrape.

    The store is left empty when this is raised, never half filled.

    Attributes:
        metric_name: Name of the metric whose fill callback failed
        key: Descriptor key of that metric
    """

    def __init__(
        self,
        message: str,
        metric_name: Optional[str] = None,
        key: Optional[int] = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if metric_name:
            context["metric_name"] = metric_name
        if key is not None:
            context["key"] = key
        super().__init__(message, context)
        self.metric_name = metric_name
        self.key = key


class RelayMetricsConfigError(RelayMetricsException):
    """Raised when relay metrics settings hold an invalid value.

    Attributes:
        field_name: Name of the invalid setting
        invalid_value: The value that failed validation
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        invalid_value: Any = None,
        context: Optional[dict] = None,
    ):
        if context is None:
            context = {}
        if field_name:
            context["field"] = field_name
        if invalid_value is not None:
            context["invalid_value"] = str(invalid_value)[:100]
        super().__init__(message, context)
        self.field_name = field_name
        self.invalid_value = invalid_value


__all__ = [
    "RelayMetricsException",
    "DescriptorTableError",
    "UnknownDimensionError",
    "MetricsNotInitializedError",
    "ScrapeError",
    "RelayMetricsConfigError",
]
