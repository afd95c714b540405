"""Exception hierarchy for the schematic router.

Configuration errors describe an inconsistency between a diagram declaration
and its template catalog. They are raised immediately and never retried.
A routing search that runs out of iterations is not an error: the router
falls back to a direct manhattan path instead.
"""

from __future__ import annotations

from typing import Any


class SchematicRouterError(Exception):
    """Base exception for all schematic router errors."""

    error_code: str = ""

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.__dict__.update(kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a serializable dict."""
        result: dict[str, Any] = {
            "error": True,
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
        }
        result.update(
            {k: v for k, v in self.__dict__.items() if k not in ["message", "error_code"]}
        )
        return result


class ValidationError(SchematicRouterError):
    """Raised when an option or field value is out of range."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: str | None = None, **kwargs: Any):
        super().__init__(message, "VALIDATION_ERROR", field=field, **kwargs)


class ConfigurationError(SchematicRouterError):
    """Raised when the diagram declaration does not match the template catalog."""

    error_code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, error_code: str | None = None, **kwargs: Any):
        super().__init__(message, error_code or "CONFIGURATION_ERROR", **kwargs)


class UnknownComponentError(ConfigurationError):
    """Raised when a connection references a component id that is not placed."""

    error_code = "UNKNOWN_COMPONENT"

    def __init__(self, message: str, component_id: str | None = None, **kwargs: Any):
        super().__init__(message, "UNKNOWN_COMPONENT", component_id=component_id, **kwargs)


class UnknownPortError(ConfigurationError):
    """Raised when a connection references a port its component's template lacks."""

    error_code = "UNKNOWN_PORT"

    def __init__(
        self,
        message: str,
        component_id: str | None = None,
        port_name: str | None = None,
        **kwargs: Any,
    ):
        super().__init__(
            message, "UNKNOWN_PORT", component_id=component_id, port_name=port_name, **kwargs
        )


class UnknownTemplateError(ConfigurationError):
    """Raised when an instance references a template missing from the catalog."""

    error_code = "UNKNOWN_TEMPLATE"

    def __init__(self, message: str, template_id: str | None = None, **kwargs: Any):
        super().__init__(message, "UNKNOWN_TEMPLATE", template_id=template_id, **kwargs)


class DiagramFormatError(ConfigurationError):
    """Raised when a diagram document is malformed."""

    error_code = "DIAGRAM_FORMAT_ERROR"

    def __init__(self, message: str, source: str | None = None, **kwargs: Any):
        super().__init__(message, "DIAGRAM_FORMAT_ERROR", source=source, **kwargs)


__all__ = [
    "SchematicRouterError",
    "ValidationError",
    "ConfigurationError",
    "UnknownComponentError",
    "UnknownPortError",
    "UnknownTemplateError",
    "DiagramFormatError",
]
