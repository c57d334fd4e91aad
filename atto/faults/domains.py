"""
AttoFaults - Domain-specific fault types.

Provides concrete fault classes for each domain:
- CONFIG faults
- ROUTING faults (lookup and URL assembly)
- DATA faults
- TEMPLATE faults
"""

from typing import Any, Optional
from .core import Fault, FaultDomain, Severity


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.FATAL,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=severity,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str, **kwargs):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason, **kwargs.get("metadata", {})},
        )


# ============================================================================
# ROUTING Faults
# ============================================================================

class RoutingFault(Fault):
    """Base class for routing faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        public: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.ROUTING,
            severity=severity,
            retryable=False,
            public=public,
            metadata=metadata,
        )


class RouteNotFoundFault(RoutingFault):
    """No route registered under the requested name."""

    def __init__(self, name: str, **kwargs):
        super().__init__(
            code="ROUTE_NOT_FOUND",
            message=(
                f'No route found with name "{name}". Please check the name of the route '
                f"or give a new route with the same name."
            ),
            metadata={"route": name, **kwargs.get("metadata", {})},
        )
        self.route = name


class MissingRequiredParameterFault(RoutingFault):
    """A required route parameter has no value."""

    def __init__(self, parameter: str, route: str, **kwargs):
        super().__init__(
            code="MISSING_REQUIRED_PARAMETER",
            message=(
                f'Required parameter "{parameter}" for route name "{route}" is missing. '
                f"Please give the required parameter or change the route URL."
            ),
            metadata={"parameter": parameter, "route": route, **kwargs.get("metadata", {})},
        )
        self.parameter = parameter
        self.route = route


class InvalidParameterValueFault(RoutingFault):
    """A route parameter value is rejected by its constraint."""

    def __init__(self, value: str, parameter: str, constraint: str, route: str, **kwargs):
        super().__init__(
            code="INVALID_PARAMETER_VALUE",
            message=(
                f'Value "{value}" for parameter "{parameter}" is not allowed by constraint '
                f'"{constraint}" for route with name "{route}". Please give a valid value.'
            ),
            metadata={
                "value": value,
                "parameter": parameter,
                "constraint": constraint,
                "route": route,
                **kwargs.get("metadata", {}),
            },
        )
        self.value = value
        self.parameter = parameter
        self.constraint = constraint
        self.route = route


class CatchAllAssemblyFault(RoutingFault):
    """A pattern made only of wildcards has no URL to assemble."""

    def __init__(self, route: str, **kwargs):
        super().__init__(
            code="CATCH_ALL_ASSEMBLY",
            message=(
                f'Catch-all route with name "{route}" can not be assembled. '
                f"Please give another route name."
            ),
            metadata={"route": route, **kwargs.get("metadata", {})},
        )
        self.route = route


class ConstraintInvalidFault(RoutingFault):
    """A parameter constraint is not a valid regular expression."""

    def __init__(self, parameter: str, constraint: str, reason: str, **kwargs):
        super().__init__(
            code="CONSTRAINT_INVALID",
            message=(
                f'Constraint "{constraint}" for parameter "{parameter}" is not a valid '
                f"regular expression: {reason}"
            ),
            severity=Severity.FATAL,
            metadata={
                "parameter": parameter,
                "constraint": constraint,
                "reason": reason,
                **kwargs.get("metadata", {}),
            },
        )
        self.parameter = parameter
        self.constraint = constraint


# ============================================================================
# DATA Faults
# ============================================================================

class DataFault(Fault):
    """Base class for data container faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.DATA,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class InvalidDataPathFault(DataFault):
    """Data container path notation is malformed."""

    def __init__(self, path: str, **kwargs):
        super().__init__(
            code="INVALID_DATA_PATH",
            message=(
                f'Path "{path}" is not a valid dot notation. Please fix the notation. '
                f"The colon (:), dot (.) and slash (/) characters can be used as separator. "
                f"They can be used interchangeably. The characters between the separator can "
                f"only consist of a-z and 0-9, case insensitive."
            ),
            metadata={"path": path, **kwargs.get("metadata", {})},
        )
        self.path = path


# ============================================================================
# TEMPLATE Faults
# ============================================================================

class TemplateFault(Fault):
    """Base class for template faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.TEMPLATE,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class TemplateRenderFault(TemplateFault):
    """Template could not be compiled or rendered."""

    def __init__(self, template: str, reason: str, **kwargs):
        super().__init__(
            code="TEMPLATE_RENDER_FAILED",
            message=f"Template '{template}' failed to render: {reason}",
            metadata={"template": template, "reason": reason, **kwargs.get("metadata", {})},
        )
        self.template = template
