"""
AttoFaults - structured fault handling.

Errors in Atto are typed fault signals: every fault carries a stable code,
a domain, a severity and the metadata needed to render a precise message.

Core exports:
- Fault: Base fault class
- FaultContext: Runtime context wrapper
- FaultDomain: Domain enumeration
- Severity: Severity levels
"""

from .core import (
    Fault,
    FaultContext,
    FaultDomain,
    Severity,
)

from .domains import (
    ConfigFault,
    ConfigInvalidFault,
    RoutingFault,
    RouteNotFoundFault,
    MissingRequiredParameterFault,
    InvalidParameterValueFault,
    CatchAllAssemblyFault,
    ConstraintInvalidFault,
    DataFault,
    InvalidDataPathFault,
    TemplateFault,
    TemplateRenderFault,
)

__all__ = [
    # Core types
    "Fault",
    "FaultContext",
    "FaultDomain",
    "Severity",

    # Domain faults
    "ConfigFault",
    "ConfigInvalidFault",
    "RoutingFault",
    "RouteNotFoundFault",
    "MissingRequiredParameterFault",
    "InvalidParameterValueFault",
    "CatchAllAssemblyFault",
    "ConstraintInvalidFault",
    "DataFault",
    "InvalidDataPathFault",
    "TemplateFault",
    "TemplateRenderFault",
]
