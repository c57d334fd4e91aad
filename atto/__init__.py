"""
Atto - a micro-framework for routing, data and templates.

Complete integration of:
- Patterns: route DSL compiler, matcher and URL assembler
- Routing: named routes matched in registration order
- Data: nested key-value container addressed by paths
- Templates: Jinja2 views and layouts
- Faults: structured error handling with fault domains
"""

__version__ = "1.0.0"

# ============================================================================
# Core Framework
# ============================================================================

from .app import Atto
from .config import AttoConfig, ConfigLoader
from .context import HandlerContext
from .data import DataContainer
from .response import Response
from .asgi import ASGIAdapter

# ============================================================================
# Routing
# ============================================================================

from .routing import Route, RouteMatch, RouteRegistry
from .patterns import (
    CompiledPattern,
    PatternSyntaxError,
    compile_pattern,
    parse_pattern,
)

# ============================================================================
# Faults
# ============================================================================

from .faults import (
    Fault,
    FaultContext,
    FaultDomain,
    Severity,
    RouteNotFoundFault,
    MissingRequiredParameterFault,
    InvalidParameterValueFault,
    CatchAllAssemblyFault,
    ConstraintInvalidFault,
    InvalidDataPathFault,
    TemplateRenderFault,
    ConfigInvalidFault,
)

from .templates import TemplateEngine
from .logging import configure_logging

__all__ = [
    "__version__",
    # Core
    "Atto",
    "AttoConfig",
    "ConfigLoader",
    "HandlerContext",
    "DataContainer",
    "Response",
    "ASGIAdapter",
    "TemplateEngine",
    "configure_logging",
    # Routing
    "Route",
    "RouteMatch",
    "RouteRegistry",
    "CompiledPattern",
    "PatternSyntaxError",
    "compile_pattern",
    "parse_pattern",
    # Faults
    "Fault",
    "FaultContext",
    "FaultDomain",
    "Severity",
    "RouteNotFoundFault",
    "MissingRequiredParameterFault",
    "InvalidParameterValueFault",
    "CatchAllAssemblyFault",
    "ConstraintInvalidFault",
    "InvalidDataPathFault",
    "TemplateRenderFault",
    "ConfigInvalidFault",
]
