"""
AttoFaults - Core types and fault taxonomy.

Defines:
- Fault base class (structured fault objects)
- FaultContext (runtime context wrapper)
- FaultDomain (explicit fault domains)
- Severity levels
"""

from __future__ import annotations

import sys
import time
import hashlib
import traceback
from enum import Enum
from dataclasses import dataclass, field
from typing import Any, Optional
from datetime import datetime, timezone


# ============================================================================
# Severity & Domain Enums
# ============================================================================

class Severity(str, Enum):
    """
    Fault severity levels.

    Determines logging level of the fault when it reaches the pipeline.
    """
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class FaultDomain:
    """
    Fault domains (taxonomy).

    Identifies the functional area where a fault occurred.
    """

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.value = name
        self.description = description

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"FaultDomain(name='{self.name}')"

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, FaultDomain):
            return self.name == other.name
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(self.name)


# Standard Domains
FaultDomain.CONFIG = FaultDomain("config", "Configuration errors")
FaultDomain.ROUTING = FaultDomain("routing", "Route matching and assembly errors")
FaultDomain.DATA = FaultDomain("data", "Data container errors")
FaultDomain.TEMPLATE = FaultDomain("template", "Template rendering errors")
FaultDomain.FLOW = FaultDomain("flow", "Handler execution errors")


# Domain defaults
DOMAIN_DEFAULTS = {
    FaultDomain.CONFIG: {"severity": Severity.FATAL, "retryable": False},
    FaultDomain.ROUTING: {"severity": Severity.ERROR, "retryable": False},
    FaultDomain.DATA: {"severity": Severity.ERROR, "retryable": False},
    FaultDomain.TEMPLATE: {"severity": Severity.ERROR, "retryable": False},
    FaultDomain.FLOW: {"severity": Severity.ERROR, "retryable": False},
}


# ============================================================================
# Fault - Base Class
# ============================================================================

class Fault(Exception):
    """
    Base fault class - structured, typed fault object.

    A fault carries:
    - Stable machine-readable code
    - Human-readable message
    - Severity level
    - Domain classification
    - Retry semantics
    - Public exposure control

    Attributes:
        code: Stable machine-readable identifier (e.g., "ROUTE_NOT_FOUND")
        message: Human-readable summary
        severity: Fault severity (INFO, WARN, ERROR, FATAL)
        domain: Fault domain (CONFIG, ROUTING, DATA, ...)
        retryable: Whether this fault can be retried
        public: Whether safe to expose to client
        metadata: Additional context data

    Example:
        ```python
        raise Fault(
            code="ROUTE_NOT_FOUND",
            message='No route found with name "blog"',
            domain=FaultDomain.ROUTING,
        )
        ```
    """

    def __init__(
        self,
        code: str | None = None,
        message: str | None = None,
        *,
        domain: FaultDomain | None = None,
        severity: Optional[Severity] = None,
        retryable: Optional[bool] = None,
        public: bool = False,
        metadata: Optional[dict[str, Any]] = None,
    ):
        # Fallback to class attributes if not provided
        self.code = code if code is not None else getattr(self, "code", None)
        self.message = message if message is not None else getattr(self, "message", None)
        self.domain = domain if domain is not None else getattr(self, "domain", None)

        if self.code is None or self.message is None or self.domain is None:
            raise TypeError(f"{self.__class__.__name__} missing required code, message, or domain")

        super().__init__(self.message)

        defaults = DOMAIN_DEFAULTS.get(self.domain, {"severity": Severity.ERROR, "retryable": False})
        self.severity = severity or defaults["severity"]
        self.retryable = retryable if retryable is not None else defaults["retryable"]
        self.public = public
        self.metadata = metadata or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __repr__(self) -> str:
        return (
            f"Fault(code={self.code!r}, domain={self.domain.value}, "
            f"severity={self.severity.value}, public={self.public})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Serialize fault to dictionary.

        Returns:
            Dictionary representation suitable for logging/serialization
        """
        return {
            "code": self.code,
            "message": self.message,
            "domain": self.domain.value,
            "severity": self.severity.value,
            "retryable": self.retryable,
            "public": self.public,
            "metadata": self.metadata,
        }


# ============================================================================
# FaultContext - Runtime Context Wrapper
# ============================================================================

@dataclass(slots=True)
class FaultContext:
    """
    Runtime context wrapper for faults.

    The dispatch pipeline wraps every failure it catches so the log line
    carries the route and request it happened in.

    Attributes:
        fault: The underlying fault
        trace_id: Unique trace ID for this fault occurrence
        timestamp: When fault was captured
        route: Route name (if a route was matched)
        path: Request path
        method: Request method
        cause: Original exception (if fault wraps an exception)
        stack: Stack frames from fault origin
    """

    fault: Fault
    trace_id: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    route: Optional[str] = None
    path: Optional[str] = None
    method: Optional[str] = None

    cause: Optional[BaseException] = None
    stack: list[Any] = field(default_factory=list)

    @classmethod
    def capture(
        cls,
        error: BaseException,
        *,
        route: Optional[str] = None,
        path: Optional[str] = None,
        method: Optional[str] = None,
    ) -> FaultContext:
        """
        Capture an exception with runtime context.

        Plain exceptions are adapted into a FLOW ``Fault`` so the context
        always holds a structured fault; the original stays in ``cause``.
        """
        if isinstance(error, Fault):
            fault = error
        else:
            fault = Fault(
                code="UNHANDLED_EXCEPTION",
                message=str(error) or error.__class__.__name__,
                domain=FaultDomain.FLOW,
                metadata={"exception": error.__class__.__name__},
            )

        trace_data = f"{fault.code}:{time.time_ns()}"
        trace_id = hashlib.sha256(trace_data.encode()).hexdigest()[:16]

        stack = []
        if error.__traceback__ is not None:
            stack = traceback.extract_tb(error.__traceback__)
        elif sys.exc_info()[2] is not None:
            stack = traceback.extract_tb(sys.exc_info()[2])

        return cls(
            fault=fault,
            trace_id=trace_id,
            route=route,
            path=path,
            method=method,
            cause=error,
            stack=stack,
        )

    def fingerprint(self) -> str:
        """
        Generate stable fingerprint for this fault occurrence.

        Fingerprint = hash(code + domain + route)
        """
        data = ":".join([
            self.fault.code,
            self.fault.domain.value,
            self.route or "",
        ])
        return hashlib.sha256(data.encode()).hexdigest()[:16]

    def to_dict(self) -> dict[str, Any]:
        return {
            "fault": self.fault.to_dict(),
            "trace_id": self.trace_id,
            "fingerprint": self.fingerprint(),
            "timestamp": self.timestamp.isoformat(),
            "scope": {
                "route": self.route,
                "path": self.path,
                "method": self.method,
            },
            "cause": str(self.cause) if self.cause else None,
            "stack_depth": len(self.stack),
        }

    def __str__(self) -> str:
        scope = f"route={self.route}" if self.route else "unrouted"
        return f"FaultContext[{self.trace_id}]({scope}): {self.fault}"
