"""
Tests for the fault taxonomy.
"""

import pytest
from atto.faults import (
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
    RoutingFault,
)


class TestFault:

    def test_requires_code_message_and_domain(self):
        with pytest.raises(TypeError):
            Fault(code="X", message="missing domain")

    def test_domain_defaults(self):
        fault = Fault(code="X", message="m", domain=FaultDomain.CONFIG)
        assert fault.severity == Severity.FATAL
        assert fault.retryable is False

    def test_str_and_to_dict(self):
        fault = RouteNotFoundFault("blog")
        assert str(fault).startswith("[ROUTE_NOT_FOUND] No route found")
        data = fault.to_dict()
        assert data["code"] == "ROUTE_NOT_FOUND"
        assert data["domain"] == "routing"
        assert data["severity"] == "error"
        assert data["metadata"] == {"route": "blog"}

    def test_domain_equality(self):
        assert FaultDomain.ROUTING == "routing"
        assert FaultDomain.ROUTING != FaultDomain.DATA
        assert len({FaultDomain.DATA, FaultDomain("data")}) == 1


class TestDomainFaults:

    def test_routing_faults_share_a_base(self):
        for fault in (
            RouteNotFoundFault("a"),
            MissingRequiredParameterFault("p", "a"),
            InvalidParameterValueFault("v", "p", "\\d+", "a"),
            CatchAllAssemblyFault("a"),
            ConstraintInvalidFault("p", "(", "missing )"),
        ):
            assert isinstance(fault, RoutingFault)
            assert fault.domain == FaultDomain.ROUTING

    def test_messages(self):
        assert MissingRequiredParameterFault("id", "post").message == (
            'Required parameter "id" for route name "post" is missing. '
            "Please give the required parameter or change the route URL."
        )
        assert InvalidParameterValueFault("x", "id", "\\d+", "post").message == (
            'Value "x" for parameter "id" is not allowed by constraint "\\d+" '
            'for route with name "post". Please give a valid value.'
        )
        assert CatchAllAssemblyFault("all").message == (
            'Catch-all route with name "all" can not be assembled. Please give another route name.'
        )
        assert InvalidDataPathFault("a..b").message.startswith('Path "a..b" is not a valid dot notation.')

    def test_constraint_fault_is_fatal(self):
        assert ConstraintInvalidFault("p", "(", "missing )").severity == Severity.FATAL

    def test_other_domains(self):
        assert TemplateRenderFault("page.html", "boom").domain == FaultDomain.TEMPLATE
        assert InvalidDataPathFault("").domain == FaultDomain.DATA
        assert ConfigInvalidFault("debug", "bad").metadata == {"key": "debug", "reason": "bad"}


class TestFaultContext:

    def test_capture_fault(self):
        fault = RouteNotFoundFault("blog")
        ctx = FaultContext.capture(fault, route="home", path="/", method="GET")
        assert ctx.fault is fault
        assert ctx.cause is fault
        assert ctx.route == "home"
        assert len(ctx.trace_id) == 16

    def test_capture_plain_exception(self):
        try:
            raise ValueError("bad value")
        except ValueError as exc:
            ctx = FaultContext.capture(exc)

        assert ctx.fault.code == "UNHANDLED_EXCEPTION"
        assert ctx.fault.message == "bad value"
        assert ctx.fault.domain == FaultDomain.FLOW
        assert ctx.fault.metadata == {"exception": "ValueError"}
        assert ctx.stack

    def test_fingerprint_is_stable(self):
        first = FaultContext.capture(RouteNotFoundFault("a"), route="home")
        second = FaultContext.capture(RouteNotFoundFault("a"), route="home")
        other = FaultContext.capture(RouteNotFoundFault("a"), route="blog")
        assert first.fingerprint() == second.fingerprint()
        assert first.fingerprint() != other.fingerprint()

    def test_to_dict_and_str(self):
        ctx = FaultContext.capture(CatchAllAssemblyFault("all"), path="/x", method="GET")
        data = ctx.to_dict()
        assert data["scope"] == {"route": None, "path": "/x", "method": "GET"}
        assert data["fault"]["code"] == "CATCH_ALL_ASSEMBLY"
        assert "unrouted" in str(ctx)
