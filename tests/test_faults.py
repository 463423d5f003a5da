"""
Faults: taxonomy, severities and the declaration/security fault types.
"""

import pytest

from routedoc.faults import (
    DOMAIN_DEFAULTS,
    DeclarationFault,
    Fault,
    FaultDomain,
    InvalidAppFault,
    InvalidBodyFault,
    InvalidGroupNameFault,
    InvalidMethodFault,
    InvalidParamFault,
    InvalidResponseHeaderFault,
    InvalidResponseSchemaFault,
    InvalidSchemeFault,
    MultipleBodyFault,
    NestedParamFault,
    SecurityDefinitionNotFoundFault,
    SecurityFault,
    Severity,
)


# ============================================================================
# Severity and domains
# ============================================================================

class TestSeverity:

    def test_values(self):
        assert Severity.INFO == "info"
        assert Severity.WARN == "warn"
        assert Severity.ERROR == "error"
        assert Severity.FATAL == "fatal"


class TestFaultDomain:

    def test_standard_domains(self):
        assert FaultDomain.DECLARATION.name == "declaration"
        assert FaultDomain.SECURITY.name == "security"

    def test_equality(self):
        assert FaultDomain("x") == FaultDomain("x", "other description")
        assert FaultDomain("x") != FaultDomain("y")
        assert FaultDomain.SECURITY == "security"
        assert hash(FaultDomain("x")) == hash(FaultDomain("x"))

    def test_defaults(self):
        assert DOMAIN_DEFAULTS[FaultDomain.DECLARATION] is Severity.FATAL
        assert DOMAIN_DEFAULTS[FaultDomain.SECURITY] is Severity.ERROR


# ============================================================================
# Fault
# ============================================================================

class TestFault:

    def test_fields(self):
        fault = Fault("X", "boom", domain=FaultDomain("custom"), metadata={"a": 1})
        assert fault.code == "X"
        assert fault.message == "boom"
        assert fault.severity is Severity.ERROR
        assert fault.metadata == {"a": 1}
        assert str(fault) == "[X] boom"
        assert repr(fault) == "Fault(code='X', domain=custom, severity=error)"

    def test_explicit_severity(self):
        fault = Fault("X", "boom", domain=FaultDomain.DECLARATION, severity=Severity.WARN)
        assert fault.severity is Severity.WARN

    def test_is_exception(self):
        with pytest.raises(Fault):
            raise MultipleBodyFault()


# ============================================================================
# Declaration and security faults
# ============================================================================

class TestFaultTypes:

    @pytest.mark.parametrize("fault, code", [
        (InvalidAppFault(object()), "INVALID_APP"),
        (InvalidGroupNameFault(), "INVALID_GROUP_NAME"),
        (InvalidParamFault("query", dict), "INVALID_PARAM"),
        (NestedParamFault("query", "page"), "NESTED_PARAM"),
        (InvalidBodyFault(None), "INVALID_BODY"),
        (MultipleBodyFault(), "MULTIPLE_BODY"),
        (InvalidResponseSchemaFault(None), "INVALID_RESPONSE_SCHEMA"),
        (InvalidResponseHeaderFault(int), "INVALID_RESPONSE_HEADER"),
        (InvalidSchemeFault("ftp"), "INVALID_SCHEME"),
        (InvalidMethodFault("TRACE"), "INVALID_METHOD"),
    ])
    def test_declaration_faults(self, fault, code):
        assert isinstance(fault, DeclarationFault)
        assert fault.code == code
        assert fault.domain == FaultDomain.DECLARATION
        assert fault.severity is Severity.FATAL

    def test_security_fault(self):
        fault = SecurityDefinitionNotFoundFault("JWT")
        assert isinstance(fault, SecurityFault)
        assert fault.domain == FaultDomain.SECURITY
        assert fault.metadata == {"name": "JWT"}
        assert str(fault) == "[SECURITY_DEFINITION_NOT_FOUND] not found SecurityDefinition with name: JWT"

    def test_metadata(self):
        assert InvalidParamFault("header", dict).metadata == {"in": "header"}
        assert NestedParamFault("query", "page").metadata == {"in": "query", "field": "page"}
        assert "'ftp'" in InvalidSchemeFault("ftp").message
