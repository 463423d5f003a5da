"""
Security requirements.

A route's security is a list of requirement mappings (scheme name →
scopes). Mappings in the list are alternatives (OR); the schemes inside
one mapping must all be satisfied (AND).
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Sequence

from .faults import SecurityDefinitionNotFoundFault
from .models import Operation, SecurityDefinition

SECURITY_BASIC = "basic"
SECURITY_OAUTH2 = "oauth2"
SECURITY_API_KEY = "apiKey"

SECURITY_IN_QUERY = "query"
SECURITY_IN_HEADER = "header"

OAUTH2_FLOW_IMPLICIT = "implicit"
OAUTH2_FLOW_PASSWORD = "password"
OAUTH2_FLOW_APPLICATION = "application"
OAUTH2_FLOW_ACCESS_CODE = "accessCode"

Requirement = Dict[str, List[str]]


def set_security(security: List[Requirement], *names: str) -> List[Requirement]:
    """Append one requirement in which every named scheme is needed."""
    security.append({name: [] for name in names})
    return security


def set_security_with_scope(
    security: List[Requirement],
    *requirements: Mapping[str, Sequence[str]],
) -> List[Requirement]:
    """Append scoped requirements, skipping empty ones."""
    for requirement in requirements:
        if not requirement:
            continue
        security.append({name: list(scopes or []) for name, scopes in requirement.items()})
    return security


def equals(a: Sequence[str], b: Sequence[str]) -> bool:
    """Same length and every element of ``a`` found in ``b``; order ignored."""
    if len(a) != len(b):
        return False
    return all(item in b for item in a)


def contains_requirement(security: Sequence[Requirement], requirement: Requirement) -> bool:
    for existing in security:
        if len(existing) != len(requirement):
            continue
        if all(name in requirement and equals(requirement[name], scopes)
               for name, scopes in existing.items()):
            return True
    return False


def add_security(
    operation: Operation,
    definitions: Mapping[str, SecurityDefinition],
    security: Sequence[Requirement],
) -> None:
    """
    Merge requirements into an operation.

    Raises:
        SecurityDefinitionNotFoundFault: a requirement names a scheme that
            was never registered on the root.
    """
    for requirement in security:
        for name in requirement:
            if name not in definitions:
                raise SecurityDefinitionNotFoundFault(name)
        if contains_requirement(operation.security, requirement):
            continue
        operation.security.append(requirement)


__all__ = [
    "SECURITY_BASIC",
    "SECURITY_OAUTH2",
    "SECURITY_API_KEY",
    "SECURITY_IN_QUERY",
    "SECURITY_IN_HEADER",
    "OAUTH2_FLOW_IMPLICIT",
    "OAUTH2_FLOW_PASSWORD",
    "OAUTH2_FLOW_APPLICATION",
    "OAUTH2_FLOW_ACCESS_CODE",
    "Requirement",
    "set_security",
    "set_security_with_scope",
    "equals",
    "contains_requirement",
    "add_security",
]
