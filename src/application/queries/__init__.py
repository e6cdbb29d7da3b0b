"""Queries - Read operations that fetch data.

Queries represent requests for information. They are immutable dataclasses
with question-like names (ListPolicyAuditEvents). Queries never change state.

Each query has a corresponding handler in queries/handlers/.
"""

from src.application.queries.policy_queries import (
    EvaluateAccess,
    GetPolicyMatrix,
    ListPersonas,
    ListPolicyAuditEvents,
)

__all__ = [
    "EvaluateAccess",
    "GetPolicyMatrix",
    "ListPersonas",
    "ListPolicyAuditEvents",
]
