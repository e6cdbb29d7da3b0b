"""Domain layer - Pure policy logic.

Contains the policy matrix entities, audit event entity, value objects,
and protocols (ports). The domain layer has NO dependencies on any framework
or infrastructure.

Structure:
- entities/: PolicyMatrix, Persona, Grant, Guardrail, PolicyAuditEvent
- value_objects/: AccessDecision, ActionRule table, PolicyAuditFilters
- enums/: PolicyDecision, DecisionReason, ActionMatchKind
- errors/: AuditError
- protocols/: PolicyAuditStoreProtocol, LoggerProtocol
"""
