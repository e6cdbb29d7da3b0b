"""Commands - Write operations that change state.

Commands represent intent to perform an action. They are immutable
dataclasses with imperative names (RecordPolicyEvent).

Each command has a corresponding handler in commands/handlers/.
"""

from src.application.commands.policy_audit_commands import (
    ActorContext,
    RecordPolicyEvent,
    RequestContext,
)

__all__ = [
    "ActorContext",
    "RecordPolicyEvent",
    "RequestContext",
]
