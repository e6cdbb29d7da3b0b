"""Reason codes attached to denied access decisions."""

from enum import Enum


class DecisionReason(str, Enum):
    """Why an access evaluation was denied.

    Allowed decisions carry no reason.
    """

    UNKNOWN_PERSONA = "unknown-persona"
    """No persona is registered under the (normalized) persona key."""

    NO_MATCHING_GRANT = "no-matching-grant"
    """The persona has no grant covering the resource/action pair."""

    EXPLICIT_DENY = "explicit-deny"
    """The first matching grant has decision=deny."""
