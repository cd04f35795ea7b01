"""Visibility and authorization policy for projects and indicators.

Every function here is pure: it looks only at the caller identity and the
inputs of the requested operation, and returns a decision. The request
handlers ask first and touch storage only once access is granted.

Two flags drive visibility:

* ``published`` gates whether anyone without the ``edit`` capability can
  see a record at all.
* ``private`` additionally hides a published record from anonymous
  callers.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple


class Capability(str, Enum):
    EDIT = "edit"


class Decision(str, Enum):
    ALLOW_FULL = "allow_full"
    ALLOW_PUBLIC_ONLY = "allow_public_only"
    DENY = "deny"


class DenyReason(str, Enum):
    UNAUTHORIZED = "unauthorized"
    BAD_DATA = "bad_data"


FLAG_FIELDS: Tuple[str, ...] = ("private", "published")


@dataclass(frozen=True)
class CallerIdentity:
    is_authenticated: bool = False
    subject: Optional[str] = None
    roles: FrozenSet[str] = frozenset()

    def can(self, capability: Capability) -> bool:
        return self.is_authenticated and capability.value in self.roles


ANONYMOUS = CallerIdentity()


@dataclass(frozen=True)
class Verdict:
    decision: Decision
    reason: Optional[DenyReason] = None
    # flag fields the caller may see in the response
    flag_fields: Tuple[str, ...] = ()

    @property
    def allowed(self) -> bool:
        return self.decision is not Decision.DENY

    @classmethod
    def deny(cls, reason: DenyReason) -> "Verdict":
        return cls(Decision.DENY, reason=reason)


ALLOW_FULL = Verdict(Decision.ALLOW_FULL, flag_fields=FLAG_FIELDS)
ALLOW_PUBLIC_ONLY = Verdict(Decision.ALLOW_PUBLIC_ONLY)


@dataclass(frozen=True)
class ListScope:
    """Storage filter plus the flag fields a list response may expose."""

    verdict: Verdict
    where: Dict[str, bool] = field(default_factory=dict)

    @property
    def flag_fields(self) -> Tuple[str, ...]:
        return self.verdict.flag_fields


def list_scope(caller: CallerIdentity) -> ListScope:
    if not caller.is_authenticated:
        return ListScope(ALLOW_PUBLIC_ONLY, where={"private": False, "published": True})
    if not caller.can(Capability.EDIT):
        return ListScope(
            Verdict(Decision.ALLOW_PUBLIC_ONLY, flag_fields=("private",)),
            where={"published": True},
        )
    return ListScope(ALLOW_FULL)


def can_read(caller: CallerIdentity, private: bool, published: bool) -> Verdict:
    if caller.can(Capability.EDIT):
        return ALLOW_FULL
    if published and not private:
        return ALLOW_PUBLIC_ONLY
    if published and private and caller.is_authenticated:
        return ALLOW_PUBLIC_ONLY
    return Verdict.deny(DenyReason.UNAUTHORIZED)


def _has_name(payload: Mapping[str, Any]) -> bool:
    name = payload.get("name")
    return isinstance(name, str) and name != ""


def can_create(caller: CallerIdentity, payload: Optional[Mapping[str, Any]]) -> Verdict:
    # Malformed input is reported before the role check, whoever the caller is.
    if not caller.subject or not payload or not _has_name(payload):
        return Verdict.deny(DenyReason.BAD_DATA)
    if not caller.can(Capability.EDIT):
        return Verdict.deny(DenyReason.UNAUTHORIZED)
    return ALLOW_FULL


def can_update(caller: CallerIdentity, payload: Optional[Mapping[str, Any]]) -> Verdict:
    if not caller.can(Capability.EDIT):
        return Verdict.deny(DenyReason.UNAUTHORIZED)
    if not payload or not _has_name(payload):
        return Verdict.deny(DenyReason.BAD_DATA)
    return ALLOW_FULL


def can_delete(caller: CallerIdentity) -> Verdict:
    if not caller.can(Capability.EDIT):
        return Verdict.deny(DenyReason.UNAUTHORIZED)
    return ALLOW_FULL
