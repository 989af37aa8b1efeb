"""
Caller identity and the authorization policy.

Pure functions, no I/O and no framework types: routers resolve a `Caller`,
services ask the policy before touching the data layer.

| Operation              | Self  | Admin | Anonymous |
|------------------------|-------|-------|-----------|
| Read (list/get)        | allow | allow | allow     |
| Create user            | n/a   | allow | allow     |
| Update/delete own      | allow | allow | deny      |
| Update/delete another  | deny  | allow | deny      |
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from core.errors import Forbidden


class Role(str, Enum):
    user = "user"
    admin = "admin"


@dataclass(frozen=True)
class Anonymous:
    pass


@dataclass(frozen=True)
class Authenticated:
    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.admin


Caller = Union[Anonymous, Authenticated]

ANONYMOUS = Anonymous()


def is_admin(caller: Caller) -> bool:
    return isinstance(caller, Authenticated) and caller.is_admin


def can_read(caller: Caller) -> bool:
    return True


def can_create_user(caller: Caller) -> bool:
    # Public signup.
    return True


def can_write(target_user_id: int, caller: Caller) -> bool:
    """
    True when `caller` may mutate records belonging to `target_user_id`.
    """
    if not isinstance(caller, Authenticated):
        return False
    return caller.is_admin or caller.user_id == target_user_id


def require_authenticated(caller: Caller) -> Authenticated:
    if not isinstance(caller, Authenticated):
        raise Forbidden("Authentication required")
    return caller


def require_write(target_user_id: int, caller: Caller) -> Authenticated:
    authenticated = require_authenticated(caller)
    if not can_write(target_user_id, authenticated):
        raise Forbidden("Admin only")
    return authenticated
