"""Bit-packed per-user and per-group settings."""

from __future__ import annotations

from dataclasses import dataclass

_APPLY = 0b001
_INVITE = 0b010
_MASTER = 0b100
_U64 = 0xFFFFFFFF_FFFFFFFF


@dataclass(frozen=True)
class RequestPolicy:
    """Auto-accept switches for friend requests and group invites."""

    value: int = 0

    def with_apply(self, on: bool) -> RequestPolicy:
        return RequestPolicy(self.value | _APPLY if on else self.value & (_INVITE | _MASTER))

    def with_invite(self, on: bool) -> RequestPolicy:
        return RequestPolicy(self.value | _INVITE if on else self.value & (_APPLY | _MASTER))

    def with_master(self, on: bool) -> RequestPolicy:
        return RequestPolicy(self.value | _MASTER if on else self.value & (_APPLY | _INVITE))

    def apply_on(self) -> bool:
        return self.value & _APPLY > 0

    def invite_on(self) -> bool:
        return self.value & _INVITE > 0

    def master_off(self) -> bool:
        return self.value & _MASTER > 0

    def __int__(self) -> int:
        return self.value


@dataclass(frozen=True)
class PoolMode:
    """Gacha pool setting; the low bit selects the five-star pool."""

    value: int = 0

    def five_star(self) -> bool:
        return self.value & 1 == 1

    def with_five_star(self, on: bool) -> PoolMode:
        value = self.value & _U64
        return PoolMode(value | 1 if on else value & (_U64 ^ 1))

    def __int__(self) -> int:
        return self.value