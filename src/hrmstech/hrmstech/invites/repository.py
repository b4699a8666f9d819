from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import InviteStatus
from .model import Invite


class InviteRepository(Protocol):
    def get(self, org_id: str, email: str) -> Optional[Invite]:
        raise NotImplementedError

    def list_for_org(self, org_id: str) -> Sequence[Invite]:
        raise NotImplementedError

    def upsert(self, invite: Invite) -> None:
        """Create the invite, or replace the one already sent to that email."""

        raise NotImplementedError

    def set_status(self, org_id: str, email: str, status: InviteStatus) -> bool:
        raise NotImplementedError
