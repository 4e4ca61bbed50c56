import itertools
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from heartlink.errors import Conflict, NotFound
from heartlink.storage import MemoryStore
from heartlink.utils.helpers import generate_token, to_iso, utcnow

logger = logging.getLogger(__name__)

LINK_ID_SIZE = 10

PENDING = "pending"
ACCEPTED = "accepted"
REJECTED = "rejected"

RESPONSES = {"yes": ACCEPTED, "no": REJECTED}

NOT_FOUND_MESSAGE = "Lost heart... \U0001F494"


@dataclass
class Invite:
    id: str
    owner_id: str
    name: str
    message: str = ""
    audio_path: str = ""
    status: str = PENDING
    created_at: datetime = field(default_factory=utcnow)
    responded_at: Optional[datetime] = None
    seq: int = 0

    def to_dict(self):
        """Owner-facing representation."""
        data = {
            "id": self.id,
            "ownerId": self.owner_id,
            "name": self.name,
            "message": self.message,
            "audioPath": self.audio_path,
            "status": self.status,
            "createdAt": to_iso(self.created_at),
        }
        if self.responded_at is not None:
            data["respondedAt"] = to_iso(self.responded_at)
        return data

    def public_view(self):
        """What the invitee gets to see: no owner, no timestamps."""
        return {
            "name": self.name,
            "message": self.message,
            "audioUrl": self.audio_path,
            "status": self.status,
        }


class InviteRegistry:
    def __init__(self, store=None, lock_responses=False):
        self._store = store if store is not None else MemoryStore()
        self._counter = itertools.count(1)
        self.lock_responses = lock_responses

    def create(self, owner_id, name, message="", audio_filename=None):
        while True:
            invite = Invite(
                id=generate_token(LINK_ID_SIZE),
                owner_id=owner_id,
                name=name,
                message=message or "",
                audio_path=f"/uploads/{audio_filename}" if audio_filename else "",
                seq=next(self._counter),
            )
            if self._store.insert(invite.id, invite):
                break
        logger.info("Created invite %s for owner %s", invite.id, owner_id)
        return invite

    def get(self, link_id):
        return self._store.get(link_id)

    def list_by_owner(self, owner_id):
        invites = [inv for inv in self._store.values() if inv.owner_id == owner_id]
        invites.sort(key=lambda inv: (inv.created_at, inv.seq), reverse=True)
        return invites

    def respond(self, link_id, response):
        status = RESPONSES[response]
        settled = []

        def _apply(invite):
            if self.lock_responses and invite.status != PENDING:
                settled.append(invite.status)
                return
            invite.status = status
            invite.responded_at = utcnow()

        invite = self._store.update(link_id, _apply)
        if invite is None:
            raise NotFound(NOT_FOUND_MESSAGE)
        if settled:
            raise Conflict(f"Invite already {settled[0]}")
        logger.info("Invite %s answered: %s", link_id, status)
        return invite
