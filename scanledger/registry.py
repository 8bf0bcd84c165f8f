"""
Identity registry: participant profiles keyed by caller identity.

Registration overwrites. Calling register() again replaces the whole profile,
including clearing last_activity, rather than merging with the old record.
"""

from __future__ import annotations

import logging

from .config import LedgerConfig
from .errors import ErrorKind, Result
from .events import PARTICIPANT_REGISTERED, create_event
from .host import CallContext, fits_text
from .models import Participant
from .store import MemoryStore, WriteSet

logger = logging.getLogger(__name__)

PARTICIPANTS = "participants"


class IdentityRegistry:
    def __init__(self, store: MemoryStore, config: LedgerConfig):
        self.store = store
        self.config = config

    def register(self, ctx: CallContext, display_name: str) -> Result[bool]:
        """Create or replace the caller's profile. Any caller may register itself."""
        if not fits_text(display_name, self.config.limits.display_name):
            logger.info("register rejected for %s: %s", ctx.caller, ErrorKind.INVALID_PARAMETERS.value)
            return Result.failure(ErrorKind.INVALID_PARAMETERS)

        profile = Participant(
            identity=ctx.caller,
            display_name=display_name,
            registered_at=ctx.height,
        )
        with self.store.atomic() as ws:
            replaced = ws.get(PARTICIPANTS, ctx.caller) is not None
            ws.put(PARTICIPANTS, ctx.caller, profile.to_dict())
            ws.emit(create_event(
                PARTICIPANT_REGISTERED,
                ctx,
                payload={"display_name": display_name, "replaced": replaced},
            ))
        logger.debug("Registered %s at height %d (replaced=%s)", ctx.caller, ctx.height, replaced)
        return Result.success(True)

    def get_profile(self, identity: str) -> Participant | None:
        data = self.store.get(PARTICIPANTS, identity)
        return Participant.from_dict(data) if data is not None else None

    def touch(self, ws: WriteSet, identity: str, height: int) -> bool:
        """Record activity for a registered identity.

        Unregistered identities are left alone; there is no implicit
        registration. Returns whether a profile was updated.
        """
        data = ws.get(PARTICIPANTS, identity)
        if data is None:
            return False
        ws.put(PARTICIPANTS, identity, Participant.from_dict(data).with_activity(height).to_dict())
        return True
