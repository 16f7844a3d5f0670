# systemd_bot/storage/sessions.py
# In-memory conversation state, one record per allowed user

import asyncio
import enum
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

NO_SESSION = object()


class SessionState(enum.Enum):
    WAITING = "waiting"


@dataclass
class Session:
    identity: str
    state:    SessionState = SessionState.WAITING


class SessionStore:
    """Sessions are created for every allowed id up front and live until exit.

    A single lock covers lookup and the whole handler body, so updates from
    different users are never processed at the same time.
    """

    def __init__(self, identities):
        self._sessions = {i: Session(i) for i in identities}
        self._lock     = asyncio.Lock()

    def __contains__(self, identity):
        return identity in self._sessions

    def __len__(self):
        return len(self._sessions)

    def identities(self):
        return list(self._sessions)

    async def with_session(self, identity, fn):
        async with self._lock:
            session = self._sessions.get(identity)
            if session is None:
                logger.warning("Session does not exist for id: %s", identity)
                return NO_SESSION
            return await fn(session)
