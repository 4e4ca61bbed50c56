from dataclasses import dataclass

from heartlink.storage import MemoryStore
from heartlink.utils.helpers import generate_token

SESSION_TOKEN_SIZE = 32


@dataclass(frozen=True)
class Session:
    token: str
    user_id: str
    email: str


class SessionRegistry:
    """Session tokens mapped to the identity captured at login. Tokens never expire."""

    def __init__(self, store=None):
        self._store = store if store is not None else MemoryStore()

    def create_session(self, user_id, email):
        while True:
            token = generate_token(SESSION_TOKEN_SIZE)
            if self._store.insert(token, Session(token=token, user_id=user_id, email=email)):
                return token

    def resolve(self, token):
        if not token:
            return None
        return self._store.get(token)
