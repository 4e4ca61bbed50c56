import logging
from dataclasses import dataclass

from heartlink.errors import Conflict
from heartlink.storage import MemoryStore
from heartlink.utils.helpers import generate_token

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Account:
    email: str
    password: str
    id: str


class AccountRegistry:
    """Accounts keyed by (normalized) email."""

    def __init__(self, store=None):
        self._store = store if store is not None else MemoryStore()

    def register(self, email, password):
        account = Account(email=email, password=password, id=generate_token())
        if not self._store.insert(email, account):
            raise Conflict("User already exists")
        logger.info("Registered account %s", account.id)
        return account

    def verify(self, email, password):
        # Passwords are stored and compared as plain text.
        account = self._store.get(email)
        if account is not None and account.password == password:
            return account
        return None
