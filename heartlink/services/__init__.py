from dataclasses import dataclass
from flask import current_app

from heartlink.services.account_service import AccountRegistry
from heartlink.services.invite_service import InviteRegistry
from heartlink.services.session_service import SessionRegistry
from heartlink.services.upload_service import AudioUploadStore

EXTENSION_KEY = "heartlink"


@dataclass
class Services:
    accounts: AccountRegistry
    sessions: SessionRegistry
    invites: InviteRegistry
    uploads: AudioUploadStore


def init_services(app):
    """Create a fresh set of stores owned by `app`."""
    services = Services(
        accounts=AccountRegistry(),
        sessions=SessionRegistry(),
        invites=InviteRegistry(lock_responses=app.config["LOCK_RESPONSES"]),
        uploads=AudioUploadStore(app.config["UPLOADS_DIR"], app.config["MAX_UPLOAD_BYTES"]),
    )
    app.extensions[EXTENSION_KEY] = services
    return services


def get_services():
    return current_app.extensions[EXTENSION_KEY]
