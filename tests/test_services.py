from __future__ import annotations

import io
from pathlib import Path

import pytest
from werkzeug.datastructures import FileStorage

from heartlink.errors import Conflict, NotFound, PayloadTooLarge, UnsupportedMediaType
from heartlink.services.account_service import AccountRegistry
from heartlink.services.invite_service import InviteRegistry
from heartlink.services.session_service import SessionRegistry
from heartlink.services.upload_service import AudioUploadStore


def _file(data: bytes, filename: str, content_type: str) -> FileStorage:
    return FileStorage(stream=io.BytesIO(data), filename=filename, content_type=content_type)


# --- Accounts ---

def test_register_same_email_twice_conflicts() -> None:
    accounts = AccountRegistry()
    account = accounts.register("a@x.com", "secret1")
    assert len(account.id) == 21

    with pytest.raises(Conflict):
        accounts.register("a@x.com", "another")


def test_verify_compares_password_exactly() -> None:
    accounts = AccountRegistry()
    account = accounts.register("a@x.com", "secret1")

    assert accounts.verify("a@x.com", "secret1") == account
    assert accounts.verify("a@x.com", "SECRET1") is None
    assert accounts.verify("nobody@x.com", "secret1") is None


# --- Sessions ---

def test_sessions_resolve_to_identity_snapshot() -> None:
    sessions = SessionRegistry()
    token = sessions.create_session("user-1", "a@x.com")
    other = sessions.create_session("user-1", "a@x.com")

    assert len(token) == 32
    assert token != other
    for _ in range(3):
        session = sessions.resolve(token)
        assert (session.user_id, session.email) == ("user-1", "a@x.com")
    assert sessions.resolve(other).user_id == "user-1"


def test_unknown_or_missing_tokens_do_not_resolve() -> None:
    sessions = SessionRegistry()
    assert sessions.resolve(None) is None
    assert sessions.resolve("") is None
    assert sessions.resolve("x" * 32) is None


# --- Invites ---

def test_create_invite_defaults() -> None:
    invites = InviteRegistry()
    invite = invites.create("owner", "Sam")

    assert len(invite.id) == 10
    assert invite.status == "pending"
    assert invite.message == ""
    assert invite.audio_path == ""
    assert invite.responded_at is None
    assert invites.get(invite.id) is invite


def test_create_invite_with_audio_references_uploads() -> None:
    invite = InviteRegistry().create("owner", "Sam", "hi", "abc.mp3")
    assert invite.audio_path == "/uploads/abc.mp3"
    assert invite.public_view() == {
        "name": "Sam",
        "message": "hi",
        "audioUrl": "/uploads/abc.mp3",
        "status": "pending",
    }


def test_list_by_owner_is_newest_first_and_scoped() -> None:
    invites = InviteRegistry()
    first = invites.create("owner", "One")
    second = invites.create("owner", "Two")
    invites.create("someone-else", "Other")
    third = invites.create("owner", "Three")

    listed = invites.list_by_owner("owner")

    assert [inv.id for inv in listed] == [third.id, second.id, first.id]
    assert invites.list_by_owner("nobody") == []


def test_respond_sets_status_and_overwrites_by_default() -> None:
    invites = InviteRegistry()
    invite = invites.create("owner", "Sam")

    invites.respond(invite.id, "yes")
    assert invite.status == "accepted"
    first_answer = invite.responded_at
    assert first_answer is not None

    invites.respond(invite.id, "no")
    assert invite.status == "rejected"
    assert invite.responded_at >= first_answer


def test_respond_can_be_locked_to_a_single_answer() -> None:
    invites = InviteRegistry(lock_responses=True)
    invite = invites.create("owner", "Sam")
    invites.respond(invite.id, "no")

    with pytest.raises(Conflict):
        invites.respond(invite.id, "yes")
    assert invite.status == "rejected"


def test_respond_to_unknown_invite() -> None:
    with pytest.raises(NotFound):
        InviteRegistry().respond("0123456789", "yes")


def test_owner_view_includes_responded_at_only_once_answered() -> None:
    invites = InviteRegistry()
    invite = invites.create("owner", "Sam")
    assert "respondedAt" not in invite.to_dict()

    invites.respond(invite.id, "yes")
    data = invite.to_dict()
    assert data["respondedAt"].endswith("Z")
    assert data["ownerId"] == "owner"
    assert data["status"] == "accepted"


# --- Uploads ---

def test_store_writes_audio_with_generated_name(tmp_path: Path) -> None:
    store = AudioUploadStore(tmp_path / "uploads", max_bytes=1024)

    filename = store.store(_file(b"ID3audio", "my song.mp3", "audio/mpeg"))

    assert filename.endswith(".mp3")
    assert len(filename) == len("0123456789.mp3")
    assert (tmp_path / "uploads" / filename).read_bytes() == b"ID3audio"


def test_store_without_extension(tmp_path: Path) -> None:
    store = AudioUploadStore(tmp_path, max_bytes=1024)
    filename = store.store(_file(b"data", "recording", "audio/webm"))
    assert len(filename) == 10


def test_store_rejects_non_audio(tmp_path: Path) -> None:
    store = AudioUploadStore(tmp_path, max_bytes=1024)
    with pytest.raises(UnsupportedMediaType):
        store.store(_file(b"<html>", "page.html", "text/html"))
    assert list(tmp_path.iterdir()) == []


def test_store_rejects_oversized_files(tmp_path: Path) -> None:
    store = AudioUploadStore(tmp_path / "uploads", max_bytes=1024)
    with pytest.raises(PayloadTooLarge):
        store.store(_file(b"\x00" * 1025, "big.wav", "audio/wav"))
    assert not (tmp_path / "uploads").exists()


@pytest.mark.parametrize(
    "client_name, extension",
    [
        ("语音.mp3", ".mp3"),
        ("голос.ogg", ".ogg"),
        (".mp3", ".mp3"),
        ("Sprachnachricht für dich.m4a", ".m4a"),
        ("../../etc/clip.wav", ".wav"),
        ("C:\\Users\\me\\memo.webm", ".webm"),
        ("clip.<script>", ""),
        ("noextension", ""),
    ],
)
def test_store_keeps_the_client_extension(tmp_path: Path, client_name: str, extension: str) -> None:
    store = AudioUploadStore(tmp_path, max_bytes=1024)

    filename = store.store(_file(b"audio", client_name, "audio/mpeg"))

    assert filename.endswith(extension)
    assert len(filename) == 10 + len(extension)
    assert (tmp_path / filename).read_bytes() == b"audio"
