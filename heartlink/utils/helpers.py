import secrets
import string
import bleach
from datetime import datetime, timezone

URL_SAFE_ALPHABET = string.ascii_letters + string.digits + "_-"


def generate_token(size=21):
    """Generate a random URL-safe token of exactly `size` characters."""
    return "".join(secrets.choice(URL_SAFE_ALPHABET) for _ in range(size))


def utcnow():
    return datetime.now(timezone.utc)


def to_iso(dt):
    if dt is None:
        return None
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def sanitize(text):
    """Escape markup in user input to prevent XSS."""
    if text is None:
        return ""
    return bleach.clean(str(text).strip(), tags=set(), strip=False)
