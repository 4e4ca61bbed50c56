from functools import wraps
from flask import g, request

from heartlink.errors import Unauthorized
from heartlink.services import get_services


def login_required(f):
    """Require a valid session token in the Authorization header.

    The header carries the token verbatim. The resolved session is exposed
    as `g.user`.
    """
    @wraps(f)
    def decorated_function(*args, **kwargs):
        session = get_services().sessions.resolve(request.headers.get("Authorization"))
        if session is None:
            raise Unauthorized()
        g.user = session
        return f(*args, **kwargs)
    return decorated_function
