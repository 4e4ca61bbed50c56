import logging
from flask import Blueprint, current_app, g, jsonify, request
from werkzeug.exceptions import RequestEntityTooLarge

from heartlink.api.auth import login_required
from heartlink.api.validation import parse_body, parse_query
from heartlink.errors import ApiError, InvalidCredentials, NotFound, PayloadTooLarge
from heartlink.schemas import (
    GenerateLinkRequest,
    GetLinkQuery,
    LoginRequest,
    RegisterRequest,
    RespondRequest,
)
from heartlink.services import get_services
from heartlink.services.invite_service import NOT_FOUND_MESSAGE
from heartlink.utils.rate_limit import rate_limited

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__, url_prefix="/api")

# Room for multipart boundaries and headers around the audio part
MULTIPART_OVERHEAD = 64 * 1024


# --- Auth ---

@api_bp.route("/register", methods=["POST"])
def register():
    data = parse_body(RegisterRequest)
    get_services().accounts.register(data.email, data.password)
    return jsonify(success=True, message="Welcome to the club! \U0001F495")


@api_bp.route("/login", methods=["POST"])
def login():
    data = parse_body(LoginRequest)
    services = get_services()
    account = services.accounts.verify(data.email, data.password)
    if account is None:
        logger.info("Failed login attempt ip=%s", request.remote_addr)
        raise InvalidCredentials()
    session_id = services.sessions.create_session(account.id, data.email)
    logger.info("Login for account %s", account.id)
    return jsonify(success=True, sessionId=session_id)


# --- Invites (owner) ---

@api_bp.route("/upload-audio", methods=["POST"])
@login_required
def upload_audio():
    limit = current_app.config["MAX_UPLOAD_BYTES"]
    if request.content_length is not None and request.content_length > limit + MULTIPART_OVERHEAD:
        raise PayloadTooLarge(f"File too large (max {limit // (1024 * 1024)} MB)")
    try:
        file = request.files.get("audio")
    except RequestEntityTooLarge:
        raise PayloadTooLarge(f"File too large (max {limit // (1024 * 1024)} MB)")
    if file is None or not file.filename:
        raise ApiError("No file uploaded")

    filename = get_services().uploads.store(file)
    return jsonify(success=True, filename=filename)


@api_bp.route("/generate-link", methods=["POST"])
@login_required
def generate_link():
    data = parse_body(GenerateLinkRequest)
    invite = get_services().invites.create(
        owner_id=g.user.user_id,
        name=data.name,
        message=data.message,
        audio_filename=data.audio_file,
    )
    return jsonify(linkId=invite.id)


@api_bp.route("/invites", methods=["GET"])
@login_required
def list_invites():
    invites = get_services().invites.list_by_owner(g.user.user_id)
    return jsonify([inv.to_dict() for inv in invites])


# --- Invitee ---

@api_bp.route("/get-link", methods=["GET"])
@rate_limited
def get_link():
    query = parse_query(GetLinkQuery)
    invite = get_services().invites.get(query.id)
    if invite is None:
        raise NotFound(NOT_FOUND_MESSAGE)
    return jsonify(invite.public_view())


@api_bp.route("/respond", methods=["POST"])
@rate_limited
def respond():
    data = parse_body(RespondRequest)
    get_services().invites.respond(data.link_id, data.response)
    return jsonify(success=True)
