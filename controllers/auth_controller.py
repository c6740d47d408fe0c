from flask import Blueprint, current_app, jsonify, request
from pymongo.errors import DuplicateKeyError, PyMongoError

from models.users import PROFILE_TYPES
from utils.auth import authenticate, hash_password, issue_token
from utils.db import serialize
from utils.errors import AlreadyRegistered, NotFoundError, UpstreamError, ValidationError
from utils.identity import EMAIL_RE, MOBILE_RE, find_by_email, find_registered
from utils.media import upload_photo, validate_photo
from utils.payload import json_object

auth_bp = Blueprint("auth", __name__)

REQUIRED_FIELDS = ("type", "name", "email", "mobile", "password", "skills")


# Register (multipart form with a photo)
@auth_bp.route("/register", methods=["POST"])
def register():
    form = request.form
    photo = request.files.get("photo")
    validate_photo(photo)

    missing = [field for field in REQUIRED_FIELDS if not form.get(field)]
    if missing:
        raise ValidationError("All fields are required, including photo",
                              details={"missingFields": missing})

    user_type = form.get("type")
    email = form.get("email")
    mobile = form.get("mobile")

    # Must be usable as a login identifier later on
    invalid = []
    if not EMAIL_RE.fullmatch(email):
        invalid.append("email")
    if not MOBILE_RE.fullmatch(mobile):
        invalid.append("mobile")
    if invalid:
        raise ValidationError("Invalid email or mobile number",
                              details={"invalidFields": invalid})

    # Prevent duplicate users across mentors and mentees
    if find_registered(email, mobile):
        raise AlreadyRegistered()

    profile_class = PROFILE_TYPES.get(user_type)
    if profile_class is None:
        raise ValidationError("Invalid user type")

    photo_url = upload_photo(photo)

    fields = {
        "name": form.get("name"),
        "email": email,
        "mobile": mobile,
        "password": hash_password(form.get("password")),
        "skills": form.getlist("skills"),
        "photo": photo_url,
    }
    if profile_class.role == "mentor":
        fields["experience"] = form.get("experience")
        fields["availability"] = form.get("availability")

    try:
        user = profile_class(**fields).save()
    except DuplicateKeyError:
        current_app.logger.warning("Duplicate %s registration, photo %s orphaned", user_type, photo_url)
        raise AlreadyRegistered()
    except PyMongoError as e:
        current_app.logger.warning("Saving %s failed, photo %s orphaned", user_type, photo_url,
                                   exc_info=True)
        raise UpstreamError() from e

    token = issue_token(user["_id"], profile_class.role)
    current_app.logger.info("Registered %s %s", profile_class.role, user["_id"])
    return jsonify({"user": serialize(user), "auth": token}), 201


# Login with email or mobile number
@auth_bp.route("/login", methods=["POST"])
def login():
    data = json_object()
    identifier = data.get("identifier")
    password = data.get("password")

    if not identifier or not password:
        raise ValidationError("Identifier and password are required")
    if not isinstance(password, str):
        raise ValidationError("Password must be a string")

    user, role, token = authenticate(identifier, password)

    current_app.logger.info("Login %s %s", role, user["_id"])
    return jsonify({"user": serialize(user), "auth": token})


# Fresh copy of the signed-in profile, polled by the client
@auth_bp.route("/syncdata", methods=["POST"])
def sync_data():
    data = json_object()
    email = data.get("email")
    if not email:
        raise ValidationError("Email is required")

    user, _ = find_by_email(email)
    if not user:
        raise NotFoundError()

    return jsonify({"user": serialize(user)})
