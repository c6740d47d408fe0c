import time
from functools import wraps

from flask import current_app, g, request
from jose import JWTError, jwt
from werkzeug.security import generate_password_hash, check_password_hash

from utils.errors import AuthError, ForbiddenError, InvalidCredentials, NotFoundError
from utils.identity import resolve


def hash_password(password):
    return generate_password_hash(password, method=current_app.config["PASSWORD_HASH_METHOD"])


def check_password(password_hash, password):
    if not password_hash or not isinstance(password, str):
        return False
    return check_password_hash(password_hash, password)


# Signed access token carrying the profile id and role
def issue_token(user_id, role):
    cfg = current_app.config
    now = int(time.time())
    claims = {
        "id": str(user_id),
        "role": role,
        "iat": now,
        "exp": now + cfg["JWT_EXPIRES_HOURS"] * 3600,
    }
    return jwt.encode(claims, cfg["JWT_SECRET_KEY"], algorithm=cfg["JWT_ALGORITHM"])


def decode_token(token):
    cfg = current_app.config
    try:
        claims = jwt.decode(token, cfg["JWT_SECRET_KEY"], algorithms=[cfg["JWT_ALGORITHM"]])
    except JWTError as exc:
        raise AuthError("Invalid or expired token") from exc
    if "id" not in claims or "role" not in claims:
        raise AuthError("Invalid or expired token")
    return {"id": claims["id"], "role": claims["role"]}


def authenticate(identifier, password):
    """
    Resolve the identifier and verify the password.
    Unknown identifier and wrong password both end in InvalidCredentials.
    Returns (record, role, token).
    """
    try:
        user, role = resolve(identifier)
    except NotFoundError:
        raise InvalidCredentials()

    if not check_password(user.get("password"), password):
        raise InvalidCredentials()

    return user, role, issue_token(user["_id"], role)


# This decorator makes sure that only requests with a valid access token
# reach the view, when REQUIRE_AUTH is switched on. Views taking a user_id
# may only be used on the token holder's own profile.
def token_required(view_function):
    @wraps(view_function)
    def decorated_function(*args, **kwargs):
        if not current_app.config.get("REQUIRE_AUTH"):
            return view_function(*args, **kwargs)

        header = request.headers.get("Authorization", "")
        scheme, _, token = header.partition(" ")
        if scheme.lower() != "bearer" or not token:
            raise AuthError("Missing access token")

        g.auth = decode_token(token.strip())
        if "user_id" in kwargs and g.auth["id"] != str(kwargs["user_id"]):
            raise ForbiddenError()
        return view_function(*args, **kwargs)
    return decorated_function
