"""
utils/errors.py
-----------------
Error types raised by the resolver, the credential gate and the controllers.
Each one carries the HTTP status it is rendered with by the handlers
registered in app.py.
"""


class MentorMatchError(Exception):
    status_code = 500
    message = "Something went wrong"

    def __init__(self, message=None, status_code=None, details=None):
        super().__init__(message or self.message)
        if message:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.details = details

    def to_dict(self):
        body = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# 400: missing or malformed input
class ValidationError(MentorMatchError):
    status_code = 400
    message = "Invalid request"


class InvalidIdentifierFormat(ValidationError):
    message = "Invalid identifier format"


# 400: duplicate identifier
class ConflictError(MentorMatchError):
    status_code = 400
    message = "Conflict"


class AlreadyRegistered(ConflictError):
    message = "Email or Mobile is already registered"


# 401
class AuthError(MentorMatchError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(AuthError):
    message = "Invalid credentials"


# 403: valid token, someone else's profile
class ForbiddenError(AuthError):
    status_code = 403
    message = "Not allowed to change another user's profile"


class NotFoundError(MentorMatchError):
    status_code = 404
    message = "User not found"


# 500: persistence or media service failure
class UpstreamError(MentorMatchError):
    status_code = 500
    message = "Something went wrong"
