"""
utils/identity.py
-----------------
Mentors and mentees live in two separate collections. Everything that
starts from an email, a mobile number or an id goes through here to find
out which collection holds the record and therefore which role it has.

Mentors are always tried before mentees.
"""

import re
from datetime import datetime

from pymongo import ReturnDocument

from utils.db import ROLE_COLLECTIONS, to_object_id
from utils.errors import InvalidIdentifierFormat, NotFoundError

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MOBILE_RE = re.compile(r"^[0-9]{10}$")


def classify_identifier(identifier):
    """Return the profile field an identifier refers to: "email" or "mobile"."""
    if not isinstance(identifier, str):
        raise InvalidIdentifierFormat()
    if EMAIL_RE.fullmatch(identifier):
        return "email"
    if MOBILE_RE.fullmatch(identifier):
        return "mobile"
    raise InvalidIdentifierFormat()


def _first_match(query):
    for role, col in ROLE_COLLECTIONS:
        record = col().find_one(query)
        if record:
            return record, role
    return None, None


def resolve(identifier):
    """Find the profile for an email or mobile number. Returns (record, role)."""
    field = classify_identifier(identifier)
    record, role = _first_match({field: identifier})
    if record is None:
        raise NotFoundError()
    return record, role


def find_by_email(email):
    """(record, role) for an exact email, or (None, None)."""
    return _first_match({"email": email})


def find_by_id(user_id):
    oid = to_object_id(user_id)
    if oid is None:
        raise NotFoundError()
    record, role = _first_match({"_id": oid})
    if record is None:
        raise NotFoundError()
    return record, role


def find_registered(email, mobile):
    """Any profile in either collection already using this email or mobile."""
    record, _ = _first_match({"$or": [{"email": email}, {"mobile": mobile}]})
    return record


def update_by_id(user_id, patch):
    """
    Apply a partial patch to whichever collection holds user_id.
    Fields are not validated; _id can never be changed.
    """
    oid = to_object_id(user_id)
    if oid is None:
        raise NotFoundError()

    changes = {k: v for k, v in dict(patch).items() if k != "_id"}
    changes["updated_at"] = datetime.utcnow()

    for role, col in ROLE_COLLECTIONS:
        updated = col().find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER
        )
        if updated:
            return updated, role
    raise NotFoundError()


def delete_by_id(user_id):
    """Delete the profile with user_id and return the role it had."""
    oid = to_object_id(user_id)
    if oid is None:
        raise NotFoundError()

    for role, col in ROLE_COLLECTIONS:
        result = col().delete_one({"_id": oid})
        if result.deleted_count:
            return role
    raise NotFoundError()
