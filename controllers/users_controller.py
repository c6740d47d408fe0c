import re

from flask import Blueprint, current_app, jsonify, request
from pymongo.errors import DuplicateKeyError

from utils.auth import hash_password, token_required
from utils.db import mentors_col, mentees_col, serialize, to_object_id
from utils.errors import AlreadyRegistered, ValidationError
from utils.identity import delete_by_id, update_by_id
from utils.payload import json_object

users_bp = Blueprint("users", __name__)


def _search_query(args):
    """
    Mongo filter from ?id=&skill=&name=&email=.
    Returns None when the id can never match.
    """
    query = {}

    if args.get("id"):
        oid = to_object_id(args.get("id"))
        if oid is None:
            return None
        query["_id"] = oid

    # Case-insensitive substring matches
    if args.get("skill"):
        query["skills"] = {"$regex": re.escape(args.get("skill")), "$options": "i"}
    if args.get("name"):
        query["name"] = {"$regex": re.escape(args.get("name")), "$options": "i"}

    if args.get("email"):
        query["email"] = args.get("email")

    return query


def _list_profiles(col, query=None):
    return jsonify([serialize(u) for u in col.find(query or {})])


# -----------------------------
# VIEW PROFILES
# -----------------------------
@users_bp.route("/allmentors")
def all_mentors():
    return _list_profiles(mentors_col())


@users_bp.route("/allmentees")
def all_mentees():
    return _list_profiles(mentees_col())


@users_bp.route("/mentor")
def search_mentors():
    query = _search_query(request.args)
    if query is None:
        return jsonify([])
    return _list_profiles(mentors_col(), query)


@users_bp.route("/mentee")
def search_mentees():
    query = _search_query(request.args)
    if query is None:
        return jsonify([])
    return _list_profiles(mentees_col(), query)


# -----------------------------
# DELETE PROFILE
# -----------------------------
@users_bp.route("/user/<user_id>", methods=["DELETE"])
@token_required
def delete_user(user_id):
    role = delete_by_id(user_id)
    current_app.logger.info("Deleted %s %s", role, user_id)
    return jsonify({"message": "User deleted successfully"})


# -----------------------------
# UPDATE PROFILE
# -----------------------------
@users_bp.route("/user/<user_id>", methods=["PUT"])
@token_required
def update_user(user_id):
    patch = json_object(required=True)

    # Update password only if provided, and never store it in plain text
    if patch.get("password"):
        if not isinstance(patch["password"], str):
            raise ValidationError("Password must be a string")
        patch["password"] = hash_password(patch["password"])
    else:
        patch.pop("password", None)

    try:
        user, _ = update_by_id(user_id, patch)
    except DuplicateKeyError:
        raise AlreadyRegistered()

    return jsonify(serialize(user))
