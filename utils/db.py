"""
utils/db.py
-----------------
This module initializes and manages the MongoDB connection
for the entire Flask application, and holds the small helpers
every controller uses to talk to the mentor/mentee collections.
"""

from bson import ObjectId
from bson.errors import InvalidId
from flask_pymongo import PyMongo
from pymongo import ASCENDING

# Create a global MongoDB instance
mongo = PyMongo()

# Collections (shortcuts)
mentors_col = lambda: mongo.db.mentors
mentees_col = lambda: mongo.db.mentees

# Lookup order used everywhere a record may live in either collection
ROLE_COLLECTIONS = (
    ("mentor", mentors_col),
    ("mentee", mentees_col),
)


def init_db_connection(app):
    """
    Initialize MongoDB connection with Flask app.
    Settings (like MONGO_URI) are already loaded from config.py.
    """
    mongo.init_app(app)

    if app.config.get("MONGO_ENSURE_INDEXES"):
        ensure_indexes()

    print("MongoDB connection initialized successfully.")
    return mongo


def ensure_indexes():
    """
    Unique email/mobile inside each collection. Uniqueness across the two
    collections is still a check-then-insert done at registration.
    """
    for _, col in ROLE_COLLECTIONS:
        col().create_index([("email", ASCENDING)], unique=True)
        col().create_index([("mobile", ASCENDING)], unique=True)


def collection_for(role):
    for name, col in ROLE_COLLECTIONS:
        if name == role:
            return col()
    raise ValueError(f"Unknown role: {role}")


def to_object_id(value):
    """Return an ObjectId, or None when value is not a valid id."""
    if isinstance(value, ObjectId):
        return value
    # ObjectId(None) would mint a brand new id
    if not value:
        return None
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


def serialize(doc):
    """Make a stored profile safe to return as JSON (no password, string ids)."""
    if doc is None:
        return None
    data = {k: v for k, v in doc.items() if k != "password"}
    if "_id" in data:
        data["_id"] = str(data["_id"])
    return data
