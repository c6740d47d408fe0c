"""
utils/media.py
-----------------
Profile photos are hosted on Cloudinary. We only validate the upload,
hand it over and keep the secure URL that comes back.
"""

import cloudinary
import cloudinary.uploader
from flask import current_app

from utils.errors import UpstreamError, ValidationError

VALID_IMAGE_TYPES = ("image/jpeg", "image/png", "image/gif")


def configure_media(app):
    cloudinary.config(
        cloud_name=app.config.get("CLOUDINARY_CLOUD_NAME"),
        api_key=app.config.get("CLOUDINARY_API_KEY"),
        api_secret=app.config.get("CLOUDINARY_API_SECRET"),
        secure=True,
    )


def validate_photo(photo):
    if photo is None or not photo.filename:
        raise ValidationError("No photo uploaded")
    if photo.mimetype not in VALID_IMAGE_TYPES:
        raise ValidationError("Uploaded file is not a valid image")


def upload_photo(photo):
    """Upload a werkzeug FileStorage and return its public URL."""
    try:
        result = cloudinary.uploader.upload(photo.stream, resource_type="image")
    except Exception as e:
        current_app.logger.exception("Photo upload failed: %s", e)
        raise UpstreamError() from e

    url = result.get("secure_url") if result else None
    if not url:
        current_app.logger.error("Photo upload returned no secure_url")
        raise UpstreamError()
    return url
