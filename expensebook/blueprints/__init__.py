from urllib.parse import urlsplit

from flask import request
from flask_login import current_user


def wants_json():
    """True when the caller is the SPA or another API client rather than a browser form."""
    if request.path.startswith("/api") or request.is_json:
        return True
    accept = request.accept_mimetypes
    best = accept.best_match(["application/json", "text/html"])
    return best == "application/json" and accept[best] > accept["text/html"]


def acting_user():
    """The logged-in user as a plain model instance, to hand to the services."""
    return current_user._get_current_object()


def safe_next(target):
    if not target:
        return None
    parts = urlsplit(target)
    if parts.scheme or parts.netloc or not target.startswith("/") or target.startswith("//"):
        return None
    return target
