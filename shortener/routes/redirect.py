"""Redirect endpoint for short URL resolution."""

import logging

from flask import Blueprint, abort, redirect

from ..storage import StorageError, URLNotFoundError
from .urls import get_storage

logger = logging.getLogger(__name__)

redirect_bp = Blueprint("redirect", __name__)


@redirect_bp.route("/<alias>", methods=["GET"])
def handle_redirect(alias: str):
    """Handle short URL redirect.

    Args:
        alias: Short URL code.

    Returns:
        302 redirect to original URL or 404 if not found.
    """
    try:
        url = get_storage().get_url(alias)
    except URLNotFoundError:
        abort(404)
    except StorageError as e:
        logger.error(f"Failed to resolve alias {alias}: {e}")
        abort(500)

    logger.debug(f"Redirecting {alias} to {url}")
    return redirect(url, code=302)
