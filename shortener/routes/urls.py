"""URL CRUD endpoints for short URL management."""

import logging

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from ..auth import auth_required
from ..schemas import DeleteURLRequest, ErrorResponse, MessageResponse, SaveURLRequest, URLResponse
from ..storage import PyDALStorage, StorageError, URLExistsError, URLNotFoundError
from ..utils import generate_unique_alias

logger = logging.getLogger(__name__)

urls_bp = Blueprint("urls", __name__)


def get_storage() -> PyDALStorage:
    """Get the URL storage registered on the current app."""
    return current_app.extensions["storage"]


def _error(message: str, status: int):
    return jsonify(ErrorResponse(error=message).model_dump()), status


def _alias_taken(storage: PyDALStorage, alias: str) -> bool:
    try:
        storage.get_url(alias)
    except URLNotFoundError:
        return False
    return True


@urls_bp.route("", methods=["POST"])
@auth_required
def save_url():
    """Create a new short URL.

    Request body:
        url: Required - URL to shorten
        alias: Optional - Custom alias (auto-generated if not provided)

    Returns:
        Created URL object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        return _error("Request body required", 400)

    try:
        save_req = SaveURLRequest(**data)
    except ValidationError as e:
        return _error(e.errors()[0].get("msg", "Validation error"), 400)

    storage = get_storage()

    alias = save_req.alias
    try:
        if not alias:
            alias = generate_unique_alias(
                lambda a: _alias_taken(storage, a),
                length=current_app.config.get("ALIAS_LENGTH", 7),
            )
            if alias is None:
                logger.error("Could not generate unique alias")
                return _error("Could not generate unique alias", 500)

        url_id = storage.save_url(save_req.url, alias)
    except URLExistsError:
        logger.info(f"Alias already exists: {alias}")
        return _error("url already exists", 409)
    except StorageError as e:
        logger.error(f"Failed to save url: {e}")
        return _error("failed to add url", 500)

    logger.info(f"URL added: alias={alias} id={url_id}")
    response = URLResponse(id=url_id, alias=alias, url=save_req.url)
    return jsonify(response.model_dump()), 201


@urls_bp.route("/<alias>", methods=["GET"])
@auth_required
def get_url(alias: str):
    """Get the destination of a short URL.

    Args:
        alias: Short alias.

    Returns:
        URL object.
    """
    try:
        url = get_storage().get_url(alias)
    except URLNotFoundError:
        logger.info(f"URL not found: alias={alias}")
        return _error("url not found", 404)
    except StorageError as e:
        logger.error(f"Failed to get url: {e}")
        return _error("internal error", 500)

    return jsonify(URLResponse(alias=alias, url=url).model_dump(exclude_none=True))


@urls_bp.route("", methods=["DELETE"])
@auth_required
def delete_url():
    """Delete a short URL.

    Request body:
        alias: Required - Alias to delete

    Returns:
        Success message.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        logger.error("Failed to decode request body")
        return _error("invalid request body", 400)

    try:
        delete_req = DeleteURLRequest(**data)
    except ValidationError:
        logger.error("Alias not provided in request body")
        return _error("alias is required", 400)

    try:
        get_storage().delete_url(delete_req.alias)
    except URLNotFoundError:
        logger.info(f"URL not found: alias={delete_req.alias}")
        return _error("url not found", 404)
    except StorageError as e:
        logger.error(f"Failed to delete url: {e}")
        return _error("failed to delete url", 500)

    logger.info(f"URL deleted: alias={delete_req.alias}")
    return jsonify(MessageResponse(message="url deleted").model_dump()), 200
