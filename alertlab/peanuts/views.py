import logging

from flask import Blueprint, jsonify, request

from alertlab.peanuts.models import NAME_MAX_LENGTH, Peanuts
from alertlab.peanuts.service import get_service

logger = logging.getLogger(__name__)

peanuts_bp = Blueprint("peanuts", __name__, url_prefix="/peanuts")


def validate_peanuts(data):
    """
    Check a create payload, returning a dict of field -> error message.

    :param data: Decoded JSON body
    :return: dict, empty when the payload is valid
    """
    if not isinstance(data, dict):
        return {"body": "Request body must be a JSON object"}

    errors = {}

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors["name"] = "Name is required"
    elif len(name) > NAME_MAX_LENGTH:
        errors["name"] = (
            f"Name must be between 1 and {NAME_MAX_LENGTH} characters"
        )

    description = data.get("description")
    if description is not None and not isinstance(description, str):
        errors["description"] = "Description must be a string"

    return errors


@peanuts_bp.get("/<int:peanuts_id>")
def get_peanuts(peanuts_id: int):
    """Return a character by id, or an empty 200 when there is none."""
    logger.info("Get Peanuts Character by id: %s", peanuts_id)

    peanuts = get_service().get_by_id(peanuts_id)
    if peanuts is None:
        return ""
    return jsonify(peanuts.to_dict())


@peanuts_bp.post("")
def create_peanuts():
    """Create a character.

    Expects JSON body::

        {
            "name": "Snoopy",
            "description": "Charlie Brown's pet beagle"
        }

    Any ``id`` in the body is ignored, the database assigns one.
    """
    data = request.get_json(silent=True)
    errors = validate_peanuts(data)
    if errors:
        logger.warning("Rejected Peanuts Character payload: %s", errors)
        return jsonify({"status": "error", "errors": errors}), 400

    logger.info("Create Peanuts Character: %s", data["name"])

    peanuts = get_service().save(
        Peanuts(name=data["name"], description=data.get("description"))
    )
    return jsonify(peanuts.to_dict())
