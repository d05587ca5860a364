from flask import Blueprint

api_bp = Blueprint("api", __name__)


def route(rule, **options):
    """Register a view without Flask's automatic OPTIONS responder.

    OPTIONS (and HEAD) are answered with 405 by the views themselves.
    """
    options.setdefault("provide_automatic_options", False)
    options.setdefault("strict_slashes", False)
    return api_bp.route(rule, **options)


from webapp.blueprints.api import users, products, images  # noqa: F401, E402
