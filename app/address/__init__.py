from flask import Blueprint

address = Blueprint('address', __name__)

from app.address import routes  # noqa: F401, E402
