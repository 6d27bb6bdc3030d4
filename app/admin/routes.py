"""
app/admin/routes.py
──────────────────
Admin-only account tools: creating wholesale customers.
"""
from flask import jsonify, current_app

from app.admin import admin
from app.auth.decorators import admin_required
from app.auth.models import UserType
from app.auth.service import AuthService
from app.auth.validators import clean_form, validate_register_form, REGISTER_FIELDS
from app.backend import UpstreamError
from app.utils.forms import request_data


@admin.route('/wholesale', methods=['POST'])
@admin_required
def create_wholesale():
    """
    Register a wholesale account on the backend.
    The admin stays signed in as themself.
    """
    data = request_data()
    form = clean_form(data, ('email',) + REGISTER_FIELDS)
    form['password'] = str(data.get('password') or '')

    errors = validate_register_form(form)
    if errors:
        return jsonify({'errors': errors}), 400

    try:
        user = AuthService().register(form, UserType.wholesale, sign_in=False)
    except UpstreamError as exc:
        current_app.logger.error(f"Wholesale account creation failed for {form['email']}: {exc}")
        status = 400 if exc.status_code in (400, 409, 422) else 502
        return jsonify({'error': exc.detail or 'Could not create the wholesale account.'}), status

    current_app.logger.info(f"Wholesale account created: {user.email}")
    return jsonify({'user': user.to_dict(), 'message': 'Wholesale account created.'}), 201
