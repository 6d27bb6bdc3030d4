from flask import jsonify, flash, current_app

from app.auth import auth
from app.auth.decorators import login_required
from app.auth.service import AuthService
from app.auth.session import SessionContext
from app.auth.validators import (
    clean_form, validate_login_form, validate_register_form, validate_profile_form,
    REGISTER_FIELDS, PROFILE_FIELDS,
)
from app.backend import UpstreamError
from app.utils.forms import request_data


@auth.route('/register', methods=['POST'])
def register():
    """Create a retail account and sign it in."""
    data = request_data()
    form = clean_form(data, ('email',) + REGISTER_FIELDS)
    form['password'] = str(data.get('password') or '')

    errors = validate_register_form(form)
    if errors:
        return jsonify({'errors': errors}), 400

    try:
        user = AuthService().register(form)
    except UpstreamError as exc:
        current_app.logger.error(f"Registration failed for {form['email']}: {exc}")
        status = 400 if exc.status_code in (400, 409, 422) else 502
        return jsonify({'error': exc.detail or 'Could not create your account. Please try again.'}), status

    current_app.logger.info(f"Account registered: {user.email}")
    flash(f'Welcome, {user.first_name}!', 'success')
    return jsonify({'user': user.to_dict()}), 201


@auth.route('/login', methods=['POST'])
def login():
    """Validate credentials against the backend, populate the session."""
    data = request_data()
    email    = str(data.get('email') or '').strip()
    password = str(data.get('password') or '')

    errors = validate_login_form({'email': email, 'password': password})
    if errors:
        return jsonify({'errors': errors}), 400

    try:
        user = AuthService().login(email, password)
    except UpstreamError as exc:
        if exc.status_code in (400, 401, 403, 404):
            # Same message for unknown e-mail and wrong password
            current_app.logger.warning(f"Failed login attempt for: {email}")
            return jsonify({'error': 'Invalid email or password.'}), 401
        current_app.logger.error(f"Login failed for {email}: {exc}")
        return jsonify({'error': 'Could not sign you in. Please try again.'}), 502

    current_app.logger.info(f"User {user.email} logged in successfully.")
    flash(f'Welcome back, {user.name}!', 'success')
    return jsonify({'user': user.to_dict()})


@auth.route('/logout', methods=['POST'])
def logout():
    """Forget the shopper and drop their cart."""
    from app.cart.store import clear_cart

    AuthService().logout()
    clear_cart()
    flash('You have been logged out.', 'info')
    return jsonify({'message': 'You have been logged out.'})


@auth.route('/me')
@login_required
def me():
    return jsonify({'user': SessionContext().load_user().to_dict()})


@auth.route('/me', methods=['PUT'])
@login_required
def update_me():
    """Edit phone / address / names from the profile or checkout screens."""
    form = clean_form(request_data(), PROFILE_FIELDS)
    errors = validate_profile_form(form)
    if errors:
        return jsonify({'errors': errors}), 400

    context = SessionContext()
    try:
        user = AuthService(context).update_user(context.load_user(), form)
    except UpstreamError as exc:
        current_app.logger.error(f"Profile update failed: {exc}")
        return jsonify({'error': 'Could not update your details.'}), 502

    return jsonify({'user': user.to_dict(), 'message': 'Your details were updated.'})
