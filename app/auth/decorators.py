"""
app/auth/decorators.py
----------------------
Reusable route-protection decorators.
Usage:
    from app.auth.decorators import login_required, admin_required

    @orders.route('/history')
    @login_required
    def history():
        ...

    @admin.route('/wholesale', methods=['POST'])
    @admin_required
    def create_wholesale():
        ...
"""
from functools import wraps
from flask import current_app, jsonify

from app.auth.session import SessionContext


def login_required(f):
    """
    Reject with 401 if no shopper is signed in.
    Checks for the 'user' key via SessionContext.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        if not SessionContext().is_authenticated:
            return jsonify({'error': 'Please log in to continue.'}), 401
        return f(*args, **kwargs)
    return decorated


def admin_required(f):
    """
    Allow access only to shoppers whose e-mail is listed in ADMIN_EMAILS.
    Implies login_required: anonymous requests get 401.
    Signed-in non-admins receive a 403 Forbidden response.
    """
    @wraps(f)
    def decorated(*args, **kwargs):
        user = SessionContext().load_user()
        if user is None:
            return jsonify({'error': 'Please log in to continue.'}), 401
        if user.email.lower() not in current_app.config.get('ADMIN_EMAILS', []):
            current_app.logger.warning(f"Admin access denied for {user.email}")
            return jsonify({'error': 'Access denied.'}), 403
        return f(*args, **kwargs)
    return decorated
