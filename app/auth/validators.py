"""
app/auth/validators.py
----------------------
Pure-Python validation for login, registration and profile forms.
Returns a dict of field -> error_message.
An empty dict means all fields are valid.
"""
import re

EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
MIN_PASSWORD_LENGTH = 6

REGISTER_FIELDS = ('first_name', 'last_name', 'phone', 'address')
PROFILE_FIELDS  = ('first_name', 'last_name', 'phone', 'address')


def clean_form(form_data: dict, fields) -> dict:
    """Strip every expected field; missing ones become ''."""
    return {f: str(form_data.get(f) or '').strip() for f in fields}


def validate_login_form(form_data: dict) -> dict:
    errors = {}
    if not form_data.get('email'):
        errors['email'] = 'Email is required.'
    if not form_data.get('password'):
        errors['password'] = 'Password is required.'
    return errors


def validate_register_form(form_data: dict) -> dict:
    """Every field is required; e-mail must look like one."""
    errors = validate_login_form(form_data)

    email = form_data.get('email', '')
    if email and not EMAIL_RE.match(email):
        errors['email'] = 'Enter a valid email address.'

    password = form_data.get('password', '')
    if password and len(password) < MIN_PASSWORD_LENGTH:
        errors['password'] = f'Password must be at least {MIN_PASSWORD_LENGTH} characters.'

    labels = {
        'first_name': 'First name',
        'last_name':  'Last name',
        'phone':      'Phone',
        'address':    'Address',
    }
    for field in REGISTER_FIELDS:
        if not form_data.get(field):
            errors[field] = f'{labels[field]} is required.'

    return errors


def validate_profile_form(form_data: dict) -> dict:
    """At least one field must be sent; phone must contain digits."""
    errors = {}
    if not any(form_data.get(f) for f in PROFILE_FIELDS):
        errors['form'] = 'Nothing to update.'

    phone = form_data.get('phone', '')
    if phone and not any(ch.isdigit() for ch in phone):
        errors['phone'] = 'Phone must contain a number.'

    return errors
