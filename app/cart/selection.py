"""
app/cart/selection.py
---------------------
Pure-Python validation for add-to-cart form data.
Returns a dict of field -> error_message.
An empty dict means all fields are valid.

Regular accounts send   grind, presentation, quantity
Wholesale accounts send grind, quarter_quantity, full_quantity
"""
from app.catalog.models import (
    Grind, Presentation, DEFAULT_GRIND, DEFAULT_WHOLESALE_GRIND,
)
from app.cart.models import MAX_QUANTITY, RegularSelection, WholesaleSelection, Selection


def _raw(form_data: dict, key: str) -> str:
    value = form_data.get(key)
    return '' if value is None else str(value).strip()


def _int_or(raw: str, default: int):
    if raw == '':
        return default
    return int(raw)


def validate_selection_form(form_data: dict, is_wholesale: bool) -> dict:
    """
    Validate raw selection data for the acting account type.

    Args:
        form_data:    dict of raw values (form or JSON body)
        is_wholesale: True when the logged-in account is wholesale

    Returns:
        dict of {field_name: error_message}, empty if all valid.
    """
    errors = {}

    # ── grind ─────────────────────────────────────────────────────
    grind = _raw(form_data, 'grind')
    if grind and grind not in {g.value for g in Grind}:
        errors['grind'] = 'Unknown grind.'

    if is_wholesale:
        # ── quarter / full units ──────────────────────────────────
        quantities = {}
        for field in ('quarter_quantity', 'full_quantity'):
            try:
                value = _int_or(_raw(form_data, field), 0)
                if value > MAX_QUANTITY:
                    errors[field] = f'At most {MAX_QUANTITY} units per line.'
                elif value < 0:
                    errors[field] = 'Quantity cannot be negative.'
                quantities[field] = value
            except ValueError:
                errors[field] = 'Quantity must be a whole number.'

        if not errors and not any(quantities.values()):
            errors['quantity'] = 'Choose at least one 1/4 kg or 1 kg unit.'
        return errors

    # ── presentation ──────────────────────────────────────────────
    presentation = _raw(form_data, 'presentation')
    if presentation and presentation not in {p.value for p in Presentation}:
        errors['presentation'] = 'Unknown presentation.'

    # ── quantity ──────────────────────────────────────────────────
    try:
        quantity = _int_or(_raw(form_data, 'quantity'), 1)
        if quantity > MAX_QUANTITY:
            errors['quantity'] = f'At most {MAX_QUANTITY} units per line.'
        elif quantity < 1:
            errors['quantity'] = 'Quantity must be at least 1.'
    except ValueError:
        errors['quantity'] = 'Quantity must be a whole number.'

    return errors


def parse_selection_form(form_data: dict, is_wholesale: bool) -> Selection:
    """
    Convert validated raw data to a Selection, filling defaults:
    grind (per account type), presentation 'quarter', quantity 1.
    Call only after validate_selection_form returns no errors.
    """
    grind = _raw(form_data, 'grind')

    if is_wholesale:
        return WholesaleSelection(
            grind=grind or DEFAULT_WHOLESALE_GRIND.value,
            quarter_quantity=_int_or(_raw(form_data, 'quarter_quantity'), 0),
            full_quantity=_int_or(_raw(form_data, 'full_quantity'), 0),
        )

    return RegularSelection(
        grind=grind or DEFAULT_GRIND.value,
        presentation=_raw(form_data, 'presentation') or Presentation.quarter.value,
        quantity=_int_or(_raw(form_data, 'quantity'), 1),
    )
