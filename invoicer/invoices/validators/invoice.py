'''Validators for invoice input'''
import math
from typing import Any

from flask import request
from flask_inputs import Inputs
from wtforms import ValidationError

from invoicer.exceptions import ClientInputError
from invoicer.tools import parse_timestamp

INVOICE_FIELDS = ['is_paid', 'amount', 'payment_date', 'due_date']
CHARGE_FIELDS = ['type', 'amount', 'description']
# Identity and store metadata may be sent back as received but are never written
READ_ONLY_FIELDS = ['id', 'when_created', 'when_changed']
READ_ONLY_CHARGE_FIELDS = READ_ONLY_FIELDS + ['invoice_id']
# Range of the INTEGER amount column
MIN_AMOUNT = -2 ** 31
MAX_AMOUNT = 2 ** 31 - 1

def _get_payload() -> dict[str, Any]:
    return request.get_json(force=True, silent=True) or {}

def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def _is_finite(value) -> bool:
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False

def _is_boolean(_form, field):
    payload = _get_payload()
    if payload.get(field.name) is not None and not isinstance(payload[field.name], bool):
        raise ValidationError(f"{field.name}:Value must be a boolean")

def _is_integer(_form, field):
    value = _get_payload().get(field.name)
    if value is None:
        return
    if not isinstance(value, int) or isinstance(value, bool):
        raise ValidationError(f"{field.name}:Value must be an integer")
    if not MIN_AMOUNT <= value <= MAX_AMOUNT:
        raise ValidationError(f"{field.name}:Value is out of range")

def _is_timestamp(_form, field):
    value = _get_payload().get(field.name)
    if value is None:
        return
    try:
        parse_timestamp(value)
    except ValueError:
        raise ValidationError(f"{field.name}:Value must be an ISO 8601 timestamp")

def _validate_charge(index, charge):
    if not isinstance(charge, dict):
        raise ValidationError(f"charges:Charge #{index} must be an object")
    for key in charge:
        if key not in CHARGE_FIELDS + READ_ONLY_CHARGE_FIELDS:
            raise ValidationError(f"charges:Charge #{index} has unknown field '{key}'")
    for key in ('type', 'description'):
        if charge.get(key) is not None and not isinstance(charge[key], str):
            raise ValidationError(f"charges:Charge #{index} {key} must be a string")
    if charge.get('type') is not None and len(charge['type']) > 255:
        raise ValidationError(f"charges:Charge #{index} type is too long")
    if charge.get('amount') is not None and not _is_number(charge['amount']):
        raise ValidationError(f"charges:Charge #{index} amount must be a number")
    if charge.get('amount') is not None and not _is_finite(charge['amount']):
        raise ValidationError(f"charges:Charge #{index} amount must be a finite number")

def _are_valid_charges(_form, field):
    charges = _get_payload().get(field.name)
    if charges is None:
        return
    if not isinstance(charges, list):
        raise ValidationError(f"{field.name}:Value must be a list of charges")
    for index, charge in enumerate(charges):
        _validate_charge(index, charge)

def _is_not_updatable(_form, field):
    if field.name in _get_payload():
        raise ValidationError(f"{field.name}:Charges can't be updated")

class InvoiceValidator(Inputs):
    '''Validator for invoice creation input'''
    json = {
        'is_paid': [_is_boolean],
        'amount': [_is_integer],
        'payment_date': [_is_timestamp],
        'due_date': [_is_timestamp],
        'charges': [_are_valid_charges]
    }

    def __enter__(self):
        return self

    def __exit__(self, *_args):
        del self

class InvoiceUpdateValidator(InvoiceValidator):
    '''Validator for invoice update input'''
    json = {**InvoiceValidator.json, 'charges': [_is_not_updatable]}

def get_invoice_payload(allowed_fields: list[str]) -> dict[str, Any]:
    '''
    Returns the JSON object of the request body.
    Raises ClientInputError if there is none or it has unknown fields
    '''
    payload = request.get_json(force=True, silent=True)
    if not isinstance(payload, dict):
        raise ClientInputError("failed to parse request body: a JSON object is expected")
    unknown_fields = [key for key in payload if key not in allowed_fields + READ_ONLY_FIELDS]
    if unknown_fields:
        raise ClientInputError(
            f"failed to parse request body: unknown fields {', '.join(sorted(unknown_fields))}")
    return payload

def get_invoice_fields(payload: dict[str, Any]) -> dict[str, Any]:
    '''Converts validated payload to invoice attributes'''
    fields = {key: payload[key] for key in INVOICE_FIELDS if payload.get(key) is not None}
    for key in ('payment_date', 'due_date'):
        if key in fields:
            fields[key] = parse_timestamp(fields[key])
    return fields

def get_charge_fields(charge: dict[str, Any]) -> dict[str, Any]:
    '''Keeps only writable charge attributes. Identity and ownership are dropped'''
    fields = {key: charge[key] for key in CHARGE_FIELDS if charge.get(key) is not None}
    if 'amount' in fields:
        fields['amount'] = float(fields['amount'])
    return fields
