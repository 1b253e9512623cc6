import re

from flask import jsonify, request
from flask.wrappers import Response

from invoicer import db
from invoicer.audit import audit_action, get_app_logger
from invoicer.auth.csrf import csrf_protected
from invoicer.exceptions import ClientInputError, InternalStoreError, NotFoundError
from invoicer.invoices import bp_api
from invoicer.invoices.models import Charge, Invoice
from invoicer.invoices.validators.invoice import INVOICE_FIELDS, \
    InvoiceUpdateValidator, InvoiceValidator, get_charge_fields, \
    get_invoice_fields, get_invoice_payload
from invoicer.tools import modify_object

# Largest value of the INTEGER primary key column
MAX_INVOICE_ID = 2 ** 31 - 1

def _get_invoice_id(invoice_id: str) -> int:
    if not re.fullmatch('[0-9]+', invoice_id) or not 0 < int(invoice_id) <= MAX_INVOICE_ID:
        raise ClientInputError(f"Invalid invoice id {invoice_id}")
    return int(invoice_id)

def _get_invoice(invoice_id: str) -> Invoice:
    invoice = Invoice.query.get(_get_invoice_id(invoice_id))
    if not invoice:
        raise NotFoundError(invoice_id)
    return invoice

def _validate(validator_class):
    with validator_class(request) as validator:
        if not validator.validate():
            raise ClientInputError(
                "failed to parse request body:\n" + "\n".join(validator.errors))

def _text_response(message, status):
    return Response(message, status=status, mimetype='text/plain')

@bp_api.route('/<invoice_id>')
@audit_action('get-invoice')
def get_invoice(invoice_id):
    '''
    Returns an invoice with its charges in JSON.
    Text of the charges is HTML escaped
    '''
    invoice = _get_invoice(invoice_id)
    try:
        response = jsonify(invoice.to_dict())
    except (TypeError, ValueError) as ex:
        raise InternalStoreError(f"failed to retrieve invoice id {invoice_id}: {ex}")
    response.headers['Access-Control-Allow-Origin'] = '*'
    get_app_logger().info("retrieved invoice %s", invoice.id)
    return response

@bp_api.route('', methods=['POST'])
@audit_action('post-invoice')
def create_invoice():
    '''
    Creates an invoice with its charges. Identities of the invoice and the
    charges are always assigned by the store
    '''
    payload = get_invoice_payload(INVOICE_FIELDS + ['charges'])
    _validate(InvoiceValidator)

    invoice = Invoice(**get_invoice_fields(payload))
    invoice.charges = [
        Charge(**get_charge_fields(charge)) for charge in payload.get('charges') or []
    ]
    db.session.add(invoice)
    db.session.commit()

    get_app_logger().info("created invoice %s with %s charges", invoice.id, len(invoice.charges))
    return _text_response(f"created invoice {invoice.id}", 201)

@bp_api.route('/<invoice_id>', methods=['PUT'])
@audit_action('put-invoice')
def update_invoice(invoice_id):
    '''
    Updates invoice attributes present in the request.
    Omitted attributes keep their values
    '''
    invoice = _get_invoice(invoice_id)
    payload = get_invoice_payload(INVOICE_FIELDS + ['charges'])
    _validate(InvoiceUpdateValidator)

    modify_object(invoice, get_invoice_fields(payload), INVOICE_FIELDS)
    db.session.commit()

    invoice = Invoice.query.get(invoice.id)
    get_app_logger().info("updated invoice %s", invoice.id)
    return _text_response(f"updated invoice {invoice.id}", 202)

@bp_api.route('/<invoice_id>', methods=['DELETE'])
@bp_api.route('/delete/<invoice_id>')
@audit_action('delete-invoice')
@csrf_protected
def delete_invoice(invoice_id):
    '''
    Deletes an invoice along with its charges in one transaction.
    Deleting an invoice that doesn't exist isn't an error
    '''
    invoice_id = _get_invoice_id(invoice_id)
    charges_deleted = Charge.query.filter_by(invoice_id=invoice_id).delete()
    Invoice.query.filter_by(id=invoice_id).delete()
    db.session.commit()

    get_app_logger().info("deleted invoice %s and %s charges", invoice_id, charges_deleted)
    return _text_response(f"deleted invoice {invoice_id}", 202)
