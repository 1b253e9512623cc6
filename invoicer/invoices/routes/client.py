import logging

from flask import make_response, render_template

from invoicer.auth.basic import basic_auth_required
from invoicer.auth.csrf import get_csrf_service
from invoicer.invoices import bp_client

@bp_client.route('/')
@basic_auth_required
def get_index():
    '''
    Invoice management page. Embeds a CSRF token required to delete invoices
    '''
    logging.getLogger('invoicer.client').info("serving index page")
    response = make_response(render_template(
        'index.html', csrf_token=get_csrf_service().create()))
    response.headers['Content-Security-Policy'] = "default-src 'self';"
    response.headers['X-Frame-Options'] = 'SAMEORIGIN'
    return response
