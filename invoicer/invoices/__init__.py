from flask import Blueprint

bp_api = Blueprint('invoices_api', __name__, url_prefix='/invoice')
bp_client = Blueprint('invoices_client', __name__, template_folder='templates')

def register_blueprints(flask_app):
    import invoicer.invoices.routes.api #pyright: ignore
    import invoicer.invoices.routes.client #pyright: ignore

    flask_app.register_blueprint(bp_api)
    flask_app.register_blueprint(bp_client)
