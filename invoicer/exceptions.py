class InvoicerError(Exception):
    '''Base error. Rendered to the client as a plain text message'''
    status = 500

    def __init__(self, message=None):
        super().__init__()
        self.message = message
        self.headers = {}
        self.args = (message,)

    def __str__(self):
        return str(self.message)

class ClientInputError(InvoicerError):
    status = 400

class NotFoundError(InvoicerError):
    status = 404

    def __init__(self, invoice_id):
        super().__init__(f"No invoice id {invoice_id}")
        self.invoice_id = invoice_id

class AuthRequiredError(InvoicerError):
    status = 401

    def __init__(self, realm='invoicer'):
        super().__init__('please authenticate')
        self.headers['WWW-Authenticate'] = f'Basic realm="{realm}"'

class CSRFRejectedError(InvoicerError):
    status = 406

    def __init__(self):
        super().__init__('Invalid CSRF Token')

class InternalStoreError(InvoicerError):
    status = 500
