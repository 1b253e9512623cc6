import base64
import os.path
from unittest import TestCase

from invoicer import db, create_app

app = create_app(os.path.join(os.path.dirname(__file__), 'config-test.json'))
app.app_context().push()

class BaseTestCase(TestCase):
    def setUp(self):
        self.app = app
        self.client = self.app.test_client()
        self.maxDiff = None
        db.create_all()

    def tearDown(self):
        db.session.remove()
        db.drop_all()

    def get_auth_headers(self, username=None, password=None):
        '''Returns Basic authorization header for provided or configured credentials'''
        username = self.app.config['INVOICER_USER'] if username is None else username
        password = self.app.config['INVOICER_PASSWORD'] if password is None else password
        credentials = base64.b64encode(f'{username}:{password}'.encode('utf-8'))
        return {'Authorization': 'Basic ' + credentials.decode('ascii')}

    def get_csrf_headers(self):
        return {'X-CSRF-Token': self.app.extensions['csrf'].create()}

    def try_add_entity(self, entity):
        try:
            db.session.add(entity)
            db.session.commit()
        except Exception as e:
            print(f'Exception while trying to add <{entity}>:', e)
            db.session.rollback()

    def try_add_entities(self, entities):
        for entity in entities:
            self.try_add_entity(entity)
