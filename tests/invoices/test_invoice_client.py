import base64
import re

from tests import BaseTestCase


class TestInvoiceClient(BaseTestCase):
    def get_index(self, headers=None):
        return self.client.get('/', headers=headers or {})

    def assert_challenged(self, res):
        self.assertEqual(res.status_code, 401)
        self.assertEqual(res.headers['WWW-Authenticate'], 'Basic realm="invoicer"')
        self.assertEqual(res.data, b'please authenticate')

    def test_index_requires_credentials(self):
        self.assert_challenged(self.get_index())

    def test_index_malformed_credentials(self):
        for header in [
            'Basic',
            'Basic ',
            'Bearer ' + base64.b64encode(b'tester:t3st-pa$$:word').decode(),
            'basic ' + base64.b64encode(b'tester:t3st-pa$$:word').decode(),
            'Basic !!not-base64!!',
            'Basic ' + base64.b64encode(b'no-separator').decode(),
            'Basic ' + base64.b64encode(b'\xff\xfe:\xff').decode()
        ]:
            with self.subTest(header=header):
                self.assert_challenged(self.get_index({'Authorization': header}))

    def test_index_wrong_credentials(self):
        for username, password in [
            ('tester', 'wrong'),
            ('someone', 't3st-pa$$:word'),
            ('someone', 'wrong'),
            ('tester', ''),
            ('', 't3st-pa$$:word'),
            ('samantha', '1ns3cur3')
        ]:
            with self.subTest(username=username, password=password):
                self.assert_challenged(self.get_index(self.get_auth_headers(username, password)))

    def test_index(self):
        res = self.get_index(self.get_auth_headers())
        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.headers['Content-Security-Policy'], "default-src 'self';")
        self.assertEqual(res.headers['X-Frame-Options'], 'SAMEORIGIN')
        page = res.data.decode()
        self.assertIn('<title>Invoicer Web</title>', page)
        self.assertIn('/statics/invoicer-cli.js', page)
        token = re.search('name="CSRFToken" value="([^"]+)"', page).group(1)
        self.assertTrue(self.app.extensions['csrf'].verify(token))

    def test_index_token_allows_deletion(self):
        res = self.get_index(self.get_auth_headers())
        token = re.search('name="CSRFToken" value="([^"]+)"', res.data.decode()).group(1)
        res = self.client.delete('/invoice/1', headers={'X-CSRF-Token': token})
        self.assertEqual(res.status_code, 202)

    def test_index_tokens_are_fresh(self):
        tokens = [
            re.search('name="CSRFToken" value="([^"]+)"',
                      self.get_index(self.get_auth_headers()).data.decode()).group(1)
            for _ in range(2)
        ]
        self.assertNotEqual(tokens[0], tokens[1])

    def test_get_static(self):
        res = self.client.get('/statics/style.css')
        self.assertEqual(res.status_code, 200)
        self.assertIn(b'font-family', res.data)
        res.close()
        res = self.client.get('/statics/invoicer-cli.js')
        self.assertEqual(res.status_code, 200)
        res.close()
        res = self.client.get('/statics/missing.css')
        self.assertEqual(res.status_code, 404)
