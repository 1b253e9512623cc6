import base64
from unittest import TestCase

from invoicer.auth.basic import check_credentials, parse_basic_credentials
from invoicer.exceptions import AuthRequiredError


def _header(credentials: bytes) -> str:
    return 'Basic ' + base64.b64encode(credentials).decode('ascii')


class TestBasicAuth(TestCase):
    def test_parse_credentials(self):
        self.assertEqual(parse_basic_credentials(_header(b'user:pass')), ('user', 'pass'))
        self.assertEqual(parse_basic_credentials(_header(b'user:pa:ss')), ('user', 'pa:ss'))
        self.assertEqual(parse_basic_credentials(_header(b':pass')), ('', 'pass'))
        self.assertEqual(parse_basic_credentials(_header(b'user:')), ('user', ''))

    def test_parse_malformed_credentials(self):
        for header in [
            None,
            '',
            'Basic',
            'Basic ab',
            'Digest ' + base64.b64encode(b'user:pass').decode(),
            'Basic %%%%%%%%',
            _header(b'userpass'),
            _header(b'\xc3\x28:pass')
        ]:
            with self.subTest(header=header):
                with self.assertRaises(AuthRequiredError) as context:
                    parse_basic_credentials(header)
                self.assertEqual(context.exception.status, 401)
                self.assertEqual(context.exception.headers['WWW-Authenticate'],
                                 'Basic realm="invoicer"')

    def test_check_credentials(self):
        self.assertTrue(check_credentials('user', 'pass', 'user', 'pass'))

    def test_check_credentials_rejects_any_mismatch(self):
        self.assertFalse(check_credentials('user', 'wrong', 'user', 'pass'))
        self.assertFalse(check_credentials('wrong', 'pass', 'user', 'pass'))
        self.assertFalse(check_credentials('wrong', 'wrong', 'user', 'pass'))
        self.assertFalse(check_credentials('User', 'pass', 'user', 'pass'))
