"""Test Utils Util"""

import unittest

import kwiltx.utils as util
from kwiltx import configure as conf
from tests.unit import test_util


class TestUtilsUtil(unittest.TestCase):

    def setUp(self):
        test_util.print_testname(self._testMethodName)

    def test_normalize_request_url(self):
        # GIVEN
        provider = "https://kwil.example.org:8443/some/path"

        # WHEN
        rest_url = util.normalize_request_url(provider, conf.ApiVersion.v1)
        rpc_url = util.normalize_request_url(provider, conf.ApiVersion.rpc)

        # THEN
        self.assertEqual(rest_url, "https://kwil.example.org:8443/api/v1")
        self.assertEqual(rpc_url, "https://kwil.example.org:8443/rpc/v1")

    def test_normalize_request_url_without_scheme(self):
        self.assertEqual(util.normalize_request_url("localhost:8484", conf.ApiVersion.v1),
                         "http://localhost:8484/api/v1")

    def test_normalize_request_url_default_provider(self):
        self.assertEqual(util.normalize_request_url(None, conf.ApiVersion.v1),
                         conf.KWIL_PROVIDER + "/api/v1")

    def test_long_to_bytes(self):
        self.assertEqual(util.long_to_bytes(1), b'\x01')
        self.assertEqual(util.long_to_bytes(256), b'\x01\x00')
        self.assertEqual(util.long_to_bytes(256, 'little'), b'\x00\x01')

    def test_address_from_pubkey(self):
        signer = test_util.signer_of(1)
        pubkey = signer.private_key.pubkey.serialize(compressed=False)

        self.assertEqual(util.address_from_pubkey(pubkey), "0x7e5f4552091a69125d5dfcb7b8c2659029395bdf")



if __name__ == '__main__':
    unittest.main()
