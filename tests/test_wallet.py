# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    Unit Tests for Wallet Class
#    © 2026 October - 1200 Web Development <http://1200wd.com/>
#
#    This program is free software: you can redistribute it and/or modify
#    it under the terms of the GNU Affero General Public License as
#    published by the Free Software Foundation, either version 3 of the
#    License, or (at your option) any later version.
#
#    This program is distributed in the hope that it will be useful,
#    but WITHOUT ANY WARRANTY; without even the implied warranty of
#    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
#    GNU Affero General Public License for more details.
#
#    You should have received a copy of the GNU Affero General Public License
#    along with this program.  If not, see <http://www.gnu.org/licenses/>.
#

import os
import json
import shutil
import tempfile
import unittest

from zeepinlib.keys import Key
from zeepinlib.wallet import *

SCRYPT_TEST_N = 1024


class TestWalletEncryption(unittest.TestCase):

    def test_encrypt_decrypt_private_key(self):
        k = Key(5)
        salt = b'\x01' * 16
        encrypted = encrypt_private_key(k.private_byte, k.address(), 'secret', salt, SCRYPT_TEST_N, 8, 1)
        self.assertEqual(len(encrypted), 48)
        self.assertNotIn(k.private_byte, encrypted)
        self.assertEqual(decrypt_private_key(encrypted, k.address(), 'secret', salt, SCRYPT_TEST_N, 8, 1),
                         k.private_byte)

    def test_decrypt_wrong_password(self):
        k = Key(5)
        salt = b'\x02' * 16
        encrypted = encrypt_private_key(k.private_byte, k.address(), 'secret', salt, SCRYPT_TEST_N, 8, 1)
        self.assertRaisesRegex(WalletError, "incorrect password", decrypt_private_key, encrypted, k.address(),
                               'wrong', salt, SCRYPT_TEST_N, 8, 1)

    def test_decrypt_other_address(self):
        k = Key(5)
        salt = b'\x03' * 16
        encrypted = encrypt_private_key(k.private_byte, k.address(), 'secret', salt, SCRYPT_TEST_N, 8, 1)
        self.assertRaises(WalletError, decrypt_private_key, encrypted, Key(6).address(), 'secret', salt,
                          SCRYPT_TEST_N, 8, 1)

    def test_decrypt_too_short(self):
        self.assertRaises(WalletError, decrypt_private_key, b'\x00' * 16, 'addr', 'secret', b'\x00' * 16)


class TestWallet(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.filename = os.path.join(self.tmpdir, 'wallet.dat')

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def create_wallet(self):
        return Wallet.create(self.filename, scrypt_n=SCRYPT_TEST_N, scrypt_p=1)

    def test_wallet_create(self):
        w = self.create_wallet()
        self.assertEqual(w.name, 'wallet')
        self.assertEqual(w.accounts, [])
        self.assertIsNone(w.default_address)
        with open(self.filename) as f:
            data = json.load(f)
        self.assertEqual(data['scrypt']['n'], SCRYPT_TEST_N)
        self.assertEqual(data['scrypt']['dkLen'], 64)

    def test_wallet_create_existing(self):
        self.create_wallet()
        self.assertRaisesRegex(WalletError, "already exists", Wallet.create, self.filename)

    def test_wallet_add_key_and_get_account(self):
        w = self.create_wallet()
        k = Key(7)
        entry = w.add_key(k, 'password', label='signer 1')
        self.assertEqual(entry['address'], k.address())
        self.assertEqual(entry['publicKey'], k.public_hex)
        self.assertTrue(entry['isDefault'])
        w.save()

        w2 = Wallet(self.filename)
        self.assertEqual(w2.default_address, k.address())
        acc = w2.get_account('password')
        self.assertEqual(acc.key, k)
        self.assertEqual(acc.label, 'signer 1')
        self.assertEqual(acc.address, k.address_obj)

    def test_wallet_file_does_not_contain_private_key(self):
        w = self.create_wallet()
        k = Key(8)
        w.add_key(k, 'password')
        w.save()
        with open(self.filename) as f:
            content = f.read()
        self.assertNotIn(k.private_hex, content)
        self.assertNotIn(k.wif(), content)

    def test_wallet_multiple_accounts(self):
        w = self.create_wallet()
        k1 = Key(9)
        k2 = Key(10)
        w.add_key(k1, 'pw1')
        w.add_key(k2, 'pw2')
        self.assertEqual(w.default_address, k1.address())
        self.assertEqual(w.get_account('pw2', k2.address()).key, k2)
        self.assertEqual(w.get_account('pw2', k2.address_obj).key, k2)
        w.add_key(Key(11), 'pw3', is_default=True)
        self.assertEqual(w.default_address, Key(11).address())
        self.assertEqual(len([a for a in w.accounts if a['isDefault']]), 1)

    def test_wallet_add_key_errors(self):
        w = self.create_wallet()
        w.add_key(Key(12), 'pw')
        self.assertRaisesRegex(WalletError, "already in wallet", w.add_key, Key(12), 'pw')
        self.assertRaises(WalletError, w.add_key, Key(12).public_hex, 'pw')
        self.assertRaises(WalletError, w.add_key, 'no key', 'pw')

    def test_wallet_get_account_errors(self):
        w = self.create_wallet()
        self.assertRaisesRegex(WalletError, "no accounts", w.get_account, 'pw')
        w.add_key(Key(13), 'pw')
        self.assertRaisesRegex(WalletError, "not found", w.get_account, 'pw', Key(14).address())
        self.assertRaisesRegex(WalletError, "incorrect password", w.get_account, 'wrong')

    def test_wallet_open_errors(self):
        self.assertRaises(WalletError, Wallet, os.path.join(self.tmpdir, 'missing.dat'))
        with open(self.filename, 'w') as f:
            f.write('not json')
        self.assertRaises(WalletError, Wallet, self.filename)
        with open(self.filename, 'w') as f:
            f.write('[]')
        self.assertRaises(WalletError, Wallet, self.filename)


if __name__ == '__main__':
    unittest.main()
