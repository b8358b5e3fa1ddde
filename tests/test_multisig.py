# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    Unit Tests for multisig addresses and signature aggregation
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

import unittest

from zeepinlib.keys import Key, Account, Address
from zeepinlib.multisig import *
from zeepinlib.scripts import program_from_multi_pubkeys
from zeepinlib.transactions import Transaction, InvokeCode, Sig


def new_tx():
    return Transaction(InvokeCode(b'\x01'), nonce=1, gas_price=0, gas_limit=20000)


class TestMultisigThreshold(unittest.TestCase):

    def test_multisig_threshold_values(self):
        self.assertEqual([multisig_threshold(n) for n in range(1, 8)], [1, 2, 3, 3, 4, 5, 5])
        self.assertEqual(multisig_threshold(16), 12)

    def test_multisig_threshold_within_range(self):
        for n in range(1, 17):
            self.assertTrue(1 <= multisig_threshold(n) <= n)

    def test_multisig_threshold_empty(self):
        self.assertRaisesRegex(MultisigError, "EmptyKeySet", multisig_threshold, 0)


class TestMultisigAddress(unittest.TestCase):

    def setUp(self):
        self.keys = [Key(i) for i in range(1, 4)]

    def test_derive_multisig_address(self):
        address, m = derive_multisig_address(self.keys)
        self.assertEqual(m, 3)
        program = program_from_multi_pubkeys([k.public_byte for k in self.keys], 3)
        self.assertEqual(address.hash_bytes, hash160(program))

    def test_derive_multisig_address_formats(self):
        a1, _ = derive_multisig_address(self.keys)
        a2, _ = derive_multisig_address([k.public_hex for k in self.keys])
        a3, _ = derive_multisig_address([k.public_byte for k in self.keys])
        self.assertEqual(a1, a2)
        self.assertEqual(a1, a3)

    def test_derive_multisig_address_two_keys(self):
        k1 = Key(1).public_byte
        k2 = Key(2).public_byte
        address, m = derive_multisig_address([k1, k2])
        self.assertEqual(m, 2)
        program = bytes.fromhex('52' + '21' + k1.hex() + '21' + k2.hex() + '52' + 'ae')
        self.assertEqual(address, Address(hash160(program)))

    def test_derive_multisig_address_key_order(self):
        a1, _ = derive_multisig_address(self.keys)
        a2, _ = derive_multisig_address(self.keys[::-1])
        self.assertNotEqual(a1, a2)

    def test_derive_multisig_address_errors(self):
        self.assertRaisesRegex(MultisigError, "EmptyKeySet", derive_multisig_address, [])
        self.assertRaisesRegex(MultisigError, "Too many", derive_multisig_address, [Key(i) for i in range(1, 18)])


class TestMultisigAppendSignature(unittest.TestCase):

    def setUp(self):
        self.accounts = [Account(i) for i in range(1, 4)]
        self.pub_keys = [a.public_key for a in self.accounts]

    def test_append_single_signature(self):
        t = new_tx()
        append_signature(t, self.accounts[0], b'\x01' * 65)
        self.assertEqual(t.sigs, [Sig([self.accounts[0].public_key], 1, [b'\x01' * 65])])

    def test_append_multisig_creates_entry(self):
        t = new_tx()
        append_signature(t, self.accounts[0], b'\x01' * 65, self.pub_keys, 2)
        self.assertEqual(len(t.sigs), 1)
        self.assertEqual(t.sigs[0].pub_keys, self.pub_keys)
        self.assertEqual(t.sigs[0].m, 2)
        self.assertEqual(t.sigs[0].sig_data, [b'\x01' * 65])

    def test_append_multisig_adds_to_entry(self):
        t = new_tx()
        append_signature(t, self.accounts[0], b'\x01' * 65, self.pub_keys, 2)
        append_signature(t, self.accounts[1], b'\x02' * 65, self.pub_keys, 2)
        self.assertEqual(len(t.sigs), 1)
        self.assertEqual(t.sigs[0].sig_data, [b'\x01' * 65, b'\x02' * 65])
        self.assertTrue(t.sigs[0].complete)

    def test_append_multisig_other_entry_untouched(self):
        t = new_tx()
        append_signature(t, self.accounts[2], b'\x03' * 65)
        append_signature(t, self.accounts[0], b'\x01' * 65, self.pub_keys, 2)
        append_signature(t, self.accounts[1], b'\x02' * 65, self.pub_keys[:2], 2)
        self.assertEqual(len(t.sigs), 3)
        self.assertEqual(t.sigs[0].pub_keys, [self.accounts[2].public_key])
        self.assertEqual(t.sigs[1].sig_data, [b'\x01' * 65])
        self.assertEqual(t.sigs[2].sig_data, [b'\x02' * 65])

    def test_append_multisig_different_threshold(self):
        t = new_tx()
        append_signature(t, self.accounts[0], b'\x01' * 65, self.pub_keys, 2)
        append_signature(t, self.accounts[1], b'\x02' * 65, self.pub_keys, 3)
        self.assertEqual(len(t.sigs), 2)

    def test_append_multisig_full_entry(self):
        t = new_tx()
        for i, acc in enumerate(self.accounts):
            append_signature(t, acc, bytes([i]) * 65, self.pub_keys, 2)
        self.assertTrue(t.sigs[0].is_full)
        self.assertRaisesRegex(MultisigError, "already contains", append_signature, t, self.accounts[0],
                               b'\x09' * 65, self.pub_keys, 2)

    def test_append_multisig_signer_not_in_set(self):
        t = new_tx()
        self.assertRaisesRegex(MultisigError, "not found", append_signature, t, Account(10), b'\x01' * 65,
                               self.pub_keys, 2)
        self.assertEqual(t.sigs, [])

    def test_append_multisig_invalid_threshold(self):
        t = new_tx()
        for m in [None, 0, 4]:
            self.assertRaises(MultisigError, append_signature, t, self.accounts[0], b'\x01' * 65,
                              self.pub_keys, m)

    def test_append_multisig_empty_key_set(self):
        self.assertRaisesRegex(MultisigError, "EmptyKeySet", append_signature, new_tx(), self.accounts[0],
                               b'\x01' * 65, [], 1)

    def test_append_empty_signature(self):
        self.assertRaises(MultisigError, append_signature, new_tx(), self.accounts[0], b'')

    def test_append_maximum_entries(self):
        t = new_tx()
        for _ in range(16):
            append_signature(t, self.accounts[0], b'\x01' * 65)
        self.assertRaisesRegex(MultisigError, "maximum", append_signature, t, self.accounts[0], b'\x01' * 65)
        self.assertRaisesRegex(MultisigError, "maximum", append_signature, t, self.accounts[0], b'\x01' * 65,
                               self.pub_keys, 2)


if __name__ == '__main__':
    unittest.main()
