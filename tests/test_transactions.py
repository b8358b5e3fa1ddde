# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    Unit Tests for Transaction Class
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
from io import BytesIO

from zeepinlib.keys import Key, Address
from zeepinlib.transactions import *

RAW_UNSIGNED_HEX = '00d101000000' + '0200000000000000' + '0300000000000000' + '11' * 20 + 'ff020102' + '00'
RAW_HEX = RAW_UNSIGNED_HEX + '00'


def invoke_tx(payer=None, sigs=None):
    return Transaction(InvokeCode(b'\x01\x02'), version=0, nonce=1, gas_price=2, gas_limit=3, payer=payer,
                       sigs=sigs)


class TestTransactions(unittest.TestCase):

    def test_transaction_serialize(self):
        t = invoke_tx(Address(b'\x11' * 20))
        self.assertEqual(t.raw_unsigned().hex(), RAW_UNSIGNED_HEX)
        self.assertEqual(t.raw_hex(), RAW_HEX)
        self.assertEqual(t.tx_type, TX_TYPE_INVOKE)

    def test_transaction_parse(self):
        t = Transaction.parse_hex(RAW_HEX)
        self.assertEqual(t.version, 0)
        self.assertEqual(t.nonce, 1)
        self.assertEqual(t.gas_price, 2)
        self.assertEqual(t.gas_limit, 3)
        self.assertEqual(t.payer, Address(b'\x11' * 20))
        self.assertEqual(t.payload.vm_type, VM_TYPE_NATIVE)
        self.assertEqual(t.payload.code, b'\x01\x02')
        self.assertEqual(t.attributes, [])
        self.assertEqual(t.sigs, [])
        self.assertEqual(Transaction.parse(bytes.fromhex(RAW_HEX)), t)
        self.assertEqual(Transaction.parse(BytesIO(bytes.fromhex(RAW_HEX))), t)

    def test_transaction_parse_serialize_with_sigs(self):
        k1 = Key(1).public_byte
        k2 = Key(2).public_byte
        sigs = [Sig([k1], 1, [b'\x01' + b'\xaa' * 64]), Sig([k1, k2], 2, [b'\x01' + b'\xbb' * 64])]
        t = invoke_tx(Address(b'\x22' * 20), sigs)
        t.attributes.append(TxAttribute(0x81, b'http://zeepin.io'))
        t2 = Transaction.parse_hex(t.raw_hex())
        self.assertEqual(t2.raw(), t.raw())
        self.assertEqual(t2.sigs, sigs)
        self.assertEqual(t2.attributes[0].data, b'http://zeepin.io')

    def test_transaction_default_payer(self):
        t = Transaction(InvokeCode(b'\x00'))
        self.assertTrue(t.payer.is_zero)
        self.assertEqual(t.raw_unsigned()[22:42], b'\x00' * 20)

    def test_transaction_payer_type(self):
        self.assertRaises(TransactionError, Transaction, InvokeCode(b''), payer=b'\x11' * 20)
        t = invoke_tx()
        with self.assertRaises(TransactionError):
            t.payer = 'AFmseVrdL9f9oyCzZefL9tG6UbvhPbdYzM'

    def test_transaction_values_out_of_range(self):
        t = invoke_tx()
        t.nonce = 2 ** 32
        self.assertRaisesRegex(TransactionError, "nonce", t.raw)
        t = invoke_tx()
        t.gas_limit = -1
        self.assertRaisesRegex(TransactionError, "gas_limit", t.raw)

    def test_transaction_too_many_sigs(self):
        pk = Key(1).public_byte
        t = invoke_tx(sigs=[Sig([pk], 1, [b'\x01']) for _ in range(17)])
        self.assertRaisesRegex(TransactionError, "Too many signature entries", t.raw)

    def test_transaction_as_dict(self):
        t = invoke_tx(Address(b'\x11' * 20))
        d = t.as_dict()
        self.assertEqual(d['txid'], double_sha256(bytes.fromhex(RAW_UNSIGNED_HEX))[::-1].hex())
        self.assertEqual(d['payer'], Address(b'\x11' * 20).address)
        self.assertEqual(d['raw'], RAW_HEX)
        self.assertIn('"gas_limit": 3', t.as_json())

    def test_transaction_txid(self):
        self.assertIsNone(invoke_tx().txid)
        self.assertIsNone(invoke_tx().as_dict()['txid'])
        t = Transaction.parse_hex(RAW_HEX)
        self.assertEqual(t.txid, t.resolve_payer(Address(b'\x33' * 20)).txid)
        self.assertEqual(t.txid, double_sha256(bytes.fromhex(RAW_UNSIGNED_HEX))[::-1].hex())

    def test_transaction_byte_fields_out_of_range(self):
        self.assertRaisesRegex(TransactionError, "usage", TxAttribute, 256)
        self.assertRaisesRegex(TransactionError, "vm_type", InvokeCode, b'', vm_type=256)
        self.assertRaisesRegex(TransactionError, "vm_type", DeployCode, b'', vm_type=-1)
        self.assertRaises(TransactionError, InvokeCode, b'', vm_type='ff')
        self.assertEqual(TxAttribute(0xff).serialize(), b'\xff\x00')


class TestTransactionsResolvedPayer(unittest.TestCase):

    def test_resolve_payer_default(self):
        payer = Address(b'\x33' * 20)
        t = invoke_tx()
        rt = t.resolve_payer(payer)
        self.assertIsInstance(rt, ResolvedTransaction)
        self.assertEqual(rt.payer, payer)
        self.assertTrue(t.payer.is_zero)

    def test_resolve_payer_keeps_existing(self):
        payer = Address(b'\x11' * 20)
        rt = invoke_tx(payer).resolve_payer(Address(b'\x33' * 20))
        self.assertEqual(rt.payer, payer)

    def test_resolve_payer_zero(self):
        self.assertRaises(TransactionError, invoke_tx().resolve_payer, Address.ZERO)
        self.assertRaises(TransactionError, invoke_tx().resolve_payer, b'\x33' * 20)

    def test_resolved_payer_immutable(self):
        rt = invoke_tx().resolve_payer(Address(b'\x33' * 20))
        with self.assertRaises(TransactionError):
            rt.payer = Address(b'\x44' * 20)
        self.assertIs(rt.resolve_payer(Address(b'\x44' * 20)), rt)

    def test_signature_hash(self):
        rt = invoke_tx(Address(b'\x11' * 20)).resolve_payer(Address(b'\x33' * 20))
        expected = double_sha256(bytes.fromhex(RAW_UNSIGNED_HEX))
        self.assertEqual(rt.signature_hash(), expected)
        self.assertEqual(rt.signature_hash(as_hex=True), expected.hex())
        self.assertEqual(rt.txid, expected[::-1].hex())

    def test_signature_hash_excludes_sigs(self):
        rt = invoke_tx(Address(b'\x11' * 20)).resolve_payer(Address(b'\x33' * 20))
        h = rt.signature_hash()
        rt.sigs.append(Sig([Key(1).public_byte], 1, [b'\x01' * 65]))
        self.assertEqual(rt.signature_hash(), h)

    def test_signature_hash_unresolved(self):
        self.assertRaises(TransactionError, invoke_tx().signature_hash)

    def test_resolved_transaction_copies_sigs(self):
        t = invoke_tx(Address(b'\x11' * 20), [Sig([Key(1).public_byte], 1, [])])
        rt = t.resolve_payer(Address(b'\x33' * 20))
        rt.sigs[0].sig_data.append(b'\x01' * 65)
        self.assertEqual(t.sigs[0].sig_data, [])


class TestTransactionsSig(unittest.TestCase):

    def test_sig_serialize(self):
        pk = Key(1).public_byte
        sig = Sig([pk], 1, [b'\x01' * 65])
        self.assertEqual(sig.serialize(), b'\x01' + b'\x21' + pk + b'\x01' + b'\x01' + b'\x41' + b'\x01' * 65)

    def test_sig_invalid_threshold(self):
        pk = Key(1).public_byte
        self.assertRaises(TransactionError, Sig, [pk], 0)
        self.assertRaises(TransactionError, Sig, [pk], 2)
        self.assertRaises(TransactionError, Sig, [], 1)

    def test_sig_too_many_signatures(self):
        self.assertRaises(TransactionError, Sig, [Key(1).public_byte], 1, [b'\x01', b'\x02'])

    def test_sig_complete(self):
        sig = Sig([Key(1).public_byte, Key(2).public_byte], 1, [])
        self.assertFalse(sig.complete)
        sig.sig_data.append(b'\x01')
        self.assertTrue(sig.complete)
        self.assertFalse(sig.is_full)
        sig.sig_data.append(b'\x02')
        self.assertTrue(sig.is_full)

    def test_sig_parse_invalid_threshold(self):
        pk = Key(1).public_byte
        raw = b'\x01' + b'\x21' + pk + b'\x02' + b'\x00'
        self.assertRaisesRegex(TransactionDecodeError, "threshold", Sig.parse_bytesio, BytesIO(raw))

    def test_sig_parse_too_many_pubkeys(self):
        with self.assertRaises(TransactionDecodeError) as cm:
            Sig.parse_bytesio(BytesIO(b'\x11' + b'\x00' * 40))
        self.assertEqual(cm.exception.field, 'sig.pub_keys')


class TestTransactionsDecodeErrors(unittest.TestCase):

    def assertDecodeError(self, rawhex, field):
        with self.assertRaises(TransactionDecodeError) as cm:
            Transaction.parse_hex(rawhex)
        self.assertEqual(cm.exception.field, field)
        return cm.exception

    def test_decode_invalid_hex(self):
        self.assertDecodeError('00d1zz', 'hex')
        self.assertDecodeError(RAW_HEX[:-1], 'hex')

    def test_decode_empty(self):
        e = self.assertDecodeError('', 'version')
        self.assertEqual(e.position, 0)

    def test_decode_unknown_type(self):
        e = self.assertDecodeError('0002' + RAW_HEX[4:], 'tx_type')
        self.assertEqual(e.position, 1)

    def test_decode_truncated_header(self):
        self.assertDecodeError(RAW_HEX[:20], 'gas_price')
        self.assertDecodeError(RAW_HEX[:60], 'payer')

    def test_decode_truncated_payload(self):
        self.assertDecodeError(RAW_UNSIGNED_HEX[:-4], 'payload.code')

    def test_decode_missing_sigs(self):
        self.assertDecodeError(RAW_UNSIGNED_HEX, 'sigs')

    def test_decode_too_many_sigs(self):
        self.assertDecodeError(RAW_UNSIGNED_HEX + '11', 'sigs')

    def test_decode_trailing_data(self):
        e = self.assertDecodeError(RAW_HEX + '00', 'end')
        self.assertEqual(e.position, len(RAW_HEX) // 2)

    def test_decode_trailing_data_stream(self):
        s = BytesIO(bytes.fromhex(RAW_HEX + 'ff'))
        Transaction.parse_bytesio(s)
        self.assertEqual(s.read(), b'\xff')

    def test_decode_no_stream(self):
        self.assertRaises(TransactionError, Transaction.parse_bytesio, bytes.fromhex(RAW_HEX))


class TestTransactionsDeploy(unittest.TestCase):

    def test_deploy_payload(self):
        payload = DeployCode(b'\x00\xc5\x6b', VM_TYPE_NEOVM, True, 'name', '1.0', 'author', 'a@b.c', 'Description')
        t = Transaction(payload, nonce=5, gas_price=1, gas_limit=30000)
        self.assertEqual(t.tx_type, TX_TYPE_DEPLOY)
        t2 = Transaction.parse_hex(t.raw_hex())
        self.assertEqual(t2.payload.name, 'name')
        self.assertEqual(t2.payload.email, 'a@b.c')
        self.assertTrue(t2.payload.need_storage)
        self.assertEqual(t2, t)

    def test_deploy_payload_serialize(self):
        payload = DeployCode(b'\xab', VM_TYPE_NEOVM, False, 'n')
        self.assertEqual(payload.serialize().hex(), '8001ab00' + '016e' + '00' * 4)

    def test_deploy_invalid_need_storage(self):
        raw = bytearray(Transaction(DeployCode(b'\xab')).raw())
        # need_storage directly follows header, vm type and code
        raw[42 + 3] = 2
        with self.assertRaises(TransactionDecodeError) as cm:
            Transaction.parse_bytes(bytes(raw))
        self.assertEqual(cm.exception.field, 'payload.need_storage')

    def test_deploy_invalid_utf8(self):
        raw = Transaction(DeployCode(b'\xab', name='x')).raw()
        raw = raw.replace(b'\x01x', b'\x01\xff')
        with self.assertRaises(TransactionDecodeError) as cm:
            Transaction.parse_bytes(raw)
        self.assertEqual(cm.exception.field, 'payload.name')


if __name__ == '__main__':
    unittest.main()
