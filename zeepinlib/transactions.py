# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    TRANSACTION class to create, serialize and parse transactions
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

import json
from copy import deepcopy
from io import BytesIO
from zeepinlib.encoding import *
from zeepinlib.keys import Address

_logger = logging.getLogger(__name__)


class TransactionError(Exception):
    """
    Handle Transaction class Exceptions
    """

    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


class TransactionDecodeError(TransactionError):
    """
    Raised when a serialized transaction can not be parsed. Contains the name of the field which could not be read
    and the position in the byte stream.
    """

    def __init__(self, msg='', field='', position=None):
        self.field = field
        self.position = position
        super(TransactionDecodeError, self).__init__("Error decoding %s at position %s: %s" % (field, position, msg))


def _remaining(s):
    pos = s.tell()
    end = s.seek(0, 2)
    s.seek(pos)
    return end - pos


def _read_fixed(s, size, field):
    pos = s.tell()
    data = s.read(size)
    if len(data) != size:
        raise TransactionDecodeError("expected %d bytes, found %d" % (size, len(data)), field, pos)
    return data


def _read_uint(s, size, field):
    return int.from_bytes(_read_fixed(s, size, field), 'little')


def _check_byte(value, field):
    if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 0xff:
        raise TransactionError("Value of %s must be an integer between 0 and 255, not %r" % (field, value))
    return value


def _read_varbytes(s, field):
    pos = s.tell()
    try:
        return read_varstr(s)
    except EncodingError as e:
        raise TransactionDecodeError(str(e), field, pos)


def _read_count(s, field, maximum=None, check_remaining=True):
    pos = s.tell()
    try:
        count = read_varbyteint(s)
    except EncodingError as e:
        raise TransactionDecodeError(str(e), field, pos)
    if maximum is not None and count > maximum:
        raise TransactionDecodeError("count %d exceeds maximum of %d" % (count, maximum), field, pos)
    if check_remaining and count > _remaining(s):
        raise TransactionDecodeError("count %d exceeds remaining data" % count, field, pos)
    return count


class Sig(object):
    """
    Signature entry of a transaction. Contains the public keys of a single or multisig account, the number of
    signatures required and the signatures collected so far.
    """

    @classmethod
    def parse_bytesio(cls, s):
        """
        Parse a signature entry from a BytesIO stream

        :param s: Raw transaction stream, positioned at the start of the signature entry
        :type s: BytesIO

        :return Sig:
        """
        pos = s.tell()
        n = _read_count(s, 'sig.pub_keys', MULTI_SIG_MAX_PUBKEY_SIZE)
        pub_keys = [_read_varbytes(s, 'sig.pub_key') for _ in range(n)]
        m = _read_count(s, 'sig.m', check_remaining=False)
        k = _read_count(s, 'sig.sig_data', n)
        sig_data = [_read_varbytes(s, 'sig.signature') for _ in range(k)]
        if not 1 <= m <= n:
            raise TransactionDecodeError("threshold %d out of range for %d public keys" % (m, n), 'sig.m', pos)
        return cls(pub_keys, m, sig_data)

    def __init__(self, pub_keys, m=1, sig_data=None):
        """
        Create a new signature entry

        :param pub_keys: List of serialized public keys, order is preserved
        :type pub_keys: list of bytes
        :param m: Number of signatures required, between 1 and the number of public keys
        :type m: int
        :param sig_data: Signatures collected so far
        :type sig_data: list of bytes
        """
        self.pub_keys = [bytes(pk) for pk in pub_keys]
        self.m = m
        self.sig_data = [bytes(sig) for sig in sig_data] if sig_data else []
        if not 1 <= m <= len(self.pub_keys):
            raise TransactionError("Invalid threshold %d for %d public keys" % (m, len(self.pub_keys)))
        if len(self.sig_data) > len(self.pub_keys):
            raise TransactionError("More signatures than public keys in signature entry")

    def __repr__(self):
        return "<Sig(m=%d, n=%d, signatures=%d)>" % (self.m, len(self.pub_keys), len(self.sig_data))

    def __eq__(self, other):
        if not isinstance(other, Sig):
            return False
        return self.pub_keys == other.pub_keys and self.m == other.m and self.sig_data == other.sig_data

    @property
    def is_full(self):
        return len(self.sig_data) >= len(self.pub_keys)

    @property
    def complete(self):
        return len(self.sig_data) >= self.m

    def serialize(self):
        """
        Serialize signature entry: public keys, threshold and signatures

        :return bytes:
        """
        r = int_to_varbyteint(len(self.pub_keys))
        for pk in self.pub_keys:
            r += varstr(pk)
        r += int_to_varbyteint(self.m)
        r += int_to_varbyteint(len(self.sig_data))
        for sig in self.sig_data:
            r += varstr(sig)
        return r

    def as_dict(self):
        return {
            'pub_keys': [pk.hex() for pk in self.pub_keys],
            'm': self.m,
            'sig_data': [sig.hex() for sig in self.sig_data],
        }


class TxAttribute(object):
    """
    Transaction attribute with usage byte and data
    """

    @classmethod
    def parse_bytesio(cls, s):
        usage = _read_uint(s, 1, 'attribute.usage')
        data = _read_varbytes(s, 'attribute.data')
        return cls(usage, data)

    def __init__(self, usage, data=b''):
        self.usage = _check_byte(usage, 'usage')
        self.data = bytes(data)

    def __repr__(self):
        return "<TxAttribute(usage=%s, data=%s)>" % (ATTRIBUTE_USAGES.get(self.usage, self.usage), self.data.hex())

    def __eq__(self, other):
        return isinstance(other, TxAttribute) and self.usage == other.usage and self.data == other.data

    def serialize(self):
        return bytes([self.usage]) + varstr(self.data)

    def as_dict(self):
        return {
            'usage': self.usage,
            'data': self.data.hex(),
        }


class InvokeCode(object):
    """
    Payload of invoke transactions: code to execute on a virtual machine
    """
    tx_type = TX_TYPE_INVOKE

    @classmethod
    def parse_bytesio(cls, s):
        vm_type = _read_uint(s, 1, 'payload.vm_type')
        code = _read_varbytes(s, 'payload.code')
        return cls(code, vm_type)

    def __init__(self, code, vm_type=VM_TYPE_NATIVE):
        self.code = bytes(code)
        self.vm_type = _check_byte(vm_type, 'vm_type')

    def __repr__(self):
        return "<InvokeCode(vm_type=%s, code_size=%d)>" % (VM_TYPES.get(self.vm_type, self.vm_type), len(self.code))

    def __eq__(self, other):
        return isinstance(other, InvokeCode) and self.serialize() == other.serialize()

    def serialize(self):
        return bytes([self.vm_type]) + varstr(self.code)

    def as_dict(self):
        return {
            'vm_type': self.vm_type,
            'code': self.code.hex(),
        }


class DeployCode(object):
    """
    Payload of deploy transactions: contract code and contract metadata
    """
    tx_type = TX_TYPE_DEPLOY

    @classmethod
    def parse_bytesio(cls, s):
        vm_type = _read_uint(s, 1, 'payload.vm_type')
        code = _read_varbytes(s, 'payload.code')
        pos = s.tell()
        need_storage = _read_uint(s, 1, 'payload.need_storage')
        if need_storage not in (0, 1):
            raise TransactionDecodeError("invalid boolean value %d" % need_storage, 'payload.need_storage', pos)
        fields = []
        for field in ['name', 'version', 'author', 'email', 'description']:
            pos = s.tell()
            value = _read_varbytes(s, 'payload.%s' % field)
            try:
                fields.append(value.decode('utf8'))
            except UnicodeDecodeError:
                raise TransactionDecodeError("invalid utf-8 string", 'payload.%s' % field, pos)
        return cls(code, vm_type, bool(need_storage), *fields)

    def __init__(self, code, vm_type=VM_TYPE_NEOVM, need_storage=False, name='', version='', author='', email='',
                 description=''):
        self.code = bytes(code)
        self.vm_type = _check_byte(vm_type, 'vm_type')
        self.need_storage = need_storage
        self.name = name
        self.version = version
        self.author = author
        self.email = email
        self.description = description

    def __repr__(self):
        return "<DeployCode(name=%s, version=%s, code_size=%d)>" % (self.name, self.version, len(self.code))

    def __eq__(self, other):
        return isinstance(other, DeployCode) and self.serialize() == other.serialize()

    def serialize(self):
        r = bytes([self.vm_type]) + varstr(self.code)
        r += b'\1' if self.need_storage else b'\0'
        for value in [self.name, self.version, self.author, self.email, self.description]:
            r += varstr(value)
        return r

    def as_dict(self):
        return {
            'vm_type': self.vm_type,
            'code': self.code.hex(),
            'need_storage': self.need_storage,
            'name': self.name,
            'version': self.version,
            'author': self.author,
            'email': self.email,
            'description': self.description,
        }


PAYLOAD_CLASSES = {
    TX_TYPE_INVOKE: InvokeCode,
    TX_TYPE_DEPLOY: DeployCode,
}


class Transaction(object):
    """
    Transaction Class

    Contains a payload to deploy or invoke a contract, the gas price and limit, the payer of the transaction fee and
    a list of signature entries.

    The signature hash covers all fields except the signature entries. Before a signature hash can be created the
    payer must be finalized with the :func:`resolve_payer` method, which returns a :class:`ResolvedTransaction`.
    """

    @classmethod
    def parse(cls, rawtx):
        """
        Parse a raw transaction and create a Transaction object

        :param rawtx: Raw transaction string
        :type rawtx: BytesIO, bytes, str

        :return Transaction:
        """
        if isinstance(rawtx, BytesIO):
            return cls.parse_bytesio(rawtx)
        elif isinstance(rawtx, str):
            return cls.parse_hex(rawtx)
        return cls.parse_bytes(rawtx)

    @classmethod
    def parse_bytesio(cls, rawtx):
        """
        Parse a raw transaction and create a Transaction object. The stream may contain more data after the
        transaction.

        :param rawtx: Raw transaction bytes stream
        :type rawtx: BytesIO

        :return Transaction:
        """
        try:
            rawtx.tell()
        except AttributeError:
            raise TransactionError("Provide raw transaction as BytesIO. Use parse, parse_bytes, parse_hex to parse "
                                   "other data types")

        version = _read_uint(rawtx, 1, 'version')
        pos = rawtx.tell()
        tx_type = _read_uint(rawtx, 1, 'tx_type')
        if tx_type not in PAYLOAD_CLASSES:
            raise TransactionDecodeError("unknown transaction type %d" % tx_type, 'tx_type', pos)
        nonce = _read_uint(rawtx, 4, 'nonce')
        gas_price = _read_uint(rawtx, 8, 'gas_price')
        gas_limit = _read_uint(rawtx, 8, 'gas_limit')
        payer = Address(_read_fixed(rawtx, ADDRESS_LENGTH, 'payer'))
        payload = PAYLOAD_CLASSES[tx_type].parse_bytesio(rawtx)

        n_attributes = _read_count(rawtx, 'attributes')
        attributes = [TxAttribute.parse_bytesio(rawtx) for _ in range(n_attributes)]
        n_sigs = _read_count(rawtx, 'sigs', TX_MAX_SIG_SIZE)
        sigs = [Sig.parse_bytesio(rawtx) for _ in range(n_sigs)]

        return Transaction(payload, version=version, nonce=nonce, gas_price=gas_price, gas_limit=gas_limit,
                           payer=payer, attributes=attributes, sigs=sigs)

    @classmethod
    def parse_hex(cls, rawtx):
        """
        Parse a raw hexadecimal transaction and create a Transaction object. Wrapper for the :func:`parse_bytes`
        method

        :param rawtx: Raw transaction hexadecimal string
        :type rawtx: str

        :return Transaction:
        """
        try:
            raw_bytes = hexstring_to_bytes(rawtx)
        except EncodingError as e:
            raise TransactionDecodeError(str(e), 'hex', 0)
        return cls.parse_bytes(raw_bytes)

    @classmethod
    def parse_bytes(cls, rawtx):
        """
        Parse a raw bytes transaction and create a Transaction object. Raises an error if data is found after the
        end of the transaction.

        :param rawtx: Raw transaction bytes
        :type rawtx: bytes

        :return Transaction:
        """
        s = BytesIO(rawtx)
        t = cls.parse_bytesio(s)
        if _remaining(s):
            raise TransactionDecodeError("%d bytes of trailing data" % _remaining(s), 'end', s.tell())
        return t

    def __init__(self, payload, version=None, nonce=0, gas_price=0, gas_limit=None, payer=None, attributes=None,
                 sigs=None):
        """
        Create a new transaction class with provided payload and fee settings.

        >>> t = Transaction(InvokeCode(b'\\x00'))
        >>> t.payer.is_zero
        True

        :param payload: Invoke or deploy payload. Determines the transaction type
        :type payload: InvokeCode, DeployCode
        :param version: Transaction version, leave empty for default
        :type version: int
        :param nonce: Random number to make transaction unique
        :type nonce: int
        :param gas_price: Price per unit of gas
        :type gas_price: int
        :param gas_limit: Maximum amount of gas, leave empty for default
        :type gas_limit: int
        :param payer: Address paying the transaction fee. Zero address if not set yet
        :type payer: Address
        :param attributes: List of transaction attributes
        :type attributes: list of TxAttribute
        :param sigs: List of signature entries
        :type sigs: list of Sig
        """
        if payload.tx_type not in TX_TYPES:
            raise TransactionError("Unsupported payload %s" % type(payload).__name__)
        self.version = TX_VERSION if version is None else version
        self.payload = payload
        self.nonce = nonce
        self.gas_price = gas_price
        self.gas_limit = DEFAULT_GAS_LIMIT if gas_limit is None else gas_limit
        if payer is not None and not isinstance(payer, Address):
            raise TransactionError("Payer must be an Address object")
        self._payer = Address.ZERO if payer is None else payer
        self.attributes = attributes if attributes else []
        self.sigs = sigs if sigs else []

    def __repr__(self):
        return "<Transaction(type=%s, payer=%s, sigs=%d)>" % \
               (TX_TYPES[self.tx_type], self.payer.address, len(self.sigs))

    def __eq__(self, other):
        """
        Compare two transactions, must have the same serialization

        :param other: Other transaction object
        :type other: Transaction

        :return bool:
        """
        if not isinstance(other, Transaction):
            return False
        return self.raw() == other.raw()

    @property
    def tx_type(self):
        return self.payload.tx_type

    @property
    def payer(self):
        return self._payer

    @payer.setter
    def payer(self, value):
        if not isinstance(value, Address):
            raise TransactionError("Payer must be an Address object")
        self._payer = value

    @property
    def txid(self):
        if self.payer.is_zero:
            return None
        return self.resolve_payer(self.payer).txid

    def resolve_payer(self, default_payer):
        """
        Finalize the payer of this transaction. If the payer is not set, the zero address, it is replaced by the
        provided default. After this step the payer can not be changed and the signature hash can be created.

        :param default_payer: Payer to use if none is set
        :type default_payer: Address

        :return ResolvedTransaction:
        """
        if not isinstance(default_payer, Address):
            raise TransactionError("Default payer must be an Address object")
        payer = default_payer if self.payer.is_zero else self.payer
        return ResolvedTransaction(self, payer)

    def signature_hash(self, as_hex=False):
        raise TransactionError("Payer of transaction must be resolved before creating a signature hash")

    def raw_unsigned(self):
        """
        Serialize transaction without the signature entries. This is the data used for the signature hash.

        :return bytes:
        """
        for field, value, size in [('version', self.version, 1), ('nonce', self.nonce, 4),
                                   ('gas_price', self.gas_price, 8), ('gas_limit', self.gas_limit, 8)]:
            if not 0 <= value < 256 ** size:
                raise TransactionError("Value of %s out of range: %d" % (field, value))
        r = bytes([self.version, self.tx_type])
        r += self.nonce.to_bytes(4, 'little')
        r += self.gas_price.to_bytes(8, 'little')
        r += self.gas_limit.to_bytes(8, 'little')
        r += self.payer.hash_bytes
        try:
            r += self.payload.serialize()
            r += int_to_varbyteint(len(self.attributes))
            for attr in self.attributes:
                r += attr.serialize()
        except EncodingError as e:
            raise TransactionError("Could not serialize transaction: %s" % e)
        return r

    def raw(self):
        """
        Serialize complete transaction including signature entries

        :return bytes:
        """
        if len(self.sigs) > TX_MAX_SIG_SIZE:
            raise TransactionError("Too many signature entries, maximum is %d" % TX_MAX_SIG_SIZE)
        r = self.raw_unsigned()
        r += int_to_varbyteint(len(self.sigs))
        for sig in self.sigs:
            r += sig.serialize()
        return r

    def raw_hex(self):
        """
        Serialize complete transaction and return as hexadecimal string

        :return str:
        """
        return self.raw().hex()

    def as_dict(self):
        """
        Return dictionary with transaction information

        :return dict:
        """
        return {
            'txid': self.txid,
            'version': self.version,
            'tx_type': self.tx_type,
            'nonce': self.nonce,
            'gas_price': self.gas_price,
            'gas_limit': self.gas_limit,
            'payer': self.payer.address,
            'payload': self.payload.as_dict(),
            'attributes': [a.as_dict() for a in self.attributes],
            'sigs': [s.as_dict() for s in self.sigs],
            'raw': self.raw_hex(),
        }

    def as_json(self):
        """
        Get current transaction as json formatted string

        :return str:
        """
        return json.dumps(self.as_dict(), indent=4, default=str)

    def info(self):
        """
        Prints transaction information to standard output
        """
        print("Transaction %s" % self.txid)
        print("Type: %s" % TX_TYPES[self.tx_type])
        print("Version: %d" % self.version)
        print("Nonce: %d" % self.nonce)
        print("Gas price: %d, gas limit: %d" % (self.gas_price, self.gas_limit))
        print("Payer: %s%s" % (self.payer.address, ' (not set)' if self.payer.is_zero else ''))
        print("Payload: %s" % repr(self.payload))
        for attr in self.attributes:
            print("- Attribute %s" % repr(attr))
        print("Signatures:")
        for sig in self.sigs:
            print("- %d-of-%d, %d signature(s)" % (sig.m, len(sig.pub_keys), len(sig.sig_data)))
            for pk in sig.pub_keys:
                print("  Public key %s" % pk.hex())


class ResolvedTransaction(Transaction):
    """
    Transaction with a finalized payer. Only resolved transactions can create a signature hash, and the payer can
    not be changed anymore.
    """

    def __init__(self, transaction, payer):
        super(ResolvedTransaction, self).__init__(
            transaction.payload, version=transaction.version, nonce=transaction.nonce,
            gas_price=transaction.gas_price, gas_limit=transaction.gas_limit, payer=payer,
            attributes=deepcopy(transaction.attributes), sigs=deepcopy(transaction.sigs))
        if payer.is_zero:
            raise TransactionError("Payer can not be resolved to the zero address")

    @property
    def payer(self):
        return self._payer

    @payer.setter
    def payer(self, value):
        raise TransactionError("Payer of a resolved transaction can not be changed")

    @property
    def txid(self):
        return self.signature_hash()[::-1].hex()

    def resolve_payer(self, default_payer):
        return self

    def signature_hash(self, as_hex=False):
        """
        Double SHA256 Hash of the transaction without signature entries

        :param as_hex: Return value as hexadecimal string. Default is False
        :type as_hex: bool

        :return bytes: Transaction signature hash
        """
        return double_sha256(self.raw_unsigned(), as_hex=as_hex)
