# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    Public key cryptography, addresses and signing accounts
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

import random
import collections
import json
from hashlib import sha256

import ecdsa
from ecdsa.curves import NIST256p
from ecdsa.util import sigencode_string

from zeepinlib.encoding import *
from zeepinlib.scripts import program_from_pubkey, program_from_multi_pubkeys, ScriptError

_logger = logging.getLogger(__name__)


class BKeyError(Exception):
    """
    Handle Key class Exceptions

    """

    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


def get_key_format(key, is_private=None):
    """
    Determine the format of a key. Recognises private keys as integer, bytes, hexstring or WIF and public keys
    as compressed or uncompressed bytes or hexstring.

    >>> get_key_format('02' + '11' * 32)
    'public_hex'

    :param key: Any private or public key
    :type key: str, int, bytes
    :param is_private: Is key private or not? Use None to derive from key
    :type is_private: bool, None

    :return str: Key format name
    """
    if isinstance(key, int) and not isinstance(key, bool):
        return 'decimal'
    if isinstance(key, (bytes, bytearray)):
        if len(key) == 32 and is_private is not False:
            return 'bin'
        if len(key) == 33 and key[:1] in [b'\2', b'\3']:
            return 'public_bin'
        if len(key) == 65 and key[:1] == b'\4':
            return 'public_uncompressed_bin'
    elif isinstance(key, str):
        if len(key) == 64 and is_private is not False and _is_hex(key):
            return 'hex'
        if len(key) == 66 and key[:2] in ['02', '03'] and _is_hex(key):
            return 'public_hex'
        if len(key) == 130 and key[:2] == '04' and _is_hex(key):
            return 'public_uncompressed_hex'
        if is_private is not False and len(key) in [51, 52]:
            return 'wif'
    raise BKeyError("Unrecognised key format")


def _is_hex(string):
    try:
        hexstring_to_bytes(string)
    except EncodingError:
        return False
    return True


class Address(object):
    """
    Account address: 20 byte hash of the verification program of a single public key or a set of public keys.

    The human readable form is a base-58 checksummed string with version byte 0x17. Addresses are immutable once
    created.
    """

    ZERO = None

    @classmethod
    def parse(cls, address):
        """
        Import an address from its base-58 representation or from a hexstring of the 20 byte hash.

        :param address: Base-58 address or 40 character hexstring
        :type address: str, bytes

        :return Address:
        """
        if isinstance(address, Address):
            return address
        if isinstance(address, (bytes, bytearray)):
            return cls(address)
        if len(address) == ADDRESS_LENGTH * 2 and _is_hex(address):
            return cls(bytes.fromhex(address))
        try:
            return cls(addr_base58_to_pubkeyhash(address))
        except EncodingError as e:
            raise BKeyError("Invalid address %s: %s" % (address, e))

    @classmethod
    def parse_var(cls, data):
        """
        Read a length prefixed address as used in native contract arguments.

        :param data: Encoded address as bytes or a BytesIO stream positioned at the address
        :type data: bytes, BytesIO

        :return Address:
        """
        if isinstance(data, BytesIO):
            return cls(read_address(data))
        hash_bytes, _ = decode_address(data)
        return cls(hash_bytes)

    @classmethod
    def from_pubkey(cls, public_key):
        """
        Derive address of a single public key from the program PUSH(key) CHECKSIG

        :param public_key: Serialized public key or Key object
        :type public_key: bytes, Key

        :return Address:
        """
        if isinstance(public_key, Key):
            public_key = public_key.public_byte
        return cls(hash160(program_from_pubkey(bytes(public_key))))

    @classmethod
    def from_multi_pubkeys(cls, public_keys, m):
        """
        Derive address of an M-of-N multi signature account. The order of the public keys is significant, keys are
        not sorted.

        :param public_keys: Serialized public keys or Key objects
        :type public_keys: list of bytes, list of Key
        :param m: Number of signatures required
        :type m: int

        :return Address:
        """
        keys = [k.public_byte if isinstance(k, Key) else bytes(k) for k in public_keys]
        try:
            program = program_from_multi_pubkeys(keys, m)
        except ScriptError as e:
            raise BKeyError("Cannot create multisig address: %s" % e)
        return cls(hash160(program))

    def __init__(self, hash_bytes):
        """
        Initialize an Address object with a 20 byte hash

        >>> Address(b'\\0' * 20).is_zero
        True

        :param hash_bytes: Program hash
        :type hash_bytes: bytes
        """
        hash_bytes = bytes(hash_bytes)
        if len(hash_bytes) != ADDRESS_LENGTH:
            raise BKeyError("Address must be %d bytes, not %d" % (ADDRESS_LENGTH, len(hash_bytes)))
        self._hash_bytes = hash_bytes
        self._address = None

    def __repr__(self):
        return "<Address(address=%s)>" % self.address

    def __str__(self):
        return self.address

    def __bytes__(self):
        return self._hash_bytes

    def __eq__(self, other):
        if isinstance(other, Address):
            return self._hash_bytes == other._hash_bytes
        return False

    def __hash__(self):
        return hash(self._hash_bytes)

    @property
    def hash_bytes(self):
        return self._hash_bytes

    @property
    def hashed_data(self):
        return self._hash_bytes.hex()

    @property
    def address(self):
        if self._address is None:
            self._address = pubkeyhash_to_addr_base58(self._hash_bytes)
        return self._address

    @property
    def is_zero(self):
        return self._hash_bytes == b'\0' * ADDRESS_LENGTH

    def serialize_var(self):
        """
        Serialize as length prefixed address as used in native contract arguments

        :return bytes:
        """
        return encode_address(self._hash_bytes)

    def as_dict(self):
        """
        Get current Address class as dictionary. Byte values are represented by hexadecimal strings

        :return dict:
        """
        return {
            'address': self.address,
            'hashed_data': self.hashed_data,
        }

    def as_json(self):
        """
        Get current address as json formatted string

        :return str:
        """
        return json.dumps(self.as_dict(), indent=4)


Address.ZERO = Address(b'\0' * ADDRESS_LENGTH)


class Key(object):
    """
    Class to generate, import and convert NIST P-256 key pairs.

    If no key is specified when creating class a cryptographically secure Private Key is
    generated using the random.SystemRandom() class.
    """

    def __init__(self, import_key=None, is_private=None):
        """
        Initialize a Key object. Import key can be in WIF, bytes, hexstring or integer. If import_key is empty a new
        private key will be generated.

        If a private key is imported a public key will be derived. If a public is imported the private key data will
        be empty.

        >>> k = Key(1)
        >>> k.public_hex
        '036b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296'

        :param import_key: If specified import given private or public key. If not specified a new private key is generated.
        :type import_key: str, int, bytes
        :param is_private: Specify if imported key is private or public. Default is None: derive from provided key
        :type is_private: bool
        """
        self.secret = None
        self.private_byte = None
        self.private_hex = None
        self._sk = None
        self._wif = None
        self._address_obj = None

        if import_key is None:
            import_key = random.SystemRandom().randint(1, NIST256p.order - 1)
        if isinstance(import_key, Key):
            import_key = import_key.secret if import_key.is_private else import_key.public_byte
        self.key_format = get_key_format(import_key, is_private)

        if self.key_format == 'decimal':
            self.secret = import_key
        elif self.key_format == 'bin':
            self.secret = int.from_bytes(import_key, 'big')
        elif self.key_format == 'hex':
            self.secret = int(import_key, 16)
        elif self.key_format == 'wif':
            self.secret = self._wif_to_secret(import_key)

        if self.secret is not None:
            if not 0 < self.secret < NIST256p.order:
                raise BKeyError("Private key out of range, must be between 1 and curve order")
            self.is_private = True
            self.private_byte = self.secret.to_bytes(32, 'big')
            self.private_hex = self.private_byte.hex()
            self._sk = ecdsa.SigningKey.from_secret_exponent(self.secret, curve=NIST256p, hashfunc=sha256)
            self._vk = self._sk.get_verifying_key()
        else:
            self.is_private = False
            if self.key_format.endswith('hex'):
                import_key = bytes.fromhex(import_key)
            try:
                self._vk = ecdsa.VerifyingKey.from_string(bytes(import_key), curve=NIST256p, hashfunc=sha256)
            except (ecdsa.keys.MalformedPointError, ValueError) as e:
                raise BKeyError("Invalid public key: %s" % e)

        self.public_byte = self._vk.to_string('compressed')
        self.public_hex = self.public_byte.hex()
        self.public_uncompressed_byte = self._vk.to_string('uncompressed')
        self.public_uncompressed_hex = self.public_uncompressed_byte.hex()

    def __repr__(self):
        return "<Key(public_hex=%s)>" % self.public_hex

    def __str__(self):
        return self.public_hex

    def __bytes__(self):
        return self.public_byte

    def __len__(self):
        return len(self.public_byte)

    def __eq__(self, other):
        if other is None or not isinstance(other, Key):
            return False
        if self.is_private and other.is_private:
            return self.private_hex == other.private_hex
        else:
            return self.public_hex == other.public_hex

    def __hash__(self):
        if self.is_private:
            return hash(self.private_byte)
        else:
            return hash(self.public_byte)

    @staticmethod
    def _wif_to_secret(wif):
        try:
            key = base58_decode(wif)
        except EncodingError as e:
            raise BKeyError("Invalid WIF key: %s" % e)
        if len(key) != 38 or key[:1] != WIF_PREFIX or key[33:34] != b'\1':
            raise BKeyError("Invalid WIF key, unexpected length or prefix")
        if double_sha256(key[:-4])[:4] != key[-4:]:
            raise BKeyError("Invalid WIF key, checksum incorrect")
        return int.from_bytes(key[1:33], 'big')

    def hex(self):
        return self.public_hex

    def wif(self):
        """
        Get private Key in Wallet Import Format, steps:
        # Convert to Binary and add 0x80 hex
        # Add 0x01 to mark compressed public key
        # Calculate Double SHA256 and add as checksum to end of key

        :return str: Base58Check encoded Private Key WIF
        """
        if not self.is_private:
            raise BKeyError("WIF format not supported for public key")
        if not self._wif:
            key = WIF_PREFIX + self.private_byte + b'\1'
            self._wif = base58_encode(key + double_sha256(key)[:4])
        return self._wif

    def public(self):
        """
        Get public version of current key. Removes all private information from current key

        :return Key: Public key
        """
        return Key(self.public_byte, is_private=False)

    def public_point(self):
        """
        Get public key point on Elliptic curve

        :return tuple: (x, y) point
        """
        point = self._vk.pubkey.point
        return point.x(), point.y()

    @property
    def hash160(self):
        return hash160(self.public_byte)

    @property
    def address_obj(self):
        """
        Get address object property. Create address object of single key program if not defined already.

        :return Address:
        """
        if not self._address_obj:
            self._address_obj = Address.from_pubkey(self.public_byte)
        return self._address_obj

    def address(self):
        """
        Get base-58 address derived from public key

        :return str:
        """
        return self.address_obj.address

    def sign(self, data):
        """
        Sign data with SHA256withECDSA. Signatures are deterministic (RFC 6979) and consist of the signature scheme
        byte followed by the 32 byte r and 32 byte s values.

        :param data: Data to sign, normally a transaction signature hash
        :type data: bytes

        :return bytes:
        """
        if not self.is_private:
            raise BKeyError("Private key needed to create a signature")
        try:
            signature = self._sk.sign_deterministic(bytes(data), hashfunc=sha256, sigencode=sigencode_string)
        except (ValueError, RuntimeError) as e:
            raise BKeyError("Signing failed: %s" % e)
        return bytes([SIGNATURE_SCHEME_SHA256_ECDSA]) + signature

    def as_dict(self, include_private=False):
        """
        Get current Key class as dictionary. Byte values are represented by hexadecimal strings.

        :param include_private: Include private key information in dictionary
        :type include_private: bool

        :return collections.OrderedDict:
        """
        key_dict = collections.OrderedDict()
        key_dict['key_format'] = self.key_format
        key_dict['is_private'] = self.is_private
        if include_private and self.is_private:
            key_dict['private_hex'] = self.private_hex
            key_dict['secret'] = self.secret
            key_dict['wif'] = self.wif()
        key_dict['public_hex'] = self.public_hex
        key_dict['public_uncompressed_hex'] = self.public_uncompressed_hex
        key_dict['address'] = self.address()
        return key_dict

    def as_json(self, include_private=False):
        return json.dumps(self.as_dict(include_private=include_private), indent=4)

    def info(self):
        """
        Prints key information to standard output

        """
        print("KEY INFO")
        if self.is_private:
            print("SECRET EXPONENT")
            print(" Private Key (hex)              %s" % self.private_hex)
            print(" Private Key (wif)              %s" % self.wif())
        else:
            print("PUBLIC KEY ONLY, NO SECRET EXPONENT")
        print("PUBLIC KEY")
        print(" Public Key (hex)            %s" % self.public_hex)
        print(" Public Key uncompr. (hex)   %s" % self.public_uncompressed_hex)
        print(" Address (b58)               %s" % self.address())


class Account(object):
    """
    Signing account: a private key with its address and an optional label. This is the signer passed to the
    signing handlers.
    """

    def __init__(self, key, label=''):
        if not isinstance(key, Key):
            key = Key(key)
        if not key.is_private:
            raise BKeyError("Account needs a private key to sign")
        self.key = key
        self.label = label
        self.public_key = key.public_byte
        self.address = key.address_obj

    def __repr__(self):
        return "<Account(address=%s, label=%s)>" % (self.address.address, self.label)

    def sign(self, data):
        """
        Sign data with the private key of this account

        :param data: Data to sign
        :type data: bytes

        :return bytes: Signature with scheme byte
        """
        return self.key.sign(data)
