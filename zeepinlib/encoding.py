# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    ENCODING - Methods for encoding and conversion
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

import re
import numbers
import hashlib
from io import BytesIO
from Crypto.Hash import RIPEMD160
from zeepinlib.main import *

_logger = logging.getLogger(__name__)

MAX_VAR_UINT = 2 ** 64 - 1


class EncodingError(Exception):
    """ Log and raise encoding errors """
    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


class NegativeValueError(EncodingError):
    """ Value is below zero where only unsigned values are allowed """
    pass


class TruncatedError(EncodingError):
    """ Input ends before the number of bytes announced by a length prefix """
    pass


class MalformedAddressError(EncodingError):
    """ Encoded address does not have the required length """
    pass


BASE58_CHARS = '123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz'
_HEX_RE = re.compile(r'\A(?:[0-9a-fA-F]{2})*\Z')


def base58_encode(data):
    """
    Convert bytes to a base-58 string. Leading zero bytes are encoded as '1' characters.

    >>> base58_encode(bytes.fromhex('0021342f229392d7c9ed82c932916cee6517fbc9a2487cd97a'))
    '142Zp9WZn9Fh4MV8F3H5Dv4Rbg7Ja1sPWZ'

    :param data: Bytes to encode
    :type data: bytes

    :return str:
    """
    data = to_bytes(data, unhexlify=False)
    value = int.from_bytes(data, 'big')
    output = ''
    while value:
        value, remainder = divmod(value, 58)
        output = BASE58_CHARS[remainder] + output
    zeros = len(data) - len(data.lstrip(b'\0'))
    return BASE58_CHARS[0] * zeros + output


def base58_decode(string):
    """
    Convert base-58 string to bytes

    >>> base58_decode('142Zp9WZn9Fh4MV8F3H5Dv4Rbg7Ja1sPWZ').hex()
    '0021342f229392d7c9ed82c932916cee6517fbc9a2487cd97a'

    :param string: Base-58 encoded string
    :type string: str

    :return bytes:
    """
    if isinstance(string, bytes):
        string = string.decode('ascii', errors='replace')
    value = 0
    for c in string:
        pos = BASE58_CHARS.find(c)
        if pos < 0:
            raise EncodingError("Character '%s' not found in base-58 codebase" % c)
        value = value * 58 + pos
    body = value.to_bytes((value.bit_length() + 7) // 8, 'big') if value else b''
    zeros = len(string) - len(string.lstrip(BASE58_CHARS[0]))
    return b'\0' * zeros + body


def varbyteint_to_int(byteint):
    """
    Convert CompactSize Variable length integer in byte format to integer.

    >>> varbyteint_to_int(bytes.fromhex('fd1027'))
    (10000, 3)

    :param byteint: 1-9 byte representation
    :type byteint: bytes, list

    :return (int, int): tuple wit converted integer and size
    """
    if not isinstance(byteint, (bytes, list)):
        raise EncodingError("Byteint must be a list or defined as bytes")
    if not byteint:
        raise TruncatedError("Variable length integer expected but no data found")
    ni = byteint[0]
    if ni < 253:
        return ni, 1
    if ni == 253:  # integer of 2 bytes
        size = 2
    elif ni == 254:  # integer of 4 bytes
        size = 4
    else:  # integer of 8 bytes
        size = 8
    if len(byteint) < size + 1:
        raise TruncatedError("Variable length integer needs %d bytes, only %d available" %
                             (size + 1, len(byteint)))
    return int.from_bytes(bytes(byteint[1:1+size]), 'little'), size + 1


def read_varbyteint(s):
    """
    Read variable length integer from BytesIO stream. Wrapper for the varbyteint_to_int method

    :param s: A binary stream
    :type s: BytesIO

    :return int:
    """
    pos = s.tell()
    value, size = varbyteint_to_int(s.read(9))
    s.seek(pos + size)
    return value


def int_to_varbyteint(inp):
    """
    Convert integer to CompactSize Variable length integer in byte format.

    >>> int_to_varbyteint(10000).hex()
    'fd1027'

    :param inp: Integer to convert
    :type inp: int

    :return: byteint: 1-9 byte representation as integer
    """
    if not isinstance(inp, numbers.Integral):
        raise EncodingError("Input must be an integer")
    if inp < 0:
        raise NegativeValueError("Variable length integer can not be negative: %d" % inp)
    if inp < 0xfd:
        return inp.to_bytes(1, 'little')
    elif inp <= 0xffff:
        return b'\xfd' + inp.to_bytes(2, 'little')
    elif inp <= 0xffffffff:
        return b'\xfe' + inp.to_bytes(4, 'little')
    elif inp <= MAX_VAR_UINT:
        return b'\xff' + inp.to_bytes(8, 'little')
    raise EncodingError("Integer %d too large for a variable length integer" % inp)


def varstr(string):
    """
    Convert string to variably sized string: Bytestring preceded with length byte

    >>> varstr(b'transfer').hex()
    '087472616e73666572'

    :param string: String input
    :type string: bytes, str

    :return bytes: varstring
    """
    if isinstance(string, str):
        string = string.encode('utf8')
    return int_to_varbyteint(len(string)) + bytes(string)


def read_varstr(s):
    """
    Read variable length byte string from BytesIO stream

    :param s: A binary stream
    :type s: BytesIO

    :return bytes:
    """
    size = read_varbyteint(s)
    data = s.read(size)
    if len(data) != size:
        raise TruncatedError("Variable length string of %d bytes expected, only %d available" % (size, len(data)))
    return data


def encode_var_uint(value):
    """
    Encode an unsigned integer as minimal little-endian two's complement bytes, preceded by a length prefix.
    Zero is encoded as an empty byte string, so its encoding is a single zero length byte.

    >>> encode_var_uint(128).hex()
    '028000'
    >>> encode_var_uint(0).hex()
    '00'

    :param value: Integer between 0 and 2**64 - 1
    :type value: int

    :return bytes:
    """
    if not isinstance(value, numbers.Integral) or isinstance(value, bool):
        raise EncodingError("Value must be an integer, not %s" % type(value).__name__)
    if value < 0:
        raise NegativeValueError("Value %d is negative" % value)
    if value > MAX_VAR_UINT:
        raise EncodingError("Value %d exceeds maximum of %d" % (value, MAX_VAR_UINT))
    if not value:
        return varstr(b'')
    # An extra byte is needed when the highest bit is set, to keep the sign positive
    length = (value.bit_length() + 8) // 8
    return varstr(value.to_bytes(length, 'little', signed=True))


def decode_var_uint(data):
    """
    Decode a length prefixed unsigned integer as created by :func:`encode_var_uint`

    >>> decode_var_uint(bytes.fromhex('028000'))
    (128, 3)

    :param data: Encoded integer, may be followed by other data
    :type data: bytes

    :return (int, int): Value and number of bytes consumed
    """
    s = BytesIO(to_bytes(data, unhexlify=False))
    value = read_var_uint(s)
    return value, s.tell()


def read_var_uint(s):
    """
    Read length prefixed unsigned integer from BytesIO stream. Stream variant of :func:`decode_var_uint`

    :param s: A binary stream
    :type s: BytesIO

    :return int:
    """
    value = int.from_bytes(read_varstr(s), 'little', signed=True)
    if value < 0:
        raise NegativeValueError("Decoded value %d is negative" % value)
    if value > MAX_VAR_UINT:
        raise EncodingError("Decoded value %d exceeds maximum of %d" % (value, MAX_VAR_UINT))
    return value


def encode_address(address):
    """
    Encode 20 byte address with its length as prefix

    :param address: Address bytes or hash as hexstring
    :type address: bytes, str

    :return bytes:
    """
    if isinstance(address, str):
        address = to_bytes(address)
    address = bytes(address)
    if len(address) != ADDRESS_LENGTH:
        raise MalformedAddressError("Address must be %d bytes, not %d" % (ADDRESS_LENGTH, len(address)))
    return varstr(address)


def decode_address(data):
    """
    Decode a length prefixed address as created by :func:`encode_address`

    :param data: Encoded address, may be followed by other data
    :type data: bytes

    :return (bytes, int): 20 byte address and number of bytes consumed
    """
    s = BytesIO(to_bytes(data, unhexlify=False))
    address = read_address(s)
    return address, s.tell()


def read_address(s):
    """
    Read length prefixed address from BytesIO stream

    :param s: A binary stream
    :type s: BytesIO

    :return bytes:
    """
    try:
        address = read_varstr(s)
    except TruncatedError as e:
        raise MalformedAddressError("Could not read address: %s" % e)
    if len(address) != ADDRESS_LENGTH:
        raise MalformedAddressError("Address must be %d bytes, not %d" % (ADDRESS_LENGTH, len(address)))
    return address


def pubkeyhash_to_addr_base58(pubkeyhash, prefix=ADDRESS_VERSION_BYTE):
    """
    Convert public key hash to base58 encoded address

    >>> pubkeyhash_to_addr_base58('21342f229392d7c9ed82c932916cee6517fbc9a2', b'\\x00')
    '142Zp9WZn9Fh4MV8F3H5Dv4Rbg7Ja1sPWZ'

    :param pubkeyhash: Public key hash
    :type pubkeyhash: bytes, str
    :param prefix: Prefix version byte, default is the ZeepinChain address version
    :type prefix: bytes

    :return str: Base-58 encoded address
    """
    key = prefix + to_bytes(pubkeyhash, unhexlify=isinstance(pubkeyhash, str))
    return base58_encode(key + double_sha256(key)[:4])


def addr_base58_to_pubkeyhash(address, as_hex=False, prefix=ADDRESS_VERSION_BYTE):
    """
    Convert Base58 encoded address to public key hash

    >>> addr_base58_to_pubkeyhash('142Zp9WZn9Fh4MV8F3H5Dv4Rbg7Ja1sPWZ', as_hex=True, prefix=b'\\x00')
    '21342f229392d7c9ed82c932916cee6517fbc9a2'

    :param address: Address in base-58 format
    :type address: str
    :param as_hex: Output as hexstring
    :type as_hex: bool
    :param prefix: Expected version byte. Use None to accept any version
    :type prefix: bytes, None

    :return bytes, str: Public Key Hash
    """
    addr256 = base58_decode(address)
    if len(addr256) != 25:
        raise EncodingError("Invalid address %s, decoded length should be 25 bytes not %d" %
                            (address, len(addr256)))
    pkh = addr256[:-4]
    if double_sha256(pkh)[:4] != addr256[-4:]:
        raise EncodingError("Invalid address %s, checksum incorrect" % address)
    if prefix is not None and pkh[:1] != prefix:
        raise EncodingError("Invalid address %s, unexpected version byte %s" % (address, pkh[:1].hex()))
    if as_hex:
        return pkh[1:].hex()
    return pkh[1:]


def to_bytes(string, unhexlify=True):
    """
    Convert string, hexadecimal string  to bytes

    :param string: String to convert
    :type string: str, bytes
    :param unhexlify: Try to unhexlify hexstring
    :type unhexlify: bool

    :return: Bytes var
    """
    if not string:
        return b''
    if unhexlify:
        try:
            if isinstance(string, bytes):
                string = string.decode()
            s = bytes.fromhex(string)
            return s
        except (TypeError, ValueError):
            pass
    if isinstance(string, (bytes, bytearray)):
        return bytes(string)
    else:
        return bytes(string, 'utf8')


def to_hexstring(string):
    """
    Convert bytes, string to a hexadecimal string. Use instead of built-in hex() method if format
    of input string is not known.

    >>> to_hexstring(b'\\x12\\xaa\\xdd')
    '12aadd'

    :param string: Variable to convert to hex string
    :type string: bytes, str

    :return: hexstring
    """
    if not string:
        return ''
    try:
        bytes.fromhex(string)
        return string
    except (ValueError, TypeError):
        pass

    if not isinstance(string, bytes):
        string = bytes(string, 'utf8')
    return string.hex()


def hexstring_to_bytes(hexstring):
    """
    Strict conversion of hexadecimal string to bytes. Unlike bytes.fromhex() whitespace, odd lengths and any other
    non-hexadecimal characters are refused.

    >>> hexstring_to_bytes('00ff')
    b'\\x00\\xff'

    :param hexstring: Hexadecimal string
    :type hexstring: str

    :return bytes:
    """
    if not isinstance(hexstring, str) or not _HEX_RE.match(hexstring):
        raise EncodingError("Invalid hexadecimal string: %s" % str(hexstring)[:80])
    return bytes.fromhex(hexstring)


def double_sha256(string, as_hex=False):
    """
    Get double SHA256 hash of string

    :param string: String to be hashed
    :type string: bytes
    :param as_hex: Return value as hexadecimal string. Default is False
    :type as_hex: bool

    :return bytes, str:
    """
    if not as_hex:
        return hashlib.sha256(hashlib.sha256(string).digest()).digest()
    else:
        return hashlib.sha256(hashlib.sha256(string).digest()).hexdigest()


def hash160(string):
    """
    Creates a RIPEMD-160 + SHA256 hash of the input string

    :param string: Program
    :type string: bytes

    :return bytes: RIPEMD-160 hash of program
    """
    return RIPEMD160.new(hashlib.sha256(string).digest()).digest()
