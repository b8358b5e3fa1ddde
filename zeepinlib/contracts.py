# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    CONTRACTS - Native contract invocation payloads
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
from io import BytesIO
from zeepinlib.encoding import *
from zeepinlib.keys import Address
from zeepinlib.transactions import Transaction, InvokeCode

_logger = logging.getLogger(__name__)


class ContractError(Exception):
    """
    Handle Contract Exceptions
    """

    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


def asset_address(asset):
    """
    Get address of native asset contract by name

    :param asset: Asset name, i.e. 'zpt' or 'gala'
    :type asset: str

    :return Address:
    """
    if not isinstance(asset, str) or asset.lower() not in NATIVE_CONTRACTS:
        raise ContractError("Unknown asset %s, supported assets are: %s" %
                            (asset, ', '.join(NATIVE_CONTRACTS.keys())))
    return Address(bytes.fromhex(NATIVE_CONTRACTS[asset.lower()]))


class State(object):
    """
    Single transfer of an amount from one address to another
    """

    @classmethod
    def parse_bytesio(cls, s):
        from_address = Address.parse_var(s)
        to_address = Address.parse_var(s)
        value = read_var_uint(s)
        return cls(from_address, to_address, value)

    def __init__(self, from_address, to_address, value):
        self.from_address = Address.parse(from_address)
        self.to_address = Address.parse(to_address)
        self.value = value

    def __repr__(self):
        return "<State(from=%s, to=%s, value=%d)>" % (self.from_address, self.to_address, self.value)

    def __eq__(self, other):
        return isinstance(other, State) and self.serialize() == other.serialize()

    def serialize(self):
        return self.from_address.serialize_var() + self.to_address.serialize_var() + encode_var_uint(self.value)


class Transfers(object):
    """
    List of transfer states, the argument of the native 'transfer' method
    """

    @classmethod
    def parse(cls, data):
        s = BytesIO(to_bytes(data, unhexlify=False))
        n = read_var_uint(s)
        return cls([State.parse_bytesio(s) for _ in range(n)])

    def __init__(self, states=None):
        self.states = states if states else []

    def __repr__(self):
        return "<Transfers(states=%d)>" % len(self.states)

    def serialize(self):
        r = encode_var_uint(len(self.states))
        for state in self.states:
            r += state.serialize()
        return r


class Contract(object):
    """
    Native contract invocation: contract address, method name and serialized arguments
    """

    @classmethod
    def parse(cls, data):
        """
        Parse serialized contract invocation

        :param data: Serialized invocation, i.e. the code of an invoke transaction
        :type data: bytes

        :return Contract:
        """
        s = BytesIO(to_bytes(data, unhexlify=False))
        try:
            version = s.read(1)[0]
        except IndexError:
            raise ContractError("Empty contract invocation")
        address = s.read(ADDRESS_LENGTH)
        if len(address) != ADDRESS_LENGTH:
            raise ContractError("Contract invocation ends before contract address")
        try:
            method = read_varstr(s).decode('utf8')
            args = read_varstr(s)
        except (EncodingError, UnicodeDecodeError) as e:
            raise ContractError("Invalid contract invocation: %s" % e)
        return cls(Address(address), method, args, version)

    def __init__(self, address, method, args=b'', version=NATIVE_CONTRACT_VERSION):
        self.address = Address.parse(address)
        self.method = method
        self.args = bytes(args)
        self.version = version

    def __repr__(self):
        return "<Contract(address=%s, method=%s)>" % (self.address.hashed_data, self.method)

    def serialize(self):
        return bytes([self.version]) + self.address.hash_bytes + varstr(self.method) + varstr(self.args)


def transfer_transaction(gas_price, gas_limit, asset, from_address, to_address, amount, nonce=None):
    """
    Create a transaction which transfers an amount of a native asset. The payer is left empty, it is set when the
    transaction is signed.

    :param gas_price: Gas price
    :type gas_price: int
    :param gas_limit: Gas limit
    :type gas_limit: int
    :param asset: Asset name, 'zpt' or 'gala'
    :type asset: str
    :param from_address: Sending address
    :type from_address: Address, str
    :param to_address: Receiving address
    :type to_address: Address, str
    :param amount: Amount to transfer
    :type amount: int
    :param nonce: Transaction nonce, a random number is used if not specified
    :type nonce: int

    :return Transaction:
    """
    if not isinstance(amount, int) or amount <= 0:
        raise ContractError("Amount must be a positive integer, not %s" % amount)
    transfers = Transfers([State(from_address, to_address, amount)])
    contract = Contract(asset_address(asset), CONTRACT_METHOD_TRANSFER, transfers.serialize())
    if nonce is None:
        nonce = random.SystemRandom().randint(0, 0xffffffff)
    _logger.info("Create %s transfer of %d from %s to %s" % (asset, amount, transfers.states[0].from_address,
                                                             transfers.states[0].to_address))
    return Transaction(InvokeCode(contract.serialize(), VM_TYPE_NATIVE), nonce=nonce, gas_price=gas_price,
                       gas_limit=gas_limit)
