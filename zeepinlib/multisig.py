# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    MULTISIG - Multi signature addresses and signature aggregation
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

from zeepinlib.encoding import *
from zeepinlib.keys import Address, Key
from zeepinlib.transactions import Sig, TransactionError

_logger = logging.getLogger(__name__)


class MultisigError(Exception):
    """
    Handle multi signature Exceptions
    """

    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


def multisig_threshold(n):
    """
    Number of signatures required for a multisig account with n public keys

    >>> [multisig_threshold(n) for n in range(1, 8)]
    [1, 2, 3, 3, 4, 5, 5]

    :param n: Number of public keys
    :type n: int

    :return int:
    """
    if n < 1:
        raise MultisigError("EmptyKeySet: at least one public key is required")
    return (5 * n + 6) // 7


def _public_key_bytes(public_key):
    if isinstance(public_key, Key):
        return public_key.public_byte
    if isinstance(public_key, str):
        public_key = hexstring_to_bytes(public_key)
    return bytes(public_key)


def derive_multisig_address(pub_keys):
    """
    Derive multisig address and signature threshold from an ordered list of public keys. The order of the keys
    is used as provided.

    :param pub_keys: List of public keys as bytes, hexstring or Key objects
    :type pub_keys: list

    :return (Address, int): Multisig address and number of signatures required
    """
    if not pub_keys:
        raise MultisigError("EmptyKeySet: at least one public key is required")
    if len(pub_keys) > MULTI_SIG_MAX_PUBKEY_SIZE:
        raise MultisigError("Too many public keys, maximum is %d" % MULTI_SIG_MAX_PUBKEY_SIZE)
    keys = [_public_key_bytes(pk) for pk in pub_keys]
    m = multisig_threshold(len(keys))
    address = Address.from_multi_pubkeys(keys, m)
    _logger.info("Multisig address %s: %d-of-%d" % (address.address, m, len(keys)))
    return address, m


def append_signature(tx, signer, signature, pub_keys=None, m=None):
    """
    Add signature of signer to the signature entries of a transaction. Existing entries are never removed
    or reordered.

    Without pub_keys a single signature entry with the signer's public key is added. With a list of pub_keys the
    signature is added to the entry with the same keys and threshold, or a new entry is created if there is none.

    :param tx: Transaction to add the signature to
    :type tx: Transaction
    :param signer: Account which created the signature
    :type signer: Account
    :param signature: Signature created by the signer
    :type signature: bytes
    :param pub_keys: Public keys of the multisig account, in order
    :type pub_keys: list of bytes
    :param m: Number of signatures required by the multisig account
    :type m: int

    :return Transaction:
    """
    if not signature:
        raise MultisigError("Empty signature")
    if pub_keys is None:
        _check_sig_count(tx)
        tx.sigs.append(Sig([signer.public_key], 1, [signature]))
        return tx

    pub_keys = [_public_key_bytes(pk) for pk in pub_keys]
    if not pub_keys:
        raise MultisigError("EmptyKeySet: at least one public key is required")
    if len(pub_keys) > MULTI_SIG_MAX_PUBKEY_SIZE:
        raise MultisigError("Too many public keys, maximum is %d" % MULTI_SIG_MAX_PUBKEY_SIZE)
    if m is None or not 1 <= m <= len(pub_keys):
        raise MultisigError("Invalid threshold %s for %d public keys" % (m, len(pub_keys)))
    if signer.public_key not in pub_keys:
        raise MultisigError("Public key of signer %s not found in multisig key set" % signer.address.address)

    for sig in tx.sigs:
        if sig.pub_keys == pub_keys and sig.m == m:
            if sig.is_full:
                raise MultisigError("Signature entry already contains %d signatures" % len(sig.sig_data))
            sig.sig_data.append(bytes(signature))
            return tx

    _check_sig_count(tx)
    try:
        tx.sigs.append(Sig(pub_keys, m, [signature]))
    except TransactionError as e:
        raise MultisigError(str(e))
    return tx


def _check_sig_count(tx):
    if len(tx.sigs) >= TX_MAX_SIG_SIZE:
        raise MultisigError("Transaction already contains the maximum of %d signature entries" % TX_MAX_SIG_SIZE)
