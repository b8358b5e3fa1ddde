# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    COORDINATOR - Collect signatures of all keys of a multisig account
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

from enum import Enum
from zeepinlib.encoding import *
from zeepinlib.transactions import Transaction, TransactionError
from zeepinlib.multisig import multisig_threshold, MultisigError, _public_key_bytes
from zeepinlib.sigsvr import CliRpcRequest, ErrorCode, sig_multi_raw_transaction

_logger = logging.getLogger(__name__)


class SigningError(Exception):
    """
    Raised when a signing run fails. Contains the error code of the failed step and the index of the signer, or
    None if the run failed before the first signer was called.
    """

    def __init__(self, error_code, error_info='', signer_index=None):
        self.error_code = error_code
        self.error_info = error_info
        self.signer_index = signer_index
        self.msg = "Signing failed at signer %s with error %d: %s" % (signer_index, error_code, error_info)
        _logger.error(self.msg)

    def __str__(self):
        return self.msg


class CoordinatorState(Enum):
    INIT = 'init'
    PAYER_RESOLVED = 'payer_resolved'
    SIGNING = 'signing'
    COMPLETE = 'complete'
    FAILED = 'failed'


class SigningCoordinator(object):
    """
    Collect the signatures of a list of signers for one transaction, one signer at a time.

    Before the first signature hash is created the payer of the transaction is set to the address of the first
    signer if no payer is specified. Then each signer adds a signature to the multisig signature entry and the
    output of each round is used as input of the next. If any round fails the whole run fails and the remaining
    signers are not called.

    >>> from zeepinlib.keys import Account
    >>> c = SigningCoordinator([Account(1), Account(2)])
    >>> c.m
    2
    """

    def __init__(self, signers, pub_keys=None, m=None):
        """
        Create a new coordinator.

        :param signers: Accounts which sign the transaction, in signing order
        :type signers: list of Account
        :param pub_keys: Public keys of the multisig account in order. Default is the public keys of the signers
        :type pub_keys: list of bytes, list of str
        :param m: Number of signatures required. Default is derived from the number of public keys
        :type m: int
        """
        if not signers:
            raise MultisigError("No signers provided")
        self.signers = list(signers)
        self.pub_keys = [_public_key_bytes(pk) for pk in pub_keys] if pub_keys else \
            [s.public_key for s in self.signers]
        self.m = multisig_threshold(len(self.pub_keys)) if m is None else m
        self.state = CoordinatorState.INIT
        self.signer_index = None

    def __repr__(self):
        return "<SigningCoordinator(signers=%d, m=%d, state=%s)>" % (len(self.signers), self.m, self.state.value)

    def _fail(self, error_code, error_info, signer_index=None):
        self.state = CoordinatorState.FAILED
        return SigningError(error_code, error_info, signer_index)

    def resolve_payer(self, raw_tx_hex):
        """
        Set payer of transaction to address of first signer if the transaction has no payer

        :param raw_tx_hex: Raw transaction as hexadecimal string
        :type raw_tx_hex: str

        :return str: Raw transaction with payer as hexadecimal string
        """
        try:
            raw_tx = hexstring_to_bytes(raw_tx_hex)
        except EncodingError as e:
            raise self._fail(ErrorCode.INVALID_PARAMS, str(e))
        try:
            rtx = Transaction.parse_bytes(raw_tx).resolve_payer(self.signers[0].address)
            raw_tx_hex = rtx.raw_hex()
        except TransactionError as e:
            raise self._fail(ErrorCode.INVALID_TRANSACTION, str(e))
        self.state = CoordinatorState.PAYER_RESOLVED
        _logger.info("Payer of transaction is %s" % rtx.payer.address)
        return raw_tx_hex

    def run(self, raw_tx_hex):
        """
        Sign the transaction with all signers.

        :param raw_tx_hex: Raw unsigned transaction as hexadecimal string
        :type raw_tx_hex: str

        :return list of str: Signed transaction after each round, the last one contains all signatures
        """
        self.state = CoordinatorState.INIT
        self.signer_index = None
        current = self.resolve_payer(raw_tx_hex)
        params = {
            'm': self.m,
            'pub_keys': [pk.hex() for pk in self.pub_keys],
        }
        results = []
        for i, signer in enumerate(self.signers):
            self.state = CoordinatorState.SIGNING
            self.signer_index = i
            params['raw_tx'] = current
            req = CliRpcRequest(str(i), 'sigmutilrawtx', params)
            resp = sig_multi_raw_transaction(req, signer)
            if not resp.ok:
                raise self._fail(resp.error_code, resp.error_info, i)
            current = resp.result['signed_tx']
            _logger.info("Signer %d (%s) signed transaction" % (i, signer.address.address))
            results.append(current)
        self.state = CoordinatorState.COMPLETE
        return results
