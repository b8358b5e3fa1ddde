# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    SIGSVR - Request handlers to sign raw transactions
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
from enum import IntEnum
from zeepinlib.encoding import *
from zeepinlib.keys import Address, Key, BKeyError
from zeepinlib.transactions import Transaction, TransactionError
from zeepinlib.multisig import append_signature, MultisigError

_logger = logging.getLogger(__name__)


class ErrorCode(IntEnum):
    OK = 0
    INVALID_PARAMS = 1001
    INVALID_TRANSACTION = 1003
    INTERNAL_ERROR = 1004
    MULTISIG_ERROR = 1005


ERROR_DESCRIPTIONS = {
    ErrorCode.OK: '',
    ErrorCode.INVALID_PARAMS: 'invalid params',
    ErrorCode.INVALID_TRANSACTION: 'invalid transaction',
    ErrorCode.INTERNAL_ERROR: 'internal error',
    ErrorCode.MULTISIG_ERROR: 'multisig error',
}


class CliRpcRequest(object):
    """
    Signing request. The params are the JSON encoded parameters of the method.
    """

    def __init__(self, qid, method, params):
        self.qid = qid
        self.method = method
        if isinstance(params, dict):
            params = json.dumps(params).encode('utf8')
        elif isinstance(params, str):
            params = params.encode('utf8')
        self.params = params

    def __repr__(self):
        return "<CliRpcRequest(qid=%s, method=%s)>" % (self.qid, self.method)


class CliRpcResponse(object):
    """
    Result of a signing request. The error code is ErrorCode.OK and result contains the signed transaction if the
    request succeeded.
    """

    def __init__(self, error_code=ErrorCode.OK, error_info='', result=None):
        self.error_code = error_code
        self.error_info = error_info
        self.result = result

    def __repr__(self):
        return "<CliRpcResponse(error_code=%d, error_info=%s)>" % (self.error_code, self.error_info)

    @property
    def ok(self):
        return self.error_code == ErrorCode.OK

    def as_dict(self):
        return {
            'error_code': int(self.error_code),
            'error_info': self.error_info,
            'result': self.result,
        }


def _failed(req, error_code, msg):
    _logger.info("Cli Qid:%s %s error: %s" % (req.qid, req.method, msg))
    info = ERROR_DESCRIPTIONS[error_code]
    if msg:
        info = "%s: %s" % (info, msg)
    return CliRpcResponse(error_code, info)


def _parse_params(req, fields):
    if not isinstance(req.params, bytes):
        raise ValueError("Parameters must be JSON encoded bytes")
    params = json.loads(req.params.decode('utf8'))
    if not isinstance(params, dict):
        raise ValueError("Parameters must be a JSON object")
    for field in fields:
        if field not in params:
            raise ValueError("Missing parameter %s" % field)
    if not isinstance(params['raw_tx'], str):
        raise ValueError("Parameter raw_tx must be a hexadecimal string")
    return params


def _sign_and_serialize(req, rtx, signer, pub_keys=None, m=None):
    try:
        signature = signer.sign(rtx.signature_hash())
    except Exception as e:
        return _failed(req, ErrorCode.INTERNAL_ERROR, "signing failed: %s" % e)
    try:
        append_signature(rtx, signer, signature, pub_keys, m)
    except MultisigError as e:
        return _failed(req, ErrorCode.MULTISIG_ERROR, str(e))
    try:
        signed_tx = rtx.raw_hex()
    except (TransactionError, EncodingError) as e:
        return _failed(req, ErrorCode.INTERNAL_ERROR, "serialization failed: %s" % e)
    _logger.debug("Cli Qid:%s %s signed transaction %s" % (req.qid, req.method, rtx.txid))
    return CliRpcResponse(result={'signed_tx': signed_tx})


def sig_raw_transaction(req, signer):
    """
    Sign a raw transaction with a single key. If the transaction has no payer the address of the signer is used.

    Request parameters: {"raw_tx": <hex>}. Result: {"signed_tx": <hex>}

    :param req: Signing request
    :type req: CliRpcRequest
    :param signer: Account to sign with
    :type signer: Account

    :return CliRpcResponse:
    """
    try:
        params = _parse_params(req, ['raw_tx'])
        raw_tx = hexstring_to_bytes(params['raw_tx'])
    except (ValueError, EncodingError) as e:
        return _failed(req, ErrorCode.INVALID_PARAMS, str(e))
    try:
        tx = Transaction.parse_bytes(raw_tx)
    except TransactionError as e:
        return _failed(req, ErrorCode.INVALID_TRANSACTION, str(e))

    try:
        rtx = tx.resolve_payer(signer.address)
    except TransactionError as e:
        return _failed(req, ErrorCode.INTERNAL_ERROR, str(e))
    return _sign_and_serialize(req, rtx, signer)


def sig_multi_raw_transaction(req, signer):
    """
    Add the signature of one key of a multisig account to a raw transaction. If the transaction has no payer the
    multisig address is used.

    Request parameters: {"raw_tx": <hex>, "m": <int>, "pub_keys": [<hex>, ...]}. Result: {"signed_tx": <hex>}

    :param req: Signing request
    :type req: CliRpcRequest
    :param signer: Account to sign with, must be one of the keys of the multisig account
    :type signer: Account

    :return CliRpcResponse:
    """
    try:
        params = _parse_params(req, ['raw_tx', 'm', 'pub_keys'])
        raw_tx = hexstring_to_bytes(params['raw_tx'])
        m = params['m']
        if not isinstance(m, int) or isinstance(m, bool):
            raise ValueError("Parameter m must be an integer")
        if not isinstance(params['pub_keys'], list):
            raise ValueError("Parameter pub_keys must be a list")
        pub_keys = [Key(hexstring_to_bytes(pk), is_private=False).public_byte for pk in params['pub_keys']]
    except (ValueError, EncodingError, BKeyError) as e:
        return _failed(req, ErrorCode.INVALID_PARAMS, str(e))
    if not pub_keys:
        return _failed(req, ErrorCode.MULTISIG_ERROR, "EmptyKeySet: at least one public key is required")
    if len(pub_keys) > MULTI_SIG_MAX_PUBKEY_SIZE:
        return _failed(req, ErrorCode.MULTISIG_ERROR, "too many public keys, maximum is %d" %
                       MULTI_SIG_MAX_PUBKEY_SIZE)
    if not 1 <= m <= len(pub_keys):
        return _failed(req, ErrorCode.MULTISIG_ERROR, "invalid threshold %d for %d public keys" % (m, len(pub_keys)))
    try:
        tx = Transaction.parse_bytes(raw_tx)
    except TransactionError as e:
        return _failed(req, ErrorCode.INVALID_TRANSACTION, str(e))

    try:
        rtx = tx.resolve_payer(Address.from_multi_pubkeys(pub_keys, m))
    except (TransactionError, BKeyError) as e:
        return _failed(req, ErrorCode.INTERNAL_ERROR, str(e))
    return _sign_and_serialize(req, rtx, signer, pub_keys, m)
