# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#
#    Command line tool to create a transfer from a multisig account and sign it with all wallets
#
#    © 2026 October - 1200 Web Development <http://1200wd.com/>
#

import sys
import json
import logging
import argparse
from pathlib import Path
from zeepinlib.main import ZEEPINLIB_VERSION, DEFAULT_GAS_PRICE, DEFAULT_GAS_LIMIT, set_loglevel
from zeepinlib.wallet import Wallet, WalletError
from zeepinlib.multisig import derive_multisig_address, MultisigError
from zeepinlib.transactions import TransactionError
from zeepinlib.contracts import transfer_transaction, ContractError
from zeepinlib.coordinator import SigningCoordinator, SigningError

_logger = logging.getLogger('zeepinlib.tools.ztools')

MAX_GAS = 256 ** 8 - 1


def parse_args(args=None):
    parser = argparse.ArgumentParser(description='ZeepinLib multisig transfer signing tool')
    parser.add_argument('--config', '-c', required=True,
                        help="JSON file with asset, amount and list of wallets with password and address")
    parser.add_argument('--loglevel', '-l', default=None,
                        help="Log level, i.e. DEBUG or INFO. Log messages are written to standard error")
    parser.add_argument('--quiet', '-q', action='store_true',
                        help="Only output the signed transactions")
    parser.add_argument('--version', action='version', version='%(prog)s ' + ZEEPINLIB_VERSION)
    return parser.parse_args(args)


def load_config(filename):
    """
    Read and check batch configuration file

    :param filename: Path to JSON configuration
    :type filename: str

    :return dict:
    """
    path = Path(filename)
    try:
        cfg = json.loads(path.read_text())
    except OSError as e:
        raise ValueError("Could not read configuration file %s: %s" % (filename, e))
    if not isinstance(cfg, dict):
        raise ValueError("Configuration must be a JSON object")
    for field in ['Asset', 'Amount', 'Wallet']:
        if field not in cfg:
            raise ValueError("Missing field %s in configuration" % field)
    if not isinstance(cfg['Wallet'], list) or not cfg['Wallet']:
        raise ValueError("Configuration must contain a list of wallets")
    if not isinstance(cfg['Amount'], int) or isinstance(cfg['Amount'], bool):
        raise ValueError("Amount must be an integer")
    for field in ['GasPrice', 'GasLimit']:
        value = cfg.get(field, 0)
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= MAX_GAS:
            raise ValueError("%s must be an integer between 0 and %d" % (field, MAX_GAS))
    for wallet in cfg['Wallet']:
        if not isinstance(wallet, dict) or not isinstance(wallet.get('FilePath'), str):
            raise ValueError("Each wallet needs a FilePath")
        for field in ['Passwd', 'Address']:
            if wallet.get(field) is not None and not isinstance(wallet[field], str):
                raise ValueError("Wallet field %s must be a string" % field)
        # Relative wallet paths are relative to the configuration file
        wallet_path = Path(wallet['FilePath'])
        if not wallet_path.is_absolute() and not wallet_path.exists():
            wallet['FilePath'] = str(path.parent / wallet_path)
    return cfg


def open_accounts(cfg):
    accounts = []
    for wallet_cfg in cfg['Wallet']:
        wallet = Wallet(wallet_cfg['FilePath'])
        account = wallet.get_account(wallet_cfg.get('Passwd') or '', wallet_cfg.get('Address') or None)
        _logger.info("Using account: %s" % account.address.address)
        accounts.append(account)
    return accounts


def sign_multi_transfer(cfg):
    """
    Create a transfer from the multisig account of all wallets in the configuration to the first wallet's account
    and sign it with every wallet.

    :param cfg: Batch configuration as returned by :func:`load_config`
    :type cfg: dict

    :return (Address, list of str): Multisig address and signed transaction of each round
    """
    accounts = open_accounts(cfg)
    pub_keys = [acc.public_key for acc in accounts]
    multisig_address, m = derive_multisig_address(pub_keys)
    tx = transfer_transaction(cfg.get('GasPrice', DEFAULT_GAS_PRICE), cfg.get('GasLimit', DEFAULT_GAS_LIMIT),
                              cfg['Asset'], multisig_address, accounts[0].address, cfg['Amount'])
    coordinator = SigningCoordinator(accounts, pub_keys, m)
    return multisig_address, coordinator.run(tx.raw_hex())


def main(args=None):
    pa = parse_args(args)
    try:
        if pa.loglevel:
            set_loglevel(pa.loglevel)
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter('%(levelname)s %(name)s: %(message)s'))
            logging.getLogger('zeepinlib').addHandler(handler)
        cfg = load_config(pa.config)
        multisig_address, signed_txs = sign_multi_transfer(cfg)
    except ValueError as e:
        print("Invalid configuration: %s" % e, file=sys.stderr)
        return 1
    except (WalletError, MultisigError, ContractError, TransactionError) as e:
        print("Error: %s" % e, file=sys.stderr)
        return 1
    except SigningError as e:
        print("Signing failed at signer %s: error %d %s" % (e.signer_index, e.error_code, e.error_info),
              file=sys.stderr)
        return 1

    if not pa.quiet:
        print("Multisig address: %s" % multisig_address.address)
        print("Amount: %d %s" % (cfg['Amount'], cfg['Asset']))
    for i, signed_tx in enumerate(signed_txs):
        if pa.quiet:
            print(signed_tx)
        else:
            print("Signed transaction %d: %s" % (i, signed_tx))
    return 0


if __name__ == '__main__':
    sys.exit(main())
