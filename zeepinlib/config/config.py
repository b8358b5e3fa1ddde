# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    CONFIG - Configuration settings
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

import os
import configparser
from pathlib import Path

# General defaults
LOGLEVEL = 'WARNING'


# File locations
ZPL_CONFIG_FILE = ''
ZPL_INSTALL_DIR = Path(__file__).parents[1]
ZPL_DATA_DIR = ''
ZPL_LOG_FILE = ''

# Main
ENABLE_ZEEPINLIB_LOGGING = True

# Addresses
ADDRESS_LENGTH = 20
ADDRESS_VERSION_BYTE = b'\x17'
WIF_PREFIX = b'\x80'

# Transactions
TX_VERSION = 0
TX_TYPE_DEPLOY = 0xd0
TX_TYPE_INVOKE = 0xd1
TX_TYPES = {
    TX_TYPE_DEPLOY: 'deploy',
    TX_TYPE_INVOKE: 'invoke',
}
TX_MAX_SIG_SIZE = 16
MULTI_SIG_MAX_PUBKEY_SIZE = 16
DEFAULT_GAS_PRICE = 0
DEFAULT_GAS_LIMIT = 20000

# Virtual machine types used in invoke and deploy payloads
VM_TYPE_NATIVE = 0xff
VM_TYPE_NEOVM = 0x80
VM_TYPE_WASMVM = 0x90
VM_TYPES = {
    VM_TYPE_NATIVE: 'native',
    VM_TYPE_NEOVM: 'neovm',
    VM_TYPE_WASMVM: 'wasmvm',
}

# Transaction attribute usages
ATTRIBUTE_USAGES = {
    0x00: 'nonce',
    0x20: 'script',
    0x81: 'description_url',
    0x90: 'description',
}

# Signatures
SIGNATURE_SCHEME_SHA256_ECDSA = 0x01

# Native contracts
NATIVE_CONTRACT_VERSION = 0
NATIVE_CONTRACTS = {
    # <asset>: <contract address as hexstring>
    'zpt': '0000000000000000000000000000000000000001',
    'gala': '0000000000000000000000000000000000000002',
}
CONTRACT_METHOD_TRANSFER = 'transfer'

# Wallets
WALLET_VERSION = '1.1'
SCRYPT_N = 16384
SCRYPT_R = 8
SCRYPT_P = 8
SCRYPT_DKLEN = 64


def read_config():
    config = configparser.ConfigParser()

    def config_get(section, var, fallback, is_boolean=False):
        try:
            if is_boolean:
                val = config.getboolean(section, var, fallback=fallback)
            else:
                val = config.get(section, var, fallback=fallback)
            return val
        except (ValueError, configparser.Error):
            return fallback

    global ZPL_INSTALL_DIR, ZPL_DATA_DIR, ZPL_CONFIG_FILE
    global ZPL_LOG_FILE, LOGLEVEL, ENABLE_ZEEPINLIB_LOGGING
    global DEFAULT_GAS_PRICE, DEFAULT_GAS_LIMIT, TX_VERSION
    global SCRYPT_N, SCRYPT_R, SCRYPT_P

    # Read settings from configuration file provided in OS environment or ~/.zeepinlib/ directory
    config_file_name = os.environ.get('ZPL_CONFIG_FILE')
    if not config_file_name:
        ZPL_CONFIG_FILE = Path('~/.zeepinlib/config.ini').expanduser()
    else:
        ZPL_CONFIG_FILE = Path(config_file_name)
        if not ZPL_CONFIG_FILE.is_absolute():
            ZPL_CONFIG_FILE = Path(Path.home(), '.zeepinlib', ZPL_CONFIG_FILE)
        if not ZPL_CONFIG_FILE.exists():
            ZPL_CONFIG_FILE = Path(ZPL_INSTALL_DIR, 'data', config_file_name)
        if not ZPL_CONFIG_FILE.exists():
            raise IOError('Zeepinlib configuration file not found: %s' % str(ZPL_CONFIG_FILE))
    data = config.read(str(ZPL_CONFIG_FILE))
    ZPL_DATA_DIR = Path(config_get('locations', 'data_dir', fallback='~/.zeepinlib')).expanduser()
    ZPL_DATA_DIR.mkdir(parents=True, exist_ok=True)

    # Log settings
    ENABLE_ZEEPINLIB_LOGGING = config_get("logs", "enable_zeepinlib_logging", fallback=True, is_boolean=True)
    ZPL_LOG_FILE = Path(ZPL_DATA_DIR, config_get('logs', 'log_file', fallback='zeepinlib.log'))
    ZPL_LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    LOGLEVEL = config_get('logs', 'loglevel', fallback=LOGLEVEL)

    # Transaction settings
    DEFAULT_GAS_PRICE = int(config_get('transactions', 'gas_price', fallback=DEFAULT_GAS_PRICE))
    DEFAULT_GAS_LIMIT = int(config_get('transactions', 'gas_limit', fallback=DEFAULT_GAS_LIMIT))
    TX_VERSION = int(config_get('transactions', 'version', fallback=TX_VERSION))

    # Wallet settings
    SCRYPT_N = int(config_get('wallets', 'scrypt_n', fallback=SCRYPT_N))
    SCRYPT_R = int(config_get('wallets', 'scrypt_r', fallback=SCRYPT_R))
    SCRYPT_P = int(config_get('wallets', 'scrypt_p', fallback=SCRYPT_P))

    if not data:
        return False
    return True


# Copy default settings to the data directory if no configuration file is found there
def initialize_lib():
    global ZPL_INSTALL_DIR, ZPL_DATA_DIR
    config_file = Path(ZPL_DATA_DIR, 'config.ini')
    if config_file.exists():
        return

    from shutil import copyfile
    default_config = Path(ZPL_INSTALL_DIR, 'data', 'config.ini')
    if default_config.exists():
        copyfile(str(default_config), str(config_file))


# Initialize library
read_config()
ZEEPINLIB_VERSION = Path(ZPL_INSTALL_DIR, 'config/VERSION').open().read().strip()
initialize_lib()
