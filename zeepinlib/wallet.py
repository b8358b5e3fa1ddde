# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    WALLET - Wallet files with password protected accounts
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
import base64
from pathlib import Path
from Crypto.Cipher import AES
from Crypto.Protocol.KDF import scrypt
from Crypto.Random import get_random_bytes
from zeepinlib.encoding import *
from zeepinlib.keys import Key, Account, Address, BKeyError

_logger = logging.getLogger(__name__)

ENCRYPTION_ALGORITHM = 'aes-256-gcm'
KEY_ALGORITHM = 'ECDSA'
KEY_CURVE = 'P-256'
SIGNATURE_SCHEME = 'SHA256withECDSA'


class WalletError(Exception):
    """
    Handle Wallet class Exceptions

    """
    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


def _derive_key(password, salt, n, r, p):
    if isinstance(password, str):
        password = password.encode('utf8')
    return scrypt(password, salt, SCRYPT_DKLEN, N=n, r=r, p=p)


def encrypt_private_key(private_key, address, password, salt, n=None, r=None, p=None):
    """
    Encrypt private key with a password. The key is derived from the password with scrypt and used for AES-256-GCM
    encryption, with the base-58 address as associated data.

    :param private_key: 32 byte private key
    :type private_key: bytes
    :param address: Base-58 address of the key
    :type address: str
    :param password: Password
    :type password: str
    :param salt: Random salt
    :type salt: bytes
    :param n: Scrypt CPU/memory cost, leave empty for default
    :type n: int
    :param r: Scrypt block size, leave empty for default
    :type r: int
    :param p: Scrypt parallelization, leave empty for default
    :type p: int

    :return bytes: Encrypted key with authentication tag
    """
    derived = _derive_key(password, salt, n or SCRYPT_N, r or SCRYPT_R, p or SCRYPT_P)
    cipher = AES.new(derived[32:], AES.MODE_GCM, nonce=derived[:12])
    cipher.update(address.encode('utf8'))
    encrypted, tag = cipher.encrypt_and_digest(private_key)
    return encrypted + tag


def decrypt_private_key(encrypted_key, address, password, salt, n=None, r=None, p=None):
    """
    Decrypt a private key encrypted with :func:`encrypt_private_key`. Raises WalletError if the password is
    incorrect or the data has been altered.

    :return bytes: 32 byte private key
    """
    if len(encrypted_key) <= 16:
        raise WalletError("Encrypted key too short")
    derived = _derive_key(password, salt, n or SCRYPT_N, r or SCRYPT_R, p or SCRYPT_P)
    cipher = AES.new(derived[32:], AES.MODE_GCM, nonce=derived[:12])
    cipher.update(address.encode('utf8'))
    try:
        return cipher.decrypt_and_verify(encrypted_key[:-16], encrypted_key[-16:])
    except ValueError:
        raise WalletError("Could not decrypt key of %s, incorrect password" % address)


class Wallet(object):
    """
    Wallet file with password protected accounts. The file is a JSON document with the scrypt parameters and a
    list of accounts with encrypted private keys.
    """

    @classmethod
    def create(cls, filename, name='', scrypt_n=None, scrypt_r=None, scrypt_p=None):
        """
        Create a new empty wallet file

        :param filename: Path of wallet file, must not exist
        :type filename: str, Path
        :param name: Name of the wallet
        :type name: str
        :param scrypt_n: Scrypt CPU/memory cost used for new accounts, leave empty for default from config
        :type scrypt_n: int

        :return Wallet:
        """
        path = Path(filename)
        if path.exists():
            raise WalletError("Wallet file %s already exists" % path)
        path.parent.mkdir(parents=True, exist_ok=True)
        data = {
            'name': name or path.stem,
            'version': WALLET_VERSION,
            'scrypt': {
                'n': scrypt_n or SCRYPT_N,
                'r': scrypt_r or SCRYPT_R,
                'p': scrypt_p or SCRYPT_P,
                'dkLen': SCRYPT_DKLEN,
            },
            'accounts': [],
        }
        path.write_text(json.dumps(data, indent=4))
        _logger.info("Created wallet %s" % path)
        return cls(path)

    def __init__(self, filename):
        """
        Open a wallet file

        :param filename: Path of wallet file
        :type filename: str, Path
        """
        self.filename = Path(filename)
        try:
            data = json.loads(self.filename.read_text())
        except OSError as e:
            raise WalletError("Could not open wallet file %s: %s" % (self.filename, e))
        except ValueError as e:
            raise WalletError("Invalid wallet file %s: %s" % (self.filename, e))
        if not isinstance(data, dict) or not isinstance(data.get('accounts', []), list):
            raise WalletError("Invalid wallet file %s: unexpected structure" % self.filename)
        scrypt_params = data.get('scrypt', {})
        self.name = data.get('name', '')
        self.version = data.get('version', WALLET_VERSION)
        self.scrypt_n = scrypt_params.get('n', SCRYPT_N)
        self.scrypt_r = scrypt_params.get('r', SCRYPT_R)
        self.scrypt_p = scrypt_params.get('p', SCRYPT_P)
        self.accounts = data.get('accounts', [])

    def __repr__(self):
        return "<Wallet(name=%s, accounts=%d)>" % (self.name, len(self.accounts))

    @property
    def default_address(self):
        for acc in self.accounts:
            if acc.get('isDefault'):
                return acc['address']
        return self.accounts[0]['address'] if self.accounts else None

    def add_key(self, key, password, label='', is_default=None):
        """
        Add a private key to this wallet, encrypted with the given password. Call :func:`save` to write the wallet
        to disk.

        :param key: Private key in any format accepted by the Key class
        :type key: Key, str, bytes, int
        :param password: Password to encrypt the private key
        :type password: str
        :param label: Label of the account
        :type label: str
        :param is_default: Make this the default account. Default is True for the first account only
        :type is_default: bool

        :return dict: The new account entry
        """
        if not isinstance(key, Key):
            try:
                key = Key(key)
            except BKeyError as e:
                raise WalletError("Invalid private key: %s" % e)
        if not key.is_private:
            raise WalletError("Only private keys can be added to a wallet")
        address = key.address()
        if address in [acc['address'] for acc in self.accounts]:
            raise WalletError("Account %s already in wallet" % address)
        if is_default is None:
            is_default = not self.accounts
        if is_default:
            for acc in self.accounts:
                acc['isDefault'] = False

        salt = get_random_bytes(16)
        encrypted = encrypt_private_key(key.private_byte, address, password, salt, self.scrypt_n, self.scrypt_r,
                                        self.scrypt_p)
        account = {
            'address': address,
            'enc-alg': ENCRYPTION_ALGORITHM,
            'key': base64.b64encode(encrypted).decode(),
            'algorithm': KEY_ALGORITHM,
            'salt': base64.b64encode(salt).decode(),
            'parameters': {'curve': KEY_CURVE},
            'label': label,
            'publicKey': key.public_hex,
            'signatureScheme': SIGNATURE_SCHEME,
            'isDefault': bool(is_default),
            'lock': False,
        }
        self.accounts.append(account)
        _logger.info("Added account %s to wallet %s" % (address, self.name))
        return account

    def save(self):
        """
        Write wallet to its file
        """
        data = {
            'name': self.name,
            'version': self.version,
            'scrypt': {
                'n': self.scrypt_n,
                'r': self.scrypt_r,
                'p': self.scrypt_p,
                'dkLen': SCRYPT_DKLEN,
            },
            'accounts': self.accounts,
        }
        self.filename.write_text(json.dumps(data, indent=4))

    def get_account(self, password, address=None):
        """
        Decrypt an account of this wallet and return it as signing Account

        :param password: Password of the account
        :type password: str
        :param address: Base-58 address of account, leave empty for the default account
        :type address: str

        :return Account:
        """
        if address is None:
            address = self.default_address
            if address is None:
                raise WalletError("Wallet %s has no accounts" % self.name)
        elif isinstance(address, Address):
            address = address.address
        entry = None
        for acc in self.accounts:
            if acc['address'] == address:
                entry = acc
                break
        if entry is None:
            raise WalletError("Account %s not found in wallet %s" % (address, self.name))
        if entry.get('enc-alg', ENCRYPTION_ALGORITHM) != ENCRYPTION_ALGORITHM:
            raise WalletError("Unsupported encryption algorithm %s" % entry['enc-alg'])
        try:
            encrypted = base64.b64decode(entry['key'])
            salt = base64.b64decode(entry['salt'])
        except (KeyError, ValueError) as e:
            raise WalletError("Invalid account entry %s: %s" % (address, e))
        private_key = decrypt_private_key(encrypted, address, password, salt, self.scrypt_n, self.scrypt_r,
                                          self.scrypt_p)
        key = Key(private_key)
        if key.address() != address:
            raise WalletError("Decrypted key does not match address %s" % address)
        return Account(key, entry.get('label', ''))

    def info(self):
        """
        Prints wallet information to standard output
        """
        print("=== WALLET ===")
        print(" Name                           %s" % self.name)
        print(" File                           %s" % self.filename)
        print(" Version                        %s" % self.version)
        print("= Accounts =")
        for acc in self.accounts:
            print(" %s %-20s %s" % (acc['address'], acc.get('label', ''), '(default)' if acc.get('isDefault') else ''))
