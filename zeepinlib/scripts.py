# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    Programs - Build verification programs for addresses
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

from io import BytesIO
from zeepinlib.encoding import *
from zeepinlib.config.opcodes import *


_logger = logging.getLogger(__name__)


class ScriptError(Exception):
    """
    Handle Program class Exceptions

    """
    def __init__(self, msg=''):
        self.msg = msg
        _logger.error(msg)

    def __str__(self):
        return self.msg


def data_pack(data):
    """
    Add data length prefix to data string to include data in a program

    >>> data_pack(b'\\x01\\x02').hex()
    '020102'

    :param data: Data to be packed
    :type data: bytes

    :return bytes:
    """
    if len(data) <= 75:
        return len(data).to_bytes(1, 'little') + data
    elif len(data) < 0x100:
        return opcode('OP_PUSHDATA1') + len(data).to_bytes(1, 'little') + data
    elif len(data) < 0x10000:
        return opcode('OP_PUSHDATA2') + len(data).to_bytes(2, 'little') + data
    elif len(data) < 0x100000000:
        return opcode('OP_PUSHDATA4') + len(data).to_bytes(4, 'little') + data
    raise ScriptError("Data too large to include in a program: %d bytes" % len(data))


def num_pack(num):
    """
    Encode an integer as push command. Small numbers use the dedicated opcodes, others are pushed as little-endian
    two's complement data.

    >>> num_pack(3).hex()
    '53'

    :param num: Number to push
    :type num: int

    :return bytes:
    """
    if num == -1:
        return opcode('OP_PUSHM1')
    if num == 0:
        return opcode('OP_0')
    if 0 < num <= 16:
        return bytes([opcodes['OP_1'] - 1 + num])
    length = (num.bit_length() + 8) // 8
    return data_pack(num.to_bytes(length, 'little', signed=True))


class ProgramBuilder(object):
    """
    Build a verification program step by step. Used to derive addresses from one or more public keys.

    >>> ProgramBuilder().push_bytes(b'\\xab').push_opcode('OP_CHECKSIG').program.hex()
    '01abac'

    """

    def __init__(self):
        self._buffer = BytesIO()

    def push_num(self, num):
        self._buffer.write(num_pack(num))
        return self

    def push_bytes(self, data):
        if not isinstance(data, bytes):
            raise ScriptError("Only bytes can be pushed to a program, not %s" % type(data).__name__)
        self._buffer.write(data_pack(data))
        return self

    def push_opcode(self, name):
        if isinstance(name, int):
            if name not in opcodenames:
                raise ScriptError("Unknown opcode %d" % name)
            self._buffer.write(bytes([name]))
        else:
            if name not in opcodes:
                raise ScriptError("Unknown opcode %s" % name)
            self._buffer.write(opcode(name))
        return self

    @property
    def program(self):
        return self._buffer.getvalue()


def program_from_pubkey(public_key):
    """
    Create program which checks a signature for a single public key: PUSH(key) CHECKSIG

    :param public_key: Serialized public key
    :type public_key: bytes

    :return bytes:
    """
    return ProgramBuilder().push_bytes(public_key).push_opcode(op.op_checksig).program


def program_from_multi_pubkeys(public_keys, m):
    """
    Create M-of-N multi signature program: PUSH(m) PUSH(key_1) ... PUSH(key_n) PUSH(n) CHECKMULTISIG

    The keys are used in the order provided.

    :param public_keys: List of serialized public keys
    :type public_keys: list of bytes
    :param m: Number of signatures required
    :type m: int

    :return bytes:
    """
    n = len(public_keys)
    if not 1 <= m <= n:
        raise ScriptError("Invalid number of required signatures %d for %d keys" % (m, n))
    builder = ProgramBuilder().push_num(m)
    for public_key in public_keys:
        builder.push_bytes(public_key)
    return builder.push_num(n).push_opcode(op.op_checkmultisig).program


def program_commands(program):
    """
    Split a serialized program in a list of commands. Opcodes are returned as names, pushed data as bytes.

    >>> program_commands(bytes.fromhex('5101ab51ae'))
    ['OP_1', b'\\xab', 'OP_1', 'OP_CHECKMULTISIG']

    :param program: Serialized program
    :type program: bytes

    :return list:
    """
    s = BytesIO(program)
    commands = []
    while True:
        ch = s.read(1)
        if not ch:
            break
        code = ch[0]
        if 0 < code <= 75:
            size = code
        elif code == op.op_pushdata1:
            size = int.from_bytes(s.read(1), 'little')
        elif code == op.op_pushdata2:
            size = int.from_bytes(s.read(2), 'little')
        elif code == op.op_pushdata4:
            size = int.from_bytes(s.read(4), 'little')
        else:
            if code not in opcodenames:
                raise ScriptError("Unknown opcode %d in program" % code)
            commands.append(opcodenames[code])
            continue
        data = s.read(size)
        if len(data) != size:
            raise ScriptError("Program ends before end of pushed data")
        commands.append(data)
    return commands
