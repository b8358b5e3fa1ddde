# -*- coding: utf-8 -*-
#
#    ZeepinLib - Python ZeepinChain Transaction Signing Library
#    Virtual machine opcode definitions
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


import struct

# Opcodes 0x01 - 0x4b push the next 1 - 75 bytes and have no name
_opcodes = [
    ("OP_0", 0), ("OP_PUSHDATA1", 0x4c), "OP_PUSHDATA2", "OP_PUSHDATA4", "OP_PUSHM1", ("OP_1", 0x51),
    "OP_2", "OP_3", "OP_4", "OP_5", "OP_6", "OP_7", "OP_8", "OP_9", "OP_10", "OP_11", "OP_12", "OP_13", "OP_14",
    "OP_15", "OP_16", "OP_NOP", "OP_JMP", "OP_JMPIF", "OP_JMPIFNOT", "OP_CALL", "OP_RET", "OP_APPCALL",
    "OP_SYSCALL", "OP_TAILCALL", ("OP_DUPFROMALTSTACK", 0x6a), "OP_TOALTSTACK", "OP_FROMALTSTACK", "OP_XDROP",
    ("OP_XSWAP", 0x72), "OP_XTUCK", "OP_DEPTH", "OP_DROP", "OP_DUP", "OP_NIP", "OP_OVER", "OP_PICK", "OP_ROLL",
    "OP_ROT", "OP_SWAP", "OP_TUCK", "OP_CAT", "OP_SUBSTR", "OP_LEFT", "OP_RIGHT", "OP_SIZE", "OP_INVERT", "OP_AND",
    "OP_OR", "OP_XOR", "OP_EQUAL", ("OP_INC", 0x8b), "OP_DEC", "OP_SIGN", ("OP_NEGATE", 0x8f), "OP_ABS", "OP_NOT",
    "OP_NZ", "OP_ADD", "OP_SUB", "OP_MUL", "OP_DIV", "OP_MOD", "OP_SHL", "OP_SHR", "OP_BOOLAND", "OP_BOOLOR",
    "OP_NUMEQUAL", ("OP_NUMNOTEQUAL", 0x9e), "OP_LT", "OP_GT", "OP_LTE", "OP_GTE", "OP_MIN", "OP_MAX", "OP_WITHIN",
    ("OP_SHA1", 0xa7), "OP_SHA256", "OP_HASH160", "OP_HASH256", ("OP_CHECKSIG", 0xac), "OP_VERIFY",
    "OP_CHECKMULTISIG", ("OP_ARRAYSIZE", 0xc0), "OP_PACK", "OP_UNPACK", "OP_PICKITEM", "OP_SETITEM", "OP_NEWARRAY",
    "OP_NEWSTRUCT", "OP_NEWMAP", "OP_APPEND", "OP_REVERSE", "OP_REMOVE", "OP_HASKEY", "OP_KEYS", "OP_VALUES",
    ("OP_THROW", 0xf0), "OP_THROWIFNOT"
]


def _set_opcodes():
    count = 0
    cds = {}
    cds_rev = {}
    for opcode in _opcodes:
        if isinstance(opcode, tuple):
            var, count = opcode
        else:
            var = opcode
        cds.update({count: var})
        cds_rev.update({var: count})
        count += 1
    return cds, cds_rev


def opcode(name, as_bytes=True):
    """
    Get integer or byte character value of OP code by name.

    >>> opcode('OP_CHECKMULTISIG').hex()
    'ae'

    :param name: Name of OP code as defined in opcodenames
    :type name: str
    :param as_bytes: Return as byte or int? Default is bytes
    :type as_bytes: bool

    :return int, bytes:

    """
    opcode_int = opcodes[name]
    if as_bytes:
        return struct.pack('B', opcode_int)
    return opcode_int


opcodenames, opcodes = _set_opcodes()


class op:
    pass


for _name, _value in opcodes.items():
    setattr(op, _name.lower(), _value)
