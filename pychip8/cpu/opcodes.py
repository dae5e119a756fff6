"""Opcode decoding for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final, Mapping


class Op(Enum):
    """Instruction variants. Values are the conventional nibble patterns."""

    SYS = "0NNN"
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1NNN"
    CALL = "2NNN"
    SKIP_EQ = "3XKK"
    SKIP_NE = "4XKK"
    SKIP_REG_EQ = "5XY0"
    SET_REG = "6XKK"
    ADD_CONST = "7XKK"
    COPY_REG = "8XY0"
    OR_REG = "8XY1"
    AND_REG = "8XY2"
    XOR_REG = "8XY3"
    ADD_REG = "8XY4"
    SUB_REG = "8XY5"
    SHR_REG = "8XY6"
    SUB_REG_REV = "8XY7"
    SHL_REG = "8XYE"
    SKIP_REG_NE = "9XY0"
    SET_I = "ANNN"
    JUMP_INDIRECT = "BNNN"
    RANDOM = "CXKK"
    DRAW = "DXYN"
    SKIP_KEY = "EX9E"
    SKIP_NOT_KEY = "EXA1"
    READ_DELAY = "FX07"
    AWAIT_KEY = "FX0A"
    SET_DELAY = "FX15"
    SET_SOUND = "FX18"
    ADD_I = "FX1E"
    FONT_SPRITE = "FX29"
    STORE_BCD = "FX33"
    STORE_REGS = "FX55"
    LOAD_REGS = "FX65"
    UNKNOWN = "????"


# (mnemonic, operand layout, handler)
_OP_INFO: Final[Mapping[Op, tuple[str, str, str]]] = {
    Op.SYS: ("SYS", "{nnn}", "op_sys"),
    Op.CLEAR_SCREEN: ("CLS", "", "op_clear_screen"),
    Op.RETURN: ("RET", "", "op_return"),
    Op.JUMP: ("JP", "{nnn}", "op_jump"),
    Op.CALL: ("CALL", "{nnn}", "op_call"),
    Op.SKIP_EQ: ("SE", "{vx}, {kk}", "op_skip_eq"),
    Op.SKIP_NE: ("SNE", "{vx}, {kk}", "op_skip_ne"),
    Op.SKIP_REG_EQ: ("SE", "{vx}, {vy}", "op_skip_reg_eq"),
    Op.SET_REG: ("LD", "{vx}, {kk}", "op_set_reg"),
    Op.ADD_CONST: ("ADD", "{vx}, {kk}", "op_add_const"),
    Op.COPY_REG: ("LD", "{vx}, {vy}", "op_copy_reg"),
    Op.OR_REG: ("OR", "{vx}, {vy}", "op_or_reg"),
    Op.AND_REG: ("AND", "{vx}, {vy}", "op_and_reg"),
    Op.XOR_REG: ("XOR", "{vx}, {vy}", "op_xor_reg"),
    Op.ADD_REG: ("ADD", "{vx}, {vy}", "op_add_reg"),
    Op.SUB_REG: ("SUB", "{vx}, {vy}", "op_sub_reg"),
    Op.SHR_REG: ("SHR", "{vx}, {vy}", "op_shr_reg"),
    Op.SUB_REG_REV: ("SUBN", "{vx}, {vy}", "op_sub_reg_rev"),
    Op.SHL_REG: ("SHL", "{vx}, {vy}", "op_shl_reg"),
    Op.SKIP_REG_NE: ("SNE", "{vx}, {vy}", "op_skip_reg_ne"),
    Op.SET_I: ("LD", "I, {nnn}", "op_set_i"),
    Op.JUMP_INDIRECT: ("JP", "V0, {nnn}", "op_jump_indirect"),
    Op.RANDOM: ("RND", "{vx}, {kk}", "op_random"),
    Op.DRAW: ("DRW", "{vx}, {vy}, {n}", "op_draw"),
    Op.SKIP_KEY: ("SKP", "{vx}", "op_skip_key"),
    Op.SKIP_NOT_KEY: ("SKNP", "{vx}", "op_skip_not_key"),
    Op.READ_DELAY: ("LD", "{vx}, DT", "op_read_delay"),
    Op.AWAIT_KEY: ("LD", "{vx}, K", "op_await_key"),
    Op.SET_DELAY: ("LD", "DT, {vx}", "op_set_delay"),
    Op.SET_SOUND: ("LD", "ST, {vx}", "op_set_sound"),
    Op.ADD_I: ("ADD", "I, {vx}", "op_add_i"),
    Op.FONT_SPRITE: ("LD", "F, {vx}", "op_font_sprite"),
    Op.STORE_BCD: ("LD", "B, {vx}", "op_store_bcd"),
    Op.STORE_REGS: ("LD", "[I], {vx}", "op_store_regs"),
    Op.LOAD_REGS: ("LD", "{vx}, [I]", "op_load_regs"),
    Op.UNKNOWN: ("???", "{word}", "op_unknown"),
}

_ALU_OPS: Final[Mapping[int, Op]] = {
    0x0: Op.COPY_REG,
    0x1: Op.OR_REG,
    0x2: Op.AND_REG,
    0x3: Op.XOR_REG,
    0x4: Op.ADD_REG,
    0x5: Op.SUB_REG,
    0x6: Op.SHR_REG,
    0x7: Op.SUB_REG_REV,
    0xE: Op.SHL_REG,
}

_KEY_OPS: Final[Mapping[int, Op]] = {
    0x9E: Op.SKIP_KEY,
    0xA1: Op.SKIP_NOT_KEY,
}

_MISC_OPS: Final[Mapping[int, Op]] = {
    0x07: Op.READ_DELAY,
    0x0A: Op.AWAIT_KEY,
    0x15: Op.SET_DELAY,
    0x18: Op.SET_SOUND,
    0x1E: Op.ADD_I,
    0x29: Op.FONT_SPRITE,
    0x33: Op.STORE_BCD,
    0x55: Op.STORE_REGS,
    0x65: Op.LOAD_REGS,
}

# families whose variant is fully determined by the high nibble
_FIXED_FAMILIES: Final[Mapping[int, Op]] = {
    0x1: Op.JUMP,
    0x2: Op.CALL,
    0x3: Op.SKIP_EQ,
    0x4: Op.SKIP_NE,
    0x5: Op.SKIP_REG_EQ,
    0x6: Op.SET_REG,
    0x7: Op.ADD_CONST,
    0x9: Op.SKIP_REG_NE,
    0xA: Op.SET_I,
    0xB: Op.JUMP_INDIRECT,
    0xC: Op.RANDOM,
    0xD: Op.DRAW,
}


@dataclass(frozen=True)
class Instruction:
    """A decoded opcode together with all of its positional fields.

    Every field is extracted for every word; which ones are meaningful depends
    on ``op``.
    """

    op: Op
    word: int

    @property
    def x(self) -> int:
        return (self.word >> 8) & 0xF

    @property
    def y(self) -> int:
        return (self.word >> 4) & 0xF

    @property
    def n(self) -> int:
        return self.word & 0xF

    @property
    def kk(self) -> int:
        return self.word & 0xFF

    @property
    def nnn(self) -> int:
        return self.word & 0xFFF

    @property
    def mnemonic(self) -> str:
        return _OP_INFO[self.op][0]

    @property
    def handler(self) -> str:
        return _OP_INFO[self.op][2]

    def disassemble(self) -> str:
        layout = _OP_INFO[self.op][1]
        operands = layout.format(
            vx=f"V{self.x:X}",
            vy=f"V{self.y:X}",
            kk=f"{self.kk:#04x}",
            nnn=f"{self.nnn:#05x}",
            n=self.n,
            word=f"{self.word:#06x}",
        )
        return f"{self.mnemonic} {operands}" if operands else self.mnemonic

    def __str__(self) -> str:
        return self.disassemble()


def decode(word: int) -> Instruction:
    """Map a 16-bit word to its instruction. Never fails."""

    word &= 0xFFFF
    family = word >> 12

    if family == 0x0:
        if word == 0x00E0:
            op = Op.CLEAR_SCREEN
        elif word == 0x00EE:
            op = Op.RETURN
        else:
            op = Op.SYS
    elif family == 0x8:
        op = _ALU_OPS.get(word & 0xF, Op.UNKNOWN)
    elif family == 0xE:
        op = _KEY_OPS.get(word & 0xFF, Op.UNKNOWN)
    elif family == 0xF:
        op = _MISC_OPS.get(word & 0xFF, Op.UNKNOWN)
    else:
        op = _FIXED_FAMILIES[family]
    return Instruction(op, word)


__all__ = ["Instruction", "Op", "decode"]
