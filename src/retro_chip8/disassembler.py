# src/retro_chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
命令層のデコードロジックを再利用します。
"""
from typing import List

from retro_chip8.common.types import DisassemblyLine
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import MEMORY_SIZE
from retro_chip8.instructions import decode_instruction

_ALU_FORMATS = {
    0x0: "LD V{x:X}, V{y:X}",
    0x1: "OR V{x:X}, V{y:X}",
    0x2: "AND V{x:X}, V{y:X}",
    0x3: "XOR V{x:X}, V{y:X}",
    0x4: "ADD V{x:X}, V{y:X}",
    0x5: "SUB V{x:X}, V{y:X}",
    0x6: "SHR V{x:X}",
    0x7: "SUBN V{x:X}, V{y:X}",
    0xE: "SHL V{x:X}",
}

_MISC_FORMATS = {
    0x07: "LD V{x:X}, DT",
    0x0A: "LD V{x:X}, K",
    0x15: "LD DT, V{x:X}",
    0x18: "LD ST, V{x:X}",
    0x1E: "ADD I, V{x:X}",
    0x29: "LD F, V{x:X}",
    0x33: "LD B, V{x:X}",
    0x55: "LD [I], V{x:X}",
    0x65: "LD V{x:X}, [I]",
}

_CLASS_FORMATS = {
    0x1: "JP 0x{nnn:03X}",
    0x2: "CALL 0x{nnn:03X}",
    0x3: "SE V{x:X}, 0x{nn:02X}",
    0x4: "SNE V{x:X}, 0x{nn:02X}",
    0x5: "SE V{x:X}, V{y:X}",
    0x6: "LD V{x:X}, 0x{nn:02X}",
    0x7: "ADD V{x:X}, 0x{nn:02X}",
    0x9: "SNE V{x:X}, V{y:X}",
    0xA: "LD I, 0x{nnn:03X}",
    0xB: "JP V0, 0x{nnn:03X}",
    0xC: "RND V{x:X}, 0x{nn:02X}",
    0xD: "DRW V{x:X}, V{y:X}, {n}",
}

# @intent:responsibility デコード済み命令をニーモニック文字列に変換します。
# @intent:post-condition 定義されていない命令語は "DW 0xNNNN" として表現します。
def format_instruction(ins: Instruction) -> str:
    fmt = None
    if ins.opcode == 0x0:
        if ins.nnn == 0x0E0:
            return "CLS"
        if ins.nnn == 0x0EE:
            return "RET"
        fmt = "SYS 0x{nnn:03X}"
    elif ins.opcode == 0x8:
        fmt = _ALU_FORMATS.get(ins.n)
    elif ins.opcode == 0xE:
        if ins.nn == 0x9E:
            fmt = "SKP V{x:X}"
        elif ins.nn == 0xA1:
            fmt = "SKNP V{x:X}"
    elif ins.opcode == 0xF:
        fmt = _MISC_FORMATS.get(ins.nn)
    else:
        fmt = _CLASS_FORMATS.get(ins.opcode)

    if fmt is None:
        return f"DW 0x{ins.raw:04X}"
    return fmt.format(x=ins.x, y=ins.y, n=ins.n, nn=ins.nn, nnn=ins.nnn)

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
def disassemble(memory: bytes, start_addr: int, length: int) -> List[DisassemblyLine]:
    """
    指定された範囲のメモリを2バイト単位で逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, MEMORY_SIZE)

    # 末尾に1バイトだけ残る場合は命令語を構成できないため打ち切る
    while current_addr + 1 < end_addr:
        hi = memory[current_addr]
        lo = memory[current_addr + 1]
        ins = decode_instruction((hi << 8) | lo, current_addr)
        result.append((current_addr, f"{hi:02X} {lo:02X}", format_instruction(ins)))
        current_addr += 2

    return result
