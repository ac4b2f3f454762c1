"""
CHIP-8命令セット実装パッケージ。
"""
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State
from .maps import EXECUTE_MAP

# @intent:responsibility 16bit命令語から固定フィールドを切り出します。
def decode_instruction(word: int, address: int = 0) -> Instruction:
    """
    命令語をデコードし、Instructionオブジェクトを返します。
    CHIP-8は全命令が2バイト固定長で、フィールド位置も固定です。
    """
    return Instruction(
        raw=word,
        opcode=(word & 0xF000) >> 12,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        nn=word & 0x00FF,
        nnn=word & 0x0FFF,
        address=address,
    )

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(ins: Instruction, state: Chip8State, host: HostCapabilities) -> None:
    """
    デコードされた命令を実行し、マシンの状態を変更します。
    """
    EXECUTE_MAP[ins.opcode](state, host, ins)
