"""
CHIP-8命令実装用の共通ユーティリティ。
"""
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State, MEMORY_SIZE

ADDRESS_MASK = MEMORY_SIZE - 1

# @intent:utility_function メモリから1バイト読み込みます。アドレスは4096でラップします。
def read_byte(state: Chip8State, addr: int) -> int:
    return state.memory[addr & ADDRESS_MASK]

# @intent:utility_function メモリへ1バイト書き込みます。アドレスは4096でラップします。
def write_byte(state: Chip8State, addr: int, val: int) -> None:
    state.memory[addr & ADDRESS_MASK] = val & 0xFF

# @intent:utility_function メモリから16bitワードをビッグエンディアン形式で読み込みます。
def read_word(state: Chip8State, addr: int) -> int:
    """Big-endian 16-bit read."""
    return (read_byte(state, addr) << 8) | read_byte(state, addr + 1)

# @intent:utility_function 次の命令をスキップします（PC += 2）。
def skip_next(state: Chip8State) -> None:
    state.pc = (state.pc + 2) & 0xFFFF

# @intent:utility_function 未実装・未定義の命令を診断ログに記録します。状態は変更しません。
def not_implemented(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    host.log(f"Instruction not implemented: 0x{ins.raw:04X} at pc=0x{ins.address:04X}")
