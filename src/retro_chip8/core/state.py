# retro_chip8/core/state.py
"""
Core Layer (マシン状態)

このモジュールは、CHIP-8仮想マシンの全状態（メモリ、レジスタ、スタック、
フレームバッファ、タイマー）を保持するデータ構造と、アーキテクチャ定数を定義します。
"""
from dataclasses import dataclass, field
from typing import List

# @intent:constant CHIP-8のアドレス空間・表示・レジスタ構成を定義します。
MEMORY_SIZE = 4096
DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
REGISTER_COUNT = 16
STACK_SIZE = 16
PROGRAM_START_ADDRESS = 0x200
MAX_ROM_SIZE = MEMORY_SIZE - PROGRAM_START_ADDRESS

FLAG_REGISTER = REGISTER_COUNT - 1  # VF

# @intent:constant 組み込みフォント（16進数字 0-F、各5バイト）の配置。
# 0x000からではなく0x050から配置する（一般的なインタプリタと同じ配置で、Fx29の結果もこれに従う）。
FONT_START_ADDRESS = 0x050
FONT_GLYPH_SIZE = 5
FONT_SIZE = 16 * FONT_GLYPH_SIZE

# @intent:constant タイマーが1減算されるまでの経過時間（ホストクロック単位、約60Hz）。
TIMER_QUANTUM = 16

FONT_DATA = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:responsibility CHIP-8マシンの全ての状態を保持します。
# @intent:rationale 状態はMachineが排他的に所有します。モジュールレベルの可変状態は持ちません。
@dataclass
class Chip8State:
    """
    CHIP-8マシンの状態を保持するデータクラス。
    display は行優先の1ピクセル1バイト（0 または 1）です。
    """
    pc: int = PROGRAM_START_ADDRESS  # Program Counter
    sp: int = 0x00                   # Stack Pointer (次に書き込むスロット)
    i: int = 0x0000                  # Index Register
    delay_timer: int = 0x00
    sound_timer: int = 0x00
    last_tick_time: int = 0          # タイマーが最後に減算された時刻
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    memory: bytearray = field(default_factory=lambda: bytearray(MEMORY_SIZE))
    display: bytearray = field(default_factory=lambda: bytearray(DISPLAY_WIDTH * DISPLAY_HEIGHT))

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    # @intent:accessor フレームバッファの1ピクセルの点灯状態を返します。
    def pixel(self, x: int, y: int) -> bool:
        return self.display[y * DISPLAY_WIDTH + x] != 0
