"""
命令クラスと命令実装のマッピング定義。
トップレベルは上位ニブル（0-F）の16エントリで、クラス 0 / 8 / E / F は
下位フィールドでさらに分岐します。
"""
from typing import Callable, Dict

from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State
from .base import not_implemented
from . import alu
from . import control
from . import display
from . import keypad
from . import load

Executor = Callable[[Chip8State, HostCapabilities, Instruction], None]

# @intent:map 0nnn（nnnで分岐）
SYSTEM_MAP: Dict[int, Executor] = {
    0x0E0: display.execute_cls,
    0x0EE: control.execute_ret,
}

# @intent:map 8xyN（nで分岐）
ALU_MAP: Dict[int, Executor] = {
    0x0: alu.execute_ld_vx_vy,
    0x1: alu.execute_or,
    0x2: alu.execute_and,
    0x3: alu.execute_xor,
    0x4: alu.execute_add_vx_vy,
    0x5: alu.execute_sub,
    0x6: alu.execute_shr,
    0x7: alu.execute_subn,
    0xE: alu.execute_shl,
}

# @intent:map ExNN（nnで分岐）
KEYPAD_MAP: Dict[int, Executor] = {
    0x9E: keypad.execute_skp,
    0xA1: keypad.execute_sknp,
}

# @intent:map FxNN（nnで分岐）
MISC_MAP: Dict[int, Executor] = {
    0x07: load.execute_ld_vx_dt,
    0x0A: keypad.execute_ld_vx_k,
    0x15: load.execute_ld_dt_vx,
    0x18: load.execute_ld_st_vx,
    0x1E: load.execute_add_i_vx,
    0x29: load.execute_ld_f_vx,
    0x33: load.execute_ld_b_vx,
    0x55: load.execute_ld_mem_vx,
    0x65: load.execute_ld_vx_mem,
}

# @intent:responsibility 下位フィールドで二段目のテーブルを引く実行関数を生成します。
# @intent:post-condition 該当エントリがない命令は未実装としてログ出力され、状態は変更されません。
def _sub_dispatch(table: Dict[int, Executor], field_name: str) -> Executor:
    def execute(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
        executor = table.get(getattr(ins, field_name))
        if executor is None:
            not_implemented(state, host, ins)
            return
        executor(state, host, ins)
    return execute

# @intent:map 上位ニブル（命令クラス）から実行関数へのマッピングテーブル。
EXECUTE_MAP: Dict[int, Executor] = {
    0x0: _sub_dispatch(SYSTEM_MAP, "nnn"),
    0x1: control.execute_jp,
    0x2: control.execute_call,
    0x3: control.execute_se_vx_nn,
    0x4: control.execute_sne_vx_nn,
    0x5: control.execute_se_vx_vy,
    0x6: load.execute_ld_vx_nn,
    0x7: alu.execute_add_vx_nn,
    0x8: _sub_dispatch(ALU_MAP, "n"),
    0x9: control.execute_sne_vx_vy,
    0xA: load.execute_ld_i,
    0xB: control.execute_jp_v0,
    0xC: load.execute_rnd,
    0xD: display.execute_drw,
    0xE: _sub_dispatch(KEYPAD_MAP, "nn"),
    0xF: _sub_dispatch(MISC_MAP, "nn"),
}
