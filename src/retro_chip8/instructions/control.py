"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State, STACK_SIZE
from .base import skip_next

# --- 00EE: RET ---
# @intent:responsibility スタックから戻りアドレスをポップしてPCに設定します。
# @intent:pre-condition スタックが空の場合はログを出力し、何もしません。
def execute_ret(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if state.sp == 0:
        host.log(f"Stack underflow on RET for pc={state.pc:04X}")
        return
    state.sp -= 1
    state.pc = state.stack[state.sp]

# --- 1nnn: JP addr ---
def execute_jp(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.pc = ins.nnn

# --- 2nnn: CALL addr ---
# @intent:responsibility 戻りアドレス（次の命令）をプッシュしてからジャンプします。
# @intent:pre-condition スタックが満杯の場合は呼び出しを拒否し、ログを出力して次の命令へ進みます。
def execute_call(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if state.sp >= STACK_SIZE:
        host.log(f"Stack overflow on CALL 0x{ins.nnn:03X} for pc={ins.address:04X}")
        return
    # state.pc は Machine.step で既に次の命令を指している
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = ins.nnn

# --- 3xnn: SE Vx, byte ---
def execute_se_vx_nn(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if state.v[ins.x] == ins.nn:
        skip_next(state)

# --- 4xnn: SNE Vx, byte ---
def execute_sne_vx_nn(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if state.v[ins.x] != ins.nn:
        skip_next(state)

# --- 5xy0: SE Vx, Vy ---
def execute_se_vx_vy(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if state.v[ins.x] == state.v[ins.y]:
        skip_next(state)

# --- 9xy0: SNE Vx, Vy ---
def execute_sne_vx_vy(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if state.v[ins.x] != state.v[ins.y]:
        skip_next(state)

# --- Bnnn: JP V0, addr ---
def execute_jp_v0(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.pc = ins.nnn + state.v[0]
