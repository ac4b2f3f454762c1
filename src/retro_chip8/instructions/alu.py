"""
算術・論理演算命令（7xnn, 8xyN）の実装。
フラグを伴う命令は「VFを先に書き、結果を後で書く」順序に従います。
そのため x == F の場合は演算結果がフラグを上書きします。
"""
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State, FLAG_REGISTER

# --- 7xnn: ADD Vx, byte ---
# @intent:responsibility 8bitラップアラウンドで加算します。VFは変更しません。
def execute_add_vx_nn(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.v[ins.x] = (state.v[ins.x] + ins.nn) & 0xFF

# --- 8xy0: LD Vx, Vy ---
def execute_ld_vx_vy(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.v[ins.x] = state.v[ins.y]

# --- 8xy1: OR Vx, Vy ---
def execute_or(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.v[ins.x] |= state.v[ins.y]

# --- 8xy2: AND Vx, Vy ---
def execute_and(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.v[ins.x] &= state.v[ins.y]

# --- 8xy3: XOR Vx, Vy ---
def execute_xor(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.v[ins.x] ^= state.v[ins.y]

# --- 8xy4: ADD Vx, Vy ---
# @intent:responsibility 加算し、キャリーをVFに設定します。
def execute_add_vx_vy(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    total = state.v[ins.x] + state.v[ins.y]
    state.v[FLAG_REGISTER] = 1 if total > 0xFF else 0
    state.v[ins.x] = total & 0xFF

# --- 8xy5: SUB Vx, Vy ---
# @intent:responsibility Vx - Vy を計算し、VFに NOT borrow（Vx > Vy）を設定します。
def execute_sub(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    vx, vy = state.v[ins.x], state.v[ins.y]
    state.v[FLAG_REGISTER] = 1 if vx > vy else 0
    state.v[ins.x] = (vx - vy) & 0xFF

# --- 8xy6: SHR Vx ---
# @intent:responsibility 1bit右シフトし、シフト前のLSBをVFに設定します（Vyは使用しません）。
def execute_shr(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    vx = state.v[ins.x]
    state.v[FLAG_REGISTER] = vx & 0x01
    state.v[ins.x] = vx >> 1

# --- 8xy7: SUBN Vx, Vy ---
# @intent:responsibility Vy - Vx を計算し、VFに NOT borrow（Vy > Vx）を設定します。
def execute_subn(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    vx, vy = state.v[ins.x], state.v[ins.y]
    state.v[FLAG_REGISTER] = 1 if vy > vx else 0
    state.v[ins.x] = (vy - vx) & 0xFF

# --- 8xyE: SHL Vx ---
# @intent:responsibility 1bit左シフトし、シフト前のMSBをVFに設定します。
def execute_shl(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    vx = state.v[ins.x]
    state.v[FLAG_REGISTER] = (vx & 0x80) >> 7
    state.v[ins.x] = (vx << 1) & 0xFF
