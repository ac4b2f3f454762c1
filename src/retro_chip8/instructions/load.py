"""
ロード／ストア命令（レジスタ、インデックス、タイマー、メモリ、乱数）の実装。
"""
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State, FONT_START_ADDRESS, FONT_GLYPH_SIZE
from .base import read_byte, write_byte

# --- 6xnn: LD Vx, byte ---
def execute_ld_vx_nn(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.v[ins.x] = ins.nn

# --- Annn: LD I, addr ---
def execute_ld_i(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.i = ins.nnn

# --- Cxnn: RND Vx, byte ---
# @intent:responsibility ホストの乱数バイトとnnの論理積をVxに設定します。
# @intent:pre-condition random_byteが未提供の場合はログを出力し、何もしません。
def execute_rnd(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if host.random_byte is None:
        host.log("Random byte generator not implemented")
        return
    state.v[ins.x] = (host.random_byte() & 0xFF) & ins.nn

# --- Fx07: LD Vx, DT ---
def execute_ld_vx_dt(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.v[ins.x] = state.delay_timer

# --- Fx15: LD DT, Vx ---
def execute_ld_dt_vx(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.delay_timer = state.v[ins.x]

# --- Fx18: LD ST, Vx ---
# @intent:responsibility サウンドタイマーを設定し、非ゼロであればホストにブザー開始を通知します。
def execute_ld_st_vx(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.sound_timer = state.v[ins.x]
    if state.sound_timer > 0 and host.sound_start is not None:
        host.sound_start()

# --- Fx1E: ADD I, Vx ---
# @intent:responsibility 8bit値を16bitのIに加算します。オーバーフローフラグは設定しません。
def execute_add_i_vx(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.i = (state.i + state.v[ins.x]) & 0xFFFF

# --- Fx29: LD F, Vx ---
# @intent:responsibility Vxの16進数字に対応する組み込みフォントのアドレスをIに設定します。
def execute_ld_f_vx(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    digit = state.v[ins.x]
    if digit > 0xF:
        host.log(f"Invalid font character: 0x{digit:02X}")
        return
    state.i = FONT_START_ADDRESS + digit * FONT_GLYPH_SIZE

# --- Fx33: LD B, Vx ---
# @intent:responsibility Vxの10進表現（百・十・一の位）を I, I+1, I+2 に格納します。
def execute_ld_b_vx(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    value = state.v[ins.x]
    write_byte(state, state.i, value // 100)
    write_byte(state, state.i + 1, (value // 10) % 10)
    write_byte(state, state.i + 2, value % 10)

# --- Fx55: LD [I], Vx ---
# @intent:responsibility V0..Vx（両端含む）をIから始まるメモリに格納します。Iは変更しません。
def execute_ld_mem_vx(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    for offset in range(ins.x + 1):
        write_byte(state, state.i + offset, state.v[offset])

# --- Fx65: LD Vx, [I] ---
# @intent:responsibility Iから始まるメモリを V0..Vx（両端含む）に読み込みます。Iは変更しません。
def execute_ld_vx_mem(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    for offset in range(ins.x + 1):
        state.v[offset] = read_byte(state, state.i + offset)
