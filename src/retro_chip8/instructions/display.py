"""
表示命令（00E0, Dxyn）の実装。
"""
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State, DISPLAY_WIDTH, DISPLAY_HEIGHT, FLAG_REGISTER
from .base import read_byte

# --- 00E0: CLS ---
# @intent:responsibility フレームバッファを消去し、ホストに画面消去を通知します。
def execute_cls(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    state.display[:] = bytes(len(state.display))
    if host.display_clear is not None:
        host.display_clear()

# --- Dxyn: DRW Vx, Vy, nibble ---
# @intent:responsibility Iが指すn行のスプライトを(Vx, Vy)にXOR描画し、衝突をVFに設定します。
# @intent:rationale 画面端ではクリップせず、トーラス状に反対側へ折り返します。
# @intent:post-condition 反転したピクセルごとにdisplay_draw_pixelを通知し、最後に一度だけdisplay_refreshを通知します。
def execute_drw(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    x = state.v[ins.x] % DISPLAY_WIDTH
    y = state.v[ins.y] % DISPLAY_HEIGHT
    state.v[FLAG_REGISTER] = 0

    for row in range(ins.n):
        sprite_byte = read_byte(state, state.i + row)
        for col in range(8):
            if sprite_byte & (0x80 >> col) == 0:
                continue
            px = (x + col) % DISPLAY_WIDTH
            py = (y + row) % DISPLAY_HEIGHT
            index = py * DISPLAY_WIDTH + px

            if state.display[index]:
                state.v[FLAG_REGISTER] = 1  # Collision
            state.display[index] ^= 1

            if host.display_draw_pixel is not None:
                host.display_draw_pixel(px, py, state.display[index] == 1)

    if host.display_refresh is not None:
        host.display_refresh()
