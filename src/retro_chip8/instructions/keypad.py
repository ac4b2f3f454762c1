"""
キー入力命令（Ex9E, ExA1, Fx0A）の実装。
"""
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction
from retro_chip8.core.state import Chip8State
from .base import skip_next

# --- Ex9E: SKP Vx ---
# @intent:responsibility Vxのキーが押されていれば次の命令をスキップします。
def execute_skp(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if host.key_is_pressed is None:
        host.log("Key input not implemented")
        return
    if host.key_is_pressed(state.v[ins.x]):
        skip_next(state)

# --- ExA1: SKNP Vx ---
# @intent:responsibility Vxのキーが押されていなければ次の命令をスキップします。
def execute_sknp(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if host.key_is_pressed is None:
        host.log("Key input not implemented")
        return
    if not host.key_is_pressed(state.v[ins.x]):
        skip_next(state)

# --- Fx0A: LD Vx, K ---
# @intent:responsibility キーが押されるまでホスト側でブロックし、返された値をVxに格納します。
# @intent:rationale キャンセル（終了要求など）はホストの責務であり、その際に返された値もそのまま格納します。
# @intent:post-condition 整数以外が返された場合はログを出力し、Vxは変更しません。
def execute_ld_vx_k(state: Chip8State, host: HostCapabilities, ins: Instruction) -> None:
    if host.key_wait_press is None:
        host.log("Key wait not implemented")
        return
    key = host.key_wait_press()
    if not isinstance(key, int):
        host.log(f"Key wait returned non-integer value: {key!r}")
        return
    state.v[ins.x] = key & 0xFF
