# retro_chip8/core/host.py
"""
Core Layer (ホストケイパビリティ)

コアが必要とする全てのI/O（描画、キー入力、乱数、時刻、音、診断ログ）を
ホストから注入するためのインターフェースを定義します。
各ケイパビリティは独立して省略可能で、省略時はコア側でno-opまたはログ出力に縮退します。
"""
from dataclasses import dataclass, fields
from typing import Callable, Optional

from retro_chip8.common.errors import InvalidCapabilitiesError

# @intent:responsibility ホストが提供するコールバック群を保持します。
# @intent:rationale 関数ポインタ構造体の代わりに、Noneを「未提供」として明示するOptionalフィールドで表現します。
@dataclass
class HostCapabilities:
    """
    ホストケイパビリティの束。

    clock: 単調増加するミリ秒相当の現在時刻を返す。
    display_clear / display_draw_pixel(x, y, state) / display_refresh: 描画通知。
    key_is_pressed(key) -> bool: キー 0-F の押下状態。
    key_wait_press() -> int: キーが押されるまでブロックし、その値を返す。
    sound_start / sound_stop: ブザーの開始・停止通知。
    random_byte() -> int: 一様分布の8bit値。
    debug_log(message): 自由形式の診断メッセージ。
    """
    clock: Optional[Callable[[], int]] = None
    display_clear: Optional[Callable[[], None]] = None
    display_draw_pixel: Optional[Callable[[int, int, bool], None]] = None
    display_refresh: Optional[Callable[[], None]] = None
    key_is_pressed: Optional[Callable[[int], bool]] = None
    key_wait_press: Optional[Callable[[], int]] = None
    sound_start: Optional[Callable[[], None]] = None
    sound_stop: Optional[Callable[[], None]] = None
    random_byte: Optional[Callable[[], int]] = None
    debug_log: Optional[Callable[[str], None]] = None

    # @intent:responsibility 全てのフィールドがNoneまたは呼び出し可能であることを検証します。
    # @intent:post-condition 不正なフィールドがあればInvalidCapabilitiesErrorを送出します。
    def validate(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None and not callable(value):
                raise InvalidCapabilitiesError(
                    f"Capability '{f.name}' must be callable or None, got {type(value).__name__}."
                )

    # @intent:responsibility debug_logが提供されていれば診断メッセージを渡します。
    def log(self, message: str) -> None:
        if self.debug_log is not None:
            self.debug_log(message)
