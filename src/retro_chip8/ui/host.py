"""
Qtホスト用のケイパビリティ生成モジュール。
ウィジェットやキーパッドなどのホスト状態はインスタンスとして保持し、
グローバル変数は使用しません。
"""
import logging
import random
import time

from PySide6.QtWidgets import QApplication

from retro_chip8.core.host import HostCapabilities
from .display_view import DisplayView
from .keypad import KeypadController

core_logger = logging.getLogger("retro_chip8.core")
logger = logging.getLogger(__name__)

def monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000

def random_byte() -> int:
    return random.getrandbits(8)

def _sound_start() -> None:
    """
    QApplication.beep()による単発のビープです。持続音は鳴らさないため、_sound_stopで止める音はありません。
    """
    logger.debug("Sound start")
    QApplication.beep()

def _sound_stop() -> None:
    """サウンドタイマーが0になったことを記録するだけです。"""
    logger.debug("Sound stop")

# @intent:responsibility 表示ウィジェットとキーパッドを結線したHostCapabilitiesを生成します。
def create_capabilities(display: DisplayView, keypad_controller: KeypadController) -> HostCapabilities:
    return HostCapabilities(
        clock=monotonic_ms,
        display_clear=display.clear,
        display_draw_pixel=display.draw_pixel,
        display_refresh=display.refresh,
        key_is_pressed=keypad_controller.keypad.is_pressed,
        key_wait_press=keypad_controller.wait_press,
        sound_start=_sound_start,
        sound_stop=_sound_stop,
        random_byte=random_byte,
        debug_log=core_logger.debug,
    )
