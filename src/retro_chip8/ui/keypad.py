"""
キーパッドモジュール。

ホストのキーボード入力をCHIP-8の4x4キーパッド（0-F）に変換し、
押下状態の問い合わせとブロッキングなキー待ちを提供します。
"""
from typing import Dict, List, Optional

from PySide6.QtCore import QEvent, QEventLoop, QObject, Qt, Signal

KEY_COUNT = 16

# @intent:responsibility 16キーの押下状態を保持します。Qtに依存しません。
class Keypad:
    def __init__(self):
        self._pressed: List[bool] = [False] * KEY_COUNT

    def press(self, key: int) -> None:
        self._pressed[key] = True

    def release(self, key: int) -> None:
        self._pressed[key] = False

    def release_all(self) -> None:
        self._pressed = [False] * KEY_COUNT

    # @intent:responsibility キーの押下状態を返します。0-F以外のキーは常にFalseです。
    def is_pressed(self, key: int) -> bool:
        if not 0 <= key < KEY_COUNT:
            return False
        return self._pressed[key]

def _key_code(key) -> int:
    return int(getattr(key, "value", key))

# @intent:responsibility キー名（"1", "Q" など）からQtのキーコードへの変換表を作成します。
# @intent:post-condition 解決できないキー名があればValueErrorを送出します。
def resolve_keymap(keymap: Dict[str, int]) -> Dict[int, int]:
    resolved = {}
    for name, index in keymap.items():
        qt_key = getattr(Qt.Key, f"Key_{name.upper()}", None)
        if qt_key is None:
            raise ValueError(f"Unknown key name in keymap: '{name}'")
        resolved[_key_code(qt_key)] = index
    return resolved

# @intent:responsibility Qtのキーイベントを監視してKeypadを更新し、キー待ちを提供します。
class KeypadController(QObject):
    """
    アプリケーションにイベントフィルタとしてインストールして使用します。
    """
    key_pressed = Signal(int)

    def __init__(self, keypad: Keypad, keymap: Dict[str, int], parent=None):
        super().__init__(parent)
        self.keypad = keypad
        self._keymap = resolve_keymap(keymap)
        self._wait_loop: Optional[QEventLoop] = None
        self._waited_key = 0

    @property
    def waiting(self) -> bool:
        return self._wait_loop is not None

    def eventFilter(self, obj, event) -> bool:
        if event.type() not in (QEvent.Type.KeyPress, QEvent.Type.KeyRelease):
            return False
        if event.isAutoRepeat():
            return False
        index = self._keymap.get(_key_code(event.key()))
        if index is None:
            return False
        if event.type() == QEvent.Type.KeyPress:
            self.handle_key_press(index)
        else:
            self.handle_key_release(index)
        return True

    def handle_key_press(self, index: int) -> None:
        self.keypad.press(index)
        self.key_pressed.emit(index)
        if self._wait_loop is not None:
            self._waited_key = index
            self._wait_loop.quit()

    def handle_key_release(self, index: int) -> None:
        self.keypad.release(index)

    # @intent:responsibility マップされたキーが押されるまでネストしたイベントループで待機します。
    # @intent:post-condition cancel_wait()で中断された場合は0を返します。
    def wait_press(self) -> int:
        self._waited_key = 0
        self._wait_loop = QEventLoop()
        try:
            self._wait_loop.exec()
        finally:
            self._wait_loop = None
        return self._waited_key

    def cancel_wait(self) -> None:
        if self._wait_loop is not None:
            self._waited_key = 0
            self._wait_loop.quit()
