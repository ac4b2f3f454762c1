"""
Display View モジュール。

コアから通知されるピクセル単位の変更を64x32のオフスクリーン画像に蓄積し、
リフレッシュ通知を受けたときに拡大表示します。
"""
from PySide6.QtWidgets import QWidget
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QImage, QPainter

from retro_chip8.core.state import DISPLAY_WIDTH, DISPLAY_HEIGHT

# @intent:responsibility CHIP-8のフレームバッファをホスト側で表現し、描画するウィジェット。
class DisplayView(QWidget):
    """
    display_clear / display_draw_pixel / display_refresh ケイパビリティの受け手となるウィジェット。
    """
    def __init__(self, scale: int = 10, foreground: str = "#FFFFFF", background: str = "#000000", parent=None):
        super().__init__(parent)
        self._foreground = QColor(foreground)
        self._background = QColor(background)
        self._image = QImage(DISPLAY_WIDTH, DISPLAY_HEIGHT, QImage.Format.Format_RGB32)
        self._image.fill(self._background)

        self.setMinimumSize(DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # @intent:responsibility ホスト側の表示をすべて背景色で塗りつぶします。
    def clear(self) -> None:
        self._image.fill(self._background)
        self.update()

    # @intent:responsibility 1ピクセルの点灯状態を更新します。範囲外の座標は無視します。
    def draw_pixel(self, x: int, y: int, state: bool) -> None:
        if not (0 <= x < DISPLAY_WIDTH and 0 <= y < DISPLAY_HEIGHT):
            return
        self._image.setPixelColor(x, y, self._foreground if state else self._background)

    # @intent:responsibility 蓄積されたフレームの再描画を要求します。
    def refresh(self) -> None:
        self.update()

    def is_lit(self, x: int, y: int) -> bool:
        return self._image.pixel(x, y) == self._foreground.rgb()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(self.rect(), self._image)
        painter.end()
