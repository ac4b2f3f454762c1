import sys
import unittest
from PySide6.QtWidgets import QApplication
from retro_chip8.core.machine import Machine
from retro_chip8.ui.display_view import DisplayView
from retro_chip8.ui.host import create_capabilities
from retro_chip8.ui.keypad import Keypad, KeypadController
from retro_chip8.config.models import DEFAULT_KEYMAP

class TestDisplayView(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def test_initially_clear(self):
        view = DisplayView()
        self.assertFalse(view.is_lit(0, 0))
        self.assertGreaterEqual(view.minimumWidth(), 640)

    def test_draw_and_clear(self):
        view = DisplayView(scale=4)
        view.draw_pixel(10, 5, True)
        self.assertTrue(view.is_lit(10, 5))
        view.draw_pixel(10, 5, False)
        self.assertFalse(view.is_lit(10, 5))
        view.draw_pixel(63, 31, True)
        view.clear()
        self.assertFalse(view.is_lit(63, 31))

    def test_out_of_range_pixel_is_ignored(self):
        view = DisplayView()
        view.draw_pixel(64, 0, True)
        view.draw_pixel(0, 32, True)
        view.refresh()

    def test_machine_draws_through_capabilities(self):
        """
        Machineのスプライト描画がケイパビリティ経由でDisplayViewに反映されることを検証します。
        """
        view = DisplayView()
        controller = KeypadController(Keypad(), DEFAULT_KEYMAP)
        machine = Machine(create_capabilities(view, controller))
        # LD V0, 0x3F; LD I, 0x050 (フォント"0"); DRW V0, V1, 5
        machine.load_program(bytes([0x60, 0x3F, 0xA0, 0x50, 0xD0, 0x15]))
        for _ in range(3):
            machine.step()
        self.assertTrue(view.is_lit(63, 0))
        self.assertTrue(view.is_lit(0, 0))  # 折り返し
        self.assertEqual(view.is_lit(1, 1), machine.get_pixel(1, 1))

if __name__ == '__main__':
    unittest.main()
