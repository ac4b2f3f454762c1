import sys
import unittest
from PySide6.QtWidgets import QApplication
from retro_chip8.config.models import DEFAULT_KEYMAP
from retro_chip8.core.machine import Machine
from retro_chip8.ui.display_view import DisplayView
from retro_chip8.ui.host import create_capabilities, monotonic_ms, random_byte
from retro_chip8.ui.keypad import Keypad, KeypadController

class TestQtHostCapabilities(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if not QApplication.instance():
            cls.app = QApplication(sys.argv)
        else:
            cls.app = QApplication.instance()

    def setUp(self):
        self.display = DisplayView()
        self.controller = KeypadController(Keypad(), DEFAULT_KEYMAP)
        self.capabilities = create_capabilities(self.display, self.controller)

    def test_all_capabilities_provided(self):
        self.capabilities.validate()
        for name in ("clock", "display_clear", "display_draw_pixel", "display_refresh",
                     "key_is_pressed", "key_wait_press", "sound_start", "sound_stop",
                     "random_byte", "debug_log"):
            self.assertTrue(callable(getattr(self.capabilities, name)), name)

    def test_clock_and_random(self):
        first = monotonic_ms()
        self.assertGreaterEqual(monotonic_ms(), first)
        for _ in range(32):
            self.assertIn(random_byte(), range(256))

    # @intent:test_case_sound_pairing 開始（単発ビープ）と停止通知が独立して呼び出せることを検証します。
    def test_sound_start_and_stop(self):
        with self.assertLogs("retro_chip8.ui.host", level="DEBUG") as logs:
            self.capabilities.sound_start()
            self.capabilities.sound_stop()
        self.assertEqual(len(logs.records), 2)

    def test_sound_timer_drives_host(self):
        """
        LD ST, Vx で開始が通知され、タイマー満了時に停止が通知されることを検証します。
        """
        machine = Machine(self.capabilities)
        # LD V0, 0x01; LD ST, V0; JP 0x204
        machine.load_program(bytes([0x60, 0x01, 0xF0, 0x18, 0x12, 0x04]))
        with self.assertLogs("retro_chip8.ui.host", level="DEBUG") as logs:
            machine.step()
            machine.step()
            machine.get_state().last_tick_time -= 16
            machine.step()
        messages = [r.getMessage() for r in logs.records]
        self.assertEqual(messages, ["Sound start", "Sound stop"])
        self.assertEqual(machine.get_state().sound_timer, 0)

if __name__ == '__main__':
    unittest.main()
