# tests/conftest.py
"""
テスト共通の設定とフィクスチャ。
"""
import os

import pytest

# ディスプレイのないCI環境でもQtウィジェットを生成できるようにする
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.machine import Machine
from retro_chip8.core.state import PROGRAM_START_ADDRESS


# @intent:test_helper ホストへの通知をすべて記録するフェイクホスト。
class RecordingHost:
    def __init__(self):
        self.now = 0
        self.logs = []
        self.pixels = []
        self.clears = 0
        self.refreshes = 0
        self.sound_starts = 0
        self.sound_stops = 0
        self.pressed = set()
        self.wait_result = 0
        self.random_value = 0xFF

    def capabilities(self, **overrides) -> HostCapabilities:
        caps = dict(
            clock=lambda: self.now,
            display_clear=self._clear,
            display_draw_pixel=lambda x, y, state: self.pixels.append((x, y, state)),
            display_refresh=self._refresh,
            key_is_pressed=lambda key: key in self.pressed,
            key_wait_press=lambda: self.wait_result,
            sound_start=self._sound_start,
            sound_stop=self._sound_stop,
            random_byte=lambda: self.random_value,
            debug_log=self.logs.append,
        )
        caps.update(overrides)
        return HostCapabilities(**caps)

    def _clear(self):
        self.clears += 1

    def _refresh(self):
        self.refreshes += 1

    def _sound_start(self):
        self.sound_starts += 1

    def _sound_stop(self):
        self.sound_stops += 1


@pytest.fixture
def host():
    return RecordingHost()


@pytest.fixture
def machine(host):
    return Machine(host.capabilities())


# @intent:test_helper 命令語の列をROMとしてロードします。
def load_words(machine: Machine, *words: int) -> None:
    data = bytearray()
    for word in words:
        data += bytes([(word >> 8) & 0xFF, word & 0xFF])
    machine.load_program(bytes(data))


@pytest.fixture
def run():
    """
    命令語をロードし、その数だけstepする関数を返します。
    """
    def _run(machine: Machine, *words: int, steps: int = None):
        load_words(machine, *words)
        for _ in range(len(words) if steps is None else steps):
            machine.step()
        return machine.get_state()
    return _run


@pytest.fixture
def program_start():
    return PROGRAM_START_ADDRESS


@pytest.fixture
def load():
    return load_words
