# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
ヘッダやチェックサムを持たない生のCHIP-8プログラムイメージをロードします。
"""
from retro_chip8.common.errors import InvalidSizeError
from retro_chip8.core.machine import Machine
from retro_chip8.core.state import MAX_ROM_SIZE

class RomLoader:
    """
    ROMファイルを読み込み、マシンのプログラム領域（0x200〜）に配置するローダー。
    """
    # @intent:responsibility ファイルを読み込み、プログラム領域に収まるサイズか検証します。
    # @intent:post-condition マシンには触れません。サイズ不正時はInvalidSizeErrorを送出します。
    def read_rom(self, file_path: str) -> bytes:
        with open(file_path, 'rb') as f:
            data = f.read()
        if len(data) == 0 or len(data) > MAX_ROM_SIZE:
            raise InvalidSizeError(len(data), MAX_ROM_SIZE)
        return data

    # @intent:responsibility ファイルを読み込み、Machine.load_programに渡します。
    # @intent:post-condition ロードしたバイト数を返します。サイズ不正時はInvalidSizeErrorが伝播します。
    def load_rom(self, file_path: str, machine: Machine) -> int:
        data = self.read_rom(file_path)
        machine.load_program(data)
        return len(data)
