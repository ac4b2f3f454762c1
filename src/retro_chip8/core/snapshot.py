# retro_chip8/core/snapshot.py
"""
実行状態のスナップショット

デコード済み命令と、1ステップ実行後のマシン状態を記録するデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用います。
"""
from dataclasses import dataclass

from retro_chip8.core.state import Chip8State

# @intent:responsibility フェッチした16bit命令語と、そこから切り出した固定フィールドを保持します。
@dataclass(frozen=True)
class Instruction:
    """
    デコード済みのCHIP-8命令。

    raw: 命令語全体 (例: 0xD015)
    opcode: 上位4bit（命令クラス 0-F）
    x, y: 第2・第3ニブル（レジスタ番号）
    n: 最下位ニブル、nn: 下位8bit、nnn: 下位12bit
    address: 命令をフェッチしたアドレス
    """
    raw: int
    opcode: int
    x: int
    y: int
    n: int
    nn: int
    nnn: int
    address: int = 0

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    step_count: int
    mnemonic: str = ""  # 例: "DRW V0, V1, 5"

# @intent:responsibility 1ステップ実行した結果を記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    1ステップの実行結果。
    state は実行後のマシン状態への参照であり、コピーではありません。
    """
    state: Chip8State
    instruction: Instruction
    metadata: Metadata
