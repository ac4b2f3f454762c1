from dataclasses import dataclass, field
from typing import Dict

# 一般的な 1234/QWER/ASDF/ZXCV 配列（左上4x4キーをCHIP-8キーパッドに対応付け）
DEFAULT_KEYMAP: Dict[str, int] = {
    "1": 0x1, "2": 0x2, "3": 0x3, "4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}

@dataclass
class DisplayConfig:
    scale: int = 10
    foreground: str = "#FFFFFF"
    background: str = "#000000"

@dataclass
class ExecutionConfig:
    tick_interval_ms: int = 1
    steps_per_tick: int = 1

@dataclass
class HostConfig:
    display: DisplayConfig = field(default_factory=DisplayConfig)
    execution: ExecutionConfig = field(default_factory=ExecutionConfig)
    keymap: Dict[str, int] = field(default_factory=lambda: dict(DEFAULT_KEYMAP))
    log_level: str = "INFO"
