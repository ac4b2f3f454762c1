"""
プロジェクト全体で使用される例外クラスを定義するモジュール。
生成時・ロード時のエラーのみが例外として報告されます。実行時の異常は例外にせず、
debug_log ケイパビリティ経由で記録されます。
"""

# @intent:responsibility ホストケイパビリティ群が不正な場合に送出されます。
class InvalidCapabilitiesError(TypeError):
    pass

# @intent:responsibility プログラムイメージのサイズが不正（0バイト、または上限超過）な場合に送出されます。
class InvalidSizeError(ValueError):
    def __init__(self, size: int, max_size: int):
        super().__init__(f"Invalid program size: {size} bytes (must be 1..{max_size}).")
        self.size = size
        self.max_size = max_size
