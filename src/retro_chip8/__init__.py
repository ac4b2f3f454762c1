"""
retro_chip8: CHIP-8 仮想マシンのインタプリタと、そのQtホスト。
"""
__version__ = "0.1.0"
