# src/retro_chip8/ui/app.py
"""
Qtアプリケーションのエントリポイント。
コマンドライン引数を解釈し、メインウィンドウを起動します。
"""
import argparse
import logging
import sys
from typing import List, Optional

from PySide6.QtWidgets import QApplication

from retro_chip8.common.errors import InvalidSizeError
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import HostConfig
from .main_window import MainWindow

logger = logging.getLogger(__name__)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="retro-chip8", description="CHIP-8 interpreter")
    parser.add_argument("rom", nargs="?", help="raw CHIP-8 program image to load and run")
    parser.add_argument("--config", metavar="FILE", help="YAML host configuration")
    parser.add_argument("--log-level", metavar="LEVEL", help="logging level (overrides the config file)")
    return parser

# @intent:responsibility アプリケーションを起動し、終了コードを返します。
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = ConfigLoader().load_from_file(args.config) if args.config else HostConfig()
    level = (args.log_level or config.log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.INFO),
                        format="[%(levelname)s] %(name)s: %(message)s")

    app = QApplication.instance() or QApplication(sys.argv[:1])
    main_win = MainWindow(config)
    if args.rom:
        try:
            main_win.load_rom(args.rom)
        except (OSError, InvalidSizeError) as e:
            logger.error("Failed to load ROM '%s': %s", args.rom, e)
            return 1
        main_win.start()
    main_win.show()
    return app.exec()

if __name__ == '__main__':
    sys.exit(main())
