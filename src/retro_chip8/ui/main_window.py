# src/retro_chip8/ui/main_window.py
"""
メインウィンドウの実装。
表示ウィジェット・レジスタビュー・実行制御を保持し、QTimerでマシンのステップループを駆動します。
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QMainWindow, QApplication, QDockWidget, QToolBar, QLabel, QFileDialog, QMessageBox
from PySide6.QtGui import QAction, QCloseEvent
from PySide6.QtCore import Qt, QTimer, Slot

from retro_chip8.common.errors import InvalidSizeError
from retro_chip8.config.models import HostConfig
from retro_chip8.core.machine import Machine
from retro_chip8.core.snapshot import Snapshot
from retro_chip8.loader.loader import RomLoader
from .display_view import DisplayView
from .host import create_capabilities
from .keypad import Keypad, KeypadController
from .register_view import RegisterView

logger = logging.getLogger(__name__)

# インスペクタ表示の更新間隔。ステップ毎には更新しない。
INSPECTOR_INTERVAL_MS = 100

# @intent:responsibility アプリケーションのメインウィンドウを定義し、ホスト側の状態をすべてインスタンスとして保持します。
class MainWindow(QMainWindow):
    def __init__(self, config: Optional[HostConfig] = None, parent=None):
        super(MainWindow, self).__init__(parent)
        self._config = config or HostConfig()
        self._rom_path: Optional[str] = None
        self._last_snapshot: Optional[Snapshot] = None
        # Fx0A のキー待ち中にタイマーが再入しないためのガード
        self._stepping = False

        self.setWindowTitle("Retro CHIP-8")

        self._setup_backend()
        self._create_toolbar()
        self._create_menus()
        self._create_status_inspector()

        self.status_label = QLabel("No ROM loaded", self)
        self.statusBar().addWidget(self.status_label)

        self._step_timer = QTimer(self)
        self._step_timer.setInterval(self._config.execution.tick_interval_ms)
        self._step_timer.timeout.connect(self._on_tick)

        self._inspector_timer = QTimer(self)
        self._inspector_timer.setInterval(INSPECTOR_INTERVAL_MS)
        self._inspector_timer.timeout.connect(self._update_inspector)

        self._update_ui_state(False)

    # @intent:responsibility 表示・キーパッド・マシンを生成し、ケイパビリティで結線します。
    def _setup_backend(self):
        display_cfg = self._config.display
        self.display_view = DisplayView(display_cfg.scale, display_cfg.foreground, display_cfg.background, self)
        self.setCentralWidget(self.display_view)

        self.keypad_controller = KeypadController(Keypad(), self._config.keymap, self)
        app = QApplication.instance()
        if app is not None:
            app.installEventFilter(self.keypad_controller)

        self.machine = Machine(create_capabilities(self.display_view, self.keypad_controller))

    def _create_toolbar(self):
        toolbar = QToolBar("Main Toolbar")
        self.addToolBar(toolbar)

        self.run_action = QAction("Run", self)
        self.run_action.triggered.connect(self.start)
        toolbar.addAction(self.run_action)

        self.stop_action = QAction("Stop", self)
        self.stop_action.triggered.connect(self.stop)
        toolbar.addAction(self.stop_action)

        self.step_action = QAction("Step", self)
        self.step_action.triggered.connect(self.step_once)
        toolbar.addAction(self.step_action)

        self.reset_action = QAction("Reset", self)
        self.reset_action.triggered.connect(self.reset_machine)
        toolbar.addAction(self.reset_action)

    def _create_menus(self):
        file_menu = self.menuBar().addMenu("File")
        self.load_rom_action = QAction("Load ROM...", self)
        self.load_rom_action.setShortcut("Ctrl+O")
        self.load_rom_action.triggered.connect(self._load_rom_dialog)
        file_menu.addAction(self.load_rom_action)

    def _create_status_inspector(self):
        dock = QDockWidget("Registers", self)
        dock.setAllowedAreas(Qt.DockWidgetArea.RightDockWidgetArea)
        self.register_view = RegisterView()
        self.register_view.set_machine(self.machine)
        dock.setWidget(self.register_view)
        self.addDockWidget(Qt.DockWidgetArea.RightDockWidgetArea, dock)

    # @intent:responsibility 実行状態に応じてUIコンポーネントの有効/無効を切り替えます。
    def _update_ui_state(self, is_running: bool):
        has_rom = self._rom_path is not None
        self.load_rom_action.setEnabled(not is_running)
        self.run_action.setEnabled(has_rom and not is_running)
        self.step_action.setEnabled(has_rom and not is_running)
        self.reset_action.setEnabled(has_rom)
        self.stop_action.setEnabled(is_running)

    @property
    def is_running(self) -> bool:
        return self._step_timer.isActive()

    # @intent:responsibility ROMを読み込んで検証し、マシンをリセットしてから配置します。
    # @intent:post-condition 読み込みに失敗した場合は例外を送出し、マシンの状態と以前のROMパスは変更しません。
    def load_rom(self, path: str) -> int:
        data = RomLoader().read_rom(path)
        self.stop()
        self.machine.reset()
        self.machine.load_program(data)
        size = len(data)
        self._rom_path = path
        logger.info("Loaded ROM '%s' size: %d B", path, size)
        self.status_label.setText(f"Loaded {path} ({size} B)")
        self._update_inspector()
        self._update_ui_state(False)
        return size

    @Slot()
    def _load_rom_dialog(self):
        file_name, _ = QFileDialog.getOpenFileName(self, "Open CHIP-8 ROM", "", "CHIP-8 ROMs (*.ch8 *.c8);;All Files (*)")
        if file_name:
            try:
                self.load_rom(file_name)
            except (OSError, InvalidSizeError) as e:
                QMessageBox.critical(self, "Error", f"Failed to load ROM: {e}")

    @Slot()
    def start(self):
        if self._rom_path is None:
            return
        self._step_timer.start()
        self._inspector_timer.start()
        self._update_ui_state(True)

    @Slot()
    def stop(self):
        self._step_timer.stop()
        self._inspector_timer.stop()
        self.keypad_controller.cancel_wait()
        self._update_ui_state(False)
        self._update_inspector()

    @Slot()
    def step_once(self):
        self._run_steps(1)
        self._update_inspector()

    # @intent:responsibility マシンを初期状態に戻し、現在のROMを再ロードします。
    @Slot()
    def reset_machine(self):
        if self._rom_path is None:
            return
        was_running = self.is_running
        try:
            self.load_rom(self._rom_path)
        except (OSError, InvalidSizeError) as e:
            QMessageBox.critical(self, "Error", f"Failed to reload ROM: {e}")
            return
        if was_running:
            self.start()

    @Slot()
    def _on_tick(self):
        self._run_steps(self._config.execution.steps_per_tick)

    def _run_steps(self, count: int) -> None:
        if self._stepping:
            return
        self._stepping = True
        try:
            for _ in range(count):
                self._last_snapshot = self.machine.step()
        finally:
            self._stepping = False

    # @intent:responsibility レジスタビューとステータス表示を現在の状態で更新します。
    @Slot()
    def _update_inspector(self):
        self.register_view.update_registers()
        snapshot = self._last_snapshot
        if snapshot is not None:
            ins = snapshot.instruction
            self.status_label.setText(
                f"PC=0x{self.machine.get_state().pc:04X}  last: 0x{ins.address:04X} {snapshot.metadata.mnemonic}"
                f"  steps={snapshot.metadata.step_count}"
            )

    # @intent:responsibility ウィンドウ終了時にステップループとキー待ちを停止します。
    def closeEvent(self, event: QCloseEvent):
        self._step_timer.stop()
        self._inspector_timer.stop()
        self.keypad_controller.cancel_wait()
        app = QApplication.instance()
        if app is not None:
            app.removeEventFilter(self.keypad_controller)
        event.accept()
