# retro_chip8/core/machine.py
"""
Core Layer (CHIP-8 マシン)

このモジュールは、マシン状態の生成・リセット・プログラムロードと、
タイマー減衰およびフェッチ→デコード→実行の命令サイクルを提供します。
具体的な命令の振る舞いはInstruction Layer（retro_chip8.instructions）に移譲されます。
"""
from typing import Dict, List

from retro_chip8.common.errors import InvalidCapabilitiesError, InvalidSizeError
from retro_chip8.common.types import DisassemblyLine, RegisterInfo, RegisterLayoutInfo
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.snapshot import Instruction, Metadata, Snapshot
from retro_chip8.core.state import (
    Chip8State, DISPLAY_HEIGHT, DISPLAY_WIDTH, FONT_DATA, FONT_START_ADDRESS,
    MAX_ROM_SIZE, PROGRAM_START_ADDRESS, REGISTER_COUNT, TIMER_QUANTUM,
)
from retro_chip8.instructions import decode_instruction, execute_instruction
from retro_chip8.instructions.base import read_word
from retro_chip8 import disassembler

# @intent:responsibility CHIP-8マシンの状態を所有し、ホストから呼ばれる1ステップ単位の状態遷移を提供します。
# @intent:rationale 同一インスタンスへの並行呼び出しは想定しません（単一呼び出し元の契約）。内部で同期は行いません。
class Machine:
    """
    CHIP-8インタプリタ本体。
    ホストはHostCapabilitiesを渡して生成し、load_program()でROMを配置してから
    任意のペースでstep()を繰り返し呼び出します。
    """
    # @intent:responsibility ケイパビリティを検証・保持し、暗黙のリセットを行います。
    # @intent:pre-condition `capabilities`はHostCapabilitiesのインスタンスである必要があります。
    def __init__(self, capabilities: HostCapabilities):
        if not isinstance(capabilities, HostCapabilities):
            raise InvalidCapabilitiesError(
                f"capabilities must be a HostCapabilities instance, got {type(capabilities).__name__}."
            )
        capabilities.validate()
        self._host = capabilities
        self._state = Chip8State()
        self._step_count: int = 0
        self.reset()

    @property
    def host(self) -> HostCapabilities:
        return self._host

    @property
    def step_count(self) -> int:
        return self._step_count

    # @intent:responsibility マシンを定義済みの初期状態に戻します。
    # @intent:post-condition フォントがロードされ、PCは0x200、タイマーの基準時刻は現在時刻になります。
    def reset(self) -> None:
        """
        メモリ・レジスタ・スタック・表示・タイマーをクリアし、組み込みフォントを再ロードします。
        ホストにも画面消去を要求します。
        """
        self._state = Chip8State()
        self._state.memory[FONT_START_ADDRESS:FONT_START_ADDRESS + len(FONT_DATA)] = FONT_DATA
        self._step_count = 0

        if self._host.display_clear is not None:
            self._host.display_clear()

        if self._host.clock is not None:
            self._state.last_tick_time = self._host.clock()

    # @intent:responsibility プログラムイメージを0x200から配置します。
    # @intent:pre-condition サイズは1以上 MAX_ROM_SIZE 以下である必要があります。違反時は何も変更せずInvalidSizeErrorを送出します。
    def load_program(self, data: bytes) -> None:
        """
        プログラムイメージをそのままメモリへコピーします。
        レジスタやPCはリセットしません（呼び出し元はreset後にロードします）。
        """
        size = len(data)
        if size == 0 or size > MAX_ROM_SIZE:
            raise InvalidSizeError(size, MAX_ROM_SIZE)
        self._state.memory[PROGRAM_START_ADDRESS:PROGRAM_START_ADDRESS + size] = bytes(data)

    # @intent:responsibility 現在のマシン状態を返します。
    def get_state(self) -> Chip8State:
        return self._state

    # @intent:responsibility マシンを1命令進め、その結果のスナップショットを返します。
    # @intent:flow タイマー更新 -> フェッチ -> デコード -> PC更新 -> 実行 -> スナップショット生成
    def step(self) -> Snapshot:
        self._update_timers()

        initial_pc = self._state.pc
        word = self._fetch()
        ins = self._decode(word, initial_pc)

        # ジャンプ先が上書きされないよう、実行前にPCを命令長分進める
        self._update_pc()
        self._execute(ins)

        self._step_count += 1
        return self._create_snapshot(ins)

    # @intent:responsibility ホストクロックに基づいてdelay/soundタイマーを減衰させます。
    # @intent:rationale 1回のstepで減算するのは最大1回のみです（経過量子分の追い付きは行いません）。
    def _update_timers(self) -> None:
        if self._host.clock is None:
            return

        now = self._host.clock()
        if now - self._state.last_tick_time < TIMER_QUANTUM:
            return

        if self._state.delay_timer > 0:
            self._state.delay_timer -= 1

        # ゼロへの遷移時のみ停止を通知する。ここから開始通知は行わない。
        if self._state.sound_timer > 0:
            self._state.sound_timer -= 1
            if self._state.sound_timer == 0 and self._host.sound_stop is not None:
                self._host.sound_stop()

        self._state.last_tick_time = now

    # @intent:responsibility PCが指す2バイトをビッグエンディアンで読み込みます。
    def _fetch(self) -> int:
        return read_word(self._state, self._state.pc)

    def _decode(self, word: int, address: int) -> Instruction:
        return decode_instruction(word, address)

    def _update_pc(self) -> None:
        self._state.pc = (self._state.pc + 2) & 0xFFFF

    def _execute(self, ins: Instruction) -> None:
        execute_instruction(ins, self._state, self._host)

    def _create_snapshot(self, ins: Instruction) -> Snapshot:
        return Snapshot(
            state=self._state,
            instruction=ins,
            metadata=Metadata(step_count=self._step_count, mnemonic=disassembler.format_instruction(ins)),
        )

    # @intent:responsibility UI表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        s = self._state
        regs = {f"V{idx:X}": s.v[idx] for idx in range(REGISTER_COUNT)}
        regs.update({"I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer})
        return regs

    # @intent:responsibility UIのレジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{idx:X}", 8) for idx in range(REGISTER_COUNT)]),
            RegisterLayoutInfo("Index/Pointers", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ]),
        ]

    def get_pixel(self, x: int, y: int) -> bool:
        return self._state.pixel(x % DISPLAY_WIDTH, y % DISPLAY_HEIGHT)

    # @intent:responsibility フレームバッファを行ごとの真偽値リストとして返します（テスト・デバッグ用）。
    def get_display_rows(self) -> List[List[bool]]:
        d = self._state.display
        return [
            [d[y * DISPLAY_WIDTH + x] != 0 for x in range(DISPLAY_WIDTH)]
            for y in range(DISPLAY_HEIGHT)
        ]

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        return disassembler.disassemble(self._state.memory, start_addr, length)
