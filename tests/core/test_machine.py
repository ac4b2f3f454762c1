# tests/core/test_machine.py
"""
retro_chip8.core.machineモジュールの単体テスト。
生成・リセット・ロード・フェッチ/デコード・タイマー減衰を検証します。
"""
import pytest

from retro_chip8.common.errors import InvalidCapabilitiesError, InvalidSizeError
from retro_chip8.core.host import HostCapabilities
from retro_chip8.core.machine import Machine
from retro_chip8.core.state import (
    FONT_DATA, FONT_START_ADDRESS, MAX_ROM_SIZE, MEMORY_SIZE, PROGRAM_START_ADDRESS, STACK_SIZE,
)

# @intent:test_suite マシンのライフサイクルと命令サイクルを検証します。

class TestCreate:
    def test_create_with_empty_capabilities(self):
        machine = Machine(HostCapabilities())
        assert machine.get_state().pc == PROGRAM_START_ADDRESS

    # @intent:test_case_error ケイパビリティ束が無い場合は生成に失敗することを検証します。
    def test_create_without_capabilities_fails(self):
        with pytest.raises(InvalidCapabilitiesError):
            Machine(None)
        with pytest.raises(InvalidCapabilitiesError):
            Machine({"clock": lambda: 0})

    def test_create_with_non_callable_capability_fails(self):
        with pytest.raises(InvalidCapabilitiesError, match="debug_log"):
            Machine(HostCapabilities(debug_log="stdout"))

    def test_create_performs_reset(self, host):
        host.now = 1234
        machine = Machine(host.capabilities())
        assert host.clears == 1
        assert machine.get_state().last_tick_time == 1234

    # @intent:test_case_isolation 複数のマシンが状態を共有しないことを検証します。
    def test_machines_are_isolated(self, host):
        a = Machine(host.capabilities())
        b = Machine(host.capabilities())
        a.get_state().v[0] = 0x42
        a.get_state().memory[0x300] = 0x99
        assert b.get_state().v[0] == 0
        assert b.get_state().memory[0x300] == 0


class TestReset:
    def test_reset_loads_font(self, machine):
        state = machine.get_state()
        assert bytes(state.memory[FONT_START_ADDRESS:FONT_START_ADDRESS + 80]) == FONT_DATA

    # @intent:test_case_font_placement フォントが0x050-0x09Fに置かれ、0x000-0x04Fは空のままであることを検証します。
    def test_font_occupies_0x050_to_0x09f(self, machine):
        state = machine.get_state()
        assert bytes(state.memory[0x050:0x0A0]) == FONT_DATA
        assert bytes(state.memory[0x000:0x050]) == bytes(0x50)

    def test_reset_clears_state(self, machine, host, run):
        run(machine, 0x6A12, 0xA123, 0x2300)
        state = machine.get_state()
        state.delay_timer = 9
        state.display[5] = 1

        host.now = 500
        machine.reset()
        state = machine.get_state()
        assert state.v == [0] * 16
        assert state.i == 0
        assert state.sp == 0
        assert state.stack == [0] * STACK_SIZE
        assert state.pc == PROGRAM_START_ADDRESS
        assert state.delay_timer == 0
        assert state.sound_timer == 0
        assert not any(state.display)
        assert state.last_tick_time == 500
        # ROM領域もクリアされる
        assert state.memory[PROGRAM_START_ADDRESS] == 0
        assert host.clears == 2

    def test_reset_without_clock_uses_zero_baseline(self):
        machine = Machine(HostCapabilities())
        assert machine.get_state().last_tick_time == 0


class TestLoadProgram:
    def test_load_copies_bytes_at_program_start(self, machine):
        machine.load_program(b"\x12\x34\x56")
        mem = machine.get_state().memory
        assert mem[0x200:0x203] == b"\x12\x34\x56"
        assert mem[0x203] == 0

    def test_load_does_not_touch_registers(self, machine):
        machine.get_state().v[3] = 7
        machine.get_state().pc = 0x300
        machine.load_program(b"\x00\xE0")
        assert machine.get_state().v[3] == 7
        assert machine.get_state().pc == 0x300

    def test_load_max_size(self, machine):
        machine.load_program(bytes([0xAB]) * MAX_ROM_SIZE)
        assert machine.get_state().memory[MEMORY_SIZE - 1] == 0xAB

    # @intent:test_case_error サイズ不正のイメージは拒否され、メモリは変更されないことを検証します。
    @pytest.mark.parametrize("size", [0, MAX_ROM_SIZE + 1])
    def test_load_invalid_size(self, machine, size):
        before = bytes(machine.get_state().memory)
        with pytest.raises(InvalidSizeError):
            machine.load_program(bytes(size))
        assert bytes(machine.get_state().memory) == before

    def test_invalid_size_is_value_error(self, machine):
        with pytest.raises(ValueError, match="3585"):
            machine.load_program(bytes(3585))


class TestStep:
    def test_ld_v1_zero_advances_pc(self, machine, run):
        state = run(machine, 0x6100)
        assert state.v[1] == 0x00
        assert state.pc == PROGRAM_START_ADDRESS + 2

    def test_step_returns_snapshot(self, machine, load):
        load(machine, 0x6A2F)
        snapshot = machine.step()
        assert snapshot.instruction.raw == 0x6A2F
        assert snapshot.instruction.address == 0x200
        assert snapshot.metadata.mnemonic == "LD VA, 0x2F"
        assert snapshot.metadata.step_count == 1
        assert snapshot.state is machine.get_state()

    def test_fetch_is_big_endian(self, machine, load):
        load(machine, 0xA2F0)
        machine.step()
        assert machine.get_state().i == 0x2F0

    def test_step_count(self, machine, run):
        run(machine, 0x6000, 0x6100, 0x6200)
        assert machine.step_count == 3
        machine.reset()
        assert machine.step_count == 0

    # @intent:test_case_abnormal 未実装命令はログのみで状態を変更しないことを検証します。
    def test_unimplemented_instruction_logs_and_continues(self, machine, host, run):
        state = run(machine, 0x0123, 0x6105)
        assert host.logs[0] == "Instruction not implemented: 0x0123 at pc=0x0200"
        assert state.v[1] == 5
        assert state.pc == 0x204

    def test_fetch_wraps_at_end_of_memory(self, machine):
        state = machine.get_state()
        state.memory[0xFFF] = 0x61
        state.memory[0x000] = 0x23
        state.pc = 0xFFF
        machine.step()
        assert state.v[1] == 0x23


class TestTimers:
    def _set_delay(self, machine, value):
        machine.get_state().delay_timer = value

    # @intent:test_case_timer 1量子経過でdelayタイマーが1減ることを検証します。
    def test_delay_decays_after_one_quantum(self, machine, host, load):
        load(machine, 0x1200)  # JP 0x200
        self._set_delay(machine, 5)
        host.now = 16
        machine.step()
        assert machine.get_state().delay_timer == 4

    def test_delay_holds_below_quantum(self, machine, host, load):
        load(machine, 0x1200)
        self._set_delay(machine, 5)
        host.now = 16
        machine.step()
        host.now = 31
        machine.step()
        assert machine.get_state().delay_timer == 4
        assert machine.get_state().last_tick_time == 16

    # @intent:test_case_timer 複数量子経過しても1回のstepで減るのは1だけであることを検証します。
    def test_no_catch_up(self, machine, host, load):
        load(machine, 0x1200)
        self._set_delay(machine, 10)
        host.now = 16 * 5
        machine.step()
        assert machine.get_state().delay_timer == 9
        assert machine.get_state().last_tick_time == 80

    def test_delay_stays_at_zero(self, machine, host, load):
        load(machine, 0x1200)
        host.now = 100
        machine.step()
        assert machine.get_state().delay_timer == 0

    def test_sound_stop_on_transition_to_zero(self, machine, host, load):
        load(machine, 0x1200)
        machine.get_state().sound_timer = 2
        host.now = 16
        machine.step()
        assert host.sound_stops == 0
        host.now = 32
        machine.step()
        assert machine.get_state().sound_timer == 0
        assert host.sound_stops == 1
        host.now = 48
        machine.step()
        assert host.sound_stops == 1
        assert host.sound_starts == 0

    def test_timers_decay_before_execution(self, machine, host, load):
        load(machine, 0xF007)  # LD V0, DT
        self._set_delay(machine, 3)
        host.now = 16
        machine.step()
        assert machine.get_state().v[0] == 2

    def test_timers_inert_without_clock(self, load):
        machine = Machine(HostCapabilities())
        load(machine, 0x1200)
        machine.get_state().delay_timer = 5
        for _ in range(10):
            machine.step()
        assert machine.get_state().delay_timer == 5


class TestAccessors:
    def test_register_map(self, machine, run):
        run(machine, 0x6F01, 0xA345)
        regs = machine.get_register_map()
        assert regs["VF"] == 0x01
        assert regs["I"] == 0x345
        assert regs["PC"] == 0x204
        assert set(regs) >= {"V0", "SP", "DT", "ST"}

    def test_register_layout_covers_register_map(self, machine):
        names = {reg.name for group in machine.get_register_layout() for reg in group.registers}
        assert names == set(machine.get_register_map())

    def test_display_rows(self, machine):
        machine.get_state().display[64 * 2 + 3] = 1
        rows = machine.get_display_rows()
        assert len(rows) == 32 and len(rows[0]) == 64
        assert rows[2][3] is True
        assert machine.get_pixel(3, 2)
        assert machine.get_pixel(64 + 3, 32 + 2)

    def test_disassemble(self, machine, load):
        load(machine, 0x00E0, 0xD015)
        lines = machine.disassemble(0x200, 4)
        assert lines == [(0x200, "00 E0", "CLS"), (0x202, "D0 15", "DRW V0, V1, 5")]
