import yaml
from typing import Dict, Any
from .models import HostConfig, DisplayConfig, ExecutionConfig, DEFAULT_KEYMAP

class ConfigLoader:
    def load_from_file(self, path: str) -> HostConfig:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
        return self.parse(data or {})

    def parse(self, data: Dict[str, Any]) -> HostConfig:
        if not isinstance(data, dict):
            raise ValueError(f"Config root must be a mapping, got {type(data).__name__}")

        display_data = data.get("display", {})
        display = DisplayConfig(
            scale=self._parse_positive(display_data.get("scale", 10), "display.scale"),
            foreground=str(display_data.get("foreground", "#FFFFFF")),
            background=str(display_data.get("background", "#000000")),
        )

        execution_data = data.get("execution", {})
        execution = ExecutionConfig(
            tick_interval_ms=self._parse_positive(execution_data.get("tick_interval_ms", 1), "execution.tick_interval_ms"),
            steps_per_tick=self._parse_positive(execution_data.get("steps_per_tick", 1), "execution.steps_per_tick"),
        )

        # keymap を指定した場合は既定の配列を完全に置き換える
        keymap = dict(DEFAULT_KEYMAP)
        if "keymap" in data:
            keymap = {}
            for name, key in (data.get("keymap") or {}).items():
                index = self._parse_int(key)
                if not 0 <= index <= 0xF:
                    raise ValueError(f"Invalid keypad index for '{name}': {index}")
                keymap[str(name).upper()] = index

        return HostConfig(
            display=display,
            execution=execution,
            keymap=keymap,
            log_level=str(data.get("log_level", "INFO")).upper(),
        )

    def _parse_positive(self, value: Any, name: str) -> int:
        result = self._parse_int(value)
        if result <= 0:
            raise ValueError(f"{name} must be positive: {value}")
        return result

    def _parse_int(self, value: Any) -> int:
        if isinstance(value, bool):
            raise ValueError(f"Invalid integer format: {value}")
        if isinstance(value, int):
            return value
        if isinstance(value, str):
            if value.lower().startswith("0x"):
                return int(value, 16)
            return int(value)
        raise ValueError(f"Invalid integer format: {value}")
