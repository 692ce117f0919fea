"""
Configuration loader for probe runs.

Reads config.yaml from a config directory and, when an environment name is
given, overlays config_<env>.yaml on top of it before building a ProbeConfig.
"""
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

import yaml

from leakprobe.config.probe_config import MB, ProbeConfig
from leakprobe.consts.RssSource import RssSource
from leakprobe.consts.WorkloadVariant import WorkloadVariant

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config_yaml"


class ConfigLoader:

    def __init__(self, config_path: Path = DEFAULT_CONFIG_DIR, env: Optional[str] = None):
        self.config_path = Path(config_path)
        self.env = env
        self.config_data = self._load_config()

    def _read_yaml(self, file_name: str) -> Dict[str, Any]:
        config_file = self.config_path / file_name
        if not config_file.is_file():
            raise FileNotFoundError(f"Config file not found: {config_file}")
        with open(config_file, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {config_file}: {e}") from e
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ValueError(f"{config_file} must contain a mapping, got {type(data).__name__}")
        return data

    def _load_config(self) -> ProbeConfig:
        """
        Load and parse the probe configuration.
        Supports environment-specific overrides via config_<env>.yaml

        Returns:
            ProbeConfig: validated configuration instance
        """
        data = self._read_yaml("config.yaml")

        if self.env:
            # Keys in the environment file replace the base values
            data.update(self._read_yaml(f"config_{self.env}.yaml"))

        config = build_config(data)
        config.validate()
        return config


def _mb_to_bytes(value: Any) -> int:
    return int(float(value) * MB)


# YAML key -> (ProbeConfig attribute, converter)
_FIELDS: Dict[str, Tuple[str, Callable[[Any], Any]]] = {
    "variant": ("variant", WorkloadVariant),
    "rss_source": ("rss_source", RssSource),
    "iterations": ("iterations", int),
    "buffer_size_mb": ("buffer_size", _mb_to_bytes),
    "fixture_size_mb": ("fixture_size", _mb_to_bytes),
    "sleep_interval": ("sleep_interval", float),
    "fixture_path": ("fixture_path", Path),
    "scratch_path": ("scratch_path", Path),
    "channel_host": ("channel_host", str),
    "base_port": ("base_port", int),
}


def build_config(data: Dict[str, Any]) -> ProbeConfig:
    """
    Turn a raw mapping into a ProbeConfig; absent keys keep their defaults.

    Raises:
        ValueError: naming the key, when a value is empty, a list or mapping,
            or cannot be converted
    """
    config = ProbeConfig()

    for key, (attr, convert) in _FIELDS.items():
        if key not in data:
            continue
        value = data[key]
        if value is None or isinstance(value, (list, dict)):
            raise ValueError(f"Config key '{key}' needs a single value, got {value!r}")
        try:
            setattr(config, attr, convert(value))
        except (TypeError, ValueError) as e:
            raise ValueError(f"Config key '{key}' has invalid value {value!r}: {e}") from e

    return config


if __name__ == "__main__":

    # python3 -m leakprobe.config.config_loader

    loader = ConfigLoader(DEFAULT_CONFIG_DIR, env="dev")
    print(loader.config_data)
