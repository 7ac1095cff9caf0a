"""配置加载实用工具。"""

import json
from pathlib import Path
from typing import Any, Callable

from loguru import logger
from pydantic.alias_generators import to_camel, to_snake

from tyntecbot.config.schema import Config


def get_config_path() -> Path:
    """获取默认配置文件路径。"""
    return Path.home() / ".tyntecbot" / "config.json"


def load_config(config_path: Path | None = None) -> Config:
    """
    从文件加载配置或创建默认配置。

    参数：
        config_path：配置文件的可选路径。如果未提供，则使用默认路径。

    返回：
        已加载的配置对象。文件中未设置的字段可由环境变量（TYNTECBOT_*）提供。
    """
    path = config_path or get_config_path()

    if path.exists():
        try:
            with open(path) as f:
                data = json.load(f)
            return Config(**convert_keys(data))
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning(f"无法从 {path} 加载配置：{e}")
            logger.warning("使用默认配置。")

    return Config()


def save_config(config: Config, config_path: Path | None = None) -> None:
    """
    将配置保存到文件。

    参数：
        config：要保存的配置。
        config_path：要保存到的可选路径。如果未提供，则使用默认路径。
    """
    path = config_path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    # 转换为 camelCase 格式
    data = config.model_dump()
    data = convert_keys(data, to_camel)

    with open(path, "w") as f:
        json.dump(data, f, indent=2)


def convert_keys(data: Any, convert: Callable[[str], str] = to_snake) -> Any:
    """递归转换字典键名（默认 camelCase -> snake_case，用于 Pydantic）。"""
    if isinstance(data, dict):
        return {convert(k): convert_keys(v, convert) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item, convert) for item in data]
    return data
