"""tyntecbot 的配置模块。"""

from tyntecbot.config.loader import load_config, get_config_path
from tyntecbot.config.schema import Config

__all__ = ["Config", "load_config", "get_config_path"]
