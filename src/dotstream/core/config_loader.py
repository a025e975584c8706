# src/dotstream/core/config_loader.py
"""
負責載入、合併與更新工作階段設定檔 (YAML profile)。
"""

# 1. 標準庫導入
import copy
import logging
from pathlib import Path
from typing import Any

# 2. 第三方庫導入
import yaml
from ruamel.yaml import YAML

# 3. 本專案導入
from dotstream.core.exceptions import ProfileError

DEFAULT_SESSION_PROFILE: dict[str, Any] = {
    "session": {
        "output_format": "svg",
        "program": "dot",
        "graph_kind": "digraph",
        "strict": True,
        "write_to_file": True,
        "filename": None,
        "debug": False,
        "close_timeout": None,
    }
}

SESSION_KEYS = tuple(DEFAULT_SESSION_PROFILE["session"].keys())


class ProfileLoader:
    """載入工作階段設定檔，並與預設值遞迴合併。"""

    def __init__(self, profile_path: Path):
        self.profile_path = Path(profile_path)
        user_config = self._load_yaml(self.profile_path)
        self.config = self._merge_configs(copy.deepcopy(DEFAULT_SESSION_PROFILE), user_config)

    @staticmethod
    def _load_yaml(path: Path) -> dict[str, Any]:
        """安全地載入一個 YAML 檔案；空檔案視為空設定。"""
        if not path.is_file():
            logging.error(f"指定的設定檔不存在: {path}")
            raise ProfileError(f"profile not found: {path}")
        try:
            with open(path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logging.error(f"解析設定檔 '{path.name}' 時發生錯誤: {e}")
            raise ProfileError(f"invalid YAML in profile {path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ProfileError(f"profile {path} must contain a mapping, got {type(data).__name__}")
        return data

    @staticmethod
    def _merge_configs(default: dict, user: dict) -> dict:
        """遞迴地合併使用者設定到預設設定中。"""
        for key, value in user.items():
            if isinstance(value, dict) and isinstance(default.get(key), dict):
                default[key] = ProfileLoader._merge_configs(default[key], value)
            else:
                default[key] = value
        return default

    def session_kwargs(self) -> dict[str, Any]:
        """回傳可直接傳給 DotSession 的關鍵字參數，忽略未知的鍵。"""
        session_config = self.config.get("session") or {}
        unknown = set(session_config) - set(SESSION_KEYS)
        if unknown:
            logging.warning(f"設定檔 '{self.profile_path.name}' 含有未知的 session 鍵，已忽略: {sorted(unknown)}")
        return {key: session_config[key] for key in SESSION_KEYS if key in session_config}

    @staticmethod
    def update_profile(profile_path: Path, updates: dict[str, Any]):
        """
        使用 ruamel.yaml 更新設定檔，保留註解和格式。

        鍵以點分隔 (例如 "session.program")；檔案不存在時以預設值建立。
        """
        profile_path = Path(profile_path)
        yaml_loader = YAML()

        if profile_path.is_file():
            with open(profile_path, encoding="utf-8") as f:
                config_data = yaml_loader.load(f)
            if config_data is None:
                config_data = {}
        else:
            config_data = copy.deepcopy(DEFAULT_SESSION_PROFILE)
            logging.info(f"設定檔不存在，將以預設值建立: {profile_path}")

        for key, value in updates.items():
            keys = key.split(".")
            d = config_data
            for k in keys[:-1]:
                d = d.setdefault(k, {})
            d[keys[-1]] = value

        with open(profile_path, "w", encoding="utf-8") as f:
            yaml_loader.dump(config_data, f)
        logging.info(f"已更新設定檔: {profile_path.name}")
