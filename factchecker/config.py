from __future__ import annotations

# factchecker/config.py
import os
from typing import Any

import yaml

# 配置读取顺序：环境变量 > config.yaml > 默认值
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
_CONFIG_KEYS = ("db_path", "test_db_path", "secret_key", "log_level", "port")

DEFAULT_SECRET_KEY = "secret-dev"
DEFAULT_PORT = 3001
PBKDF2_ITERATIONS = 190_000


def _read_config_yaml() -> dict[str, Any]:
    cfg_path = os.environ.get("FACTCHECKER_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    with open(cfg_path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    out: dict[str, Any] = {}
    for k in _CONFIG_KEYS:
        v = cfg.get(k)
        if isinstance(v, str):
            v = v.strip()
        if v not in (None, ""):
            out[k] = v
    return out


def is_test_env() -> bool:
    return (os.environ.get("APP_ENV") == "test") or (os.environ.get("PYTEST_CURRENT_TEST") is not None)


def get_secret_key() -> str:
    return os.environ.get("SECRET_KEY") or str(_read_config_yaml().get("secret_key") or DEFAULT_SECRET_KEY)


def get_port() -> int:
    raw = os.environ.get("PORT") or _read_config_yaml().get("port")
    return int(raw) if raw else DEFAULT_PORT


def get_log_level() -> str:
    level = os.environ.get("LOG_LEVEL") or _read_config_yaml().get("log_level") or "INFO"
    return str(level).upper()


def get_password_work_factor() -> int:
    # hashing strength is not what tests exercise
    return 1 if is_test_env() else PBKDF2_ITERATIONS


def get_db_path(_: str | None = None) -> str:
    """
    DB 路径解析顺序：
    1) 环境变量 FACTCHECKER_DB_PATH（最高优先级）
    2) config.yaml 的 test_db_path（当检测到测试环境时）
    3) config.yaml 的 db_path（生产默认）
    4) 兜底：项目根 factchecker.db
    """
    env_path = os.environ.get("FACTCHECKER_DB_PATH")
    cfg = _read_config_yaml()
    cfg_db = cfg.get("db_path")
    cfg_test = cfg.get("test_db_path")

    if env_path:
        path = env_path
    elif is_test_env() and cfg_test:
        path = cfg_test
    elif cfg_db:
        path = cfg_db
    else:
        path = os.path.join(_PROJECT_ROOT, "factchecker.db")

    if path != ":memory:":
        dirn = os.path.dirname(path) or "."
        os.makedirs(dirn, exist_ok=True)
    return path
