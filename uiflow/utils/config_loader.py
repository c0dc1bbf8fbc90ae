from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import yaml


PROJECT_ROOT = Path(__file__).resolve().parents[2]

_TRUTHY = ("1", "true", "yes", "on")


def _is_truthy(value: str | None) -> bool:
    """中文：判断环境变量字符串是否为真值（1/true/yes/on）。"""

    return (value or "").strip().lower() in _TRUTHY


def is_ci() -> bool:
    """中文：是否运行在 CI 环境（环境变量 CI 非空且非 false/0）。"""

    value = os.environ.get("CI")
    if value is None:
        return False
    return value.strip().lower() not in ("", "0", "false", "no", "off")


def load_config(path: str | Path = "config.yaml") -> dict:
    """中文：加载 YAML 配置文件，解析相对路径并应用环境变量覆盖。
    参数:
        path: 配置文件路径，支持相对路径（相对项目根目录）。
    """

    p = Path(path)
    if not p.is_absolute():
        p = (PROJECT_ROOT / p).resolve()

    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}

    if not isinstance(cfg, dict):
        raise ValueError(f"Config root must be a dict: {p}")

    cfg["_project_root"] = str(PROJECT_ROOT)
    resolve_paths(cfg)
    apply_env_overrides(cfg)
    return cfg


def resolve_paths(cfg: dict) -> dict:
    """中文：将 paths 下的相对路径转换为基于项目根目录的绝对路径。"""

    project_root = Path(cfg.get("_project_root", PROJECT_ROOT))
    if "paths" in cfg and isinstance(cfg["paths"], dict):
        for k, v in list(cfg["paths"].items()):
            if isinstance(v, str) and v and not Path(v).is_absolute():
                cfg["paths"][k] = str((project_root / v).resolve())
    return cfg


def apply_env_overrides(cfg: dict, environ: Mapping[str, str] | None = None) -> dict:
    """中文：使用环境变量覆盖配置项。
    English: BASE_URL, BROWSER, HEADLESS, LOG_LEVEL, DEBUG_LOGS and CI.
    """

    env = os.environ if environ is None else environ
    project = cfg.setdefault("project", {})
    logging_cfg = cfg.setdefault("logging", {})

    if env.get("BASE_URL"):
        project["base_url"] = env["BASE_URL"]
    if env.get("BROWSER"):
        project["browser"] = env["BROWSER"]
    if env.get("HEADLESS") is not None:
        project["headless"] = _is_truthy(env.get("HEADLESS"))
    if env.get("LOG_LEVEL"):
        logging_cfg["level"] = env["LOG_LEVEL"]
    if _is_truthy(env.get("DEBUG_LOGS")):
        logging_cfg["console"] = True

    return cfg


def load_endpoints(cfg: dict) -> Mapping[str, str]:
    """中文：返回只读的页面逻辑名 -> 路径映射。"""

    endpoints = cfg.get("endpoints")
    if not isinstance(endpoints, dict) or not endpoints:
        raise ValueError("config.yaml 中缺少 endpoints 配置")
    return MappingProxyType({str(k): str(v) for k, v in endpoints.items()})


def safe_cfg_get(cfg: dict, keys: list, default=None):
    """中文：按键路径安全读取嵌套配置，缺失时返回 default。
    参数:
        cfg: 配置字典。
        keys: 键路径列表。
        default: 默认值。
    """

    cur = cfg
    for k in keys:
        if not isinstance(cur, dict):
            return default
        cur = cur.get(k)
        if cur is None:
            return default
    return cur
