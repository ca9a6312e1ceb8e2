from dotenv import load_dotenv
from types import MappingProxyType
import json
import logging
import os


env_result = load_dotenv()

IMAGE_NAME = os.getenv("IMAGE_NAME", "mcbb-api")
SERVER_TYPE = os.getenv("SERVER_TYPE", "[Unknown Server Type]")
VERSION = os.getenv("BUILD_NUMBER", "1.0.0")

DEBUG = True if "alpha" in IMAGE_NAME.lower() or "dev" in IMAGE_NAME.lower() else False

SENTRY_URL = os.getenv("SENTRY_DSN")

LOG_DIR = os.getenv("LOG_DIR", "log")

# Remote fetch timeout in seconds
FETCH_TIMEOUT = float(os.getenv("FETCH_TIMEOUT", "10"))

ALLOW_METHODS = ("GET", "POST")

DEFAULT_ADMINS = {
    "442": "某人",
    "123": "测试员"
}

DEFAULT_MIRROR_SOURCES = {
    "al": {
        "name": "阿里云",
        "base_url": "https://mirrors.aliyun.com/minecraft/",
        "manifest_url": "https://mirrors.aliyun.com/minecraft/version_manifest.json"
    },
    "hw": {
        "name": "华为云",
        "base_url": "https://mirrors.huaweicloud.com/minecraft/",
        "manifest_url": "https://mirrors.huaweicloud.com/minecraft/version_manifest.json"
    },
    "mojiang": {
        "name": "官方源",
        "base_url": "https://launcher.mojang.com/",
        "manifest_url": "https://launchermeta.mojang.com/mc/game/version_manifest.json",
        "origin": True
    }
}

VERSION_TYPES = MappingProxyType({
    "release": "正式版",
    "snapshot": "快照版",
    "old_alpha": "旧阿尔法版",
    "old_beta": "旧测试版"
})

VERIFY_GUIDE = MappingProxyType({
    "windows": "PowerShell中执行：Get-FileHash -Algorithm SHA1 文件名.jar",
    "mac_linux": "终端中执行：sha1sum 文件名.jar",
    "verify_tip": "对比命令输出的SHA1与version_info中的client_sha1是否一致，一致则文件完整"
})


def is_valid_sources(value: dict) -> bool:
    """Every entry needs string name, base_url and manifest_url, and exactly one entry is the origin"""
    origins = 0
    for entry in value.values():
        if not isinstance(entry, dict) or not set(entry) <= {"name", "base_url", "manifest_url", "origin"}:
            return False
        if not all(isinstance(entry.get(field), str) for field in ("name", "base_url", "manifest_url")):
            return False
        if entry.get("origin") is True:
            origins += 1
        elif entry.get("origin", False) is not False:
            return False
    return origins == 1


def load_json_env(name: str, default: dict, check=None) -> dict:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        logging.getLogger(__name__).error(f"Failed to load {name} from environment variable, using defaults.")
        return default
    if not isinstance(value, dict) or not value:
        logging.getLogger(__name__).error(f"{name} must be a non-empty JSON object, using defaults.")
        return default
    if check is not None and not check(value):
        logging.getLogger(__name__).error(f"{name} has an invalid shape, using defaults.")
        return default
    return value


ADMINS = MappingProxyType({str(k): str(v) for k, v in load_json_env("MCBB_ADMINS", DEFAULT_ADMINS).items()})
MIRROR_SOURCES = MappingProxyType(load_json_env("MCBB_SOURCES", DEFAULT_MIRROR_SOURCES, is_valid_sources))

# FastAPI Config
CONTACT_INFO = {
    "name": "mcbb-api maintainers",
}
LICENSE_INFO = {
    "name": "MIT License",
}

MAIN_SERVER_DESCRIPTION = """
## Minecraft Client Mirror API

Resolve the download URL of a Minecraft client jar from a mirrored distribution source.

Call `/mcbb` with `admin`, `choose` (mirror key) and `mcbb` (version id) as query parameters or as a JSON/form body.
"""
