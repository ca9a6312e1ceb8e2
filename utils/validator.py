import re
from typing import Mapping, Any
from config import ADMINS
from utils.registry import MirrorRegistry, registry as default_registry
from utils.VersionMeta import ValidatedRequest
from utils.errors import (MissingParameter, InvalidParameterType, UnauthorizedAdmin, UnsupportedSource,
                          InvalidVersionFormat)
from base_logger import get_logger

logger = get_logger(__name__)

REQUIRED_PARAMS = ("admin", "choose", "mcbb")
VERSION_ID_PATTERN = re.compile(r"[0-9A-Za-z._-]+")


def _read_param(raw: Mapping[str, Any], name: str) -> str:
    value = raw.get(name)
    if value is None or value == "":
        raise MissingParameter(name)
    # JSON bodies may carry numeric ids such as {"admin": 442}
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise InvalidParameterType(name)
    return value


def validate_params(raw: Mapping[str, Any], admins: Mapping[str, str] = ADMINS,
                    sources: MirrorRegistry = default_registry) -> ValidatedRequest:
    """
    Validate raw request parameters.

    Checks run in order and stop at the first failure: presence, admin allow-list, source key, version id format.

    :param raw: query parameters, JSON body or form body of the request

    :param admins: admin allow-list, id to display name

    :param sources: mirror registry used to check ``choose``

    :return: validated request carrying the three parameters unchanged
    """
    params = {name: _read_param(raw, name) for name in REQUIRED_PARAMS}

    if params["admin"] not in admins:
        logger.warning(f"Rejected unauthorized admin: {params['admin']}")
        raise UnauthorizedAdmin(params["admin"])

    if params["choose"] not in sources:
        raise UnsupportedSource(params["choose"], sources.all_keys(), sources.describe())

    if not VERSION_ID_PATTERN.fullmatch(params["mcbb"]):
        raise InvalidVersionFormat(params["mcbb"])

    return ValidatedRequest(**params)
