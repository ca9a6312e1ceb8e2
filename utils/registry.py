from types import MappingProxyType
from typing import Mapping, Optional
from config import MIRROR_SOURCES
from utils.VersionMeta import MirrorSource
from base_logger import get_logger

logger = get_logger(__name__)


class MirrorRegistry:
    """
    Read-only table of download sources.

    Exactly one source is the origin: its ``base_url`` is the prefix found in manifest and version detail payloads,
    and it is replaced with the selected mirror's ``base_url``.
    """

    def __init__(self, sources: Mapping[str, Mapping]):
        self._sources = MappingProxyType({
            key: MirrorSource(key=key, **value) for key, value in sources.items()
        })
        origins = [s for s in self._sources.values() if s.origin]
        if len(origins) != 1:
            raise ValueError(f"Exactly one origin source is required, got {len(origins)}")
        self._origin = origins[0]

    def get(self, key: str) -> Optional[MirrorSource]:
        return self._sources.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._sources

    @property
    def origin(self) -> MirrorSource:
        return self._origin

    def origin_base_url(self) -> str:
        return self._origin.base_url

    def all_keys(self) -> list[str]:
        return list(self._sources.keys())

    def describe(self) -> str:
        return ", ".join(f"{s.key}: {s.name}" for s in self._sources.values())

    def rewrite(self, url: str, source: MirrorSource) -> str:
        """
        Replace the origin base URL in ``url`` with the base URL of ``source``.

        Literal substring replacement of the first occurrence. URLs without the origin prefix pass through unchanged.
        """
        origin_base = self.origin_base_url()
        if origin_base not in url:
            if not source.origin:
                logger.warning(f"Origin prefix {origin_base} not found in {url}, keeping it for source {source.key}")
            return url
        return url.replace(origin_base, source.base_url, 1)


registry = MirrorRegistry(MIRROR_SOURCES)
