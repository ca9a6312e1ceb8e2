from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Mapping, Optional
from pydantic import ValidationError
from config import ADMINS, VERSION_TYPES, VERIFY_GUIDE
from utils.fetcher import RemoteFetcher
from utils.registry import MirrorRegistry
from utils.VersionMeta import (ValidatedRequest, VersionSummary, VersionDetail, ResolutionResult, AdminInfo,
                               SourceInfo, VersionInfo, DownloadInfo, VerifyGuide)
from utils.errors import ManifestUnavailable, VersionNotFound, DownloadInfoMissing
from base_logger import get_logger

logger = get_logger(__name__)


def format_size(size: int) -> str:
    """Bytes to megabytes with two decimals, rounding half up, e.g. 123456789 -> '117.74MB'"""
    megabytes = (Decimal(size) / Decimal(1024 * 1024)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{megabytes}MB"


def format_release_time(release_time: Optional[str]) -> Optional[str]:
    if not release_time:
        return release_time
    try:
        parsed = datetime.fromisoformat(release_time)
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone()
    except (ValueError, OverflowError):
        logger.warning(f"Unrecognized release time: {release_time}")
        return release_time
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def find_version(manifest: Any, version_id: str) -> VersionSummary:
    """
    Locate a version in a manifest. Match is exact and case-sensitive, the first entry in manifest order wins.
    """
    versions = manifest.get("versions") if isinstance(manifest, dict) else None
    if not versions or not isinstance(versions, list):
        raise ManifestUnavailable()
    for entry in versions:
        if isinstance(entry, dict) and entry.get("id") == version_id:
            try:
                return VersionSummary.model_validate(entry)
            except ValidationError as e:
                logger.error(f"Manifest entry of {version_id} is malformed: {e}")
                raise ManifestUnavailable(f"entry of [{version_id}] has no detail url") from e
    raise VersionNotFound(version_id)


class VersionResolver:
    def __init__(self, registry: MirrorRegistry, fetcher: RemoteFetcher,
                 admins: Mapping[str, str] = ADMINS, version_types: Mapping[str, str] = VERSION_TYPES):
        self.registry = registry
        self.fetcher = fetcher
        self.admins = admins
        self.version_types = version_types

    async def resolve(self, req: ValidatedRequest) -> ResolutionResult:
        source = self.registry.get(req.choose)

        manifest = await self.fetcher.fetch(source.manifest_url)
        version = find_version(manifest, req.mcbb)

        detail_url = self.registry.rewrite(version.url, source)
        raw_detail = await self.fetcher.fetch(detail_url)
        try:
            detail = VersionDetail.model_validate(raw_detail)
        except ValidationError as e:
            logger.error(f"Version detail {detail_url} has no usable client download: {e}")
            raise DownloadInfoMissing(req.mcbb) from e
        client = detail.downloads.client

        download_url = self.registry.rewrite(client.url, source)

        result = ResolutionResult(
            admin_info=AdminInfo(
                admin_id=req.admin,
                admin_name=self.admins[req.admin]
            ),
            source_info=SourceInfo(
                source_key=source.key,
                source_name=source.name,
                source_base=source.base_url
            ),
            version_info=VersionInfo(
                version_id=version.id,
                version_type=self.version_types.get(version.type, version.type),
                release_time=format_release_time(version.releaseTime),
                client_sha1=client.sha1,
                client_size=format_size(client.size)
            ),
            download_info=DownloadInfo(
                download_url=download_url,
                file_name=f"minecraft-{version.id}-client.jar",
                verify_guide=VerifyGuide(**VERIFY_GUIDE)
            )
        )
        logger.info(f"Resolved {result}")
        return result
