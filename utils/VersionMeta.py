from pydantic import BaseModel, ConfigDict
from typing import Optional


class MirrorSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    name: str
    base_url: str
    manifest_url: str
    origin: bool = False

    def __str__(self):
        return f"MirrorSource(key={self.key}, name={self.name}, base_url={self.base_url})"


class VersionSummary(BaseModel):
    id: str
    type: str = ""
    releaseTime: Optional[str] = None
    url: str


class ClientDownload(BaseModel):
    url: str
    sha1: Optional[str] = None
    size: int = 0


class VersionDownloads(BaseModel):
    client: ClientDownload


class VersionDetail(BaseModel):
    downloads: VersionDownloads


class ValidatedRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    admin: str
    choose: str
    mcbb: str


class AdminInfo(BaseModel):
    admin_id: str
    admin_name: str


class SourceInfo(BaseModel):
    source_key: str
    source_name: str
    source_base: str


class VersionInfo(BaseModel):
    version_id: str
    version_type: str
    release_time: Optional[str] = None
    client_sha1: Optional[str] = None
    client_size: str


class VerifyGuide(BaseModel):
    windows: str
    mac_linux: str
    verify_tip: str


class DownloadInfo(BaseModel):
    download_url: str
    file_name: str
    verify_guide: VerifyGuide


class ResolutionResult(BaseModel):
    admin_info: AdminInfo
    source_info: SourceInfo
    version_info: VersionInfo
    download_info: DownloadInfo

    def __str__(self):
        return (f"ResolutionResult(version={self.version_info.version_id}, source={self.source_info.source_key}, "
                f"download_url={self.download_info.download_url})")
