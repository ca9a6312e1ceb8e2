from typing import Iterable


class McbbError(Exception):
    """
    Base class of every failure the mirror resolver reports to the client.

    ``code`` is rendered both as the HTTP status and as the ``code`` field of the response envelope,
    ``msg`` is returned verbatim as the ``msg`` field.
    """
    code: int = 500

    def __init__(self, msg: str):
        super().__init__(msg)
        self.msg = msg


# Request validation

class BadMethod(McbbError):
    code = 405

    def __init__(self, method: str, allowed: Iterable[str]):
        self.method = method
        super().__init__(f"Request method {method} is not allowed, only {'/'.join(allowed)} are supported")


class MissingParameter(McbbError):
    code = 400

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Missing parameter: [{name}] is required")


class InvalidParameterType(McbbError):
    code = 400

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Invalid parameter: [{name}] must be a string")


class UnauthorizedAdmin(McbbError):
    code = 403

    def __init__(self, admin: str):
        self.admin = admin
        super().__init__(f"Unauthorized request: admin [{admin}] is not allowed")


class UnsupportedSource(McbbError):
    code = 400

    def __init__(self, source: str, valid_keys: Iterable[str], description: str = ""):
        self.source = source
        self.valid_keys = list(valid_keys)
        msg = f"Unsupported download source [{source}], choose one of [{', '.join(self.valid_keys)}]"
        if description:
            msg += f" ({description})"
        super().__init__(msg)


class InvalidVersionFormat(McbbError):
    code = 400

    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Invalid version id [{version}]: only digits, letters, dot (.), underscore (_) "
                         f"and hyphen (-) are allowed")


# Remote fetch

class RemoteFetchError(McbbError):
    code = 500

    def __init__(self, url: str, msg: str):
        self.url = url
        super().__init__(msg)


class NetworkError(RemoteFetchError):
    def __init__(self, url: str, reason: str):
        self.reason = reason
        super().__init__(url, f"Network request failed: {reason} (URL: {url})")


class HttpStatusError(RemoteFetchError):
    def __init__(self, url: str, status_code: int):
        self.status_code = status_code
        super().__init__(url, f"Remote resource unavailable: HTTP status code [{status_code}] (URL: {url})")


class ParseError(RemoteFetchError):
    def __init__(self, url: str):
        super().__init__(url, f"Failed to parse response: content is not valid JSON (URL: {url})")


# Version resolution

class ResolutionError(McbbError):
    code = 500


class ManifestUnavailable(ResolutionError):
    def __init__(self, detail: str = "no version list found"):
        super().__init__(f"Failed to parse version manifest: {detail}")


class VersionNotFound(ResolutionError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Version [{version}] not found, please check the version id (case-sensitive)")


class DownloadInfoMissing(ResolutionError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Failed to parse version detail of [{version}]: client download info is missing")
