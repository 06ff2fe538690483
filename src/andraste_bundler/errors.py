"""Errors raised while assembling a bundle."""

from __future__ import annotations


class BundleError(Exception):
    """Base class for every failure that aborts a bundle run."""

    pass


class RemoteFailure(BundleError):
    """Error talking to the release API."""

    pass


class ReleaseNotFound(RemoteFailure):
    """No release matches the requested tag."""

    def __init__(self, organisation: str, repository: str, tag: str) -> None:
        super().__init__(f"No release '{tag}' found for {organisation}/{repository}")
        self.organisation = organisation
        self.repository = repository
        self.tag = tag


class DownloadFailure(BundleError):
    """Error downloading an asset body."""

    pass


class UnexpectedAssetCount(BundleError):
    """A release does not carry the number of assets the layout expects."""

    def __init__(self, repository: str, expected: int, found: int) -> None:
        super().__init__(
            f"Expected exactly {expected} asset(s) in the release of {repository}, found {found}"
        )
        self.repository = repository
        self.expected = expected
        self.found = found


class AssetNotFound(BundleError):
    """No asset matches a required naming convention."""

    pass


class ArchiveCorrupt(BundleError):
    """Downloaded bytes are not a readable zip archive."""

    pass


class InvalidPathEncoding(BundleError):
    """A path in the working tree cannot be represented as text."""

    pass


class ManifestTemplateError(BundleError):
    """The README template could not be read."""

    pass
