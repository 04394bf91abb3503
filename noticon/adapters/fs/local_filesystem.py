"""Local filesystem adapter for the icon locator."""

from noticon.adapters.fs.paths import is_readable, uri_to_path
from noticon.domain.ports import IIconFileSystem


class LocalFileSystem(IIconFileSystem):
    """Adapter answering locator queries against the real filesystem."""

    def is_readable(self, path: str) -> bool:
        return is_readable(path)

    def uri_to_path(self, uri: str) -> str:
        return uri_to_path(uri)
