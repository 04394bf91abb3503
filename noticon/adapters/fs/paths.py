"""Path helpers for locating icon files on the local filesystem."""

import os
import re
from urllib.parse import unquote

from noticon.domain.exceptions import UriResolutionFailed

FILE_SCHEME = "file://"

# A '%' not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_ESCAPED_SLASH = re.compile(r"%2[Ff]")


def is_readable(path: str) -> bool:
    """Check whether a path names a regular file the process may read.

    Symlinks are followed. The answer is best-effort: the file can still
    disappear or change permissions before it is opened.

    Args:
        path: Filesystem path

    Returns:
        bool: True if the file exists and is readable
    """
    return os.path.isfile(path) and os.access(path, os.R_OK)


def extension_of(path: str) -> str:
    """Return the extension of the final path component, without the dot.

    Examples:
        >>> extension_of("/usr/share/icons/bell.png")
        'png'
        >>> extension_of("/home/user/.hidden")
        ''
        >>> extension_of("archive.tar.gz")
        'gz'
    """
    name = os.path.basename(path)
    dot = name.rfind(".")
    if dot <= 0:
        return ""
    return name[dot + 1 :]


def expand_path(path: str) -> str:
    """Expand a leading ``~`` to the user's home directory."""
    return os.path.expanduser(path)


def uri_to_path(uri: str) -> str:
    """Map a local ``file://`` URI to an absolute filesystem path.

    Args:
        uri: URI such as ``file:///usr/share/icons/bell.png``

    Returns:
        str: Decoded absolute path

    Raises:
        UriResolutionFailed: If the URI is not a valid local file URI
    """
    if not uri.startswith(FILE_SCHEME):
        raise UriResolutionFailed(f"Not a file URI: {uri}")
    if "#" in uri:
        raise UriResolutionFailed(f"File URI must not contain a fragment: {uri}")

    rest = uri[len(FILE_SCHEME) :]
    slash = rest.find("/")
    if slash == -1:
        raise UriResolutionFailed(f"File URI has no path: {uri}")

    host, path = rest[:slash], rest[slash:]
    if host not in ("", "localhost"):
        raise UriResolutionFailed(f"File URI is not local (host {host!r}): {uri}")
    if _BAD_ESCAPE.search(path):
        raise UriResolutionFailed(f"Invalid escape sequence in file URI: {uri}")
    if _ESCAPED_SLASH.search(path):
        raise UriResolutionFailed(f"Escaped '/' in file URI: {uri}")

    decoded = unquote(path, errors="surrogateescape")
    if "\0" in decoded:
        raise UriResolutionFailed(f"NUL byte in file URI: {uri}")
    return decoded
