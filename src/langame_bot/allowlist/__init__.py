"""Chat id allowlist loaded from YAML and reloaded on file changes."""

from .file_watcher import FileChangeWatcher, read_file_signature
from .loader import ALLOWLIST_KEYS, load_allowlist, parse_allowlist
from .store import AllowlistStore

__all__ = [
    "ALLOWLIST_KEYS",
    "AllowlistStore",
    "FileChangeWatcher",
    "load_allowlist",
    "parse_allowlist",
    "read_file_signature",
]
