"""Resolve model sources to local files, downloading and caching remote ones."""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import time
import urllib.error
import urllib.request
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import urlsplit

from .errors import IoError, OtherError

MAX_PARALLEL_DOWNLOADS = 8
CACHED_FILE_MAX_AGE = 60 * 60 * 24
SMITHY_CACHE_ENV_VAR = "SMITHY_CACHE"
SMITHY_CACHE_NO_EXPIRE = "NO_EXPIRE"

_FX_SEED = 0x517CC1B727220A95
_MASK64 = (1 << 64) - 1
_SPECIAL_SCHEMES = {"http", "https", "ws", "wss", "ftp", "file"}
_DOWNLOAD_TIMEOUT = 60


@dataclass(frozen=True)
class PathSource:
    """Model files on the local file system."""

    path: Path
    files: tuple[str, ...] = ()


@dataclass(frozen=True)
class UrlSource:
    """Model files fetched from a url."""

    url: str
    files: tuple[str, ...] = ()


def _fx_add(state: int, word: int) -> int:
    rotated = ((state << 5) | (state >> 59)) & _MASK64
    return ((rotated ^ word) * _FX_SEED) & _MASK64


def fx_hash(data: str | bytes) -> int:
    """64-bit Fx hash of the given bytes (strings are hashed as UTF-8)."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    view = memoryview(data)
    state = 0
    while len(view) >= 8:
        state = _fx_add(state, int.from_bytes(view[:8], "little"))
        view = view[8:]
    for width in (4, 2, 1):
        if len(view) >= width:
            state = _fx_add(state, int.from_bytes(view[:width], "little"))
            view = view[width:]
    return state


def _bad_url(url: str, reason: object) -> OtherError:
    return OtherError(f"bad url {url}: {reason}")


def _split_file_name(name: str) -> tuple[str | None, str | None]:
    """Split a file name into stem and extension the way file systems paths do."""
    if name in ("", ".", ".."):
        return None, None
    before, dot, after = name.rpartition(".")
    if not dot or before == "":
        return name, None
    return before, after


def url_to_cache_path(url: str) -> Path:
    """Relative cache path for a url: ``host/file_stem.HASH.ext``."""
    try:
        parts = urlsplit(url)
        parts.port
    except ValueError as e:
        raise _bad_url(url, e) from e
    if not parts.scheme:
        raise _bad_url(url, "relative URL without a base")
    host = parts.hostname
    if not host:
        raise _bad_url(url, "no-host")
    if ":" in host:
        host = f"[{host}]"
    path = parts.path
    if not path and parts.scheme.lower() in _SPECIAL_SCHEMES:
        path = "/"
    if not path.startswith("/"):
        raise _bad_url(url, "path")
    last = path[1:].split("/")[-1]
    stem, ext = _split_file_name(last)
    new_name = f"{stem or 'index'}.{fx_hash(path):x}.{ext if ext is not None else 'raw'}"
    return Path(host) / new_name


def weld_cache_dir() -> Path:
    """Locate the cache directory for downloaded model files."""
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA")
        if not base:
            raise OtherError("invalid home directory")
        return Path(base) / "smithy"
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise OtherError("invalid home directory") from e
    if sys.platform == "darwin":
        return home / "Library" / "Caches" / "smithy"
    xdg = os.environ.get("XDG_CACHE_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg) / "smithy"
    return home / ".cache" / "smithy"


def cache_expired(path: Path | str) -> bool:
    """True if the file is older than the maximum cache age or its age is unknown.

    With SMITHY_CACHE=NO_EXPIRE in the environment, cached files never expire.
    """
    if os.environ.get(SMITHY_CACHE_ENV_VAR) == SMITHY_CACHE_NO_EXPIRE:
        return False
    try:
        modified = os.stat(path).st_mtime
    except OSError:
        return True
    age = time.time() - modified
    if age < 0:
        return True
    return age >= CACHED_FILE_MAX_AGE


def _join_url(url: str, file: str) -> str:
    glue = "/" if not url.endswith("/") and not file.startswith("/") else ""
    return f"{url}{glue}{file}"


def sources_to_paths(
    sources: list[PathSource | UrlSource], base_dir: Path | str, verbose: int = 0
) -> list[Path]:
    """Flatten model sources into local paths.

    Relative paths are joined to ``base_dir``; urls are downloaded into the
    cache unless a fresh copy is already there. Directories are returned as
    they are, for the caller to traverse.
    """
    base_dir = Path(base_dir)
    results: list[Path] = []
    urls: list[str] = []
    for source in sources:
        if isinstance(source, PathSource):
            path = Path(source.path)
            prefix = path if path.is_absolute() else base_dir / path
            targets = [prefix / f for f in source.files] if source.files else [prefix]
            for target in targets:
                if verbose > 0:
                    print(f"DEBUG: adding path: {target}")
                results.append(target)
        elif isinstance(source, UrlSource):
            targets = (
                [_join_url(source.url, f) for f in source.files] if source.files else [source.url]
            )
            for target in targets:
                if verbose > 0:
                    print(f"DEBUG: adding url: {target}")
                urls.append(target)
        else:
            raise TypeError(f"unknown model source {source!r}")
    if urls:
        results.extend(urls_to_cached_files(urls))
    return results


def _fetch(url: str, dest: Path) -> int:
    """Download url to dest; returns the HTTP status."""
    try:
        with urllib.request.urlopen(url, timeout=_DOWNLOAD_TIMEOUT) as response:
            status = getattr(response, "status", None) or 200
            dest.write_bytes(response.read())
            return status
    except urllib.error.HTTPError as e:
        return e.code


def urls_to_cached_files(urls: list[str]) -> list[Path]:
    """Return cached files for the urls, downloading any that are missing or expired.

    Downloads go to a temporary folder first so that a failed download never
    replaces a cached copy. Raises OtherError if any url could not be resolved.
    """
    urls = list(urls)
    cache_dir = weld_cache_dir()
    results: list[Path] = []
    pending: list[tuple[str, Path]] = []

    with tempfile.TemporaryDirectory() as tmp:
        tmpdir = Path(tmp)
        for url in urls:
            rel_path = url_to_cache_path(url)
            cache_path = cache_dir / rel_path
            if cache_path.is_file() and not cache_expired(cache_path):
                results.append(cache_path)
                continue
            temp_path = tmpdir / rel_path
            try:
                temp_path.parent.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise IoError(f"creating folder {temp_path.parent}: {e}") from e
            pending.append((url, temp_path))

        if pending:
            with ThreadPoolExecutor(max_workers=MAX_PARALLEL_DOWNLOADS) as pool:
                futures = [pool.submit(_fetch, url, dest) for url, dest in pending]
            for (url, temp_path), future in zip(pending, futures):
                try:
                    status = future.result()
                except (urllib.error.URLError, OSError, ValueError) as e:
                    print(f"Failure downloading: {e}")
                    continue
                if not 200 <= status < 300:
                    print(f"Warning: url '{url}' got status {status}")
                    continue
                cache_file = cache_dir / temp_path.relative_to(tmpdir)
                try:
                    cache_file.parent.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise IoError(f"creating folder {cache_file.parent}: {e}") from e
                try:
                    shutil.copyfile(temp_path, cache_file)
                except OSError as e:
                    raise OtherError(f"writing cache file {cache_file}: {e}") from e
                results.append(cache_file)

    if len(results) != len(urls):
        raise OtherError(
            f"Quitting - {len(urls) - len(results)} model files could not be downloaded and "
            "were not found in the cache. If you have previously built this project and are "
            'working "offline", try setting SMITHY_CACHE=NO_EXPIRE in the environment'
        )
    return results