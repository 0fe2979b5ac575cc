"""Disk cache for fetched and parsed Public Suffix Lists."""

from __future__ import annotations

import hashlib
import json
import logging
import os
import os.path
import sys
from collections.abc import Callable, Hashable, Iterable
from typing import Any, TypeVar

import requests
from filelock import FileLock

LOG = logging.getLogger(__name__)

_DID_LOG_UNABLE_TO_CACHE = False

T = TypeVar("T")


def get_pkg_unique_identifier() -> str:
    """Generate an identifier unique to the python version, tldparse version, and python instance.

    This will prevent interference between virtualenvs and issues that might
    arise when installing a new version of tldparse.
    """
    try:
        # pylint: disable=import-outside-toplevel
        from tldparse._version import version
    except ImportError:
        version = "dev"

    tldparse_version = "tldparse-" + version
    python_env_name = os.path.basename(sys.prefix)
    # two identically named python environments
    python_binary_path_short_hash = hashlib.md5(sys.prefix.encode("utf-8")).hexdigest()[:6]
    python_version = ".".join([str(v) for v in sys.version_info[:-1]])
    return "__".join(
        [python_version, python_env_name, python_binary_path_short_hash, tldparse_version]
    )


def get_cache_dir() -> str:
    """Get a cache dir that we have permission to write to.

    Try to follow the XDG standard, but if that doesn't work fallback to the package directory
    http://specifications.freedesktop.org/basedir-spec/basedir-spec-latest.html
    """
    cache_dir = os.environ.get("TLDPARSE_CACHE", None)
    if cache_dir is not None:
        return cache_dir

    xdg_cache_home = os.getenv("XDG_CACHE_HOME", None)
    if xdg_cache_home is None:
        user_home = os.getenv("HOME", None)
        if user_home:
            xdg_cache_home = os.path.join(user_home, ".cache")

    if xdg_cache_home is not None:
        return os.path.join(xdg_cache_home, "python-tldparse", get_pkg_unique_identifier())

    return os.path.join(os.path.dirname(__file__), ".suffix_cache")


class DiskCache:
    """Disk cache that only works for jsonable values."""

    def __init__(self, cache_dir: str | None, lock_timeout: int = 20):
        self.enabled = bool(cache_dir)
        self.cache_dir = os.path.expanduser(str(cache_dir or ""))
        self.lock_timeout = lock_timeout
        # a unique extension keeps `.clear()` away from unrelated files
        self.file_ext = ".tldparse.json"

    def get(self, namespace: str, key: str | dict[str, Hashable]) -> object:
        """Retrieve a value from the disk cache."""
        if not self.enabled:
            raise KeyError("Cache is disabled")
        cache_filepath = self._key_to_cachefile_path(namespace, key)

        if not os.path.isfile(cache_filepath):
            raise KeyError("namespace: " + namespace + " key: " + repr(key))
        try:
            with open(cache_filepath, encoding="utf-8") as cache_file:
                return json.load(cache_file)
        except (OSError, ValueError) as exc:
            LOG.error("error reading suffix list cache file %s: %s", cache_filepath, exc)
            raise KeyError("namespace: " + namespace + " key: " + repr(key)) from None

    def set(self, namespace: str, key: str | dict[str, Hashable], value: object) -> None:
        """Set a value in the disk cache."""
        if not self.enabled:
            return
        cache_filepath = self._key_to_cachefile_path(namespace, key)

        try:
            _make_dir(cache_filepath)
            with open(cache_filepath, "w", encoding="utf-8") as cache_file:
                json.dump(value, cache_file)
        except OSError as ioe:
            _warn_unable_to_cache(namespace, key, cache_filepath, ioe)

    def clear(self) -> None:
        """Clear the disk cache."""
        for root, _, files in os.walk(self.cache_dir):
            for filename in files:
                if filename.endswith(self.file_ext) or filename.endswith(
                    self.file_ext + ".lock"
                ):
                    try:
                        os.unlink(os.path.join(root, filename))
                    except FileNotFoundError:
                        pass

    def _key_to_cachefile_path(
        self, namespace: str, key: str | dict[str, Hashable]
    ) -> str:
        namespace_path = os.path.join(self.cache_dir, namespace)
        return os.path.join(namespace_path, _make_cache_key(key) + self.file_ext)

    def run_and_cache(
        self,
        func: Callable[..., T],
        namespace: str,
        kwargs: dict[str, Hashable],
        hashed_argnames: Iterable[str],
    ) -> T:
        """Run `func`, or return its cached result for the same hashed arguments."""
        if not self.enabled:
            return func(**kwargs)

        key_args = {k: v for k, v in kwargs.items() if k in hashed_argnames}
        cache_filepath = self._key_to_cachefile_path(namespace, key_args)
        lock_path = cache_filepath + ".lock"
        try:
            _make_dir(cache_filepath)
        except OSError as ioe:
            _warn_unable_to_cache(namespace, key_args, cache_filepath, ioe)
            return func(**kwargs)

        with FileLock(lock_path, timeout=self.lock_timeout):
            try:
                result: T = self.get(namespace=namespace, key=key_args)  # type: ignore[assignment]
            except KeyError:
                result = func(**kwargs)
                self.set(namespace=namespace, key=key_args, value=result)

            return result

    def cached_fetch_url(
        self, session: requests.Session, url: str, timeout: float | None
    ) -> str:
        """Get a url but cache the response."""
        return self.run_and_cache(
            func=_fetch_url,
            namespace="urls",
            kwargs={"session": session, "url": url, "timeout": timeout},
            hashed_argnames=["url"],
        )


def _warn_unable_to_cache(
    namespace: str, key: Any, cache_filepath: str, exc: OSError
) -> None:
    global _DID_LOG_UNABLE_TO_CACHE  # pylint: disable=global-statement
    if _DID_LOG_UNABLE_TO_CACHE:
        return
    LOG.warning(
        "unable to cache %s.%s in %s. This could refresh the "
        "Public Suffix List over HTTP every app startup. "
        "Construct your `TLDParse` with a writable `cache_dir` or "
        "set `cache_dir=None` to silence this warning. %s",
        namespace,
        key,
        cache_filepath,
        exc,
    )
    _DID_LOG_UNABLE_TO_CACHE = True


def _fetch_url(session: requests.Session, url: str, timeout: float | None) -> str:
    response = session.get(url, timeout=timeout)
    response.raise_for_status()
    # the PSL is UTF-8; file:// responses carry no charset
    if response.encoding is None:
        response.encoding = "utf-8"
    text = response.text

    if not isinstance(text, str):
        text = str(text, "utf-8")

    return text


def _make_cache_key(inputs: str | dict[str, Hashable]) -> str:
    return hashlib.md5(repr(inputs).encode("utf8")).hexdigest()


def _make_dir(filename: str) -> None:
    """Make a directory if it doesn't already exist."""
    os.makedirs(os.path.dirname(filename), exist_ok=True)
