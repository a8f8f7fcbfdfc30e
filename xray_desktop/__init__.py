"""xray-desktop - desktop shell that delegates its commands to a backend process."""

from importlib.metadata import PackageNotFoundError, version as _pkg_version

try:
    __version__ = _pkg_version("xray-desktop")
except PackageNotFoundError:
    __version__ = "0.1.0"  # fallback for editable installs / dev
