"""create-app: scaffold a new project from a bundled template."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("create-app")
except PackageNotFoundError:
    __version__ = "0.0.0"
