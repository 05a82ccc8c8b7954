"""Pathmark: NPath complexity markers for control-flow keywords."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pathmark")
except PackageNotFoundError:
    __version__ = "dev"
