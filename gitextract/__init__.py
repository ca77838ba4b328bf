"""Extract path-scoped changes into a clean commit and rebase onto it."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("git-extract")
except PackageNotFoundError:
    # Fallback for development mode
    __version__ = "0.0.0-dev"
