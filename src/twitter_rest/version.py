from importlib.metadata import version, PackageNotFoundError

# Version info - read from package metadata (single source of truth in pyproject.toml)
try:
    __version__ = version("twitter-rest-core")
except PackageNotFoundError:
    # Package is not installed (development mode)
    __version__ = "0.0.0-dev"

USER_AGENT = f"Twitter Python Client {__version__}"
