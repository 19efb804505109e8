"""
Environment configuration for the Twitter REST client.

Example:
    >>> from twitter_rest.core.env_config import load_from_env
    >>> from twitter_rest import Client
    >>>
    >>> client = Client(config=load_from_env(env_file=".env"))
"""

from .loader import load_from_env
from .settings import TwitterSettings

__all__ = [
    "load_from_env",
    "TwitterSettings",
]
