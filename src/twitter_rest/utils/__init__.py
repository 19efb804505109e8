"""Utility modules for Twitter REST client."""

from .params import flatten_params, to_text, contains_upload
from .sanitizer import mask_sensitive_data, is_sensitive_key

__all__ = [
    'flatten_params',
    'to_text',
    'contains_upload',
    'mask_sensitive_data',
    'is_sensitive_key',
]
