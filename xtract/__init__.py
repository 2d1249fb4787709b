from __future__ import annotations

from .config import config_sha256, load_config
from .config_schema import TransformConfig
from .errors import ConfigError, PostShapeError, QuoteDepthError
from .post import NormalizedPost, post_to_dict
from .transform import transform_post
from .urls import extract_post_id

__all__ = [
    "ConfigError",
    "NormalizedPost",
    "PostShapeError",
    "QuoteDepthError",
    "TransformConfig",
    "config_sha256",
    "extract_post_id",
    "load_config",
    "post_to_dict",
    "transform_post",
]
