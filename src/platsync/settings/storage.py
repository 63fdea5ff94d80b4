"""
Storage settings.

The storage API speaks camelCase and nests feature flags one level deep:

    {"fileSizeLimit": 52428800,
     "features": {"imageTransformation": {"enabled": true},
                  "s3Protocol": {"enabled": false}}}
"""

from dataclasses import dataclass

from .base import SubdomainReconciler
from .fields import BOOL, INT, block, setting


@dataclass
class ImageTransformationFeature:
    enabled: object = setting(BOOL, "Enable image transformation features")


@dataclass
class S3ProtocolFeature:
    enabled: object = setting(BOOL, "Enable S3 protocol compatibility")


@dataclass
class StorageFeatures:
    image_transformation: object = block(
        ImageTransformationFeature,
        "Image transformation feature configuration",
        wire="imageTransformation",
    )
    s3_protocol: object = block(
        S3ProtocolFeature, "S3 protocol feature configuration", wire="s3Protocol"
    )


@dataclass
class StorageConfig:
    file_size_limit: object = setting(INT, "Maximum file size limit in bytes", wire="fileSizeLimit")
    features: object = block(StorageFeatures, "Storage feature flags", wire="features")


class StorageReconciler(SubdomainReconciler):
    name = "storage"
    attribute = "storage"
    config_class = StorageConfig
    read_path = "config/storage"
    write_path = "config/storage"
