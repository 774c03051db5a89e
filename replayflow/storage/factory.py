"""
Build a StateStore from configuration.
"""

from ..config import EngineConfig
from .file_store import FileStateStore
from .memory_store import InMemoryStateStore
from .s3_store import S3StateStore
from .store import StateStore


def create_store(config: EngineConfig) -> StateStore:
    if config.store == "file":
        return FileStateStore(config.state_dir)
    if config.store == "s3":
        return S3StateStore(
            bucket=config.s3_bucket,
            prefix=config.s3_prefix,
            endpoint_url=config.s3_endpoint,
            region=config.s3_region,
        )
    return InMemoryStateStore()
