"""
Environment-driven engine configuration.

Environment Variables:
    REPLAYFLOW_DEBUG: Keep full traces and record states for inspection (default: false)
    REPLAYFLOW_STORE: memory, file, s3 (default: memory)
    REPLAYFLOW_STATE_DIR: Directory for the file store (default: /tmp/replayflow-states)
    REPLAYFLOW_S3_BUCKET: Bucket for the s3 store
    REPLAYFLOW_S3_PREFIX: Key prefix for the s3 store (default: flows)
    REPLAYFLOW_S3_ENDPOINT: Custom S3 endpoint (MinIO, localstack)
    REPLAYFLOW_S3_REGION: AWS region (default: us-east-1)
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_STATE_DIR = "/tmp/replayflow-states"
STORE_KINDS = ("memory", "file", "s3")


def _env_bool(env: Mapping[str, str], key: str, default: bool = False) -> bool:
    val = env.get(key)
    if val is None or val == "":
        return default
    return val.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class EngineConfig:
    debug: bool = False
    store: str = "memory"
    state_dir: str = DEFAULT_STATE_DIR
    s3_bucket: Optional[str] = None
    s3_prefix: str = "flows"
    s3_endpoint: Optional[str] = None
    s3_region: str = "us-east-1"

    def __post_init__(self) -> None:
        if self.store not in STORE_KINDS:
            raise ValueError(f"unsupported store: {self.store} (expected one of {', '.join(STORE_KINDS)})")
        if self.store == "s3" and not self.s3_bucket:
            raise ValueError("REPLAYFLOW_S3_BUCKET is required for the s3 store")

    @staticmethod
    def from_env(env: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if env is None else env
        return EngineConfig(
            debug=_env_bool(env, "REPLAYFLOW_DEBUG"),
            store=env.get("REPLAYFLOW_STORE", "memory").strip().lower(),
            state_dir=env.get("REPLAYFLOW_STATE_DIR", DEFAULT_STATE_DIR),
            s3_bucket=env.get("REPLAYFLOW_S3_BUCKET") or None,
            s3_prefix=env.get("REPLAYFLOW_S3_PREFIX", "flows"),
            s3_endpoint=env.get("REPLAYFLOW_S3_ENDPOINT") or None,
            s3_region=env.get("REPLAYFLOW_S3_REGION", "us-east-1"),
        )
