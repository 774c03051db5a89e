"""
S3-based continuation store using one object per subject.

Object key: {prefix}/{quoted subject}.json
Body: canonical JSON continuation
"""

from typing import List, Optional
from urllib.parse import quote, unquote

try:
    import boto3
    from botocore.exceptions import BotoCoreError, ClientError
except ImportError:
    boto3 = None  # type: ignore
    BotoCoreError = Exception  # type: ignore
    ClientError = Exception  # type: ignore

from ..core.errors import StateStoreError

from .store import StateStore

SUFFIX = ".json"
MISSING_CODES = ("NoSuchKey", "404")


class S3StateStore(StateStore):
    """
    S3-backed continuation store.

    Works against AWS S3 or any compatible endpoint (MinIO, localstack).
    S3 provides strong read-after-write consistency, so a continuation
    saved for one event is visible when the next event loads it.
    """

    def __init__(
        self,
        bucket: str,
        prefix: str = "flows",
        endpoint_url: Optional[str] = None,
        region: str = "us-east-1",
        check_bucket: bool = True,
    ) -> None:
        """
        Initialize S3 state store.

        Args:
            bucket: S3 bucket name
            prefix: Key prefix for continuations (default: "flows")
            endpoint_url: S3 endpoint URL (for MinIO, localstack, etc.)
            region: AWS region (default: us-east-1)
            check_bucket: Verify the bucket is reachable on construction

        Raises:
            StateStoreError: If boto3 not installed or the bucket is not accessible
        """
        if boto3 is None:
            raise StateStoreError("boto3 not installed (pip install replayflow[s3])")

        self.bucket = bucket
        self.prefix = prefix.rstrip("/")

        # Credentials come from the environment (AWS_ACCESS_KEY_ID, AWS_SECRET_ACCESS_KEY)
        try:
            self.s3_client = boto3.client("s3", endpoint_url=endpoint_url, region_name=region)
        except Exception as e:
            raise StateStoreError(f"Failed to create S3 client: {e}") from e

        if check_bucket:
            try:
                self.s3_client.head_bucket(Bucket=bucket)
            except ClientError as e:
                error_code = e.response.get("Error", {}).get("Code", "Unknown")
                raise StateStoreError(f"Bucket '{bucket}' not accessible (code: {error_code})") from e

    def key_for(self, subject: str) -> str:
        return f"{self.prefix}/{quote(subject, safe='')}{SUFFIX}"

    def load(self, subject: str) -> Optional[str]:
        try:
            response = self.s3_client.get_object(Bucket=self.bucket, Key=self.key_for(subject))
            return response["Body"].read().decode("utf-8")
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") in MISSING_CODES:
                return None
            raise StateStoreError(f"Failed to load state for '{subject}' from S3: {e}") from e
        except BotoCoreError as e:
            raise StateStoreError(f"Failed to load state for '{subject}' from S3: {e}") from e

    def save(self, subject: str, blob: Optional[str]) -> None:
        key = self.key_for(subject)
        try:
            if blob is None:
                self.s3_client.delete_object(Bucket=self.bucket, Key=key)
            else:
                self.s3_client.put_object(
                    Bucket=self.bucket,
                    Key=key,
                    Body=blob.encode("utf-8"),
                    ContentType="application/json",
                )
        except (BotoCoreError, ClientError) as e:
            raise StateStoreError(f"Failed to save state for '{subject}' to S3: {e}") from e

    def subjects(self) -> List[str]:
        found = []
        try:
            # paginator handles >1000 keys
            paginator = self.s3_client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=self.prefix + "/"):
                for obj in page.get("Contents", []):
                    name = obj["Key"][len(self.prefix) + 1:]
                    if name.endswith(SUFFIX) and "/" not in name:
                        found.append(unquote(name[: -len(SUFFIX)]))
        except (BotoCoreError, ClientError) as e:
            raise StateStoreError(f"Failed to list states in S3: {e}") from e
        return sorted(found)
