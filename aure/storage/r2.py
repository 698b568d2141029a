import logging
import os
from typing import Dict, Tuple

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

R2_BUCKET = os.environ.get("R2_BUCKET", "")
R2_ENDPOINT = os.environ.get("R2_ENDPOINT", "")
R2_REGION = os.environ.get("R2_REGION", "auto")
R2_CDN_BASE = os.environ.get("R2_CDN_BASE", "").rstrip("/")

logger = logging.getLogger("uvicorn.error")


def r2_client():
    return boto3.client(
        "s3",
        endpoint_url=R2_ENDPOINT or None,
        aws_access_key_id=os.environ.get("R2_ACCESS_KEY_ID"),
        aws_secret_access_key=os.environ.get("R2_SECRET_ACCESS_KEY"),
        region_name=R2_REGION,
        config=Config(signature_version="s3v4"),
    )


def object_url(key: str) -> str:
    if R2_CDN_BASE:
        return f"{R2_CDN_BASE}/{key}"
    base = R2_ENDPOINT.rstrip("/")
    return f"{base}/{R2_BUCKET}/{key}"


def key_owned_by(user_id: str, key: str) -> bool:
    return key.startswith(f"u/{user_id}/")


def presign_put(key: str, content_type: str, expires: int = 900) -> Tuple[str, Dict[str, str]]:
    s3 = r2_client()
    url = s3.generate_presigned_url(
        "put_object",
        Params={"Bucket": R2_BUCKET, "Key": key, "ContentType": content_type},
        ExpiresIn=expires,
    )
    return url, {"Content-Type": content_type}


def presign_get(key: str, expires: int = 900) -> str:
    s3 = r2_client()
    return s3.generate_presigned_url(
        "get_object",
        Params={"Bucket": R2_BUCKET, "Key": key},
        ExpiresIn=expires,
    )


def delete_object(key: str) -> bool:
    """Best-effort removal of an uploaded object."""
    try:
        r2_client().delete_object(Bucket=R2_BUCKET, Key=key)
        return True
    except (BotoCoreError, ClientError) as e:
        logger.warning("storage: delete failed key=%s reason=%s", key, e)
        return False
