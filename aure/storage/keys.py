import uuid


def vibe_image_key(user_id: str, ext: str = "jpg") -> str:
    return f"u/{user_id}/vibes/{uuid.uuid4().hex}_orig.{ext}"


def ext_from_content_type(content_type: str) -> str:
    return {
        "image/jpeg": "jpg",
        "image/png": "png",
        "image/webp": "webp",
        "image/heic": "heic",
    }.get((content_type or "").lower(), "jpg")
