import os
import time
import jwt
from typing import Any, Dict

ALG = os.getenv("JWT_ALG", "HS256")
SECRET = os.environ.get("JWT_SECRET", "change_me")
ACCESS_TTL = int(os.getenv("JWT_ACCESS_TTL_SECONDS", "3600"))
# Tokens are minted by the identity provider; audience is checked only when configured
AUDIENCE = os.getenv("JWT_AUDIENCE") or None


def mint_access(user_id: str) -> str:
    now = int(time.time())
    claims: Dict[str, Any] = {"sub": user_id, "iat": now, "exp": now + ACCESS_TTL, "typ": "access"}
    if AUDIENCE:
        claims["aud"] = AUDIENCE
    return jwt.encode(claims, SECRET, algorithm=ALG)


def decode_token(tok: str) -> Dict[str, Any]:
    if AUDIENCE:
        return jwt.decode(tok, SECRET, algorithms=[ALG], audience=AUDIENCE)
    return jwt.decode(tok, SECRET, algorithms=[ALG])
