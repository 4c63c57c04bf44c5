from fastapi import Header, HTTPException, status
from typing import Annotated


def get_current_user_id(x_user_id: Annotated[str, Header()]) -> str:
    # Identity only; authentication is handled upstream.
    if not x_user_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Missing X-User-ID header"
        )
    return x_user_id
