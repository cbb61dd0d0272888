from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from covercraft.core.security import Authenticated, CallerIdentity, get_optional_caller

router = APIRouter()


@router.get("/me")
def read_me(caller: CallerIdentity = Depends(get_optional_caller)):
    """Identity behind the bearer token, or 401 with a null user."""
    if not isinstance(caller, Authenticated):
        return JSONResponse(status_code=401, content={"user": None})

    return {
        "user": {
            "id": caller.user_id,
            "email": caller.email,
            "provider": caller.provider,
        }
    }
