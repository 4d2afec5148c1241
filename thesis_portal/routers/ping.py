from fastapi import APIRouter
router = APIRouter(prefix="/api/ping", tags=["health"])

@router.get("")
def ping():
    return "pong"
