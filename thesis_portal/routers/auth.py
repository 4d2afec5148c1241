import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from sqlalchemy import select
from datetime import datetime, timezone

from thesis_portal.core.deps import get_db, get_current_actor, Actor
from thesis_portal.core.security import verify_password, create_access_token
from thesis_portal.schemas.auth import LoginIn, TokenOut
from thesis_portal.models.user import User, Role

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])

@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, db: Session = Depends(get_db)):
    user = db.scalar(select(User).where(User.email == payload.email))
    if not user or not user.is_active or not verify_password(payload.password, user.password_hash):
        raise HTTPException(status_code=400, detail="Incorrect email and/or password!")
    profile = user.teacher if user.role is Role.TEACHER else user.student
    if profile is None:
        raise HTTPException(status_code=400, detail="Incorrect email and/or password!")
    user.last_login = datetime.now(timezone.utc)
    db.commit()
    logger.info("%s %s logged in", user.role.value, profile.id)
    token = create_access_token(user.email, user.role.value)
    return TokenOut(access_token=token, role=user.role.value, user_id=profile.id)

@router.get("/current")
def current_session(actor: Actor = Depends(get_current_actor)):
    return {"id": actor.id, "role": actor.role.value, "email": actor.email}
