from dataclasses import dataclass
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from sqlalchemy import select
from thesis_portal.db.session import SessionLocal
from thesis_portal.core.security import decode_token
from thesis_portal.models.user import User, Role
from thesis_portal.notifiers.email_notifier import EmailNotifier

bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Actor:
    """Authenticated caller: its role and the id of its student/teacher profile."""
    role: Role
    id: str
    email: str

    @property
    def is_teacher(self) -> bool:
        return self.role is Role.TEACHER

    @property
    def is_student(self) -> bool:
        return self.role is Role.STUDENT


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(creds: HTTPAuthorizationCredentials | None = Depends(bearer),
                     db: Session = Depends(get_db)) -> User:
    if creds is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
    try:
        payload = decode_token(creds.credentials)
    except Exception:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or expired token")
    email = payload.get("sub")
    user = db.scalar(select(User).where(User.email == email))
    if not user or not user.is_active:
        raise HTTPException(status_code=401, detail="User not found or inactive")
    return user

def get_current_actor(user: User = Depends(get_current_user)) -> Actor:
    profile = user.teacher if user.role is Role.TEACHER else user.student
    if profile is None:
        raise HTTPException(status_code=401, detail="User has no profile for its role")
    return Actor(role=user.role, id=profile.id, email=user.email)

def require_role(role: Role):
    def checker(actor: Actor = Depends(get_current_actor)) -> Actor:
        if actor.role is not role:
            raise HTTPException(status_code=401, detail=f"Must be a {role.value} to make this request")
        return actor
    return checker

require_teacher = require_role(Role.TEACHER)
require_student = require_role(Role.STUDENT)

def get_email_notifier() -> EmailNotifier:
    return EmailNotifier()
