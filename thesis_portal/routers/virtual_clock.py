from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from thesis_portal.core.deps import get_db, get_current_actor
from thesis_portal.schemas.virtual_clock import VirtualDateIn, VirtualDateOut
from thesis_portal.services.virtual_clock import VirtualClockService

router = APIRouter(prefix="/api/virtualclock", tags=["virtual_clock"], dependencies=[Depends(get_current_actor)])


@router.get("", response_model=VirtualDateOut)
def get_virtual_date(db: Session = Depends(get_db)):
    return VirtualDateOut(date=VirtualClockService(db).get_virtual_date().data)


@router.put("", response_model=VirtualDateOut)
def update_virtual_date(payload: VirtualDateIn, db: Session = Depends(get_db)):
    return VirtualDateOut(date=VirtualClockService(db).update_virtual_date(payload.date).data)
