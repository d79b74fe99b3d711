from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import SubscribeIn, MessageOut
from storefront.services.subscriber_service import SubscriberService

router = APIRouter(prefix="/subscribe", tags=["subscribers"])


@router.post("", response_model=MessageOut, status_code=201)
def subscribe(payload: SubscribeIn, db: Session = Depends(get_db)):
    try:
        SubscriberService(db).subscribe(payload.email)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    return MessageOut(message="Successfully subscribed to the newsletter")
