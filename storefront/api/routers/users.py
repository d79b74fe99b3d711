from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from storefront.api.deps import protect
from storefront.data.database import get_db
from storefront.data.models.user import UserModel
from storefront.domain.errors import StorefrontError
from storefront.domain.schemas import UserRegister, UserLogin, UserRead, AuthOut
from storefront.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: UserRegister, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.register(payload)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.post("/login", response_model=AuthOut)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        return service.login(payload)
    except StorefrontError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.get("/profile", response_model=UserRead)
def profile(user: UserModel = Depends(protect)):
    return user
