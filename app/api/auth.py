from fastapi import APIRouter, Depends

from app.api.deps import get_store
from app.schemas import LoginRequest, RegisterRequest, UserEnvelope, UserRead
from app.services import auth_service
from app.store import CatalogStore

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserEnvelope)
def register(body: RegisterRequest, store: CatalogStore = Depends(get_store)):
    user = auth_service.register(store, body.username, body.password, body.email)
    return UserEnvelope(user=UserRead.model_validate(user))


@router.post("/login", response_model=UserEnvelope)
def login(body: LoginRequest, store: CatalogStore = Depends(get_store)):
    user = auth_service.login(store, body.username, body.password)
    return UserEnvelope(user=UserRead.model_validate(user))
