# ligitabl/api/auth.py
import logging

from fastapi import APIRouter, HTTPException, Depends

from ligitabl.core.deps import get_current_user
from ligitabl.core.security import hash_password, verify_password, create_access_token
from ligitabl.db.session import SessionLocal
from ligitabl.db.models.user import User
from ligitabl.domain.ids import UserId
from ligitabl.schemas.user import UserCreate, UserLogin, UserOut, TokenOut

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


def _token_for(user: User) -> TokenOut:
    token = create_access_token({
        "sub": user.id,
        "display_name": user.display_name,
    })
    return TokenOut(access_token=token, user=UserOut.model_validate(user))


@router.post("/register", response_model=TokenOut, status_code=201)
def register(user: UserCreate):
    db = SessionLocal()

    # 1. Validar que no exista el email
    email = user.email.lower()
    if db.query(User).filter(User.email == email).first():
        db.close()
        raise HTTPException(status_code=400, detail="This email is already registered")

    # 2. Crear usuario (demo: queda logueado directamente)
    new_user = User(
        id=UserId.generate().value,
        email=email,
        display_name=user.display_name.strip(),
        hashed_password=hash_password(user.password),
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    db.close()

    logger.info("Demo registration: email=%s user_id=%s", email, new_user.id)
    return _token_for(new_user)


@router.post("/login", response_model=TokenOut)
def login(user: UserLogin):
    db = SessionLocal()
    db_user = db.query(User).filter(User.email == user.email.lower()).first()
    db.close()

    if not db_user or not verify_password(user.password, db_user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid email or password")

    return _token_for(db_user)


@router.get("/me", response_model=UserOut)
def get_current_user_data(current_user: User = Depends(get_current_user)):
    return current_user
