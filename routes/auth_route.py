from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from auth import (
    check_password_length, create_access_token, get_caller, get_current_user,
    get_password_hash, verify_password,
)
from database import get_db
from models import Token, User, UserCreate, UserDB
from services import CallerContext, Operation, ensure_allowed

auth_router = APIRouter(
    tags=["Auth"]
)


@auth_router.post("/auth/register", response_model=User, status_code=201, tags=["Auth"])
def register_user(user: UserCreate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    """
    Creates a staff account. Only admins may register users.
    """
    ensure_allowed(caller, Operation.MANAGE_USERS)
    check_password_length(user.password)

    if db.query(UserDB).filter(UserDB.email == user.email).first():
        raise HTTPException(status_code=400, detail="User already exists")

    new_user = UserDB(
        name=user.name,
        email=user.email,
        hashed_password=get_password_hash(user.password),
        role=user.role.value,
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    return new_user


@auth_router.post("/auth/token", response_model=Token, tags=["Auth"])
def login_for_access_token(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    # OAuth2 form field "username" carries the email
    user = db.query(UserDB).filter(UserDB.email == form_data.username).first()

    if not user or not verify_password(form_data.password, user.hashed_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(data={"sub": user.email, "role": user.role})
    return {"access_token": access_token, "token_type": "bearer"}


@auth_router.get("/auth/profile", response_model=User, tags=["Auth"])
async def read_profile(current_user: UserDB = Depends(get_current_user)):
    return current_user


@auth_router.post("/auth/change-password", tags=["Auth"])
def change_password(old_password: str, new_password: str, current_user: UserDB = Depends(get_current_user), db: Session = Depends(get_db)):
    if not verify_password(old_password, current_user.hashed_password):
        raise HTTPException(status_code=400, detail="Invalid credentials")
    check_password_length(new_password)

    current_user.hashed_password = get_password_hash(new_password)
    db.commit()
    return {"msg": "Password updated successfully"}
