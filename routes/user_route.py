from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from auth import check_password_length, get_caller, get_password_hash
from database import get_db
from models import User, UserDB, UserUpdate
from services import CallerContext, Operation, ensure_allowed

user_router = APIRouter(
    tags=["User"]
)


def _get_user_or_404(db: Session, id: int) -> UserDB:
    user = db.query(UserDB).filter(UserDB.id == id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@user_router.get("/users", response_model=list[User], tags=["User"])
def get_users(caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.MANAGE_USERS)
    return db.query(UserDB).order_by(UserDB.name.asc()).all()


@user_router.get("/users/{id}", response_model=User, tags=["User"])
def get_user(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.MANAGE_USERS)
    return _get_user_or_404(db, id)


@user_router.put("/users/{id}", tags=["User"])
def update_user(id: int, updated_user: UserUpdate, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.MANAGE_USERS)

    try:
        user = _get_user_or_404(db, id)
        changes = updated_user.model_dump(exclude_unset=True)

        if changes.get("email") and changes["email"] != user.email:
            if db.query(UserDB).filter(UserDB.email == changes["email"]).first():
                raise HTTPException(status_code=400, detail="User already exists")

        password = changes.pop("password", None)
        if password:
            check_password_length(password)
            user.hashed_password = get_password_hash(password)

        for field, value in changes.items():
            if value is not None:
                setattr(user, field, getattr(value, "value", value))

        db.commit()
        db.refresh(user)
        return {"success": True, "user": User.model_validate(user).model_dump()}
    except HTTPException:
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))


@user_router.delete("/users/{id}", tags=["User"])
def delete_user(id: int, caller: CallerContext = Depends(get_caller), db: Session = Depends(get_db)):
    ensure_allowed(caller, Operation.MANAGE_USERS)
    if id == caller.user_id:
        raise HTTPException(status_code=400, detail="You cannot remove your own account")

    try:
        user = _get_user_or_404(db, id)
        db.delete(user)
        db.commit()
        return {"success": True}
    except HTTPException:
        raise
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=400, detail="User still has orders or reservations")
    except Exception as e:
        db.rollback()
        raise HTTPException(status_code=500, detail=str(e))
