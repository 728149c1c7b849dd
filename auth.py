import logging
from datetime import UTC, datetime, timedelta
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from config import ACCESS_TOKEN_EXPIRE_MINUTES, ADMIN_EMAIL, ADMIN_PASSWORD, ALGORITHM, SECRET_KEY
from database import get_db
from models import Role, UserDB
from services.access_policy import CallerContext

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")

# bcrypt only looks at the first 72 bytes
MAX_PASSWORD_BYTES = 72


def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(plain_password.encode("utf-8"), hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.warning("Password verification error: %s", e)
        return False


def check_password_length(password: str) -> None:
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(status_code=400, detail="Password must not exceed 72 bytes.")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    now = datetime.now(UTC)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire, "iat": now})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def verify_token(token: str) -> Optional[str]:
    """
    Decodes a bearer token.

    Returns:
        str | None: The subject (user email), or None if the token is invalid or expired.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except jwt.PyJWTError as e:
        logger.debug("JWT decode error: %s", e)
        return None
    return payload.get("sub")


async def get_current_user(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> UserDB:
    email = verify_token(token)
    if email is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = db.query(UserDB).filter(UserDB.email == email).first()
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User no longer exists",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_caller(current_user: UserDB = Depends(get_current_user)) -> CallerContext:
    return CallerContext(user_id=current_user.id, role=Role(current_user.role))


def ensure_admin_account(db: Session) -> Optional[UserDB]:
    """Creates the first admin from ADMIN_EMAIL / ADMIN_PASSWORD when no user exists yet."""
    if not ADMIN_EMAIL or not ADMIN_PASSWORD:
        return None
    if db.query(UserDB).first() is not None:
        return None

    admin = UserDB(
        name="Administrator",
        email=ADMIN_EMAIL,
        hashed_password=get_password_hash(ADMIN_PASSWORD),
        role=Role.ADMIN.value,
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    logger.info("Bootstrap admin %s created", admin.email)
    return admin
