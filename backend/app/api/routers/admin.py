from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.core.deps import get_db, require_roles
from app.db.models.user import Role
from app.schemas.admin import UserCreateIn, UserListOut
from app.crud.users import create_user, list_users, get_user_by_login

router = APIRouter()

@router.get("/users", response_model=list[UserListOut])
def users(db: Session = Depends(get_db), _user=Depends(require_roles(Role.admin))):
    return list_users(db)

@router.post("/users", response_model=UserListOut)
def create_user_endpoint(data: UserCreateIn, db: Session = Depends(get_db), _user=Depends(require_roles(Role.admin))):
    if get_user_by_login(db, data.login):
        raise HTTPException(status_code=409, detail="Login already taken")
    return create_user(db, data)
