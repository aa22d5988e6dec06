# campsite_booking/routes/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from campsite_booking import auth, models, schemas
from campsite_booking.database import get_db
from campsite_booking.services.accounts import Accounts

router = APIRouter(
    prefix="/auth",
    tags=["Auth"]
)

# Register a new user (renter or owner)
@router.post("/register", status_code=status.HTTP_201_CREATED)
def register_user(user: schemas.UserCreate, db: Session = Depends(get_db)):
    new_user = Accounts(db).register(user.name, user.email, user.password, user.is_owner)
    return {"message": "User registered", "id": new_user.id}

# Authenticate and return a JWT
@router.post("/login", response_model=schemas.LoginResponse)
def login_user(user: schemas.UserLogin, db: Session = Depends(get_db)):
    db_user = Accounts(db).authenticate(user.email, user.password)
    return {
        "access_token": auth.token_for_user(db_user),
        "token_type": "bearer",
        "user": {
            "id": db_user.id,
            "name": db_user.name,
            "email": db_user.email,
            "is_owner": bool(db_user.is_owner)
        }
    }

# Currently logged-in user
@router.get("/profile", response_model=schemas.UserProfile)
def read_profile(db: Session = Depends(get_db), current_user: models.User = Depends(auth.get_current_user)):
    return Accounts(db).get_profile(current_user.id)
