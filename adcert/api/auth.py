"""Authentication and account routes."""
from typing import List
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from adcert.core.database import get_db
from adcert.core.deps import get_current_user, require_admin
from adcert.core.roles import RoleCode, build_capabilities, get_role_display, get_user_role_code
from adcert.core.security import verify_password, create_access_token, get_password_hash
from adcert.models.audit_log import AuditLog
from adcert.models.user import User
from adcert.schemas.user import (
    LoginRequest, Token, UserCreate, UserRegister, UserResponse, UserUpdate
)

router = APIRouter()


def create_audit_log(db: Session, entity_type: str, entity_id: int, action: str, user_id: int, changes: dict = None):
    """Create an audit log entry for account operations."""
    audit_log = AuditLog(
        entity_type=entity_type,
        entity_id=entity_id,
        action=action,
        user_id=user_id,
        changes=changes
    )
    db.add(audit_log)


def user_response(user: User) -> UserResponse:
    response = UserResponse.model_validate(user)
    role_code = get_user_role_code(user)
    response.role_display = get_role_display(role_code)
    response.capabilities = build_capabilities(role_code)
    return response


def _create_user(db: Session, data: UserRegister, role: RoleCode, is_verified: bool) -> User:
    existing_user = db.query(User).filter(User.email == data.email).first()
    if existing_user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )
    user = User(
        email=data.email,
        full_name=data.full_name,
        company_name=data.company_name,
        phone=data.phone,
        password_hash=get_password_hash(data.password),
        role=role,
        is_verified=is_verified
    )
    db.add(user)
    db.flush()
    return user


@router.post("/login", response_model=Token)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Login endpoint."""
    user = db.query(User).filter(User.email == login_data.email).first()

    if not user or not verify_password(login_data.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password"
        )

    access_token = create_access_token(user.email, role=get_user_role_code(user))
    return {"access_token": access_token, "token_type": "bearer"}


@router.post("/register", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserRegister, db: Session = Depends(get_db)):
    """Public sign-up. Always creates an advertiser account."""
    user = _create_user(db, user_data, RoleCode.ADVERTISER, is_verified=False)
    create_audit_log(db, "User", user.user_id, "CREATE", user.user_id,
                     {"role": RoleCode.ADVERTISER.value, "self_registered": True})
    db.commit()
    db.refresh(user)
    return user_response(user)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    """Get current user."""
    return user_response(current_user)


@router.patch("/me", response_model=UserResponse)
def update_me(
    update_data: UserUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update the current user's profile details or password."""
    changes = update_data.model_dump(exclude_unset=True)
    password = changes.pop("password", None)
    for field, value in changes.items():
        setattr(current_user, field, value)
    if password:
        current_user.password_hash = get_password_hash(password)

    logged = dict(changes)
    if password:
        logged["password"] = "changed"
    if logged:
        create_audit_log(db, "User", current_user.user_id, "UPDATE", current_user.user_id, logged)
    db.commit()
    db.refresh(current_user)
    return user_response(current_user)


@router.get("/users", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """List all users (admin only)."""
    users = db.query(User).order_by(User.user_id).all()
    return [user_response(u) for u in users]


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    user_data: UserCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    """Create an account of any role (admin only)."""
    user = _create_user(db, user_data, user_data.role, is_verified=user_data.is_verified)
    create_audit_log(db, "User", user.user_id, "CREATE", current_user.user_id,
                     {"role": user_data.role.value, "email": user_data.email})
    db.commit()
    db.refresh(user)
    return user_response(user)
