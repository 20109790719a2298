"""Seed staff accounts."""
import os
import sys
from adcert.core.config import settings
from adcert.core.database import SessionLocal, init_db
from adcert.core.roles import RoleCode
from adcert.core.security import get_password_hash, verify_password
from adcert.models import AuditLog, User

DEFAULT_SEED_PASSWORD = "admin123"

STAFF_ACCOUNTS = [
    {"email": "admin@arcon.example.com", "full_name": "ARCON Administrator", "role": RoleCode.ADMIN},
    {"email": "reviewer@arcon.example.com", "full_name": "ARCON Reviewer", "role": RoleCode.REVIEWER},
]


def is_production_env() -> bool:
    return settings.ENVIRONMENT.lower() == "production"


def get_seed_admin_password() -> str | None:
    password = os.getenv("SEED_ADMIN_PASSWORD")
    if password:
        password = password.strip()

    if is_production_env():
        if password == DEFAULT_SEED_PASSWORD:
            print("FATAL: SEED_ADMIN_PASSWORD cannot be the default in production.", file=sys.stderr)
            sys.exit(1)
        return password or None

    return password or DEFAULT_SEED_PASSWORD


def seed_database():
    """Create tables and the staff accounts."""
    init_db()
    db = SessionLocal()

    try:
        print("Starting database seeding...")
        password = get_seed_admin_password()

        for account in STAFF_ACCOUNTS:
            user = db.query(User).filter(User.email == account["email"]).first()
            if user:
                print(f"✓ {account['role'].value.title()} user already exists ({account['email']})")
                if is_production_env() and verify_password(DEFAULT_SEED_PASSWORD, user.password_hash):
                    print(f"WARNING: {account['email']} still uses the default password in production. "
                          "Rotate immediately.", file=sys.stderr)
                continue

            if password is None:
                print("FATAL: SEED_ADMIN_PASSWORD is required to create staff users in production.",
                      file=sys.stderr)
                sys.exit(1)

            user = User(
                email=account["email"],
                full_name=account["full_name"],
                company_name="ARCON",
                password_hash=get_password_hash(password),
                role=account["role"],
                is_verified=True,
            )
            db.add(user)
            db.flush()
            db.add(AuditLog(
                entity_type="User",
                entity_id=user.user_id,
                action="CREATE",
                user_id=None,
                changes={"role": account["role"].value, "seeded": True},
            ))
            db.commit()
            print(f"✓ Created {account['role'].value} user ({account['email']})")

        print("Seeding completed successfully!")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_database()
