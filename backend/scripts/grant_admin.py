import argparse

import sqlalchemy as sa

from clubdir.db.session import SessionLocal
from clubdir.services.policy import ADMIN_ROLE, USER_ROLE


def set_role(db, email: str, role: str) -> str | None:
    """Returns the user id, or None when no account has that email. Caller commits."""
    user_id = db.execute(sa.text("""
        UPDATE users
        SET role=:role, updated_date=now()
        WHERE email=:email
        RETURNING id::text
    """), {"role": role, "email": email.strip().lower()}).scalar()
    if user_id is None:
        return None
    db.execute(sa.text("""
        INSERT INTO audit_log (actor_user_id, entity_type, entity_id, action, data)
        VALUES (NULL, 'user', :uid, 'role_set', json_build_object('role', CAST(:role AS text)))
    """), {"uid": user_id, "role": role})
    return user_id


def main():
    parser = argparse.ArgumentParser(description="Promote (or demote) an existing account to admin.")
    parser.add_argument("email")
    parser.add_argument("--revoke", action="store_true", help="set the role back to 'user'")
    args = parser.parse_args()

    role = USER_ROLE if args.revoke else ADMIN_ROLE
    db = SessionLocal()
    try:
        user_id = set_role(db, args.email, role)
        if user_id is None:
            raise SystemExit(f"error: no user with email {args.email}")
        db.commit()
        print(f"ok: {args.email} ({user_id}) is now {role}")
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    main()
