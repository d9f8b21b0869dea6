# scripts/create_admin.py
import argparse
import sys

from sqlmodel import Session, select

from facultyeval.core.db import get_engine, init_db
from facultyeval.core.directory import create_profile
from facultyeval.core.errors import EvaluationError
from facultyeval.core.tokens import make_token
from facultyeval.models import Profile


def main():
    p = argparse.ArgumentParser(description="Create the first administrator and print a sign-in token")
    p.add_argument("--email", required=True)
    p.add_argument("--name", required=True, help="full name")
    args = p.parse_args()

    init_db(get_engine())
    with Session(get_engine()) as session:
        existing = session.exec(select(Profile).where(Profile.email == args.email)).first()
        if existing is not None:
            if existing.role != "admin":
                print(f"[ERR] {args.email} exists with role {existing.role}")
                sys.exit(1)
            profile = existing
        else:
            try:
                profile = create_profile(session, email=args.email, full_name=args.name, role="admin")
            except EvaluationError as e:
                print(f"[ERR] {e.message}")
                sys.exit(1)

    print(f"[OK] admin {profile.email} id={profile.id}")
    print(f"token: {make_token(profile.id)}")


if __name__ == "__main__":
    main()
