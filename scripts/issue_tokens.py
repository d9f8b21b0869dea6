# scripts/issue_tokens.py
import argparse
import csv

from sqlmodel import Session

from facultyeval.core.db import get_engine
from facultyeval.core.directory import list_profiles
from facultyeval.core.tokens import make_token


def main():
    p = argparse.ArgumentParser(description="Write sign-in tokens for every profile of a role to CSV")
    p.add_argument("--role", default="student", choices=["admin", "faculty", "evaluator", "student"])
    p.add_argument("--out", default="tokens_out.csv")
    p.add_argument("--limit", type=int, default=1000)
    args = p.parse_args()

    with Session(get_engine()) as session:
        profiles = list_profiles(session, role=args.role, limit=args.limit)

    with open(args.out, "w", newline="", encoding="utf-8") as f_out:
        writer = csv.DictWriter(f_out, fieldnames=["#", "user_id", "email", "full_name", "token"])
        writer.writeheader()
        for i, prof in enumerate(profiles, start=1):
            writer.writerow({
                "#": i,
                "user_id": prof.id,
                "email": prof.email,
                "full_name": prof.full_name or "",
                "token": make_token(prof.id),
            })

    print(f"[OK] wrote {len(profiles)} {args.role} tokens to '{args.out}'")


if __name__ == "__main__":
    main()
