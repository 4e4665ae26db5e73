"""Print an access token for an existing user.

Usage:
    python create_token.py jane@example.com --days 365
"""
import argparse
import sys

from contact_keeper_api.app.core.security import create_user_token
from contact_keeper_api.app.services.user_service import UserService


def main() -> None:
    ap = argparse.ArgumentParser(description="Mint an access token for a registered user.")
    ap.add_argument("email", help="Email of the user the token is issued for")
    ap.add_argument("--days", type=int, default=None, help="Token lifetime in days (default: ACCESS_TOKEN_EXPIRE_MINUTES)")
    args = ap.parse_args()

    user_id = UserService.get_user_id_by_email(args.email)
    if user_id is None:
        print(f"[!] No user found with email: {args.email}", file=sys.stderr)
        sys.exit(2)

    expires = args.days * 24 * 60 * 60 if args.days else None
    print(create_user_token(user_id, expires_delta=expires))


if __name__ == "__main__":
    main()
