"""Mint an identity token for local development.

In production tokens come from the identity provider.  Locally this
script signs one with ``SECRET_KEY`` so the API can be exercised with
curl or the browser client:

    python create_token.py --sub user-1 --email alex@example.com --first-name Alex
"""
import argparse

from wedsimplify_api.app.core.security import create_access_token


def main():
    ap = argparse.ArgumentParser(description="Create a signed WedSimplify identity token.")
    ap.add_argument("--sub", required=True, help="Stable user id (becomes users.id)")
    ap.add_argument("--email", help="Email claim")
    ap.add_argument("--first-name", help="first_name claim")
    ap.add_argument("--last-name", help="last_name claim")
    ap.add_argument("--provider", default="dev", help="Name of the login provider")
    ap.add_argument("--days", type=int, default=30, help="Lifetime in days (default 30)")
    args = ap.parse_args()

    claims = {
        "sub": args.sub,
        "email": args.email,
        "first_name": args.first_name,
        "last_name": args.last_name,
        "provider": args.provider,
    }
    token = create_access_token(
        {key: value for key, value in claims.items() if value is not None},
        expires_delta=args.days * 24 * 60 * 60,
    )
    print(token)


if __name__ == "__main__":
    main()
