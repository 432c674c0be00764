# scripts/debug_token.py
import argparse

import jwt

from foodcourt.auth.identity import decode_identity


def main():
    parser = argparse.ArgumentParser(description="Decode a bearer token into food court identity claims.")
    parser.add_argument("token", help="JWT without the 'Bearer ' prefix")
    args = parser.parse_args()

    try:
        claims = decode_identity(args.token)
        print("✅ Token is valid!")
        print(f"user_id={claims.user_id} role={claims.role.value} vendor_id={claims.vendor_id}")
    except jwt.ExpiredSignatureError:
        print("❌ Token has expired.")
    except jwt.InvalidTokenError as e:
        print(f"❌ Invalid token: {e}")


if __name__ == "__main__":
    main()
