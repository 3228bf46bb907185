#!/usr/bin/env python3
"""Generate the signing and encryption secrets for a deployment.

Prints a JWT signing key (JWT_KEY, at least 32 characters) and a Fernet key
(FERNET_KEY) used to encrypt stored Google OAuth tokens.

Usage:
    python scripts/generate_secrets.py
    python scripts/generate_secrets.py --env-file >> .env

Security Notes:
    - Generate unique secrets per environment (staging, production)
    - Rotating JWT_KEY signs every user out
    - Rotating FERNET_KEY makes stored OAuth tokens unreadable; linked
      channels must go through the Google consent flow again
"""

import argparse
import secrets

from cryptography.fernet import Fernet

JWT_KEY_BYTES = 48  # 64 URL-safe characters


def generate_secrets() -> dict[str, str]:
    return {
        "JWT_KEY": secrets.token_urlsafe(JWT_KEY_BYTES),
        "FERNET_KEY": Fernet.generate_key().decode(),
    }


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--env-file",
        action="store_true",
        help="print only KEY=value lines, suitable for appending to a .env file",
    )
    args = parser.parse_args()

    values = generate_secrets()
    if args.env_file:
        for name, value in values.items():
            print(f"{name}={value}")
        return

    print("=" * 60)
    print("Generated deployment secrets")
    print("=" * 60)
    print()
    for name, value in values.items():
        print(f"{name}={value}")
    print()
    print("IMPORTANT:")
    print("  - Never commit these values to version control")
    print("  - Use different values for staging and production")
    print("  - Changing FERNET_KEY requires relinking every YouTube channel")
    print("=" * 60)


if __name__ == "__main__":
    main()
