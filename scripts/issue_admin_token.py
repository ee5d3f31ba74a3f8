#!/usr/bin/env python3
"""
Administrator Token Script.

Mints a signed bearer token for the /api/v1/admin endpoints using
ADMIN_JWT_SECRET from the environment (or .env).

Usage:
    python scripts/issue_admin_token.py [operator-name]
"""
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from infrastructure.auth.jwt_provider import JWTAuthProvider
from infrastructure.auth.provider import ADMIN_ROLE, TokenUser


def main() -> None:
    subject = sys.argv[1] if len(sys.argv) > 1 else "admin"
    token = JWTAuthProvider().create_token(TokenUser(subject=subject, role=ADMIN_ROLE))
    print(token)


if __name__ == "__main__":
    main()
