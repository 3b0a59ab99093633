#!/usr/bin/env python3
"""
Issue a signed access token for local development.

Production tokens come from the identity provider; this script signs one with the
configured JWT_SECRET_KEY so the API can be exercised locally.

Usage:
  python scripts/issue_dev_token.py [--user-id UUID] [--tenant-id UUID]

The tenant defaults to the user when omitted.
"""

import argparse
import sys
from pathlib import Path
from uuid import UUID, uuid4

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.config.settings import get_settings
from src.infrastructure.auth.jwt_service import JWTService


def issue_token(user_id: UUID, tenant_id: UUID | None) -> str:
    settings = get_settings()
    jwt_service = JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    return jwt_service.create_access_token(subject=user_id, tenant_id=tenant_id)


def main():
    parser = argparse.ArgumentParser(description="Issue a development access token")
    parser.add_argument("--user-id", type=UUID, help="User ID (random when omitted)")
    parser.add_argument("--tenant-id", type=UUID, help="Tenant ID (defaults to the user)")
    args = parser.parse_args()

    user_id = args.user_id or uuid4()
    token = issue_token(user_id, args.tenant_id)

    print(f"User ID:   {user_id}")
    print(f"Tenant ID: {args.tenant_id or user_id}")
    print()
    print(token)


if __name__ == "__main__":
    main()
