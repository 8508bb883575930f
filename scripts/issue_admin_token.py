#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(ROOT))

from app.admin_agent.auth import ADMIN_TOKEN_EXPIRE_MINUTES, create_admin_token  # noqa: E402
from app.core.config import FOREST_AUTH_SECRET, IS_PRODUCTION  # noqa: E402


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Gera um token de admin para chamar as rotas do agente localmente.")
    parser.add_argument("--email", required=True, help="Email do admin")
    parser.add_argument(
        "--expires",
        type=int,
        default=ADMIN_TOKEN_EXPIRE_MINUTES,
        help="Validade em minutos",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Permite executar com NODE_ENV=production",
    )
    return parser.parse_args()


def main() -> int:
    args = parse_args()

    if IS_PRODUCTION and not args.force:
        print("NODE_ENV=production. Use --force para gerar mesmo assim.")
        return 1

    if not FOREST_AUTH_SECRET:
        print("FOREST_AUTH_SECRET não configurado.")
        return 1

    print(create_admin_token(FOREST_AUTH_SECRET, email=args.email, expires_minutes=args.expires))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
