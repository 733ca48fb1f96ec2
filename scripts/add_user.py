#!/usr/bin/env python3
"""
Crear un usuario del dashboard directamente en el almacenamiento configurado.

Uso:
  python scripts/add_user.py --username ana --password secreto --role Editor
"""
from __future__ import annotations

import argparse
import sys

from dashboard.app_factory import build_dashboard
from dashboard.services.validation import ValidationError


def main() -> None:
    ap = argparse.ArgumentParser(description="Crear usuario del dashboard")
    ap.add_argument("--username", required=True, help="Nombre de usuario (unico)")
    ap.add_argument("--password", required=True, help="Contraseña inicial")
    ap.add_argument("--role", required=True, help="Id o nombre del rol (ej.: Editor)")
    args = ap.parse_args()

    dashboard = build_dashboard()
    role = dashboard.roles.get_by_id(args.role) or dashboard.roles.find_by_name(args.role)
    if not role:
        raise SystemExit(f"Rol '{args.role}' no existe")
    try:
        user = dashboard.user_service.save(username=args.username, password=args.password, role_id=role.id)
    except ValidationError as exc:
        raise SystemExit(exc.message)
    print("OK: usuario creado")
    print(f"  Id: {user.id}")
    print(f"  Usuario: {user.username}")
    print(f"  Rol: {role.name}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
