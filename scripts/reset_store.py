#!/usr/bin/env python3
"""
Borrar usuarios, roles, clientes, servicios y la sesion guardada, y volver a
crear los datos iniciales (roles predefinidos + usuario admin).

Uso:
  python scripts/reset_store.py [--yes]
"""
from __future__ import annotations

import argparse
import sys

from dashboard.app_factory import build_dashboard


def main() -> None:
    ap = argparse.ArgumentParser(description="Reiniciar el almacenamiento del dashboard")
    ap.add_argument("--yes", action="store_true", help="No pedir confirmacion")
    args = ap.parse_args()

    if not args.yes:
        answer = input("Se borraran todos los datos. Continuar? [s/N] ").strip().lower()
        if answer not in {"s", "si", "y", "yes"}:
            print("Cancelado.")
            return

    dashboard = build_dashboard(seed=False)
    dashboard.store.reset()
    dashboard.store.ensure_seeded()
    print("OK: almacenamiento reiniciado")
    print(f"  Roles: {', '.join(r.name for r in dashboard.roles.list())}")
    print(f"  Usuarios: {', '.join(u.username for u in dashboard.users.list())}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - uso CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
