"""CLI for PrintCare — create tables, seed the catalog, run the server."""

from __future__ import annotations

import argparse
import asyncio
import sys

from printcare.services.cost_estimator import COST_RANGES

# Starter catalog: brand -> [(model, type)]
SEED_BRANDS = {
    "Canon": [("PIXMA G2010", "inkjet"), ("PIXMA iP2770", "inkjet"), ("imageCLASS MF3010", "laser")],
    "Epson": [("L3110", "inkjet"), ("L120", "inkjet"), ("L5190", "multifunction")],
    "HP": [("DeskJet 2135", "inkjet"), ("LaserJet P1102", "laser")],
    "Brother": [("DCP-T420W", "multifunction"), ("HL-L2321D", "laser")],
}

SEED_TECHNICIANS = [
    {"name": "Budi Santoso", "phone": "081200000001", "specialization": ["Canon", "Epson"], "experience": 5},
    {"name": "Andi Wijaya", "phone": "081200000002", "specialization": ["HP", "Brother"], "experience": 3},
]


async def cmd_init_db(args):
    """Create all tables in the configured database."""
    from printcare.config import get_settings
    from printcare.db.engine import build_engine, create_tables

    settings = get_settings()
    engine = build_engine(settings.database_url)
    await create_tables(engine)
    await engine.dispose()
    print(f"Tables created in {settings.database_url}")


async def cmd_seed(args):
    """Seed brands, models, problem categories and technicians."""
    from printcare.config import get_settings
    from printcare.db.engine import build_engine, build_session_factory, create_tables
    from printcare.db.store import CatalogStore

    settings = get_settings()
    engine = build_engine(settings.database_url)
    await create_tables(engine)
    store = CatalogStore(build_session_factory(engine))

    existing = {b.name for b in await store.list_brands()}
    if existing and not args.force:
        print("Catalog already has brands, skipping seed (use --force to add anyway).")
        await engine.dispose()
        return

    for brand_name, models in SEED_BRANDS.items():
        brand = await store.add_brand(brand_name)
        for model_name, model_type in models:
            await store.add_model(brand.id, model_name, model_type)
        print(f"Created brand: {brand_name} ({len(models)} models)")

    for category_name in COST_RANGES:
        await store.add_category(category_name)
    print(f"Created {len(COST_RANGES)} problem categories")

    for tech in SEED_TECHNICIANS:
        await store.add_technician(**tech)
        print(f"Created technician: {tech['name']}")

    await engine.dispose()
    print("\nSeed complete. Start the server with: printcare serve")


def cmd_serve(args):
    import uvicorn

    uvicorn.run("printcare.main:app", host=args.host, port=args.port, reload=args.reload)


def main():
    parser = argparse.ArgumentParser(description="PrintCare admin CLI")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init-db", help="Create database tables")

    sd = subparsers.add_parser("seed", help="Seed the printer catalog and technicians")
    sd.add_argument("--force", action="store_true", help="Seed even if brands already exist")

    sv = subparsers.add_parser("serve", help="Run the API server")
    sv.add_argument("--host", default="127.0.0.1")
    sv.add_argument("--port", type=int, default=8000)
    sv.add_argument("--reload", action="store_true")

    args = parser.parse_args()
    if not args.command:
        parser.print_help()
        sys.exit(1)

    from printcare.config import configure_logging, get_settings
    configure_logging(get_settings().log_level)

    if args.command == "init-db":
        asyncio.run(cmd_init_db(args))
    elif args.command == "seed":
        asyncio.run(cmd_seed(args))
    elif args.command == "serve":
        cmd_serve(args)


if __name__ == "__main__":
    main()
