"""
Serve the Flex Selector API with uvicorn.

Engine and catalog options are exported as the environment variables that
app.api reads, so they also reach reloaded worker processes.

Usage:
    python -m scripts.run_server [--engine dp|greedy|hybrid] [--seed S] [--reload]

Examples:
    # Hybrid engine on the default 1500-asset catalog
    python -m scripts.run_server

    # Exact engine on a small catalog, with auto-reload
    python -m scripts.run_server --engine dp --asset-count 200 --reload
"""

import argparse
import os

import uvicorn

from app.models import EngineKind


def export_settings(args: argparse.Namespace) -> None:
    """Expose CLI choices as SELECTION_ENGINE / ASSET_PROVIDER_* variables."""
    if args.engine:
        os.environ["SELECTION_ENGINE"] = args.engine
    if args.asset_count is not None:
        os.environ["ASSET_PROVIDER_COUNT"] = str(args.asset_count)
    if args.seed is not None:
        os.environ["ASSET_PROVIDER_SEED"] = str(args.seed)


def main():
    parser = argparse.ArgumentParser(
        description="Run the Flex Selector API server",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--host", default="0.0.0.0", help="Bind address (default: 0.0.0.0)")
    parser.add_argument("--port", type=int, default=8000, help="Port (default: 8000)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
    )
    parser.add_argument(
        "--engine",
        choices=[kind.value for kind in EngineKind],
        help="Selection engine (default: SELECTION_ENGINE or hybrid)",
    )
    parser.add_argument("--asset-count", type=int, help="Size of the generated catalog")
    parser.add_argument("--seed", type=int, help="Catalog seed")
    args = parser.parse_args()

    export_settings(args)
    print(
        f"Flex Selector on http://{args.host}:{args.port} "
        f"(engine: {os.environ.get('SELECTION_ENGINE') or EngineKind.HYBRID.value})"
    )
    print("  POST /assets, GET /health, docs at /docs")

    uvicorn.run(
        "app.api:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
