"""
Run the Inspection Finder application.

Usage:
    python run.py                          # Run the web server
    python run.py --data path/to/file.json # Serve a different inspection data file
    python run.py --no-reload              # Run without auto-reload (more stable)
"""
import sys
import os
import argparse
import shutil
import logging
from pathlib import Path

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def clear_pycache():
    """Clear all __pycache__ directories to prevent stale bytecode issues."""
    logger.info("Clearing Python cache directories...")
    project_root = Path(__file__).parent
    cleared = 0
    for cache_dir in project_root.rglob("__pycache__"):
        try:
            shutil.rmtree(cache_dir)
            cleared += 1
        except OSError:
            logger.debug(f"  Skipped (in use): {cache_dir.relative_to(project_root)}")

    if cleared > 0:
        logger.info(f"Cache cleared: {cleared} directories removed")


def main():
    parser = argparse.ArgumentParser(description="Inspection Finder Application")
    parser.add_argument("--data", help="Inspection data file path or http(s) URL (overrides DATA_URL)")
    parser.add_argument("--host", help="Bind host (overrides API_HOST)")
    parser.add_argument("--port", type=int, help="Bind port (overrides API_PORT)")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload (more stable)")
    parser.add_argument("--clear-cache", action="store_true", help="Clear Python cache before starting")
    args = parser.parse_args()

    if args.clear_cache:
        clear_pycache()

    # Settings are read from the environment, so the reloader process picks these up too
    if args.data:
        os.environ["DATA_URL"] = args.data

    import uvicorn
    from inspection_finder.config import Settings

    settings = Settings()
    host = args.host or settings.API_HOST
    port = args.port or settings.API_PORT

    logger.info("=" * 60)
    logger.info("Starting Inspection Finder...")
    logger.info(f"Data source: {settings.DATA_URL}")
    logger.info(f"Page:      http://{host}:{port}")
    logger.info(f"API Docs:  http://{host}:{port}/docs")
    logger.info(f"Auto-reload: {'disabled' if args.no_reload else 'enabled'}")
    logger.info("=" * 60)

    try:
        uvicorn.run(
            "inspection_finder.main:app",
            host=host,
            port=port,
            reload=not args.no_reload,
            log_level="info",
            access_log=True,
            timeout_keep_alive=75,
            timeout_graceful_shutdown=30,
        )
    except KeyboardInterrupt:
        logger.info("\nShutting down gracefully...")
    except Exception as e:
        logger.error(f"Server error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
