"""Main entry point for the sea urchin reef simulation.

This module provides command-line options to run the simulation:
- Web mode (default): FastAPI backend serving the simulation API
- Headless mode: Stats-only, faster than realtime for experiments
"""

import argparse
import logging
import os
from pathlib import Path

import orjson

from backend.logging_config import configure_logging
from reef.config.display import SEPARATOR_WIDTH

logger = logging.getLogger(__name__)


def run_web_server(seed=None):
    """Run the web server hosting the simulation API."""
    import uvicorn

    from backend.app_factory import DEFAULT_API_PORT, create_app

    port = int(os.getenv("REEF_API_PORT", str(DEFAULT_API_PORT)))
    app = create_app(seed=seed)

    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("SEA URCHIN REEF SIMULATION - WEB SERVER")
    logger.info("=" * SEPARATOR_WIDTH)
    logger.info("API docs available at http://localhost:%d/docs", port)
    logger.info("Press Ctrl+C to stop the server")
    logger.info("=" * SEPARATOR_WIDTH)

    uvicorn.run(app, host="0.0.0.0", port=port)


def run_headless(max_ticks, stats_interval, seed=None, export_stats=None):
    """Run the simulation in headless mode (no server).

    Args:
        max_ticks: Maximum number of ticks to simulate
        stats_interval: Log stats every N ticks
        seed: Optional random seed for deterministic behavior
        export_stats: Optional filename to export final stats and history as JSON
    """
    from reef.driver import SimulationDriver
    from reef.simulation.engine import SimulationEngine

    engine = SimulationEngine(seed=seed)
    engine.reset()
    driver = SimulationDriver(engine)
    stats = driver.run_headless(max_ticks=max_ticks, stats_interval=stats_interval)

    if export_stats:
        payload = {
            "seed": seed,
            "params": engine.params.to_dict(),
            "stats": stats.to_dict(),
            "history": engine.get_history().to_dict(),
        }
        Path(export_stats).write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        logger.info("Stats exported to %s", export_stats)


def main():
    """Parse command-line arguments and run the appropriate mode."""
    parser = argparse.ArgumentParser(
        description="Sea Urchin Reef Ecosystem Simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run web server (default)
  python main.py

  # Quick headless run
  python main.py --headless --max-ticks 1000

  # Reproducible run with exported history
  python main.py --headless --max-ticks 5000 --seed 42 --export-stats run.json
        """,
    )

    parser.add_argument(
        "--headless", action="store_true", help="Run in headless mode (no server, stats only)"
    )

    parser.add_argument(
        "--max-ticks",
        type=int,
        default=1000,
        help="Maximum ticks to simulate in headless mode (default: 1000)",
    )

    parser.add_argument(
        "--stats-interval",
        type=int,
        default=100,
        help="Log stats every N ticks in headless mode (default: 100)",
    )

    parser.add_argument(
        "--seed", type=int, default=None, help="Random seed for deterministic behavior (optional)"
    )

    parser.add_argument(
        "--export-stats",
        type=str,
        default=None,
        metavar="FILENAME",
        help="Export final stats and history to a JSON file",
    )

    args = parser.parse_args()
    configure_logging(include_uvicorn=not args.headless)

    if args.headless:
        logger.info("Starting headless simulation...")
        logger.info(
            "Configuration: %d ticks, stats every %d ticks", args.max_ticks, args.stats_interval
        )
        run_headless(
            args.max_ticks, args.stats_interval, seed=args.seed, export_stats=args.export_stats
        )
    else:
        run_web_server(seed=args.seed)


if __name__ == "__main__":
    main()
