"""Entry point: ``python -m colony_priority``.

Supports two modes:
  - ``python -m colony_priority serve``             → Launch the FastAPI diagnostic server (default)
  - ``python -m colony_priority evaluate FILE``     → Score a JSON scenario headlessly
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path

from pydantic import BaseModel, Field, ValidationError

from colony_priority.core.snapshot import ColonySnapshot

logger = logging.getLogger(__name__)


class Scenario(BaseModel):
    """Scenario file: a snapshot plus which colonist (and category) to score."""

    snapshot: ColonySnapshot = Field(default_factory=ColonySnapshot)
    actor_id: int | None = None
    category: str | None = None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Colony work-priority scoring engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI diagnostic server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--strict", action="store_true", help="Fail requests instead of falling back")
    srv.add_argument("--hauling-urgent", action="store_true", help="Register the HaulingUrgent category")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless evaluation ---
    ev = sub.add_parser("evaluate", help="Score a JSON scenario file")
    ev.add_argument("scenario", type=str, help="Path to the scenario JSON")
    ev.add_argument("--actor", type=int, default=None, help="Colonist id (overrides the file)")
    ev.add_argument("--category", type=str, default=None, help="Single category key (overrides the file)")
    ev.add_argument("--settings", type=str, default=None, help="Consideration weights JSON")
    ev.add_argument("--explain", action="store_true", help="Print the justification trail")
    ev.add_argument("--strict", action="store_true")
    ev.add_argument("--hauling-urgent", action="store_true")
    ev.add_argument("--log-level", type=str, default="WARNING", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from colony_priority.api.app import create_app
    from colony_priority.config import PriorityConfig

    config = PriorityConfig(
        strict=args.strict,
        include_hauling_urgent=args.hauling_urgent,
        host=args.host,
        port=args.port,
        log_level=args.log_level,
    )
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


def _run_evaluate(args: argparse.Namespace) -> int:
    from colony_priority.api.service import PriorityService
    from colony_priority.config import PriorityConfig
    from colony_priority.core.errors import PriorityError
    from colony_priority.core.settings import load_settings
    from colony_priority.utils.logging import setup_logging

    config = PriorityConfig(
        strict=args.strict,
        include_hauling_urgent=args.hauling_urgent,
        log_level=args.log_level,
    )
    setup_logging(config.log_level, stream=sys.stderr)

    try:
        scenario = Scenario.model_validate_json(Path(args.scenario).read_text(encoding="utf-8"))
        snapshot = scenario.snapshot
        if args.settings:
            snapshot = dataclasses.replace(snapshot, settings=load_settings(args.settings))
    except (OSError, ValidationError) as exc:
        logger.error("Cannot load scenario: %s", exc)
        return 1

    actor_id = args.actor if args.actor is not None else scenario.actor_id
    actor = None
    if actor_id is not None:
        actor = next((a for a in snapshot.colonists if a.id == actor_id), None)
        if actor is None:
            logger.error("No colonist with id %d in %s", actor_id, args.scenario)
            return 1

    service = PriorityService(config)
    category = args.category or scenario.category
    try:
        if category is not None:
            states = {category: service.evaluate(actor, category, snapshot)}
        else:
            states = service.evaluate_all(actor, snapshot)
        rows = [(key, state, state.to_tier()) for key, state in states.items()]
    except PriorityError as exc:
        logger.error("Evaluation failed: %s", exc)
        return 2

    name = actor.name if actor is not None else "<no actor>"
    print(f"Priorities for {name} at tick {snapshot.tick}")
    for key, state, tier in rows:
        flags = "never" if state.disabled else ("always" if state.enabled else "")
        print(f"  {key:<16} tier {int(tier)}  {state.value:>4.0%}  {flags}")
        if args.explain:
            for line in state.justifications:
                print(f"      {line}")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    # Default to serve mode if no subcommand given
    if args.command is None:
        args = parser.parse_args(["serve"])
    if args.command == "serve":
        _run_server(args)
        return 0
    return _run_evaluate(args)


if __name__ == "__main__":
    sys.exit(main())
