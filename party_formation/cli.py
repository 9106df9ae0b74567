"""Command line preview of resolved party anchors.

Usage::

    party-formation params.json --party-size 5
    party-formation js/plugins.js --plugin PartyFormation

Prints one line per party slot with its anchor (``default`` when the host's
own placement applies) followed by the retreat motion in effect.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from party_formation.battle import BattleSession
from party_formation.params import (
    FormationParams,
    load_parameters,
    load_plugin_parameters,
)

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="party-formation",
        description="Preview resolved side-view battle positions.",
    )
    parser.add_argument("path", type=Path, help="Parameter JSON or plugins.js file")
    parser.add_argument(
        "--plugin",
        default=None,
        help="Read the parameters of this plugin from a plugins.js file",
    )
    parser.add_argument(
        "--party-size",
        type=int,
        default=None,
        help="Members to place (default: number of configured positions)",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default="WARNING",
    )
    return parser


def _load(args: argparse.Namespace) -> FormationParams:
    if args.plugin is not None:
        return load_plugin_parameters(args.path, args.plugin)
    return load_parameters(args.path)


def format_preview(session: BattleSession) -> List[str]:
    """Render the placed sprites and the retreat motion as text lines."""
    lines: List[str] = []
    for sprite in session.sprites:
        source = "" if sprite.configured else " (default)"
        lines.append(f"{sprite.index}: ({sprite.home.x}, {sprite.home.y}){source}")
    override = session.retreat_provider.retreat_override()
    motion = override or session.default_retreat
    label = "override" if override else "default"
    lines.append(
        f"retreat: dx={motion.dx} dy={motion.dy} duration={motion.duration} ({label})"
    )
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        params = _load(args)
    except (OSError, ValueError) as exc:
        print(f"party-formation: {exc}", file=sys.stderr)
        return 2

    party_size = len(params.positions) if args.party_size is None else args.party_size
    session = BattleSession(params)
    try:
        session.start_battle(party_size)
    except ValueError as exc:
        print(f"party-formation: {exc}", file=sys.stderr)
        return 2
    logger.debug("Previewing %d party members", party_size)

    for line in format_preview(session):
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
