import argparse
import logging
import sys
from pathlib import Path
import os
os.environ['PYGAME_HIDE_SUPPORT_PROMPT'] = "hide"

# Ensure repo root is on sys.path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from shapeclick.app.loader import available_games
from shapeclick.app.loop import run_game
from shapeclick.core.errors import ShapeClickError

logger = logging.getLogger("shapeclick.launcher")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Shape Click Launcher")
    parser.add_argument("--game", default="shape-click", help="Game folder name under games/")
    parser.add_argument("--screen", default="900x700", help="Screen size WxH, e.g. 900x700")
    parser.add_argument("--mirror", action="store_true", help="Mirror the game window horizontally")
    parser.add_argument("--show-fps", action="store_true", help="Draw the frame rate in a corner")
    parser.add_argument("--policy", choices=["first_to_score", "fixed_rounds"],
                        help="Override the manifest's termination policy")
    parser.add_argument("--target", type=int,
                        help="Target score (first_to_score) or round count (fixed_rounds)")
    parser.add_argument("--shapes", type=int, help="Shapes per round")
    parser.add_argument("--seed", type=int, help="Seed the layout generator for a repeatable game")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"], help="Logging verbosity")
    parser.add_argument("--list", action="store_true", help="List installed games and exit")
    return parser


def options_from_args(args: argparse.Namespace) -> dict:
    """Manifest option overrides taken from the command line."""
    opts = {}
    if args.policy:
        opts["policy"] = args.policy
    if args.target is not None:
        if args.policy == "first_to_score":
            opts["target_score"] = args.target
        elif args.policy == "fixed_rounds":
            opts["total_rounds"] = args.target
        else:
            # the manifest decides the policy; it reads whichever key it needs
            opts["target_score"] = opts["total_rounds"] = args.target
    if args.shapes is not None:
        opts["shape_count"] = args.shapes
    if args.seed is not None:
        opts["seed"] = args.seed
    return opts


def parse_screen(text: str) -> tuple:
    try:
        w, h = map(int, text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"screen must look like WxH, got {text!r}") from None
    return w, h


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.list:
        for name in available_games():
            print(name)
        return 0

    try:
        return run_game(
            game_id=args.game,
            screen_size=parse_screen(args.screen),
            mirror=args.mirror,
            show_fps=args.show_fps,
            options=options_from_args(args),
        )
    except (ShapeClickError, FileNotFoundError, AttributeError, argparse.ArgumentTypeError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
