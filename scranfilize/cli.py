import argparse
import sys
from typing import List, Optional

from scranfilize.core.errors import ParseError, ScranfilizeError
from scranfilize.scramble.config import ScrambleConfig
from scranfilize.scramble.scrambler import run
from scranfilize.version import __version__


class SingleUseStore(argparse.Action):
    """Stores a value but refuses to see the same option twice."""
    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest) is not None:
            parser.error(f"multiple '{option_string}' options")
        setattr(namespace, self.dest, values)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="scranfilize",
        description="Scramble a DIMACS CNF: move variables and clauses, flip literals.",
        epilog="By default the original CNF is read from <stdin> and the scrambled "
               "CNF is written to <stdout>.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument("original", nargs="?", help="Original CNF (may be .gz, .bz2, .xz, .lzma or .7z).")
    parser.add_argument("scrambled", nargs="?", help="Where to write the scrambled CNF.")

    parser.add_argument("-p", dest="permute_variables", action="store_true", help="Completely permute variables.")
    parser.add_argument("-P", dest="permute_clauses", action="store_true", help="Completely permute clauses.")
    parser.add_argument("-r", dest="reverse_variables", action="store_true", help="Reverse order of all variables.")
    parser.add_argument("-R", dest="reverse_clauses", action="store_true", help="Reverse order of all clauses.")
    parser.add_argument("-s", dest="seed", type=int, action=SingleUseStore,
                        help="Random number generator seed (default hashes time and process id).")
    parser.add_argument("-f", dest="literal_flip_probability", type=float, action=SingleUseStore,
                        help="Probability of flipping a literal (default .01).")
    parser.add_argument("-v", dest="variable_move_window", type=float, action=SingleUseStore,
                        help="Relative variable move window (default .01).")
    parser.add_argument("-c", dest="clause_move_window", type=float, action=SingleUseStore,
                        help="Relative clause move window (default .01).")
    parser.add_argument("-a", dest="absolute_windows", action="store_true",
                        help="Use absolute move windows (window defaults become 1).")
    parser.add_argument("--force", action="store_true", help="Overwrite an existing scrambled CNF.")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    options = {k: v for k, v in vars(args).items() if k not in ("original", "scrambled")}

    try:
        config = ScrambleConfig.create(**options)
        run(args.original, args.scrambled, config)
    except ParseError as e:
        sys.stdout.flush()
        print(f"scranfilize: parse error: {e}", file=sys.stderr)
        return 1
    except ScranfilizeError as e:
        sys.stdout.flush()
        print(f"scranfilize: error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
