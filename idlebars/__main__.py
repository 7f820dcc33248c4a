"""Entry point for idlebars: python -m idlebars"""

import argparse
import logging
import sys
from pathlib import Path

from idlebars.config import Options, StartScreen
from idlebars.data.balance import BALANCE
from idlebars.engine.save import SaveCorruptError

logger = logging.getLogger(__name__)


def parse_options(argv: list[str] | None = None) -> Options:
    defaults = Options()
    parser = argparse.ArgumentParser(description="idlebars — a chain of progress bars")
    parser.add_argument("--save-file", type=Path, default=defaults.save_file,
                        help=f"Save file (default: {defaults.save_file})")
    parser.add_argument("--speed-base", type=float, default=BALANCE.bar.speed_base,
                        help=f"Progress per tick of a new bar (default: {BALANCE.bar.speed_base})")
    parser.add_argument("--ui", choices=[s.value for s in StartScreen],
                        default=StartScreen.NORMAL.value, help="Screen to start on")
    parser.add_argument("--log-file", type=Path, default=defaults.log_file,
                        help=f"Log file (default: {defaults.log_file})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log purchases too")
    args = parser.parse_args(argv)

    return Options(
        save_file=args.save_file,
        speed_base=args.speed_base,
        start_screen=StartScreen(args.ui),
        log_file=args.log_file,
        verbose=args.verbose,
    )


def main() -> None:
    options = parse_options()

    # The terminal belongs to the UI, so logs go to a file
    options.log_file.parent.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        filename=options.log_file,
        level=logging.DEBUG if options.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    from idlebars.app import IdleBarsApp

    try:
        app = IdleBarsApp(options)
    except SaveCorruptError:
        logger.exception("Refusing to start with a corrupt save")
        print(f"Save file {options.save_file} is corrupt; see {options.log_file}", file=sys.stderr)
        sys.exit(1)
    app.run()


if __name__ == "__main__":
    main()
