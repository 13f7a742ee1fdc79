"""
Push Grader: CI homework review and functional testing

Usage:
  main.py review [--config=PATH]
  main.py test [--config=PATH]
  main.py (-h | --help)
  main.py --version

Commands:
  review         Ask the language model to approve or reject the pushed code.
  test           Generate test cases and run them against the pushed program.

Options:
  --config=PATH  Path to YAML configuration file [default: grader_config.yml].
  -h --help      Show this screen.
  --version      Show version.
"""

import sys
from pathlib import Path

from docopt import docopt

from push_grader import __version__
from push_grader.config import DEFAULT_CONFIG_FILENAME
from push_grader.config_loader import load_config, load_environment
from push_grader.errors import GraderError
from push_grader.pipeline import run_functional_tests, run_review
from push_grader.reporter import annotate_error


def main(argv: list[str] | None = None) -> int:
    """
    Main CLI entrypoint.

    Returns:
        Exit code (0 for success, 1 for any failure).
    """
    arguments = docopt(__doc__, argv=argv, version=f"push-grader {__version__}")
    config_path = Path(arguments["--config"])

    # The default file is optional; an explicit one must exist
    if arguments["--config"] == DEFAULT_CONFIG_FILENAME and not config_path.exists():
        config_path = None

    try:
        config = load_config(config_path)
        if config_path is not None:
            print(f"Loaded configuration from {config_path}")
        env = load_environment()

        if arguments["review"]:
            return run_review(config, env)
        return run_functional_tests(config, env)
    except GraderError as e:
        annotate_error(str(e))
        return 1
    except KeyboardInterrupt:
        print("\nGrading interrupted by user.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
