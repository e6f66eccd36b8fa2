import sys
import argparse

from typing import List, Optional


def parse_command_line_arguments(
  argv : Optional[List[str]] = None,
) -> argparse.Namespace:
  """
  Parse command-line arguments for the acceleration partial evaluation.

  Input:
  ------
    argv : list[str] | None
      Arguments to parse. None reads from sys.argv.

  Output:
  -------
    args : argparse.Namespace
      Parsed command-line arguments.
  """
  parser = argparse.ArgumentParser(
    description     = 'Acceleration partials of a vehicle w.r.t. its state and estimatable parameters',
    formatter_class = argparse.RawDescriptionHelpFormatter,
  )

  # If no arguments provided, print help and exit
  if argv is None and len(sys.argv) == 1:
    parser.print_help(sys.stderr)
    sys.exit(1)

  parser.add_argument(
    '--config',
    '--config-filepath',
    dest     = 'config_filepath',
    type     = str,
    required = True,
    help     = 'YAML configuration file, as a path or a filename in data/configurations.',
  )
  parser.add_argument(
    '--epoch',
    dest    = 'epoch',
    type    = float,
    default = None,
    help    = 'Epoch at which the partials are evaluated [s]. Overrides the configuration file.',
  )
  parser.add_argument(
    '--log-filepath',
    dest    = 'log_filepath',
    type    = str,
    default = None,
    help    = 'File receiving a copy of the terminal output. Overrides the configuration file.',
  )

  # Parse arguments
  args = parser.parse_args(argv)

  return args
