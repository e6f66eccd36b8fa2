"""
Logger Utility
==============

Provides logging functionality to capture terminal output to a file.
"""
import sys

from pathlib import Path
from typing  import Optional, TextIO


class TeeStream:
  """
  A stream that writes to both a terminal stream and a shared log file.
  """
  def __init__(self, terminal: TextIO, log_file: TextIO):
    self.terminal = terminal
    self.log_file = log_file

  def write(self, message: str):
    self.terminal.write(message)
    self.log_file.write(message)
    self.log_file.flush()

  def flush(self):
    self.terminal.flush()
    self.log_file.flush()


class LoggerContext:
  """
  Context to hold logger state for cleanup.
  """
  def __init__(
    self,
    log_file : TextIO,
    original_stdout,
    original_stderr,
  ):
    self.log_file        = log_file
    self.original_stdout = original_stdout
    self.original_stderr = original_stderr


def start_logging(
  log_filepath: Optional[Path],
) -> Optional[LoggerContext]:
  """
  Start logging terminal output (stdout and stderr) to a file.

  Input:
  ------
    log_filepath : Path | None
      Path to the log file. Parent folders are created. None disables logging.

  Output:
  -------
    context : LoggerContext | None
      Context object for cleanup. None if logging is disabled.
  """
  if log_filepath is None:
    return None

  log_filepath = Path(log_filepath)
  log_filepath.parent.mkdir(parents=True, exist_ok=True)

  # Store original streams
  original_stdout = sys.stdout
  original_stderr = sys.stderr

  # One file handle shared by both tee streams
  log_file = open(log_filepath, 'w')

  # Redirect stdout and stderr
  sys.stdout = TeeStream(original_stdout, log_file)
  sys.stderr = TeeStream(original_stderr, log_file)

  return LoggerContext(
    log_file,
    original_stdout,
    original_stderr,
  )


def stop_logging(
  context: Optional[LoggerContext],
) -> None:
  """
  Stop logging and restore original stdout/stderr.

  Input:
  ------
    context : LoggerContext | None
      Context object from start_logging.

  Output:
  -------
    None
  """
  if context is None:
    return

  # Restore original streams
  sys.stdout = context.original_stdout
  sys.stderr = context.original_stderr

  # Close log file
  context.log_file.close()
