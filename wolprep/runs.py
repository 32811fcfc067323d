"""Run folders on disk and JSON input for the solve commands."""

import os
import sys
import json
import logging
from datetime import datetime
from typing import Optional

from slugify import slugify

from wolprep.errors import InputError

logger = logging.getLogger(__name__)


# ─── Output ───────────────────────────────────────────────────────────────────

def create_runs_dir(path: str) -> str:
    """Make sure the folder that holds every run of a command exists."""
    runs_dir = os.path.abspath(path)
    if os.path.isdir(runs_dir):
        logger.info("runs directory already exists: %s", runs_dir)
    else:
        os.makedirs(runs_dir)
        logger.info("runs directory created: %s", runs_dir)
    return runs_dir


def create_run_dir(runs_dir: str, now: Optional[datetime] = None) -> str:
    """Create the timestamped folder for this run.

    ':' is replaced because some filesystems reject it in names.
    """
    timestamp = (now or datetime.now()).isoformat(timespec="milliseconds")
    run_dir = os.path.join(runs_dir, timestamp.replace(":", "-"))
    os.makedirs(run_dir)
    logger.info("run directory created: %s", run_dir)
    return run_dir


def artifact_name(*parts: str, ext: str = "json") -> str:
    """Build a safe file name from scraped strings, e.g. article number + title."""
    slug = "--".join(slugify(p) for p in parts if p) or "result"
    return f"{slug}.{ext}"


def write_text(dir_path: str, file_name: str, text: str) -> str:
    path = os.path.join(dir_path, file_name)
    logger.debug("writing to: %s", path)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    logger.info("written to: %s", path)
    return path


def write_json(dir_path: str, file_name: str, data) -> str:
    path = os.path.join(dir_path, file_name)
    logger.debug("writing json to: %s", path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    logger.info("json written to: %s", path)
    return path


# ─── Input ────────────────────────────────────────────────────────────────────

def read_json_file(path: str):
    logger.debug("reading json from: %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error("error reading or parsing %s: %s", path, e)
        raise InputError(f"Unable to read JSON from {path}: {e}") from e
    logger.info("json read from: %s", path)
    return data


def read_json_stdin(stream=None):
    stream = stream or sys.stdin
    if stream.isatty():
        raise InputError("No pipe detected. Pass a file path or pipe JSON into stdin.")
    logger.debug("reading json from stdin")
    try:
        data = json.loads(stream.read())
    except ValueError as e:
        raise InputError(f"Unable to parse JSON from stdin: {e}") from e
    logger.info("json read from stdin")
    return data


def read_json_input(path: Optional[str] = None, stream=None):
    """Read the JSON to process from ``path`` or, when omitted, from stdin."""
    if path:
        logger.info("file path mode, reading %s", path)
        data = read_json_file(path)
    else:
        logger.info("stdin mode, reading piped input")
        data = read_json_stdin(stream)
    if not data:
        raise InputError("Unable to read JSON to process.")
    return data
