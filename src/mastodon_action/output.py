"""Report results back to the workflow that runs the action."""

import os
from collections.abc import Mapping

from mastodon_action.logging_config import logger

GITHUB_OUTPUT_ENV = "GITHUB_OUTPUT"


def write_output(key: str, value: str) -> None:
    """
    Write one output to the appropriate destination.

    Appends ``key=value`` to the file named by ``GITHUB_OUTPUT`` when the variable is
    set, otherwise prints the legacy ``::set-output`` command for self-hosted runners
    without an output file.
    """
    output_path = os.environ.get(GITHUB_OUTPUT_ENV)
    if output_path is None:
        print(f"::set-output name={key}::{value}")
        return

    try:
        with open(output_path, "a", encoding="utf-8") as output_file:
            output_file.write(f"{key}={value}\n")
    except OSError as e:
        logger.error(f"Error writing to {GITHUB_OUTPUT_ENV} file {output_path}: {e}")


def set_action_outputs(output_pairs: Mapping[str, str]) -> None:
    """Set several outputs, in the order given."""
    for key, value in output_pairs.items():
        write_output(key, value)
    logger.debug(f"Set action outputs: {', '.join(output_pairs)}")
