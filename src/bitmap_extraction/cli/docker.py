"""
CLI module for Docker operations.

Provides environment variable support for Docker deployment.
"""

import os
import sys

from bitmap_extraction.cli.extract_bitmaps import configure_logging, run
from bitmap_extraction.core.constants import DEFAULT_SOURCE_PATTERN

TRUE_VALUES = ('1', 'true', 'yes', 'on')


def extract_with_env(environ=None):
    """
    Extract bitmaps using environment variables.

    Supports Docker environment variables:
    - INPUT_PATH: Archive file or folder (required)
    - OUTPUT_PATH: Output directory (default: /OUTPUT)
    - SOURCE_PATTERN: Pattern for folder mode (default: *.lib)
    - VERIFY_DECODE: 1/true/yes to verify with Pillow (default: true)

    Returns
    -------
    int
        Process exit code.
    """
    if environ is None:
        environ = os.environ

    input_path = environ.get('INPUT_PATH')
    output_path = environ.get('OUTPUT_PATH', '/OUTPUT')
    pattern = environ.get('SOURCE_PATTERN', DEFAULT_SOURCE_PATTERN)
    verify = environ.get('VERIFY_DECODE', 'true').strip().lower() in TRUE_VALUES

    if not input_path:
        print("Error: INPUT_PATH environment variable not set", file=sys.stderr)
        return 1

    if not os.path.exists(input_path):
        print(f"Error: input not found: {input_path}", file=sys.stderr)
        return 1

    os.makedirs(output_path, exist_ok=True)

    try:
        print(f"Extracting bitmaps from: {input_path}")
        print(f"Output: {output_path}")

        total = run([input_path], output_path, pattern, verify=verify)

        print(f"✓ Extraction complete: {total} bitmaps")
        return 0

    except (IOError, ValueError) as e:
        print(f"✗ Extraction failed: {e}", file=sys.stderr)
        return 1


def main():
    """Entry point for the Docker image."""
    configure_logging(os.environ.get('VERBOSE', '').strip().lower() in TRUE_VALUES)
    sys.exit(extract_with_env())


if __name__ == "__main__":
    main()
