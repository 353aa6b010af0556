"""
Command-line interface for embedded bitmap extraction.

Provides the main entry point for extracting bitmaps from archive files
or folders of archives.
"""

import argparse
import logging
import os
import sys

from bitmap_extraction.core.constants import DEFAULT_SOURCE_PATTERN
from bitmap_extraction_service import BitmapExtractorService


def create_parser():
    """
    Create and return the argument parser for the CLI.

    Returns
    -------
    argparse.ArgumentParser
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(
        prog='extract-bitmaps',
        description='Extract embedded BMP images from archive files',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -i textures.lib
  %(prog)s -i /path/to/libs -o ./output
  %(prog)s -i a.lib b.lib -o ./output --no-verify
  %(prog)s -i /path/to/archives -p "*.dat"
        """
    )

    parser.add_argument(
        '--input-path', '-i',
        required=True,
        nargs='+',
        help='Archive file(s) or folder(s) containing archives'
    )

    parser.add_argument(
        '--output-path', '-o',
        type=str,
        default=None,
        help='Folder for the <name>_extracted output folders '
             '(default: next to each archive)'
    )

    parser.add_argument(
        '--pattern', '-p',
        type=str,
        default=DEFAULT_SOURCE_PATTERN,
        help=f'File pattern used for folders (default: {DEFAULT_SOURCE_PATTERN})'
    )

    parser.add_argument(
        '--no-verify',
        action='store_true',
        help='Skip decoding extracted bitmaps with Pillow'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable verbose output'
    )

    return parser


def configure_logging(verbose=False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


def run(input_paths, output_path=None, pattern=DEFAULT_SOURCE_PATTERN, verify=True):
    """
    Extract bitmaps from every given file or folder.

    Returns
    -------
    int
        Total number of bitmaps written.
    """
    if output_path is not None and not os.path.isdir(output_path):
        raise IOError(f"Output {output_path} is not a directory")

    service = BitmapExtractorService(verify=verify, pattern=pattern)

    total = 0
    for path in input_paths:
        if os.path.isdir(path):
            results = service.extract_folder(path, output_root=output_path)
            total += sum(len(written) for written in results.values())
        else:
            print(f"Processing: {path}")
            total += len(service.extract_file(path, output_root=output_path))

    return total


def main(argv=None):
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        if args.verbose:
            print(f"Input: {args.input_path}")
            print(f"Output: {args.output_path or '(next to each archive)'}")
            print(f"Pattern: {args.pattern}")

        total = run(args.input_path, args.output_path, args.pattern,
                    verify=not args.no_verify)

        print(f"Extraction Done! {total} bitmaps extracted.")

    except IOError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except ValueError as e:
        print(f"Invalid argument: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
