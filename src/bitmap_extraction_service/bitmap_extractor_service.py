"""
Service layer for embedded bitmap extraction.

Wraps the scanner with the file-system side: choosing output folders,
writing artifacts and walking folders of archives.
"""

import glob
import os

from bitmap_extraction.core import BitmapExtractor, SourceUnavailable, no_verify
from bitmap_extraction.core.constants import DEFAULT_SOURCE_PATTERN, OUTPUT_DIR_SUFFIX


class BitmapExtractorService:
    """
    Service wrapper for embedded bitmap extraction.

    Provides a clean API for extracting bitmaps from single archives or
    whole folders of them.
    """

    def __init__(self, verify=True, pattern=DEFAULT_SOURCE_PATTERN):
        """
        Initialize the service.

        Parameters
        ----------
        verify : bool, optional
            Confirm each extracted bitmap decodes with Pillow. Default is True.
        pattern : str, optional
            Glob pattern selecting archives in folder mode. Default is '*.lib'.
        """
        if not pattern:
            raise ValueError("pattern must not be empty")

        self.verify = verify
        self.pattern = pattern
        self.last_stats = None

    def _make_extractor(self):
        if self.verify:
            return BitmapExtractor()
        return BitmapExtractor(verifier=no_verify)

    @staticmethod
    def output_dir_for(path, output_root=None):
        """
        Output folder for an archive: '<stem>_extracted'.

        Placed next to the archive unless ``output_root`` is given.
        """
        stem = os.path.splitext(os.path.basename(path))[0]
        parent = output_root if output_root else os.path.dirname(os.path.abspath(path))
        return os.path.join(parent, stem + OUTPUT_DIR_SUFFIX)

    def extract_file(self, path, output_root=None):
        """
        Extract all bitmaps from a single archive.

        Parameters
        ----------
        path : str
            Path to the archive.
        output_root : str, optional
            Folder under which the '<stem>_extracted' folder is created.

        Returns
        -------
        list
            Sorted paths of the written bitmap files.

        Raises
        ------
        SourceUnavailable
            If the archive cannot be opened.
        """
        extractor = self._make_extractor()
        out_dir = self.output_dir_for(path, output_root)

        written = []
        with extractor.scan_file(path) as images:
            os.makedirs(out_dir, exist_ok=True)
            print(f"Extracting to: {out_dir}")

            for image in images:
                saved = image.save(out_dir)
                print(f"  Saved as: {saved} ({image.width}x{image.height}, "
                      f"{image.bit_depth} bpp, offset {image.offset})")
                if self.verify and not image.verified:
                    print("  Warning: Extracted file may not be a valid bitmap")
                written.append(saved)

        self.last_stats = images.stats
        print(f"Extraction complete. Found {images.stats.extracted} bitmaps.")
        return sorted(written)

    def find_sources(self, folder):
        """
        List archives in ``folder`` matching the service pattern.

        Raises
        ------
        IOError
            If the folder does not exist.
        """
        if not os.path.isdir(folder):
            raise IOError(f"Folder not found: {folder}")

        matches = glob.glob(os.path.join(glob.escape(folder), self.pattern))
        return sorted(path for path in matches if os.path.isfile(path))

    def extract_folder(self, folder, output_root=None):
        """
        Extract bitmaps from every matching archive in a folder.

        Parameters
        ----------
        folder : str
            Folder containing archives.
        output_root : str, optional
            Folder under which per-archive output folders are created.

        Returns
        -------
        dict
            Mapping of archive path to list of written bitmap paths. Archives
            that could not be read map to an empty list.
        """
        sources = self.find_sources(folder)
        if not sources:
            print(f"No {self.pattern} files found in {folder}.")
            return {}

        print(f"Found {len(sources)} {self.pattern} files. Processing...")

        results = {}
        for number, path in enumerate(sources, start=1):
            print(f"Processing file {number} of {len(sources)}: {os.path.basename(path)}")
            try:
                results[path] = self.extract_file(path, output_root)
            except SourceUnavailable as e:
                print(f"Error processing {path}: {e}")
                results[path] = []

        print(f"Finished processing {len(sources)} files.")
        return results
