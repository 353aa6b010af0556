"""Constants for embedded bitmap extraction."""

# Two-byte signature opening every BITMAPFILEHEADER
BITMAP_MARKER = b'BM'

# Fixed header layouts (little-endian, packed)
FILE_HEADER_SIZE = 14
FILE_HEADER_FORMAT = '<2sIHHI'
INFO_HEADER_SIZE = 40
INFO_HEADER_FORMAT = '<IiiHHIIiiII'

# Bytes needed to read the file header plus the info header size field
MIN_CANDIDATE_BYTES = FILE_HEADER_SIZE + 4

# Plausibility bounds; width and |height| must lie in (0, MAX_DIMENSION]
MAX_DIMENSION = 4000

# Output artifact naming
OUTPUT_FILENAME = 'bitmap_{index:04d}.bmp'
OUTPUT_DIR_SUFFIX = '_extracted'

# Default file pattern for folder (batch) mode
DEFAULT_SOURCE_PATTERN = '*.lib'
