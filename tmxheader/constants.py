"""
Constants for tmxheader.

File naming, reader dispatch and value limits shared across modules.
"""

from pathlib import Path

# Output naming: <baseName>Map.h, preview beside it
OUTPUT_SUFFIX = "Map.h"
PREVIEW_SUFFIX = "Map.png"

# Input extensions per serialization
XML_EXTENSIONS = (".tmx",)
JSON_EXTENSIONS = (".json", ".tmj")

# Bundled header template
TEMPLATES_DIR = Path(__file__).parent / "templates"
DEFAULT_TEMPLATE = TEMPLATES_DIR / "map.h.template"

# Tile identifiers are unsigned 32-bit
UINT32_MAX = 0xFFFFFFFF
UINT32_SIZE = 4

# Preview rendering
DEFAULT_PREVIEW_SCALE = 4
EMPTY_TILE = 0
