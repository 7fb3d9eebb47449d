"""Constants for apply-edits."""

# Similarity floor for closest-match diagnostics (0.5 = 50% similar catches
# partial matches and renamed items)
SIMILARITY_THRESHOLD = 0.5

# Maximum number of closest matches reported for a failed search
MAX_CLOSEST_MATCHES = 3

# Lines of context attached before/after each closest match
CONTEXT_LINES = 2

# Search/anchor previews are truncated to this many characters
PREVIEW_LENGTH = 200

# Files above this size are read through a read-only mmap view (100KB)
LARGE_FILE_THRESHOLD = 100 * 1024

# Indentation detection samples at most this many lines
INDENT_SAMPLE_LINES = 100

# Tab-dominant files whose space-indented lines exceed this share are "mixed"
MIXED_INDENT_RATIO = 0.2

# Valid range for a space-indentation unit
MIN_INDENT_WIDTH = 1
MAX_INDENT_WIDTH = 8

# Auto-correction confidences
INDENTATION_CONFIDENCE = 0.95
TRAILING_WHITESPACE_CONFIDENCE = 0.90
LINE_ENDING_CONFIDENCE = 0.95
FUZZY_MIN_SIMILARITY = 0.90
TYPO_CONFIDENCE = 0.85
TYPO_MIN_LENGTH = 5
TYPO_MAX_LENGTH = 200

# Hint tiers for search/anchor-not-found diagnostics
HINT_VERY_CLOSE = 0.9
HINT_SIMILAR = 0.7

# Default line cap for the read command
DEFAULT_MAX_READ_LINES = 500

DRY_RUN_SUFFIX = " (dry-run)"

# Per-extension indentation defaults used when a file carries no signal.
# Values are (kind, width); width is ignored for tabs.
LANGUAGE_INDENT_DEFAULTS = {
    # Go and Makefiles require tabs
    "go": ("tabs", None),
    "makefile": ("tabs", None),
    "mk": ("tabs", None),
    # PEP 8
    "py": ("spaces", 4),
    "pyw": ("spaces", 4),
    # JavaScript/TypeScript ecosystem
    "js": ("spaces", 2),
    "jsx": ("spaces", 2),
    "ts": ("spaces", 2),
    "tsx": ("spaces", 2),
    "mjs": ("spaces", 2),
    "cjs": ("spaces", 2),
    # Web
    "html": ("spaces", 2),
    "htm": ("spaces", 2),
    "css": ("spaces", 2),
    "scss": ("spaces", 2),
    "sass": ("spaces", 2),
    "less": ("spaces", 2),
    "vue": ("spaces", 2),
    "svelte": ("spaces", 2),
    # Config
    "json": ("spaces", 2),
    "yaml": ("spaces", 2),
    "yml": ("spaces", 2),
    "rb": ("spaces", 2),
    # rustfmt, Java/Kotlin, C family, PSR, shell
    "rs": ("spaces", 4),
    "java": ("spaces", 4),
    "kt": ("spaces", 4),
    "kts": ("spaces", 4),
    "c": ("spaces", 4),
    "cpp": ("spaces", 4),
    "cc": ("spaces", 4),
    "h": ("spaces", 4),
    "hpp": ("spaces", 4),
    "cs": ("spaces", 4),
    "php": ("spaces", 4),
    "sh": ("spaces", 4),
    "bash": ("spaces", 4),
    "zsh": ("spaces", 4),
}

DEFAULT_INDENT = ("spaces", 4)
