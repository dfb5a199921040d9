"""Constants for the generation pipeline.

Single source of truth for wire paths, field names and prompt bounds.
"""

# ---------------------------------------------------------------------------
# Backend wire format
# ---------------------------------------------------------------------------
GENERATE_PATH = "/api/generate"
RESPONSE_FIELD = "response"
DONE_FIELD = "done"  # sentinel that follows the generated text

# ---------------------------------------------------------------------------
# Prompt bounds
# ---------------------------------------------------------------------------
MAX_TRAITS_PER_AGENT = 8
MAX_ORIGINAL_TEXT_CHARS = 500
TRUNCATION_SUFFIX = "..."

# ---------------------------------------------------------------------------
# Logging previews
# ---------------------------------------------------------------------------
ERROR_BODY_PREVIEW_CHARS = 200
