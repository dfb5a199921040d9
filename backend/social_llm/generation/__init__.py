from social_llm.generation.client import GenerationClient, GenerationError
from social_llm.generation.codec import GenerationRequest, decode, encode
from social_llm.generation.prompts import build_prompt
from social_llm.generation.sanitizer import sanitize, strip_color_tags

__all__ = [
    "GenerationClient",
    "GenerationError",
    "GenerationRequest",
    "build_prompt",
    "decode",
    "encode",
    "sanitize",
    "strip_color_tags",
]
