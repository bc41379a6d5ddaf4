"""Infrastructure layer exports."""

from .cache import DEFAULT_TTL_SECONDS, ResultCache, TTLCache
from .gemini import GeminiGenerationClient
from .generation import GenerationClient, UnconfiguredGenerationClient
from .posters import NoOpPosterLookup, PosterLookup
from .tmdb import TMDBPosterClient

__all__ = [
    "DEFAULT_TTL_SECONDS",
    "GeminiGenerationClient",
    "GenerationClient",
    "NoOpPosterLookup",
    "PosterLookup",
    "ResultCache",
    "TMDBPosterClient",
    "TTLCache",
    "UnconfiguredGenerationClient",
]
