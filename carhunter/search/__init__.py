from carhunter.search.direct import DirectSearchOutcome, run_direct_search
from carhunter.search.llm_client import LlmConfigurationError, LlmSearchError, PerplexityClient
from carhunter.search.parser import NormalizedResponse, extract_listings, normalize_llm_response, validate_listings
from carhunter.search.prompt import build_search_prompt

__all__ = [
    "DirectSearchOutcome",
    "LlmConfigurationError",
    "LlmSearchError",
    "NormalizedResponse",
    "PerplexityClient",
    "build_search_prompt",
    "extract_listings",
    "normalize_llm_response",
    "run_direct_search",
    "validate_listings",
]
