"""NationStates API access: async client, rate limiter and dump reader.

RULES:
- All HTTP calls go through NSClient (no direct httpx usage elsewhere)
- Every request passes the client's RateLimiter first
"""

from nationscript.api.client import Credential, NSClient, to_id_form
from nationscript.api.dump import DumpMode, DumpReader
from nationscript.api.ratelimit import RateLimiter

__all__ = ["Credential", "NSClient", "DumpMode", "DumpReader", "RateLimiter", "to_id_form"]
