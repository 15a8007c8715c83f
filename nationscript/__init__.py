"""nationscript: streaming client for the NationStates API.

WHY: NationStates answers with markup documents ranging from a few
hundred bytes to multi-gigabyte data dumps. Callers want plain dicts and
lists, and they want them without holding whole documents in memory.

HOW: Three layers. core turns streaming markup events into products
through configurable assemblers; shapes configures those assemblers per
response type; api fetches documents over HTTP and feeds them through.

RULES:
- core has no knowledge of HTTP or of any response shape
- Products are plain dicts, lists and scalars with snake_case keys
"""

__version__ = "0.1.0"
