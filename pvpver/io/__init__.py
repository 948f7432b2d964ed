"""Input/Output operations for pvpver.

This module provides the HTTP plumbing used by release datasources, with
retry logic and consistent error wrapping.

Modules:

http : module
    Retrying requests session and JSON fetch helper.

Public API:

make_session : function
    Create a requests.Session with retries and a pvpver User-Agent.
get_json : function
    Fetch and decode a JSON document, raising NetworkError on failure.

Example:
    from pvpver.io import get_json

    versions = get_json("https://hackage.haskell.org/package/text.json")
    print(f"{len(versions)} releases")

"""

from .http import get_json, make_session

__all__ = ["get_json", "make_session"]
