import hashlib
from typing import Dict, Optional

def compute_etag(body: bytes) -> str:
    return '"' + hashlib.sha256(body).hexdigest() + '"'

def etag_matches(if_none_match: Optional[str], etag: str) -> bool:
    if not if_none_match:
        return False
    candidates = [c.strip() for c in if_none_match.split(",")]
    # weak validators compare equal for GET/HEAD
    return "*" in candidates or etag in candidates or f"W/{etag}" in candidates

def make_cache_headers(max_age: int, etag: Optional[str] = None) -> Dict[str, str]:
    headers = {
        "Cache-Control": f"public, max-age={max_age}",
    }
    if etag:
        headers["ETag"] = etag
    return headers

def html_headers(max_age: int, etag: Optional[str] = None) -> Dict[str, str]:
    headers = make_cache_headers(max_age, etag)
    headers["X-Content-Type-Options"] = "nosniff"
    return headers
