"""tools/sonar/api.py

All SonarQube / SonarCloud HTTP calls live here.

Design goals:
  - Keep network I/O separated from the binding logic.
  - Provide best-effort pagination and resilience (return partial results on errors).
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import requests

from .types import SonarConfig


PAGE_SIZE = 100
MAX_PAGES = 50


def _auth_headers(cfg: SonarConfig) -> Dict[str, str]:
    if not cfg.token:
        return {}
    return {"Authorization": f"Bearer {cfg.token}"}


def search_projects(cfg: SonarConfig, query: Optional[str] = None) -> List[Dict[str, str]]:
    """List projects visible to the connection via /api/components/search (paginated).

    Returns ``[{"key": ..., "name": ...}, ...]``; on errors, whatever was fetched
    so far.
    """
    headers = _auth_headers(cfg)
    projects: List[Dict[str, str]] = []
    page = 1

    while page <= MAX_PAGES:
        params: Dict[str, Any] = {"qualifiers": "TRK", "ps": PAGE_SIZE, "p": page}
        if cfg.org:
            params["organization"] = cfg.org
        if query:
            params["q"] = query

        try:
            resp = requests.get(
                f"{cfg.host.rstrip('/')}/api/components/search",
                params=params,
                headers=headers,
                timeout=30,
            )
        except requests.RequestException as e:
            print(f"⚠️ Project search request error page {page}: {e}. Returning partial results.")
            break

        if resp.status_code in (401, 403):
            print(f"⚠️ Project search not authorized (HTTP {resp.status_code}). Check the connection token.")
            break

        if not resp.ok:
            print(f"⚠️ HTTP {resp.status_code}: {resp.text[:200]!r}. Returning partial results.")
            break

        try:
            data = resp.json()
        except ValueError:
            print("⚠️ Could not decode JSON. Returning partial results.")
            break

        components = data.get("components", []) or []
        for c in components:
            key = c.get("key")
            if key:
                projects.append({"key": str(key), "name": str(c.get("name") or key)})

        if len(components) < PAGE_SIZE:
            break
        page += 1

    return projects
