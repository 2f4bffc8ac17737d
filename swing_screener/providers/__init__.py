"""
Snapshot providers — the data-acquisition collaborators of the scoring core.

Submodules:
  base          — ``SnapshotProvider`` abstract interface
  file_provider — JSON / CSV snapshot files on disk
  http_provider — remote screener endpoint over HTTP (httpx)

Credential placement (.env, gitignored):
  SWING_SCREENER_API_KEY     — bearer token for the HTTP provider
  SWING_SCREENER_PROVIDER_URL — base URL override for the HTTP provider
"""
