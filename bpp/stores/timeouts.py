from __future__ import annotations

# Per-request HTTP timeouts
HTTP_TIMEOUT_SECONDS = 60.0
HTTP_CONNECT_TIMEOUT_SECONDS = 10.0

# Bundle uploads can be large
UPLOAD_TIMEOUT_SECONDS = 5 * 60.0

# Status polling for stores that process uploads asynchronously (Firefox, Edge)
POLL_INTERVAL_SECONDS = 5.0
POLL_ATTEMPTS = 60
