from __future__ import annotations

from datetime import datetime, timezone

# Cursor value for a (user, peer) pair that has never been read
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
