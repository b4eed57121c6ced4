# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

from datetime import UTC, datetime

__version__ = "0.1.0"


def now_iso() -> str:
    return datetime.now(UTC).isoformat()
