# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

from maelnode.logging.decorator import Loggable, log_method
from maelnode.logging.event_log import EventLog, read_log

__all__ = ["EventLog", "Loggable", "log_method", "read_log"]
