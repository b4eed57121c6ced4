# SPDX-FileCopyrightText: 2026 Maelnode authors
#
# SPDX-License-Identifier: Apache-2.0

import sys

from maelnode.cli import main

sys.exit(main())
