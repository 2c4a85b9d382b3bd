"""CampusDesk back office.

Academic result grading and multi-channel notification dispatch for an
educational institution's administrative back office.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
