# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Core package for CampusDesk.

This package contains shared building blocks:
- config: Application configuration and settings
- exceptions: The error taxonomy shared by every domain
- responses: Success/failure envelope returned to callers
"""
