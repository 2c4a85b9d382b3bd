# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for CampusDesk.

Domains:
    result: Grade engine and result record store.
    notification: Notification dispatch and broadcast.
    course: Departments, categories and courses.
    admission: Admission decisions.
    faculty: Faculty onboarding.
    document: Document records for uploaded files.
"""
