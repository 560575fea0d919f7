# Supabase table: projects
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

projects:
- id: bigint (primary key)
- name: text (not null)
- description: text (nullable)
- status: text (default: 'open') - one of 'open', 'in_progress', 'done'
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Row-level security filters the table per user; the page capability flags
in role_permissions decide which actions the console exposes.
"""
