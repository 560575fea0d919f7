# Supabase tables: pages, roles, user_roles, role_permissions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

pages:
- id: bigint (primary key)
- code: text (not null, unique) - e.g., "projects", "documents"
- name: text (not null)
- description: text (nullable)
- created_at: timestamp (default: now())

roles:
- id: uuid (primary key)
- name: text (not null, unique) - e.g., "admin", "editor", "viewer"
- description: text (nullable)
- created_at: timestamp (default: now())

user_roles:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null)
- role_id: uuid (foreign key to roles.id, not null)
- unique constraint on (user_id, role_id)

role_permissions:
- id: uuid (primary key)
- role_id: uuid (foreign key to roles.id, not null)
- page_id: bigint (foreign key to pages.id, not null)
- can_view: boolean (default: false)
- can_add: boolean (default: false)
- can_edit: boolean (default: false)
- can_delete: boolean (default: false)
- can_print: boolean (default: false)
- unique constraint on (role_id, page_id)

Effective permissions are never stored; they are computed per request by
OR-ing the flags of every role_permissions row for the page across the
user's roles.
"""
