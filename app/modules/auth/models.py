# Authentication is handled entirely by Supabase Auth (auth.users table)
# This file documents what the backend reads from it

"""
auth.users (managed by Supabase Auth):
- id: uuid - stable user identifier, referenced by profiles.id and user_roles.user_id
- email: text
- raw_user_meta_data: jsonb - exposed as user_metadata; "is_admin": true marks an admin
- raw_app_meta_data: jsonb - exposed as app_metadata

Sign-in, sign-up, sign-out and password reset are performed by the frontend
directly against Supabase Auth; the backend only verifies bearer tokens.
"""
