# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- email: text (nullable) - synced from auth.users
- username: text (nullable)
- full_name: text (nullable)
- avatar_url: text (nullable) - public URL of the uploaded avatar
- role: text (default: 'user') - one of 'admin', 'editor', 'user'
- updated_at: timestamp (nullable)

Row-level security lets every user read profiles and update their own row;
only admins may update another user's role.
"""
