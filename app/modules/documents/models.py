# Supabase table: documents
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

documents:
- id: bigint (primary key)
- project_id: bigint (foreign key to projects.id, nullable)
- name: text (not null) - original file name
- mime_type: text (nullable)
- size_bytes: bigint (nullable)
- storage_path: text (not null) - object path in the documents bucket
- created_at: timestamp (default: now())

File bytes live in Supabase Storage; uploading, deleting and signed URLs
are done by the frontend. The backend only lists the metadata rows.
"""
