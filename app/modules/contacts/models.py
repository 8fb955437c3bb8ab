# Supabase table: contacts_table (name configurable via CONTACTS_TABLE)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: bigint / uuid (primary key, generated)
- name: text
- phone: text (E.164-ish, not validated)
- created_at: timestamp (default: now(), optional)
"""
