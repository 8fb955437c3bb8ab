# Supabase table: notifications_table (name configurable via NOTIFICATIONS_TABLE)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: bigint / uuid (primary key, generated)
- contact_id: foreign key to contacts_table.id
- event_id: foreign key to event_table.id
- is_selected: boolean (default: false)
- no unique constraint on (contact_id, event_id); duplicate links are allowed
"""
